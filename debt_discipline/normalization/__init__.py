"""Normalization package."""

from debt_discipline.normalization.normalizer import (
    DEBT_SCHEMA,
    INVALID_JSON_MESSAGE,
    NOT_AN_ARRAY_MESSAGE,
    NormalizationError,
    ParseError,
    day_clamp,
    new_debt,
    new_debt_id,
    normalize_batch,
    normalize_debt,
    parse_debts_json,
    read_field,
    safe_number,
)

__all__ = [
    "DEBT_SCHEMA",
    "INVALID_JSON_MESSAGE",
    "NOT_AN_ARRAY_MESSAGE",
    "NormalizationError",
    "ParseError",
    "day_clamp",
    "new_debt",
    "new_debt_id",
    "normalize_batch",
    "normalize_debt",
    "parse_debts_json",
    "read_field",
    "safe_number",
]
