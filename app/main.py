"""
Streamlit Frontend for Debt Discipline

The page a user keeps open to track their debts.

DESIGN PRINCIPLES:
1. The page only renders what the tracker computes
2. Every button maps to exactly one tracker operation
3. Clear messages when an import is rejected
4. Nothing is hidden: totals, progress and payoff dates are always visible

Run:
    streamlit run app/main.py
"""

import streamlit as st

from debt_discipline.config import get_settings, validate_all_settings
from debt_discipline.formatting import (
    format_month_year,
    format_payoff,
    format_percent,
    money,
)
from debt_discipline.models.debt import (
    MAX_DUE_DAY,
    MIN_DUE_DAY,
    Debt,
    DebtFilter,
    DebtForm,
    SortDirection,
    SortKey,
)
from debt_discipline.normalization import ParseError
from debt_discipline.orchestrator import DebtTracker, create_app_components


st.set_page_config(
    page_title="Debt Discipline",
    page_icon="💸",
    layout="centered",
)


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    return create_app_components()


def main():
    """Main application entry point."""
    if not render_settings_check():
        st.stop()

    tracker, audit_logger = get_components()
    currency = get_settings().app.currency

    st.title("💸 Debt Tracker")

    render_summary(tracker, currency)
    st.markdown("---")
    render_add_form(tracker)
    st.markdown("---")
    render_debt_list(tracker, currency)
    st.markdown("---")
    render_import_export(tracker)

    with st.sidebar.expander("🕑 Recent activity"):
        for event in audit_logger.recent_events(limit=10):
            st.caption(f"{event.timestamp:%H:%M:%S} · {event.description}")


def render_settings_check() -> bool:
    """Show configuration problems. Returns True when every section is valid."""
    status = validate_all_settings()

    sections = [
        ("Storage", "storage"),
        ("Application", "app"),
    ]

    valid = True
    for name, key in sections:
        if not status.get(key, False):
            valid = False
            error = status.get(f"{key}_error", "Invalid configuration")
            st.error(f"❌ {name} settings - {error}")

    if not valid:
        st.markdown(
            "Fix the variables above in your environment or `.env` file, "
            "then reload the page."
        )
    return valid


def render_summary(tracker: DebtTracker, currency: str):
    summary = tracker.summary()
    projection = summary.overall_projection

    col1, col2, col3 = st.columns(3)
    col1.metric("Total", summary.total)
    col2.metric("Completed", summary.completed_count)
    col3.metric("Incomplete", summary.incomplete_count)

    col1, col2, col3 = st.columns(3)
    col1.metric("Total monthly", money(summary.total_monthly, currency))
    col2.metric("Total remaining", money(summary.total_remaining, currency))
    col3.metric("Overall payoff", format_percent(summary.overall_percent))

    estimate = f"Payoff estimate: **{format_payoff(projection)}**"
    if projection.paid_by:
        estimate += f" • Paid by **{format_month_year(projection.paid_by)}**"
    st.markdown(estimate)

    st.progress(summary.overall_percent / 100)
    st.caption(
        f"{money(summary.total_paid, currency)} paid • "
        f"{money(summary.total_remaining, currency)} remaining"
    )


def render_add_form(tracker: DebtTracker):
    st.subheader("Add a debt")

    with st.form("add_debt", clear_on_submit=True):
        name = st.text_input("Debt name", placeholder="e.g., Visa Card")
        col1, col2, col3 = st.columns(3)
        due_day = col1.number_input(
            "Due day", min_value=MIN_DUE_DAY, max_value=MAX_DUE_DAY, value=MIN_DUE_DAY,
        )
        monthly_amount = col2.text_input("Monthly amount", placeholder="e.g., 150")
        remaining_balance = col3.text_input("Remaining balance", placeholder="e.g., 3200")

        if st.form_submit_button("Add", type="primary"):
            added = tracker.add_debt(DebtForm(
                name=name,
                due_day=due_day,
                monthly_amount=monthly_amount,
                remaining_balance=remaining_balance,
            ))
            if added is None:
                st.warning("Please give the debt a name.")
            else:
                st.rerun()


def render_debt_list(tracker: DebtTracker, currency: str):
    st.subheader("Your debts")

    col1, col2, col3 = st.columns(3)
    debt_filter = col1.selectbox(
        "Show",
        options=list(DebtFilter),
        format_func=lambda x: x.value.title(),
    )
    sort_by = col2.selectbox(
        "Sort by",
        options=list(SortKey),
        format_func=lambda x: x.value.replace("_", " ").title(),
    )
    direction = col3.selectbox(
        "Order",
        options=list(SortDirection),
        format_func=lambda x: "Ascending" if x == SortDirection.ASC else "Descending",
    )

    debts = tracker.list_debts(debt_filter, sort_by, direction)
    if not debts:
        st.info("📋 No debts here yet. Add your first one above.")

    for debt in debts:
        if tracker.editing_id == debt.id:
            render_edit_form(tracker, debt)
        else:
            render_debt_card(tracker, debt, currency)

    if st.button("🧹 Clear completed"):
        tracker.clear_completed()
        st.rerun()


def render_debt_card(tracker: DebtTracker, debt: Debt, currency: str):
    projection = tracker.projection(debt)
    percent = tracker.percent_paid(debt)

    with st.container(border=True):
        col1, col2 = st.columns([4, 1])
        title = f"~~{debt.name}~~" if debt.completed else f"**{debt.name}**"
        col1.markdown(title)
        col1.caption(
            f"Due day {debt.due_day} • "
            f"Monthly: {money(debt.monthly_amount, currency)} • "
            f"Remaining: {money(debt.remaining_balance, currency)}"
        )

        payoff = f"Payoff: {format_payoff(projection)}"
        if projection.paid_by:
            payoff += f" • Paid by {format_month_year(projection.paid_by)}"
        col1.caption(payoff)

        st.progress(percent / 100, text=f"{format_percent(percent)} paid")

        b1, b2, b3 = st.columns(3)
        label = "↩️ Undo" if debt.completed else "✅ Done"
        if b1.button(label, key=f"toggle_{debt.id}"):
            tracker.toggle(debt.id)
            st.rerun()
        if b2.button("✏️ Edit", key=f"edit_{debt.id}"):
            tracker.start_edit(debt.id)
            st.rerun()
        if b3.button("🗑️ Remove", key=f"remove_{debt.id}"):
            tracker.remove(debt.id)
            st.rerun()


def render_edit_form(tracker: DebtTracker, debt: Debt):
    form = DebtForm.from_debt(debt)

    with st.form(f"edit_{debt.id}"):
        name = st.text_input("Debt name", value=form.name)
        col1, col2, col3 = st.columns(3)
        due_day = col1.number_input(
            "Due day", min_value=MIN_DUE_DAY, max_value=MAX_DUE_DAY, value=form.due_day,
        )
        monthly_amount = col2.text_input("Monthly amount", value=form.monthly_amount)
        remaining_balance = col3.text_input("Remaining balance", value=form.remaining_balance)

        save, cancel = st.columns(2)
        if save.form_submit_button("💾 Save", type="primary"):
            updated = tracker.save_edit(debt.id, DebtForm(
                name=name,
                due_day=due_day,
                monthly_amount=monthly_amount,
                remaining_balance=remaining_balance,
            ))
            if updated is None:
                st.warning("Please give the debt a name.")
            else:
                st.rerun()
        if cancel.form_submit_button("Cancel"):
            tracker.cancel_edit()
            st.rerun()


def render_import_export(tracker: DebtTracker):
    st.subheader("Backup")

    st.download_button(
        "⬇️ Export JSON",
        data=tracker.export_json(),
        file_name=tracker.export_filename,
        mime="application/json",
    )

    uploaded_file = st.file_uploader("Import JSON", type=["json"])
    if uploaded_file and st.button("⬆️ Replace my debts with this file"):
        try:
            imported = tracker.import_json(uploaded_file.getvalue())
            st.success(f"Imported {len(imported)} debts.")
        except ParseError as e:
            st.error(str(e))


if __name__ == "__main__":
    main()
