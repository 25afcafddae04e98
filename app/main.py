"""
Streamlit Frontend for Paycheck Budget

DESIGN PRINCIPLES:
1. Two paycheck cards, always visible
2. Every form goes through a command handler
3. Deletes ask for confirmation before anything is removed
4. Clear messages when input is rejected or a save fails

The page holds no budget logic. It renders a BudgetSnapshot and
forwards form input to BudgetCommands.
"""

from decimal import Decimal

import streamlit as st

from paycheck_budget.config import get_settings, validate_all_settings
from paycheck_budget.formatting import format_currency, format_date
from paycheck_budget.models.budget import EntryKind, PaycheckTarget, PayPeriod
from paycheck_budget.orchestrator import BudgetCommands, create_app_components
from paycheck_budget.services.storage import StorageError


# Page configuration
st.set_page_config(
    page_title="Paycheck Budget",
    page_icon="💵",
    layout="wide",
)


@st.cache_resource
def get_commands() -> BudgetCommands:
    """Get or create application components (cached)."""
    commands = create_app_components()
    result = commands.load()
    if not result.success:
        st.error(result.message)
        st.stop()
    return commands


def show_result(result) -> None:
    """Flash a command result, then re-render on success."""
    if result.success:
        st.session_state.flash = result.message
        st.rerun()
    else:
        st.error(result.message)


def main():
    """Main application entry point."""
    commands = get_commands()
    app_settings = get_settings().app
    symbol = app_settings.currency_symbol

    if "pending_deletion" not in st.session_state:
        st.session_state.pending_deletion = None
    if "flash" in st.session_state:
        st.success(st.session_state.pop("flash"))

    try:
        snapshot = commands.refresh()
    except StorageError as e:
        st.error(f"Could not update the pay period: {e}")
        st.stop()
    state = commands.store.state

    st.title("💵 Paycheck Budget")
    st.caption(f"Current pay period: {snapshot.current_period.value} paycheck")

    render_paycheck_cards(snapshot, symbol, app_settings.date_format)
    render_pending_deletion(commands)

    st.markdown("---")
    col1, col2 = st.columns(2)

    with col1:
        render_paycheck_form(commands)
        render_recurring_section(commands, state, symbol)

    with col2:
        render_one_time_section(commands, snapshot, symbol)
        render_notes_section(commands, state, app_settings.date_format)

    with st.sidebar:
        render_settings()


def render_paycheck_cards(snapshot, symbol: str, date_format: str):
    """Show income, deductions and what is left for each paycheck."""
    columns = st.columns(len(PayPeriod))
    for column, period in zip(columns, PayPeriod):
        totals = snapshot.totals[period]
        with column:
            st.subheader(f"{period.value} Paycheck")
            st.caption(format_date(snapshot.paycheck_dates[period], date_format))
            st.markdown(f"**Income:** {format_currency(totals.income, symbol)}")
            st.markdown(f"**Recurring:** {format_currency(totals.recurring, symbol, negative=True)}")
            st.markdown(f"**One-time:** {format_currency(totals.one_time, symbol, negative=True)}")
            st.metric("Available", format_currency(totals.available, symbol))
            if totals.is_overspent:
                st.warning(
                    f"Over budget by {format_currency(-totals.balance, symbol)}"
                )


def render_paycheck_form(commands: BudgetCommands):
    st.subheader("Set Paycheck Amount")
    with st.form("paycheck-form", clear_on_submit=False):
        period = st.selectbox(
            "Paycheck",
            options=list(PayPeriod),
            format_func=lambda p: f"{p.value} paycheck",
        )
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")
        if st.form_submit_button("Save paycheck"):
            show_result(commands.handle_submit_paycheck(period, Decimal(str(amount))))


def render_recurring_section(commands: BudgetCommands, state, symbol: str):
    st.subheader("Recurring Payments")
    with st.form("recurring-form"):
        name = st.text_input("Name")
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f", key="recurring-amount")
        paycheck = st.selectbox(
            "Charged to",
            options=list(PaycheckTarget),
            format_func=lambda t: "Both paychecks" if t is PaycheckTarget.BOTH else f"{t.value} paycheck",
        )
        if st.form_submit_button("Add recurring payment"):
            show_result(commands.handle_add_recurring_payment(name, Decimal(str(amount)), paycheck))

    if not state.recurring_payments:
        st.info("No recurring payments added yet")
        return

    for payment in state.recurring_payments:
        paycheck_text = (
            "Both paychecks"
            if payment.paycheck is PaycheckTarget.BOTH
            else f"{payment.paycheck.value} paycheck"
        )
        render_entry_row(
            commands,
            EntryKind.RECURRING_PAYMENT,
            payment.id,
            f"**{payment.name}** · {paycheck_text}",
            format_currency(payment.amount, symbol, negative=True),
        )


def render_one_time_section(commands: BudgetCommands, snapshot, symbol: str):
    st.subheader("One-Time Payments")
    with st.form("onetime-form"):
        name = st.text_input("Name", key="onetime-name")
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f", key="onetime-amount")
        paycheck = st.selectbox(
            "Charged to",
            options=list(PayPeriod),
            format_func=lambda p: f"{p.value} paycheck",
            key="onetime-paycheck",
        )
        if st.form_submit_button("Add one-time payment"):
            show_result(commands.handle_add_one_time_payment(name, Decimal(str(amount)), paycheck))

    if not snapshot.current_one_time_payments:
        st.info("No one-time payments for this period")
        return

    for payment in snapshot.current_one_time_payments:
        render_entry_row(
            commands,
            EntryKind.ONE_TIME_PAYMENT,
            payment.id,
            f"**{payment.name}** · {payment.paycheck.value} paycheck",
            format_currency(payment.amount, symbol, negative=True),
        )


def render_notes_section(commands: BudgetCommands, state, date_format: str):
    st.subheader("Notes")
    with st.form("notes-form", clear_on_submit=True):
        text = st.text_area("Note", placeholder="Anything worth remembering this period...")
        if st.form_submit_button("Add note"):
            show_result(commands.handle_add_note(text))

    if not state.notes:
        st.info("No notes added yet")
        return

    for note in state.notes:
        render_entry_row(
            commands,
            EntryKind.NOTE,
            note.id,
            note.text,
            format_date(note.date, date_format),
        )


def render_entry_row(commands: BudgetCommands, kind: EntryKind, entry_id, title: str, detail: str):
    """One list row with a Delete button that starts the two-phase delete."""
    info, amount, action = st.columns([4, 2, 1])
    info.markdown(title)
    amount.markdown(detail)
    if action.button("Delete", key=f"delete-{entry_id}"):
        st.session_state.pending_deletion = commands.request_delete(kind, entry_id)
        st.rerun()


def render_pending_deletion(commands: BudgetCommands):
    """Ask the user to confirm the delete they requested."""
    pending = st.session_state.pending_deletion
    if pending is None:
        return

    st.warning(f"{pending.prompt}\n\n{pending.label}")
    yes, no = st.columns(2)
    if yes.button("Yes, delete", type="primary"):
        st.session_state.pending_deletion = None
        show_result(commands.confirm_deletion(pending))
    if no.button("Cancel"):
        st.session_state.pending_deletion = None
        commands.cancel_deletion(pending)
        st.rerun()


def render_settings():
    st.markdown("### Configuration")
    status = validate_all_settings()
    for key in ("storage", "app"):
        if status.get(key, False):
            st.success(f"✅ {key.title()} settings OK")
        else:
            st.error(f"❌ {key.title()} - {status.get(f'{key}_error', 'Not configured')}")
    st.caption(f"Budget file: {get_settings().storage.data_path}")


if __name__ == "__main__":
    main()
