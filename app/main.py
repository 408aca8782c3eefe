"""
Streamlit Frontend for Personal Ledger

Single page:
1. Entry form (date, description, amount, income/expense)
2. Filter + current balance
3. Transaction table, newest first, with delete

DESIGN PRINCIPLES:
- All rules live in the ledger; this page only collects input and renders
- Deleting asks for confirmation
- Storage problems are shown, but the page keeps working
"""

from datetime import date
from decimal import Decimal

import streamlit as st

from personal_ledger import (
    KindFilter,
    Ledger,
    Transaction,
    TransactionKind,
    ValidationError,
    create_ledger,
)
from personal_ledger.config import get_settings, validate_all_settings
from personal_ledger.validation import get_user_friendly_message


# Page configuration
st.set_page_config(
    page_title="Personal Ledger",
    page_icon="💰",
    layout="centered",
)

KIND_LABELS = {
    TransactionKind.INCOME: "Income",
    TransactionKind.EXPENSE: "Expense",
}

FILTER_LABELS = {
    KindFilter.ALL: "All",
    KindFilter.INCOME: "Income",
    KindFilter.EXPENSE: "Expenses",
}


@st.cache_resource
def get_ledger() -> Ledger:
    """Get or create the session ledger (cached)."""
    return create_ledger()


def format_currency(value: Decimal) -> str:
    """Format an amount with the configured currency symbol."""
    symbol = get_settings().app.currency_symbol
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol} {abs(value):,.2f}"


def format_date(value: date) -> str:
    return value.strftime(get_settings().app.date_format)


def sort_for_display(transactions: list[Transaction]) -> list[Transaction]:
    """Newest date first; entries on the same day, most recently added first."""
    return sorted(transactions, key=lambda t: (t.date, t.id), reverse=True)


def render_form(ledger: Ledger):
    """Render the entry form."""
    with st.form("transaction_form", clear_on_submit=True):
        col1, col2 = st.columns(2)

        with col1:
            entry_date = st.date_input("Date", value=date.today())
            value = st.text_input("Amount", placeholder="0,00")

        with col2:
            description = st.text_input(
                "Description",
                placeholder="e.g. Salary, Electricity bill...",
            )
            kind = st.radio(
                "Type",
                options=list(TransactionKind),
                format_func=lambda k: KIND_LABELS[k],
                horizontal=True,
            )

        submitted = st.form_submit_button("Add entry", type="primary")

    if submitted:
        try:
            ledger.add(entry_date, description, value, kind)
        except ValidationError as e:
            st.error(get_user_friendly_message(e))
        else:
            st.success("Entry added.")


def render_balance(ledger: Ledger):
    """Render the filter selector and balance card. Returns the chosen filter."""
    col1, col2 = st.columns([1, 1])

    with col1:
        kind_filter = st.selectbox(
            "Show",
            options=list(KindFilter),
            format_func=lambda f: FILTER_LABELS[f],
        )

    with col2:
        summary = ledger.summary()
        st.metric(
            "Current balance",
            format_currency(summary.balance),
            help=(
                f"Income {format_currency(summary.income_total)} · "
                f"Expenses {format_currency(summary.expense_total)}"
            ),
        )

    return kind_filter


def render_table(ledger: Ledger, kind_filter: KindFilter):
    """Render the transaction table with delete buttons."""
    transactions = sort_for_display(ledger.list_transactions(kind_filter))

    if not transactions:
        st.info("No transactions found")
        return

    header = st.columns([2, 4, 2, 2, 2])
    for column, title in zip(header, ["Date", "Description", "Amount", "Type", ""]):
        column.markdown(f"**{title}**")

    pending = st.session_state.get("pending_delete")

    for transaction in transactions:
        cols = st.columns([2, 4, 2, 2, 2])
        cols[0].write(format_date(transaction.date))
        cols[1].write(transaction.description)
        color = "green" if transaction.kind is TransactionKind.INCOME else "red"
        cols[2].markdown(f":{color}[{format_currency(transaction.value)}]")
        cols[3].write(KIND_LABELS[transaction.kind])

        if pending == transaction.id:
            if cols[4].button("Confirm", key=f"confirm-{transaction.id}", type="primary"):
                ledger.remove(transaction.id)
                st.session_state.pending_delete = None
                st.rerun()
        elif cols[4].button("Delete", key=f"delete-{transaction.id}"):
            st.session_state.pending_delete = transaction.id
            st.rerun()


def render_storage_status(ledger: Ledger):
    """Warn when changes could not be saved."""
    error = ledger.last_storage_error
    if error is not None:
        st.warning(
            "Your changes could not be saved and will be lost when this "
            f"session ends. ({error})"
        )

    status = validate_all_settings()
    for key in ("storage", "app"):
        if not status.get(key, False):
            st.error(f"Configuration problem ({key}): {status.get(f'{key}_error')}")


def main():
    """Main application entry point."""
    ledger = get_ledger()

    st.title("💰 Personal Ledger")

    render_form(ledger)
    render_storage_status(ledger)

    st.markdown("---")

    kind_filter = render_balance(ledger)
    render_table(ledger, kind_filter)


if __name__ == "__main__":
    main()
