"""
Streamlit Frontend for Expenzo

Four views over one ExpenseStore:
1. Dashboard   - overall totals, this month, recent entries, breakdown
2. Expenses    - searchable/filterable list with edit and delete
3. Monthly     - one month at a time with previous/next navigation
4. Categories  - per-category totals, shares and averages

The UI only talks to the store (mutations) and the QueryExecutor (views).
All numbers are computed by the core; this file only lays them out.
"""

from datetime import date

import streamlit as st

from expenzo.config import get_settings
from expenzo.formatting import (
    category_badge,
    format_currency,
    format_date,
    format_long_date,
    format_percentage,
    pluralize,
)
from expenzo.log import configure_logging, get_logger
from expenzo.models import ExpenseCategory, ExpenseFilter, category_choices
from expenzo.queries import MonthCursor, QueryExecutor
from expenzo.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    NotFoundError,
    PersistenceError,
    StorageError,
)
from expenzo.store import ExpenseStore
from expenzo.validation import ExpenseValidationError


# Page configuration
st.set_page_config(
    page_title="Expenzo",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
</style>
""", unsafe_allow_html=True)


logger = get_logger(__name__)


@st.cache_resource
def get_components():
    """Open the store once per server process (cached)."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)

    try:
        store = ExpenseStore.open(JsonFileStorage.from_settings())
    except StorageError as e:
        logger.error("store_open_failed", error=str(e))
        st.error(f"Could not load saved expenses, starting empty for this session: {e}")
        store = ExpenseStore.open(InMemoryStorage(key=settings.storage_key))

    return store, QueryExecutor(store, recent_limit=settings.recent_limit), settings


def main():
    """Main application entry point."""
    store, executor, settings = get_components()
    symbol = settings.currency_symbol

    st.sidebar.title("💰 Expenzo")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "📋 All Expenses", "📅 Monthly", "🏷️ Categories"],
        index=0,
    )

    st.sidebar.markdown("---")
    if st.sidebar.button("➕ Add Expense", type="primary"):
        st.session_state.editing_id = None
        st.session_state.show_form = True

    if st.session_state.get("show_form"):
        render_expense_form(store)

    if page == "📊 Dashboard":
        render_dashboard(executor, symbol)
    elif page == "📋 All Expenses":
        render_expenses_page(store, executor, symbol)
    elif page == "📅 Monthly":
        render_monthly_page(store, executor, symbol)
    elif page == "🏷️ Categories":
        render_categories_page(executor, symbol)


# =============================================================================
# ADD / EDIT
# =============================================================================

def render_expense_form(store: ExpenseStore):
    """Add form, or edit form when st.session_state.editing_id is set."""
    editing_id = st.session_state.get("editing_id")
    existing = None
    if editing_id:
        try:
            existing = store.get_expense(editing_id)
        except NotFoundError:
            st.session_state.editing_id = None
            editing_id = None

    categories = category_choices(existing.category if existing else None)
    default_category = existing.category if existing else categories[0]

    # Values stay in the form after a rejected submit; a successful one
    # closes the form.
    with st.form("expense_form", clear_on_submit=False):
        st.subheader("Edit Expense" if existing else "Add Expense")

        col1, col2 = st.columns(2)
        with col1:
            description = st.text_input(
                "Description *",
                value=existing.description if existing else "",
            )
            amount = st.number_input(
                f"Amount ({get_settings().currency_symbol}) *",
                value=float(existing.amount) if existing else 0.0,
                min_value=0.0,
                step=0.01,
                format="%.2f",
            )
        with col2:
            category = st.selectbox(
                "Category *",
                options=categories,
                index=categories.index(default_category),
                format_func=category_badge,
            )
            spent_on = st.date_input(
                "Date *",
                value=existing.spent_on if existing else date.today(),
            )

        note = st.text_area(
            "Note (optional)",
            value=existing.note if existing else "",
        )

        col1, col2 = st.columns(2)
        with col1:
            submitted = st.form_submit_button(
                "Update Expense" if existing else "Save Expense",
                type="primary",
            )
        with col2:
            cancelled = st.form_submit_button("Cancel")

    if cancelled:
        _close_form()
        st.rerun()

    if not submitted:
        return

    # number_input returns a float; round to cents before it becomes a Decimal
    amount_text = f"{amount:.2f}"

    try:
        if existing:
            store.update_expense(editing_id, description, amount_text, category, spent_on, note)
            st.toast("✅ Expense updated!")
        else:
            store.add_expense(description, amount_text, category, spent_on, note)
            st.toast("✅ Expense added!")
    except ExpenseValidationError as e:
        for issue in e.errors:
            st.error(f"❗ {issue.message}")
        return
    except PersistenceError as e:
        st.warning(f"⚠️ {e}")
    except NotFoundError:
        st.error("This expense no longer exists.")

    _close_form()
    st.rerun()


def _close_form():
    st.session_state.show_form = False
    st.session_state.editing_id = None


def _delete(store: ExpenseStore, expense_id: str):
    try:
        store.delete_expense(expense_id)
        st.toast("🗑️ Expense deleted")
    except NotFoundError:
        st.error("This expense no longer exists.")
    except PersistenceError as e:
        st.warning(f"⚠️ {e}")
    st.rerun()


def _start_edit(expense_id: str):
    st.session_state.editing_id = expense_id
    st.session_state.show_form = True
    st.rerun()


# =============================================================================
# VIEWS
# =============================================================================

def render_breakdown(breakdown, symbol: str, empty_message: str):
    """Category bars: name, amount, share."""
    if not breakdown:
        st.info(empty_message)
        return

    for share in breakdown:
        st.markdown(
            f"**{category_badge(share.category)}** · "
            f"{format_currency(share.total, symbol)} ({format_percentage(share.percent)})"
        )
        st.progress(min(float(share.percent) / 100, 1.0))


def render_transaction(expense, symbol: str):
    meta = f"{format_date(expense.spent_on)} · {expense.category}"
    if expense.note:
        meta += f" · {expense.note}"
    col1, col2 = st.columns([4, 1])
    with col1:
        st.markdown(f"{expense.category_config.emoji} **{expense.description}**")
        st.caption(meta)
    with col2:
        st.markdown(f"**{format_currency(expense.amount, symbol)}**")


def render_dashboard(executor: QueryExecutor, symbol: str):
    """Render the dashboard page."""
    st.title("📊 Dashboard")
    st.caption(format_long_date(date.today()))

    summary = executor.dashboard()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Spent", format_currency(summary.total, symbol), pluralize(summary.count, "transaction"), delta_color="off")
    col2.metric("This Month", format_currency(summary.month_total, symbol), f"{summary.month_count} this month", delta_color="off")
    if summary.top_category:
        col3.metric(
            "Top Category",
            category_badge(summary.top_category.category),
            format_currency(summary.top_category.total, symbol),
            delta_color="off",
        )
    else:
        col3.metric("Top Category", "—", "No data yet", delta_color="off")
    col4.metric("Daily Average", format_currency(summary.daily_average, symbol))

    st.markdown("---")
    left, right = st.columns(2)

    with left:
        st.subheader("Recent Transactions")
        if not summary.recent:
            st.info("No expenses yet. Add one!")
        for expense in summary.recent:
            render_transaction(expense, symbol)

    with right:
        st.subheader("By Category")
        render_breakdown(summary.breakdown, symbol, "No data yet.")


def render_expenses_page(store: ExpenseStore, executor: QueryExecutor, symbol: str):
    """Render the filterable list of all expenses."""
    st.title("📋 All Expenses")

    col1, col2, col3, col4 = st.columns([3, 2, 2, 2])
    with col1:
        text_query = st.text_input("Search", placeholder="Description or note")
    with col2:
        category = st.selectbox(
            "Category",
            options=[""] + [c.value for c in ExpenseCategory],
            format_func=lambda x: "All Categories" if not x else category_badge(x),
        )
    with col3:
        date_from = st.date_input("From", value=None)
    with col4:
        date_to = st.date_input("To", value=None)

    listing = executor.list_expenses(ExpenseFilter(
        text_query=text_query,
        category=category,
        date_from=date_from,
        date_to=date_to,
    ))

    st.markdown(
        f"**{pluralize(listing.count, 'record')}** · "
        f"Total {format_currency(listing.total, symbol)}"
    )
    st.markdown("---")

    if not listing.expenses:
        st.info("No expenses match your filters.")
        return

    for expense in listing.expenses:
        col1, col2, col3 = st.columns([6, 1, 1])
        with col1:
            render_transaction(expense, symbol)
        with col2:
            if st.button("✏️ Edit", key=f"edit-{expense.id}"):
                _start_edit(expense.id)
        with col3:
            if st.button("🗑️", key=f"del-{expense.id}"):
                _delete(store, expense.id)


def render_monthly_page(store: ExpenseStore, executor: QueryExecutor, symbol: str):
    """Render one month with previous/next navigation."""
    if "month_cursor" not in st.session_state:
        st.session_state.month_cursor = MonthCursor.from_date()
    cursor = st.session_state.month_cursor

    col1, col2, col3 = st.columns([1, 3, 1])
    with col1:
        if st.button("◀ Previous"):
            cursor.previous()
            st.rerun()
    with col2:
        st.markdown(f"<h2 style='text-align:center'>{cursor.label}</h2>", unsafe_allow_html=True)
    with col3:
        if st.button("Next ▶"):
            cursor.next()
            st.rerun()

    summary = executor.monthly(cursor.month, cursor.year)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total", format_currency(summary.total, symbol))
    col2.metric("Transactions", summary.count)
    col3.metric("Daily Average", format_currency(summary.average, symbol))
    col4.metric(
        "Highest Day",
        format_date(summary.max_day.day) if summary.max_day else "—",
        format_currency(summary.max_day.total, symbol) if summary.max_day else None,
        delta_color="off",
    )

    st.markdown("---")
    left, right = st.columns(2)
    with left:
        st.subheader("By Category")
        render_breakdown(summary.breakdown, symbol, "No data for this month.")
    with right:
        st.subheader("Transactions")
        if not summary.expenses:
            st.info("No expenses this month.")
        for expense in summary.expenses:
            col1, col2 = st.columns([6, 1])
            with col1:
                render_transaction(expense, symbol)
            with col2:
                if st.button("🗑️", key=f"mdel-{expense.id}"):
                    _delete(store, expense.id)


def render_categories_page(executor: QueryExecutor, symbol: str):
    """Render one card per category."""
    st.title("🏷️ Categories")

    cards = executor.categories()
    if not cards:
        st.info("Add some expenses to see category analysis.")
        return

    columns = st.columns(3)
    for index, card in enumerate(cards):
        badge = category_badge(card.category)
        with columns[index % 3]:
            st.markdown(f"### {badge}")
            st.caption(pluralize(card.count, "transaction"))
            st.markdown(f"**{format_currency(card.total, symbol)}**")
            st.progress(min(float(card.percent) / 100, 1.0))
            st.caption(
                f"{format_percentage(card.percent)} of total · "
                f"Avg {format_currency(card.average, symbol)} per entry"
            )


if __name__ == "__main__":
    main()
