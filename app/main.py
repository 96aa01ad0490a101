"""
Streamlit Frontend for Budget Tracker

The page the user interacts with daily: pick a month, add income,
log what was spent each day and watch the balance.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Clear error messages in simple language
3. Visual feedback for all operations
4. No business logic here - every change goes through BudgetApp
"""

import streamlit as st

from budget_tracker.errors import BudgetTrackerError
from budget_tracker.orchestrator import BudgetApp, DayRow, create_app_components


# Page configuration
st.set_page_config(
    page_title="Budget Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for the stat cards
st.markdown("""
<style>
    .stat-card {
        padding: 20px;
        border-radius: 10px;
        border: 1px solid #eee;
        margin: 10px 0;
    }
    .stat-title {
        font-size: 0.9em;
        color: #6b7280;
    }
    .stat-amount {
        font-size: 1.8em;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_app() -> BudgetApp:
    """Get or create the application instance (cached)."""
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"Failed to open local storage: {e}")
        return create_app_components(use_storage=False)


def main():
    """Main application entry point."""
    app = get_app()

    render_sidebar(app)
    render_header(app)

    for warning in app.pop_warnings():
        st.warning(f"⚠️ {warning}")

    render_stats(app)
    st.markdown("---")
    render_days(app)


def render_sidebar(app: BudgetApp):
    """Year and month selection."""
    st.sidebar.title("💰 Budget Tracker")
    st.sidebar.markdown("---")

    years = app.available_years
    year = st.sidebar.selectbox(
        "Year",
        options=years,
        index=years.index(app.year) if app.year in years else 0,
    )
    if year != app.year:
        app.select_year(year)

    month_index = st.sidebar.radio(
        "Month",
        options=list(range(12)),
        index=app.month_index,
        format_func=lambda index: app.month_names[index],
    )
    if month_index != app.month_index:
        app.select_month(month_index)


def render_header(app: BudgetApp):
    """Month title and the sign-in area."""
    col1, col2 = st.columns([3, 1])

    with col1:
        st.title(f"{app.current_month.name} {app.year}")

    with col2:
        session = app.session
        st.markdown(f"**{session.display_name}**  \n{session.display_subtitle}")
        if session.is_authenticated:
            if st.button("Sign Out"):
                app.sign_out()
                st.rerun()
        else:
            render_auth_forms(app)


def render_auth_forms(app: BudgetApp):
    with st.popover("Sign In"):
        sign_in_tab, sign_up_tab = st.tabs(["Sign In", "Sign Up"])

        with sign_in_tab:
            with st.form("sign_in_form"):
                email = st.text_input("Email")
                password = st.text_input("Password", type="password")
                if st.form_submit_button("Sign In"):
                    try:
                        app.sign_in(email, password)
                        st.rerun()
                    except BudgetTrackerError as e:
                        st.error(str(e))

        with sign_up_tab:
            with st.form("sign_up_form"):
                name = st.text_input("Name")
                email = st.text_input("Email", key="sign_up_email")
                password = st.text_input("Password", type="password", key="sign_up_password")
                if st.form_submit_button("Create Account"):
                    try:
                        app.sign_up(name, email, password)
                        st.rerun()
                    except BudgetTrackerError as e:
                        st.error(str(e))

        if st.button("Continue with Google"):
            app.sign_in_with_provider()
            st.rerun()


def render_stat_card(title: str, amount: str, color: str):
    st.markdown(
        f"""
        <div class="stat-card">
            <div class="stat-title">{title}</div>
            <div class="stat-amount" style="color: {color}">{amount}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_stats(app: BudgetApp):
    """Income (with add form), expenses and balance."""
    col1, col2, col3 = st.columns(3)

    with col1:
        with st.form("income_form", clear_on_submit=True):
            amount = st.number_input(
                "Add Income",
                min_value=0.0,
                step=0.01,
                format="%.2f",
            )
            if st.form_submit_button("➕ Add to Income"):
                try:
                    app.update_income(amount)
                    st.rerun()
                except BudgetTrackerError as e:
                    st.error(str(e))
        render_stat_card("Total Income", app.format_amount(app.income), "#16a34a")

    with col2:
        render_stat_card(
            "Total Expenses", app.format_amount(app.monthly_expense), "#dc2626"
        )

    with col3:
        balance = app.balance
        render_stat_card(
            "Current Balance",
            app.format_amount(balance),
            "#4f46e5" if balance >= 0 else "#dc2626",
        )


def render_days(app: BudgetApp):
    """One expandable row per day of the month."""
    st.markdown("### Daily Expenses")
    for row in app.day_rows():
        render_day_row(app, row)


def render_day_row(app: BudgetApp, row: DayRow):
    count = row.transaction_count
    title = (
        f"{row.label} · {count} transaction{'' if count == 1 else 's'} · "
        f"{app.format_amount(row.total)}"
    )
    with st.expander(title):
        for item in row.items:
            col1, col2, col3 = st.columns([4, 2, 1])
            col1.write(item.description)
            col2.write(app.format_amount(item.amount))
            if col3.button("🗑️", key=f"remove_{item.id}", help="Remove"):
                app.remove_expense(row.day_key, item.id)
                st.rerun()

        with st.form(f"add_{row.day_key}", clear_on_submit=True):
            col1, col2, col3 = st.columns([4, 2, 1])
            description = col1.text_input(
                "Description",
                placeholder="Expense description...",
                label_visibility="collapsed",
            )
            amount = col2.number_input(
                "Amount",
                min_value=0.0,
                step=0.01,
                format="%.2f",
                label_visibility="collapsed",
            )
            if col3.form_submit_button("Add"):
                try:
                    app.add_expense(row.day_key, description, amount)
                    st.rerun()
                except BudgetTrackerError as e:
                    st.error(str(e))


if __name__ == "__main__":
    main()
