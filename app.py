import logging

import pandas as pd
import streamlit as st

from customer_insights import config
from customer_insights.auth import authenticate, visible_pages
from customer_insights.data import customers_frame, load_customers
from customer_insights.engine import filter_customers, unique_values
from customer_insights.formatting import gender_label
from customer_insights.models import MARITAL_STATUSES
from customer_insights.repository import InMemoryCustomerRepository
from customer_insights.views import analytics, customers, overview, reports, schema, settings

st.set_page_config(
    page_title=config.APP_TITLE,
    page_icon=config.PAGE_ICON,
    layout="wide",
)

config.configure_logging()
logger = logging.getLogger("customer_insights.app")

ALL = "All"


@st.cache_resource
def load_repository() -> InMemoryCustomerRepository:
    repository = InMemoryCustomerRepository(load_customers())
    logger.info("Loaded %d reference customers", len(repository))
    return repository


def login():
    st.title(config.APP_TITLE)
    with st.form("login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")
    st.caption("Demo accounts: admin@example.com / admin123, sales@example.com / sales123, viewer@example.com / viewer123")

    if submitted:
        user = authenticate(email, password)
        if user is None:
            st.error("Invalid email or password.")
        else:
            st.session_state["user"] = user
            st.rerun()
    st.stop()


def apply_filters(df: pd.DataFrame) -> pd.DataFrame:
    st.sidebar.header("Filters")

    division = st.sidebar.selectbox("Division", [ALL] + unique_values(df, "division"))
    gender = st.sidebar.selectbox(
        "Gender", [ALL, "M", "F"], format_func=lambda g: g if g == ALL else gender_label(g)
    )
    marital_status = st.sidebar.selectbox("Marital Status", [ALL, *MARITAL_STATUSES])

    criteria = {
        "division": division,
        "gender": gender,
        "marital_status": marital_status,
    }
    filtered = filter_customers(df, {k: v for k, v in criteria.items() if v != ALL})

    st.sidebar.caption(f"Filtered customers: {len(filtered):,} of {len(df):,}")
    return filtered


def show_empty_state():
    st.warning("No customers match the current filter selection. Adjust the filters to continue.")
    st.stop()


user = st.session_state.get("user")
if user is None:
    login()

st.sidebar.title(config.APP_TITLE)
st.sidebar.caption(f"Signed in as **{user.name}** ({user.role})")
pages = visible_pages(user)
default_view = settings.current_settings()["appearance"].default_view
page = st.sidebar.radio("Navigate", pages, index=pages.index(default_view) if default_view in pages else 0)
if st.sidebar.button("Sign out"):
    st.session_state.pop("user", None)
    st.rerun()
st.sidebar.markdown("---")

try:
    repository = load_repository()
    df = customers_frame(repository.list())
except Exception as e:
    logger.exception("Failed to load customers")
    st.error(f"Unable to load the customer data. {e}")
    st.stop()

if page == "Database Schema":
    schema.render()
elif page == "Settings":
    settings.render(user)
else:
    filtered_df = apply_filters(df)
    st.title(config.APP_TITLE)
    if filtered_df.empty:
        show_empty_state()

    if page == "Dashboard":
        overview.render(filtered_df)
    elif page == "Customers":
        customers.render(filtered_df, repository, user)
    elif page == "Analytics":
        analytics.render(filtered_df)
    elif page == "Reports":
        reports.render(filtered_df)

st.markdown("---")
st.caption("Customer analytics across divisions, demographics and income segments.")
