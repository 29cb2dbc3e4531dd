"""Customers page: segments, demographics, value distribution and the paged record table."""

import math

import pandas as pd
import streamlit as st

from .. import config
from ..actions import delete_customer, get_customer, run_action, update_customer
from ..auth import can_delete, can_edit
from ..charts import create_bar, create_pie
from ..data import DIVISIONS
from ..engine import (
    age_bucket,
    group_count,
    income_band_members,
    percentage,
    segment_by_income,
    to_chart_data,
)
from ..export import prepare_customer_rows
from ..formatting import format_currency, gender_label
from ..insights import customer_highlights, gender_by_division, income_by_age_group, income_contribution
from ..models import GENDERS, MARITAL_STATUSES

SEGMENT_BADGES = {
    "High Value": "Premium",
    "Mid Value": "Core",
    "Low Value": "Growth",
    "No Income": "Prospect",
}


def show_highlights(df: pd.DataFrame):
    st.markdown("### Key Insights")
    columns = st.columns(3)
    for column, (title, text) in zip(columns, customer_highlights(df)):
        with column.container(border=True):
            st.markdown(f"**{title}**")
            st.caption(text)


def show_segments(df: pd.DataFrame):
    st.markdown("### Customer Segmentation")
    left, right = st.columns(2)
    segments = list(reversed(segment_by_income(df)))
    with left:
        for segment in segments:
            st.markdown(
                f"**{SEGMENT_BADGES.get(segment.name, segment.name)}** · {segment.name}: "
                f"{segment.count} customers ({segment.percentage}%), "
                f"average age {segment.average_age}, average income {format_currency(segment.average_income)}"
            )
    with right:
        create_pie(
            [{"name": s.name, "value": s.count} for s in segments],
            title="Customers by Value Segment",
        )

    left, right = st.columns(2)
    with left:
        create_bar(
            to_chart_data(age_bucket(df, config.AGE_SEGMENTS)), title="Age Segments", text_auto=True
        )
    with right:
        divisions = dict(sorted(group_count(df, "division").items(), key=lambda kv: kv[1], reverse=True))
        create_bar(to_chart_data(divisions), title="Customers per Division", text_auto=True, horizontal=True)


def show_demographics(df: pd.DataFrame):
    st.markdown("### Demographics")
    by_division = gender_by_division(df)
    stacked = by_division.melt(
        id_vars="division", value_vars=["male", "female"], var_name="gender", value_name="customers"
    )
    create_bar(stacked, x="division", y="customers", color="gender", title="Gender by Division", text_auto=True)

    left, right = st.columns(2)
    with left:
        create_bar(
            to_chart_data(income_by_age_group(df, config.AGE_DISTRIBUTION)),
            title="Average Income by Age Group",
        )
    with right:
        rows = []
        for gender in GENDERS:
            subset = df[df["gender"] == gender]
            for status, count in group_count(subset, "marital_status").items():
                rows.append({"gender": gender_label(gender), "status": status, "customers": count})
        create_bar(
            pd.DataFrame(rows, columns=["gender", "status", "customers"]),
            x="status",
            y="customers",
            color="gender",
            title="Marital Status by Gender",
            text_auto=True,
        )


def show_value_distribution(df: pd.DataFrame):
    st.markdown("### Customer Value Distribution")
    total = len(df)
    left, right = st.columns(2)
    with left:
        st.markdown("**Distribution by Count**")
        for band in config.INCOME_RANGES:
            count = len(income_band_members(df, band))
            share = percentage(count, total)
            st.progress(share / 100, text=f"{band.label}: {count} customers ({share}%)")
    with right:
        st.markdown("**Income Contribution**")
        for band in income_contribution(df):
            st.progress(band["value"] / 100, text=f"{band['name']}: {format_currency(band['income'])} ({band['value']}%)")


def show_customer_table(df: pd.DataFrame, repository, user):
    st.markdown("### Customers")
    search = st.text_input("Search by name or ID", key="customer_search")
    view = df
    if search:
        needle = search.strip().lower()
        view = df[
            df["name"].str.lower().str.contains(needle, regex=False)
            | df["id"].str.lower().str.contains(needle, regex=False)
        ]

    if view.empty:
        st.info("No customers match the current search.")
        return

    pages = max(math.ceil(len(view) / config.PAGE_SIZE), 1)
    page = st.number_input("Page", min_value=1, max_value=pages, value=1, step=1, key=f"customer_page_{len(view)}")
    start = (int(page) - 1) * config.PAGE_SIZE
    page_rows = prepare_customer_rows(view.iloc[start : start + config.PAGE_SIZE])
    page_rows["Income"] = page_rows["Income"].map(format_currency)
    st.dataframe(page_rows, use_container_width=True, hide_index=True)
    st.caption(f"Showing {start + 1}-{min(start + config.PAGE_SIZE, len(view))} of {len(view)} customers")

    selected_id = st.selectbox("Select a customer", view["id"].tolist(), key="customer_selected")
    if not selected_id:
        return

    view_tab, edit_tab, delete_tab = st.tabs(["View", "Edit", "Delete"])
    with view_tab:
        if st.button("Load details", key="customer_view"):
            with st.spinner("Loading customer..."):
                result = run_action(get_customer(repository, selected_id))
            if result.success:
                st.json(result.data.to_dict())
            else:
                st.error(result.error)

    with edit_tab:
        if not can_edit(user):
            st.info("Your role cannot edit customers.")
        else:
            edit_form(repository, repository.get(selected_id))

    with delete_tab:
        if not can_delete(user):
            st.info("Only administrators can delete customers.")
        else:
            st.warning(f"Deleting {selected_id} cannot be undone.")
            if st.button("Delete customer", type="primary", key="customer_delete"):
                with st.spinner("Deleting customer..."):
                    result = run_action(delete_customer(repository, selected_id))
                if result.success:
                    st.toast(f"Customer {selected_id} deleted")
                    st.rerun()
                else:
                    st.error(result.error)


def edit_form(repository, customer):
    if customer is None:
        st.info("The selected customer no longer exists.")
        return

    with st.form(f"edit_{customer.id}"):
        name = st.text_input("Name", customer.name)
        divisions = list(DIVISIONS) if customer.division in DIVISIONS else [customer.division, *DIVISIONS]
        division = st.selectbox("Division", divisions, index=divisions.index(customer.division))
        gender = st.selectbox(
            "Gender", GENDERS, index=GENDERS.index(customer.gender), format_func=gender_label
        )
        marital_status = st.selectbox(
            "Marital Status", MARITAL_STATUSES, index=MARITAL_STATUSES.index(customer.marital_status)
        )
        age = st.number_input("Age", min_value=0, max_value=150, value=customer.age, step=1)
        income = st.number_input("Income", min_value=0, value=customer.income, step=1000)
        submitted = st.form_submit_button("Save changes")

    if submitted:
        changes = {
            "name": name,
            "division": division,
            "gender": gender,
            "marital_status": marital_status,
            "age": int(age),
            "income": int(income),
        }
        with st.spinner("Saving..."):
            result = run_action(update_customer(repository, customer.id, changes))
        if result.success:
            st.toast(f"Customer {customer.id} updated")
            st.rerun()
        else:
            st.error(result.error)


def render(df: pd.DataFrame, repository, user):
    st.subheader("Customers")
    segment_tab, demographics_tab, value_tab, table_tab = st.tabs(
        ["Segments", "Demographics", "Value Distribution", "Records"]
    )
    with segment_tab:
        show_highlights(df)
        show_segments(df)
    with demographics_tab:
        show_demographics(df)
    with value_tab:
        show_value_distribution(df)
    with table_tab:
        show_customer_table(df, repository, user)
