import pandas as pd
import streamlit as st

from .. import config
from ..charts import create_bar, create_pie
from ..engine import age_bucket, group_count, to_chart_data
from ..formatting import format_currency, format_number, gender_label
from ..insights import income_contribution, key_figures


def metric_row(df: pd.DataFrame):
    figures = key_figures(df)

    col1, col2, col3, col4, col5 = st.columns(5)
    col1.metric("Total Customers", format_number(figures["total_customers"]))
    col2.metric(
        "Customers with Income",
        format_number(figures["customers_with_income"]),
        f"{figures['income_percentage']}% of total",
        delta_color="off",
    )
    col3.metric("Average Income", format_currency(figures["average_income"]))
    col4.metric("Average Age", f"{figures['average_age']} yrs")
    col5.metric(
        "High-Value Customers",
        format_number(figures["high_value_customers"]),
        f"{figures['high_value_percentage']}% of total",
        delta_color="off",
    )


def render(df: pd.DataFrame):
    st.subheader("Overview")
    metric_row(df)

    left, right = st.columns(2)
    divisions = group_count(df, "division")
    with left:
        create_bar(to_chart_data(divisions), title="Customers by Division", text_auto=True)
        if divisions:
            top_division = max(divisions, key=divisions.get)
            st.caption(
                f"Largest division in the current view: **{top_division}** "
                f"with **{divisions[top_division]}** customers."
            )

    genders = {gender_label(k): v for k, v in group_count(df, "gender").items()}
    with right:
        create_pie(to_chart_data(genders), title="Gender Distribution")

    left, right = st.columns(2)
    with left:
        create_bar(
            to_chart_data(age_bucket(df, config.AGE_DISTRIBUTION)),
            title="Age Distribution",
            text_auto=True,
        )
    with right:
        create_pie(to_chart_data(group_count(df, "marital_status")), title="Marital Status")

    st.markdown("### Income Contribution")
    contribution = income_contribution(df)
    create_bar(contribution, title="Share of Total Income by Range (%)", text_auto=True)
    if contribution:
        top_band = max(contribution, key=lambda band: band["value"])
        st.caption(
            f"The **{top_band['name']}** range contributes **{top_band['value']}%** "
            f"of reported income ({format_currency(top_band['income'])})."
        )
