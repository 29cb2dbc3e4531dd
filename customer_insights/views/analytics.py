import pandas as pd
import streamlit as st

from .. import config
from ..charts import create_bar, create_heatmap, create_line, create_radar, create_scatter
from ..engine import nearest_neighbor_predict, to_chart_data
from ..formatting import format_currency, gender_label
from ..insights import (
    age_income_correlation,
    detect_anomalies,
    division_metrics,
    income_by_age_group,
    income_heatmap,
    income_projection,
    income_spread,
    income_trend_by_marital_status,
    top_lifetime_value,
)
from ..models import GENDERS, MARITAL_STATUSES


def division_comparison(df: pd.DataFrame):
    metrics = division_metrics(df)
    if metrics.empty:
        st.info("No divisions available for comparison.")
        return

    options = metrics["division"].tolist()
    selected = st.multiselect("Divisions to compare", options, default=options[:3], key="compare_divisions")
    chosen = metrics[metrics["division"].isin(selected)]

    radar = pd.DataFrame(
        {
            "division": chosen["division"],
            "Avg Income (K)": chosen["avg_income"] / 1000,
            "Customers (x5)": chosen["total_customers"] / 5,
            "Avg Age": chosen["avg_age"],
            "Married %": chosen["married_percentage"],
            "High Value %": chosen["high_value_percentage"],
        }
    )
    left, right = st.columns(2)
    with left:
        create_radar(radar, "division", list(radar.columns[1:]), "Division Profile")
    with right:
        create_bar(chosen, x="division", y="avg_income", title="Average Income by Division")

    display = metrics.rename(
        columns={
            "division": "Division",
            "total_customers": "Customers",
            "total_income": "Total Income",
            "avg_income": "Avg Income",
            "avg_age": "Avg Age",
            "male_percentage": "Male %",
            "married_percentage": "Married %",
            "high_value_percentage": "High Value %",
        }
    )
    display["Total Income"] = display["Total Income"].map(format_currency)
    display["Avg Income"] = display["Avg Income"].map(format_currency)
    st.dataframe(display, use_container_width=True, hide_index=True)


def correlation_analysis(df: pd.DataFrame):
    correlation = age_income_correlation(df)
    st.metric("Age vs Income (Pearson r)", f"{correlation['r']:.2f}")
    st.caption(
        f"There is a **{correlation['strength']} {correlation['direction']}** correlation "
        "between age and income among customers who report an income."
    )
    create_scatter(correlation["points"], x="age", y="income", hover_name="name", title="Age vs Income")

    heatmap = income_heatmap(df)
    create_heatmap(
        heatmap,
        x="Marital Status",
        y="Division",
        z="Avg Income",
        title="Average Income: Division by Marital Status",
    )

    left, right = st.columns(2)
    for column, key, label in ((left, "division", "Division"), (right, "marital_status", "Marital Status")):
        spread = income_spread(df, key)
        with column:
            if spread is None:
                st.info(f"No income data by {label.lower()}.")
                continue
            st.markdown(
                f"**{label}:** {spread['highest']} earns {format_currency(spread['highest_income'])} on average, "
                f"{spread['percentage_difference']}% more than {spread['lowest']} "
                f"({format_currency(spread['lowest_income'])})."
            )


def trend_analysis(df: pd.DataFrame):
    trend = income_trend_by_marital_status(df).reset_index()
    long = trend.melt(id_vars="age_group", var_name="marital_status", value_name="avg_income")
    create_line(
        long,
        x="age_group",
        y="avg_income",
        color="marital_status",
        title="Average Income by Age and Marital Status",
    )

    create_line(
        to_chart_data(income_by_age_group(df, config.TREND_AGE_GROUPS)),
        x="name",
        y="value",
        title="Average Income by Age Group",
    )


def anomaly_detection(df: pd.DataFrame):
    report = detect_anomalies(df)
    col1, col2, col3 = st.columns(3)
    col1.metric("Income Mean", format_currency(report.income_mean))
    col2.metric("Income Std Dev", format_currency(report.income_std))
    col3.metric(
        "Normal Income Range",
        f"{format_currency(max(report.income_lower, 0))} - {format_currency(report.income_upper)}",
    )

    outliers = pd.concat([report.high_income_outliers, report.low_income_outliers])
    st.markdown("#### Income Outliers")
    if outliers.empty:
        st.success("No income outliers detected.")
    else:
        st.dataframe(outliers[["id", "name", "division", "age", "income"]], use_container_width=True, hide_index=True)

    st.markdown("#### Age Outliers")
    st.caption(f"Mean age {report.age_mean:.1f}, standard deviation {report.age_std:.1f}")
    if report.age_outliers.empty:
        st.success("No age outliers detected.")
    else:
        st.dataframe(report.age_outliers[["id", "name", "division", "age"]], use_container_width=True, hide_index=True)

    st.markdown("#### Unusual Patterns")
    if not report.patterns:
        st.info("No unusual patterns detected.")
    for pattern in report.patterns:
        st.warning(f"**{pattern.title}** · {pattern.description}")


def predictive_analytics(df: pd.DataFrame):
    st.markdown("#### Income Prediction")
    with st.form("income_prediction"):
        col1, col2, col3 = st.columns(3)
        age = col1.number_input("Age", min_value=18, max_value=100, value=35, step=1)
        gender = col2.selectbox("Gender", GENDERS, format_func=gender_label)
        marital_status = col3.selectbox("Marital Status", MARITAL_STATUSES)
        submitted = st.form_submit_button("Predict income")

    if submitted:
        prediction = nearest_neighbor_predict(df, int(age), gender, marital_status)
        if prediction.tier == "none":
            st.info("Not enough comparable customers to make a prediction.")
        else:
            col1, col2 = st.columns(2)
            col1.metric("Predicted Income", format_currency(prediction.income))
            col2.metric("Confidence", f"{prediction.confidence}%")
            if prediction.tier == "broad":
                st.caption("Based on customers of a similar age only.")

    st.markdown("#### Customer Lifetime Value")
    ltv = top_lifetime_value(df)
    ltv = ltv[ltv["ltv"] > 0]
    create_bar(ltv, x="name", y="ltv", title="Top Customers by Lifetime Value")

    st.markdown("#### Income Projection (Married Customers)")
    projection = pd.DataFrame(income_projection(df), columns=["name", "value", "projected"])
    projection["series"] = projection["projected"].map({True: "Projected", False: "Actual"})
    create_bar(projection, x="name", y="value", color="series", title="Average Income by Age Group")


def render(df: pd.DataFrame):
    st.subheader("Analytics")
    if df.empty:
        st.info("No data available for analytics.")
        return

    tabs = st.tabs(["Division Comparison", "Correlation", "Trends", "Anomaly Detection", "Predictive"])
    with tabs[0]:
        division_comparison(df)
    with tabs[1]:
        correlation_analysis(df)
    with tabs[2]:
        trend_analysis(df)
    with tabs[3]:
        anomaly_detection(df)
    with tabs[4]:
        predictive_analytics(df)
