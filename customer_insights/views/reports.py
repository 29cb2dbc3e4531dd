from datetime import date

import pandas as pd
import streamlit as st

from .. import config
from ..charts import create_bar, create_pie
from ..engine import segment_by_income
from ..export import (
    XLSX_MIME,
    build_report_pdf,
    mailto_link,
    prepare_customer_rows,
    shareable_link,
    to_csv_bytes,
    to_excel_bytes,
)
from ..formatting import format_currency, format_number, format_percent
from ..insights import (
    division_changes,
    division_metrics,
    executive_summary,
    key_metrics_report,
    kpi_status,
    recommendations,
)

STATUS_ICONS = {"on track": "🟢", "at risk": "🟡", "off track": "🔴"}


def format_kpi(value, unit: str) -> str:
    if unit == "currency":
        return format_currency(value)
    if unit == "percent":
        return format_percent(value)
    return format_number(value)


def show_summary(df: pd.DataFrame):
    st.markdown("### Executive Summary")
    for sentence in executive_summary(df):
        st.markdown(f"- {sentence}")


def show_key_metrics(df: pd.DataFrame):
    st.markdown("### Key Metrics")
    rows = key_metrics_report(df)
    columns = st.columns(4)
    for column, row in zip(columns, rows[:4]):
        column.metric(row.label, format_kpi(row.current, row.unit), f"{row.change}% vs previous period")

    table = pd.DataFrame(
        [
            {
                "Metric": row.label,
                "Current": format_kpi(row.current, row.unit),
                "Target": format_kpi(row.target, row.unit),
                "Previous": format_kpi(row.previous, row.unit),
                "Progress": row.progress,
                "Change": f"{row.change:+d}%",
                "Status": f"{STATUS_ICONS[kpi_status(row.progress)]} {kpi_status(row.progress)}",
            }
            for row in rows
        ]
    )
    st.dataframe(
        table,
        use_container_width=True,
        hide_index=True,
        column_config={
            "Progress": st.column_config.ProgressColumn("Progress", format="%d%%", min_value=0, max_value=100)
        },
    )


def show_segment_report(df: pd.DataFrame):
    st.markdown("### Customer Segments")
    segments = segment_by_income(df)
    left, right = st.columns(2)
    with left:
        create_pie([{"name": s.name, "value": s.count} for s in segments], title="Segment Size")
    with right:
        create_bar(
            [{"name": s.name, "value": s.average_income} for s in segments],
            title="Average Income by Segment",
        )
    st.dataframe(
        pd.DataFrame(
            [
                {
                    "Segment": s.name,
                    "Customers": s.count,
                    "Share": f"{s.percentage}%",
                    "Avg Age": s.average_age,
                    "Avg Income": format_currency(s.average_income),
                }
                for s in segments
            ]
        ),
        use_container_width=True,
        hide_index=True,
    )


def show_regional_performance(df: pd.DataFrame):
    st.markdown("### Regional Performance")
    metrics = division_metrics(df)
    if metrics.empty:
        st.info("No data available for regional performance.")
        return

    regional = metrics.merge(division_changes(metrics), on="division")
    create_bar(regional, x="division", y="total_income", title="Total Income by Division")

    display = regional[
        ["division", "total_customers", "customer_change", "total_income", "income_change", "avg_income", "avg_income_change"]
    ].rename(
        columns={
            "division": "Division",
            "total_customers": "Customers",
            "customer_change": "Customers Δ%",
            "total_income": "Total Income",
            "income_change": "Income Δ%",
            "avg_income": "Avg Income",
            "avg_income_change": "Avg Income Δ%",
        }
    )
    display["Total Income"] = display["Total Income"].map(format_currency)
    display["Avg Income"] = display["Avg Income"].map(format_currency)
    st.dataframe(display, use_container_width=True, hide_index=True)
    st.caption("Changes are measured against a simulated previous period.")


def show_recommendations(df: pd.DataFrame):
    st.markdown("### Recommendations")
    items = recommendations(df)
    if not items:
        st.info("No recommendations for the current selection.")
        return
    for area in ("segment", "regional", "demographic"):
        area_items = [item for item in items if item.area == area]
        if not area_items:
            continue
        st.markdown(f"#### {area.title()}")
        for item in area_items:
            with st.container(border=True):
                st.markdown(f"**{item.title}**")
                st.write(item.detail)
                st.caption(" · ".join(item.tags))


def show_export(df: pd.DataFrame):
    st.markdown("### Export & Share")
    preferences = st.session_state.get("settings", {}).get("export")
    stamp = date.today().isoformat()
    rows = prepare_customer_rows(df)

    col1, col2, col3 = st.columns(3)
    col1.download_button(
        "Download Excel",
        data=to_excel_bytes(rows, sheet_name="Customers"),
        file_name=f"customer-report-{stamp}.xlsx",
        mime=XLSX_MIME,
        use_container_width=True,
    )
    col2.download_button(
        "Download CSV",
        data=to_csv_bytes(rows),
        file_name=f"customer-report-{stamp}.csv",
        mime="text/csv",
        use_container_width=True,
    )
    col3.download_button(
        "Download PDF",
        data=build_report_pdf(df),
        file_name=f"customer-report-{stamp}.pdf",
        mime="application/pdf",
        use_container_width=True,
    )

    link = shareable_link(config.SHARE_BASE_URL)
    st.text_input("Shareable link", link, disabled=True)
    recipients = preferences.recipients() if preferences is not None else []
    body = "\n".join(executive_summary(df)) + f"\n\nView the full report: {link}"
    st.link_button("Share via email", mailto_link("Customer Analytics Report", body, recipients))


def render(df: pd.DataFrame):
    st.subheader("Reports")
    tabs = st.tabs(["Summary", "Key Metrics", "Segments", "Regional", "Recommendations", "Export"])
    with tabs[0]:
        show_summary(df)
    with tabs[1]:
        show_key_metrics(df)
    with tabs[2]:
        show_segment_report(df)
    with tabs[3]:
        show_regional_performance(df)
    with tabs[4]:
        show_recommendations(df)
    with tabs[5]:
        show_export(df)
