import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

CHART_HEIGHT = 400


def chart_frame(data) -> pd.DataFrame:
    """Accept ``[{"name", "value"}]`` lists or mappings as well as frames."""
    if isinstance(data, pd.DataFrame):
        return data
    if isinstance(data, dict):
        return pd.DataFrame({"name": list(data.keys()), "value": list(data.values())})
    return pd.DataFrame(list(data))


def create_bar(data, x="name", y="value", title="", text_auto=".2s", horizontal=False, color=None):
    data = chart_frame(data)
    if data.empty:
        st.info(f"No data available for {title.lower()}.")
        return
    if horizontal:
        fig = px.bar(data, x=y, y=x, orientation="h", title=title, text_auto=text_auto, color=color)
    else:
        fig = px.bar(data, x=x, y=y, title=title, text_auto=text_auto, color=color, barmode="group")
    fig.update_layout(height=CHART_HEIGHT, xaxis_title=None, yaxis_title=None)
    st.plotly_chart(fig, use_container_width=True)


def create_pie(data, names="name", values="value", title=""):
    data = chart_frame(data)
    if data.empty or data[values].sum() == 0:
        st.info(f"No data available for {title.lower()}.")
        return
    fig = px.pie(data, names=names, values=values, title=title, hole=0.35)
    fig.update_layout(height=CHART_HEIGHT)
    st.plotly_chart(fig, use_container_width=True)


def create_line(data, x, y, title, color=None):
    data = chart_frame(data)
    if data.empty:
        st.info(f"No data available for {title.lower()}.")
        return
    fig = px.line(data, x=x, y=y, color=color, markers=True, title=title)
    fig.update_layout(height=CHART_HEIGHT, xaxis_title=None, yaxis_title=None)
    st.plotly_chart(fig, use_container_width=True)


def create_scatter(data, x, y, hover_name, title, color=None):
    data = chart_frame(data)
    if data.empty:
        st.info(f"No data available for {title.lower()}.")
        return
    fig = px.scatter(data, x=x, y=y, color=color, hover_name=hover_name, title=title)
    fig.update_layout(height=450)
    st.plotly_chart(fig, use_container_width=True)


def create_heatmap(data, x, y, z, title):
    if data.empty:
        st.info(f"No data available for {title.lower()}.")
        return
    fig = px.imshow(
        data,
        labels={"x": x, "y": y, "color": z},
        aspect="auto",
        title=title,
        text_auto=True,
    )
    fig.update_layout(height=450)
    st.plotly_chart(fig, use_container_width=True)


def create_radar(data: pd.DataFrame, category_column: str, metrics: list, title: str):
    if data.empty:
        st.info(f"No data available for {title.lower()}.")
        return
    fig = go.Figure()
    for _, row in data.iterrows():
        fig.add_trace(
            go.Scatterpolar(
                r=[row[m] for m in metrics] + [row[metrics[0]]],
                theta=metrics + [metrics[0]],
                fill="toself",
                name=str(row[category_column]),
            )
        )
    fig.update_layout(title=title, height=450, polar={"radialaxis": {"visible": True}})
    st.plotly_chart(fig, use_container_width=True)
