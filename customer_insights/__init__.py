"""Customer analytics dashboard: aggregation engine, insights and Streamlit views."""

__version__ = "0.1.0"
