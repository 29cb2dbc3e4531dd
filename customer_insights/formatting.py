import pandas as pd


def format_currency(value: float) -> str:
    if value is None or pd.isna(value):
        return "$0"
    return f"${value:,.0f}"


def format_number(value: float) -> str:
    if value is None or pd.isna(value):
        return "0"
    return f"{value:,.0f}"


def format_percent(value: float) -> str:
    if value is None or pd.isna(value):
        return "0%"
    return f"{value:,.0f}%"


def gender_label(code: str) -> str:
    return {"M": "Male", "F": "Female"}.get(code, code)
