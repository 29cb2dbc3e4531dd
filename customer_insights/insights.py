"""
Composite figures behind the analytics and report screens.

Everything here is assembled from the aggregation engine so that every view
reports the same numbers for the same selection of customers.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from . import config
from .engine import (
    as_frame,
    average_age,
    average_income,
    average_income_by,
    describe_correlation,
    group_count,
    income_band_members,
    mean,
    outlier_bounds,
    pearson_correlation,
    percentage,
    round_half_up,
    standard_deviation,
    unique_values,
)
from .formatting import format_currency
from .models import AgeBucket, IncomeBand, Pattern, Recommendation

DIVISION_METRIC_COLUMNS = [
    "division",
    "total_customers",
    "total_income",
    "avg_income",
    "avg_age",
    "male_percentage",
    "married_percentage",
    "high_value_percentage",
]


@dataclass
class AnomalyReport:
    income_mean: float
    income_std: float
    income_lower: float
    income_upper: float
    high_income_outliers: pd.DataFrame
    low_income_outliers: pd.DataFrame
    age_mean: float
    age_std: float
    age_lower: float
    age_upper: float
    age_outliers: pd.DataFrame
    patterns: list = field(default_factory=list)


@dataclass
class KpiRow:
    key: str
    label: str
    current: float
    target: float
    previous: float
    progress: int
    change: int
    unit: str


def percentage_change(current: float, previous: float) -> int:
    if not previous:
        return 0
    return round_half_up((current - previous) / previous * 100)


def target_progress(current: float, target: float) -> int:
    return min(percentage(current, target), 100)


def kpi_status(progress: int) -> str:
    if progress >= 90:
        return "on track"
    if progress >= 70:
        return "at risk"
    return "off track"


def key_figures(customers) -> dict:
    df = as_frame(customers)
    total = len(df)
    earners = int((df["income"] > 0).sum())
    male = int((df["gender"] == "M").sum())
    female = int((df["gender"] == "F").sum())
    married = int((df["marital_status"] == "Married").sum())
    high_value = int((df["income"] >= config.HIGH_VALUE_THRESHOLD).sum())
    premium = int((df["income"] > config.PREMIUM_INCOME_THRESHOLD).sum())
    male_percentage = percentage(male, total)

    return {
        "total_customers": total,
        "customers_with_income": earners,
        "income_percentage": percentage(earners, total),
        "no_income_customers": total - earners,
        "no_income_percentage": percentage(total - earners, total),
        "total_income": int(df["income"].sum()),
        "average_income": average_income(df),
        "average_age": average_age(df),
        "male_customers": male,
        "female_customers": female,
        "male_percentage": male_percentage,
        "female_percentage": 100 - male_percentage if total else 0,
        "married_percentage": percentage(married, total),
        "high_value_customers": high_value,
        "high_value_percentage": percentage(high_value, total),
        "premium_percentage": percentage(premium, total),
        "divisions": len(unique_values(df, "division")),
    }


def division_metrics(customers) -> pd.DataFrame:
    df = as_frame(customers)
    rows = []
    for division, group in df.groupby("division", sort=False):
        size = len(group)
        rows.append(
            {
                "division": division,
                "total_customers": size,
                "total_income": int(group["income"].sum()),
                "avg_income": average_income(group),
                "avg_age": average_age(group),
                "male_percentage": percentage((group["gender"] == "M").sum(), size),
                "married_percentage": percentage((group["marital_status"] == "Married").sum(), size),
                "high_value_percentage": percentage(
                    (group["income"] >= config.HIGH_VALUE_THRESHOLD).sum(), size
                ),
            }
        )
    return pd.DataFrame(rows, columns=DIVISION_METRIC_COLUMNS)


def division_changes(
    metrics: pd.DataFrame,
    seed: int = config.REGIONAL_SEED,
    drift: float = config.REGIONAL_DRIFT,
) -> pd.DataFrame:
    """Period-over-period change per division against a simulated previous period."""
    rng = np.random.default_rng(seed)
    rows = []
    for row in metrics.itertuples(index=False):
        changes = {"division": row.division}
        for column, name in (
            ("total_customers", "customer_change"),
            ("total_income", "income_change"),
            ("avg_income", "avg_income_change"),
        ):
            current = getattr(row, column)
            previous = round_half_up(current * (1 - rng.uniform(-drift, drift)))
            changes[name] = percentage_change(current, previous)
        rows.append(changes)
    return pd.DataFrame(
        rows, columns=["division", "customer_change", "income_change", "avg_income_change"]
    )


def gender_by_division(customers) -> pd.DataFrame:
    df = as_frame(customers)
    rows = []
    for division, group in df.groupby("division", sort=False):
        male = int((group["gender"] == "M").sum())
        female = int((group["gender"] == "F").sum())
        rows.append(
            {
                "division": division,
                "male": male,
                "female": female,
                "total_customers": len(group),
                "male_percentage": percentage(male, len(group)),
            }
        )
    frame = pd.DataFrame(
        rows, columns=["division", "male", "female", "total_customers", "male_percentage"]
    )
    return frame.sort_values("total_customers", ascending=False, kind="mergesort").reset_index(drop=True)


def income_by_age_group(
    customers,
    buckets: Sequence[AgeBucket],
    marital_status: Optional[str] = None,
) -> dict:
    df = as_frame(customers)
    if marital_status:
        df = df[df["marital_status"] == marital_status]
    return {
        bucket.label: average_income(df[df["age"].between(bucket.minimum, bucket.maximum)])
        for bucket in buckets
    }


def income_trend_by_marital_status(
    customers, buckets: Sequence[AgeBucket] = config.TREND_AGE_GROUPS
) -> pd.DataFrame:
    df = as_frame(customers)
    statuses = unique_values(df, "marital_status")
    trend = pd.DataFrame(
        {status: income_by_age_group(df, buckets, status) for status in statuses},
        index=[bucket.label for bucket in buckets],
    )
    trend.index.name = "age_group"
    return trend


def income_heatmap(customers) -> pd.DataFrame:
    df = as_frame(customers)
    divisions = unique_values(df, "division")
    statuses = unique_values(df, "marital_status")
    heatmap = pd.DataFrame(
        {
            status: [
                average_income(df[(df["division"] == division) & (df["marital_status"] == status)])
                for division in divisions
            ]
            for status in statuses
        },
        index=divisions,
    )
    heatmap.index.name = "division"
    return heatmap


def income_contribution(customers, bands: Sequence[IncomeBand] = config.INCOME_RANGES) -> list:
    df = as_frame(customers)
    total_income = int(df["income"].sum())
    contribution = []
    for band in bands:
        band_income = int(income_band_members(df, band)["income"].sum())
        if band_income > 0:
            contribution.append(
                {"name": band.label, "income": band_income, "value": percentage(band_income, total_income)}
            )
    return contribution


def age_income_correlation(customers) -> dict:
    df = as_frame(customers)
    earners = df[df["income"] > 0]
    r = pearson_correlation(earners["age"], earners["income"])
    strength, direction = describe_correlation(r)
    return {"r": r, "strength": strength, "direction": direction, "points": earners[["name", "age", "income"]]}


def income_spread(customers, key: str) -> Optional[dict]:
    """Highest and lowest average income across the values of ``key``."""
    averages = average_income_by(customers, key)
    earning = {value: income for value, income in averages.items() if income > 0}
    if not earning:
        return None

    highest = max(earning, key=earning.get)
    lowest = min(earning, key=earning.get)
    difference = earning[highest] - earning[lowest]
    return {
        "highest": highest,
        "highest_income": earning[highest],
        "lowest": lowest,
        "lowest_income": earning[lowest],
        "difference": difference,
        "percentage_difference": percentage(difference, earning[lowest]),
    }


def detect_anomalies(customers, k: float = config.OUTLIER_STD_MULTIPLIER) -> AnomalyReport:
    df = as_frame(customers)
    earners = df[df["income"] > 0]
    incomes = earners["income"].tolist()
    income_lower, income_upper = outlier_bounds(incomes, k)

    ages = df["age"].tolist()
    age_mean = mean(ages)
    age_std = standard_deviation(ages)

    report = AnomalyReport(
        income_mean=mean(incomes),
        income_std=standard_deviation(incomes),
        income_lower=income_lower,
        income_upper=income_upper,
        high_income_outliers=earners[earners["income"] > income_upper].copy(),
        low_income_outliers=earners[earners["income"] < income_lower].copy(),
        age_mean=age_mean,
        age_std=age_std,
        age_lower=age_mean - k * age_std,
        age_upper=age_mean + k * age_std,
        age_outliers=df[(df["age"] - age_mean).abs() > k * age_std].copy(),
    )
    report.patterns = unusual_patterns(df, report.income_mean)
    return report


def unusual_patterns(customers, income_mean: float) -> list:
    df = as_frame(customers)
    patterns = []

    young_high_earners = df[(df["age"] < 30) & (df["income"] > income_mean * 1.5)]
    if len(young_high_earners) > 0:
        patterns.append(
            Pattern(
                "Young High Earners",
                f"{len(young_high_earners)} customers under 30 with income 50% above average",
                len(young_high_earners),
            )
        )

    for division in unique_values(df, "division"):
        earners = df[(df["division"] == division) & (df["income"] > 0)]
        male = earners.loc[earners["gender"] == "M", "income"]
        female = earners.loc[earners["gender"] == "F", "income"]
        if male.empty or female.empty:
            continue
        ratio = max(male.mean(), female.mean()) / min(male.mean(), female.mean())
        if ratio > 1.5:
            patterns.append(
                Pattern(
                    f"Gender Income Gap in {division}",
                    f"{ratio:.1f}x difference between male and female average income",
                    len(earners),
                )
            )

    total = len(df)
    for status, count in group_count(df, "marital_status").items():
        share = count / total * 100
        if share < 10 or share > 70:
            patterns.append(
                Pattern(
                    f"Unusual {status} Distribution",
                    f"{round_half_up(share)}% of customers are {status}",
                    count,
                )
            )
    return patterns


def lifetime_value(income: int, age: int) -> int:
    if income <= 0:
        return 0
    years_remaining = max(config.RETIREMENT_AGE - age, 0)
    return round_half_up(income * config.LIFETIME_SPEND_RATE * years_remaining)


def top_lifetime_value(customers, n: int = 10) -> pd.DataFrame:
    df = as_frame(customers).copy()
    df["ltv"] = [lifetime_value(income, age) for income, age in zip(df["income"], df["age"])]
    return df.sort_values("ltv", ascending=False, kind="mergesort").head(n).reset_index(drop=True)


def income_projection(customers, buckets: Sequence[AgeBucket] = config.PROJECTION_AGE_GROUPS) -> list:
    df = as_frame(customers)
    oldest = int(df["age"].max()) if not df.empty else 0
    married = df[df["marital_status"] == "Married"]
    projection = []
    for bucket in buckets:
        avg = average_income(married[married["age"].between(bucket.minimum, bucket.maximum)])
        projected = bucket.minimum > oldest
        value = round_half_up(avg * config.PROJECTED_GROWTH) if projected else avg
        projection.append({"name": bucket.label, "value": value, "projected": projected})
    return projection


def key_metrics_report(customers, targets: Optional[dict] = None) -> list:
    targets = targets or config.KPI_TARGETS
    figures = key_figures(customers)
    rows = []

    measured = (
        ("total_customers", "Total Customers", "count"),
        ("total_income", "Total Income", "currency"),
        ("average_income", "Average Income", "currency"),
        ("high_value_percentage", "High-Value Customers", "percent"),
    )
    for key, label, unit in measured:
        current = figures[key]
        previous = round_half_up(current * config.PREVIOUS_PERIOD_FACTORS[key])
        rows.append(
            KpiRow(
                key=key,
                label=label,
                current=current,
                target=targets[key],
                previous=previous,
                progress=target_progress(current, targets[key]),
                change=percentage_change(current, previous),
                unit=unit,
            )
        )

    simulated = (
        ("customer_retention", "Customer Retention", "percent"),
        ("customer_satisfaction", "Customer Satisfaction", "percent"),
        ("market_share", "Market Share", "percent"),
        ("customer_acquisition_cost", "Acquisition Cost", "currency"),
    )
    for key, label, unit in simulated:
        current, previous = config.SIMULATED_KPIS[key]
        if key == "customer_acquisition_cost":
            # lower is better
            progress = target_progress(targets[key], current)
        else:
            progress = target_progress(current, targets[key])
        rows.append(
            KpiRow(
                key=key,
                label=label,
                current=current,
                target=targets[key],
                previous=previous,
                progress=progress,
                change=percentage_change(current, previous),
                unit=unit,
            )
        )
    return rows


def recommendations(customers) -> list:
    df = as_frame(customers)
    total = len(df)
    if total == 0:
        return []

    high_value = df[df["income"] >= config.HIGH_VALUE_THRESHOLD]
    young_high_earners = df[(df["age"] < 30) & (df["income"] >= config.PREMIUM_INCOME_THRESHOLD)]
    married_high_value = high_value[high_value["marital_status"] == "Married"]
    single_high_value = high_value[high_value["marital_status"] == "Single"]
    figures = key_figures(df)

    items = [
        Recommendation(
            "Premium Loyalty Program",
            f"Implement a premium loyalty program for the {len(high_value)} high-value customers who "
            f"represent {percentage(len(high_value), total)}% of the customer base. Focus on personalized "
            "services, exclusive benefits, and dedicated account management.",
            "segment",
            ["Premium Services", "Loyalty Program"],
        ),
        Recommendation(
            "Mid-Value Upselling",
            "Develop targeted upselling strategies for mid-value customers (income $25K-$75K). These "
            "customers have the highest growth potential with proper engagement.",
            "segment",
            ["Upselling", "Value Packages"],
        ),
        Recommendation(
            "Young Professionals",
            f"Create specialized offerings for the {len(young_high_earners)} young high-earners (under 30 "
            "with income over $50K). This segment shows high lifetime value potential.",
            "segment",
            ["Digital First", "Early Adoption"],
        ),
    ]

    spread = income_spread(df, "division")
    if spread is not None:
        items.append(
            Recommendation(
                f"Expand in {spread['highest']}",
                f"Prioritize expansion in {spread['highest']} where average income is "
                f"{format_currency(spread['highest_income'])}, the highest of any division.",
                "regional",
                ["Market Expansion", "Local Partnerships"],
            )
        )
        items.append(
            Recommendation(
                f"Improve {spread['lowest']}",
                f"Develop a targeted improvement plan for {spread['lowest']} where average income is "
                f"{format_currency(spread['lowest_income'])}. Consider specialized offerings and pricing adjustments.",
                "regional",
                ["Market Development", "Pricing"],
            )
        )

    items.append(
        Recommendation(
            "Balanced Demographic Marketing",
            f"The base is {figures['male_percentage']}% male and {figures['female_percentage']}% female. "
            f"{len(married_high_value)} married and {len(single_high_value)} single customers are high value; "
            "tailor household and individual offerings accordingly.",
            "demographic",
            ["Family Packages", "Personalization"],
        )
    )
    return items


def customer_highlights(customers) -> list:
    """Short income, age and regional observations for the Customers page."""
    df = as_frame(customers)
    if df.empty:
        return []

    figures = key_figures(df)
    divisions = group_count(df, "division")
    top_division = max(divisions, key=divisions.get)
    under_30 = int((df["age"] < 30).sum())
    top_share = percentage(divisions[top_division], figures["total_customers"])
    return [
        (
            "Income Distribution",
            f"{figures['premium_percentage']}% of customers have an income above "
            f"{format_currency(config.PREMIUM_INCOME_THRESHOLD)}, representing the premium customer segment.",
        ),
        (
            "Age Demographics",
            f"The average customer age is {figures['average_age']} years old, with {under_30} customers under 30.",
        ),
        (
            "Regional Distribution",
            f"{top_division} is the largest market with {divisions[top_division]} customers ({top_share}% of total).",
        ),
    ]


def executive_summary(customers) -> list:
    df = as_frame(customers)
    if df.empty:
        return ["No customers match the current selection."]

    figures = key_figures(df)
    total = figures["total_customers"]
    divisions = group_count(df, "division")
    top_division = max(divisions, key=divisions.get)
    high_earners = (df["income"] >= config.HIGH_VALUE_THRESHOLD).sum()

    return [
        f"The customer base comprises {total} customers across {figures['divisions']} divisions, "
        f"{figures['income_percentage']}% of whom report an income.",
        f"{top_division} is the largest division with {divisions[top_division]} customers "
        f"({percentage(divisions[top_division], total)}% of total).",
        f"{percentage(high_earners, total)}% of customers earn $75,000 or more, while "
        f"{figures['no_income_percentage']}% report no income.",
        f"Average reported income is {format_currency(figures['average_income'])} and the average "
        f"customer is {figures['average_age']} years old.",
        f"The base is {figures['male_percentage']}% male and {figures['female_percentage']}% female; "
        f"{figures['married_percentage']}% of customers are married.",
    ]

