"""
Aggregation engine shared by every dashboard view.

All functions are pure and total: they accept either a customer DataFrame or
a sequence of ``Customer`` records, never mutate their input, and substitute
``0`` wherever a division would otherwise produce NaN or infinity. Incomes of
``0`` mean "not reported" and are left out of every income average.
"""

import math
from typing import Mapping, Optional, Sequence

import numpy as np
import pandas as pd

from . import config
from .data import customers_frame
from .models import AgeBucket, IncomeBand, Prediction, SegmentSummary


def as_frame(customers) -> pd.DataFrame:
    if isinstance(customers, pd.DataFrame):
        return customers
    return customers_frame(customers)


def round_half_up(value: float) -> int:
    """Round like the dashboard always has: halves go up, not to even."""
    if value is None or pd.isna(value) or math.isinf(value):
        return 0
    return int(math.floor(value + 0.5))


def percentage(numerator: float, denominator: float) -> int:
    if not denominator:
        return 0
    return round_half_up(numerator / denominator * 100)


def unique_values(customers, key: str) -> list:
    df = as_frame(customers)
    if key not in df.columns:
        return []
    return [value for value in df[key].drop_duplicates().tolist() if value]


def group_count(customers, key: str) -> dict:
    df = as_frame(customers)
    if df.empty or key not in df.columns:
        return {}
    counts = df.groupby(key, sort=False).size()
    return {value: int(count) for value, count in counts.items()}


def to_chart_data(mapping: Mapping) -> list:
    return [{"name": name, "value": value} for name, value in mapping.items()]


def average_income(customers) -> int:
    df = as_frame(customers)
    incomes = df.loc[df["income"] > 0, "income"]
    if incomes.empty:
        return 0
    return round_half_up(incomes.mean())


def average_age(customers) -> int:
    df = as_frame(customers)
    if df.empty:
        return 0
    return round_half_up(df["age"].mean())


def average_income_by(customers, key: str) -> dict:
    df = as_frame(customers)
    if df.empty:
        return {}
    return {value: average_income(group) for value, group in df.groupby(key, sort=False)}


def age_bucket(customers, buckets: Sequence[AgeBucket]) -> dict:
    df = as_frame(customers)
    return {
        bucket.label: int(df["age"].between(bucket.minimum, bucket.maximum).sum())
        for bucket in buckets
    }


def mean(values) -> float:
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def standard_deviation(values) -> float:
    """Population standard deviation (divides by n)."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.std(arr))


def outlier_bounds(values, k: float = config.OUTLIER_STD_MULTIPLIER) -> tuple:
    values = list(values)
    center = mean(values)
    spread = standard_deviation(values)
    return center - k * spread, center + k * spread


def pearson_correlation(xs, ys) -> float:
    x = np.asarray(list(xs), dtype=float)
    y = np.asarray(list(ys), dtype=float)
    n = min(x.size, y.size)
    x, y = x[:n], y[:n]
    # Constant series have no variance; exact check avoids float noise in the mean.
    if n < 2 or np.ptp(x) == 0 or np.ptp(y) == 0:
        return 0.0

    dx = x - x.mean()
    dy = y - y.mean()
    denominator = math.sqrt(float((dx * dx).sum()) * float((dy * dy).sum()))
    if denominator == 0:
        return 0.0
    r = float((dx * dy).sum()) / denominator
    return max(-1.0, min(1.0, r))


def describe_correlation(r: float) -> tuple:
    magnitude = abs(r)
    if magnitude < config.CORRELATION_WEAK:
        strength = "weak"
    elif magnitude < config.CORRELATION_MODERATE:
        strength = "moderate"
    else:
        strength = "strong"
    direction = "positive" if r > 0 else "negative"
    return strength, direction


def filter_customers(customers, criteria: Optional[Mapping] = None) -> pd.DataFrame:
    df = as_frame(customers)
    mask = pd.Series(True, index=df.index)
    for key, value in (criteria or {}).items():
        if value is None or value == "":
            continue
        if key not in df.columns:
            mask &= False
            continue
        mask &= df[key] == value
    return df[mask].copy()


def _band_mask(df: pd.DataFrame, band: IncomeBand) -> pd.Series:
    mask = df["income"] >= band.minimum
    if band.maximum is not None:
        mask &= df["income"] <= band.maximum
    return mask


def income_band_members(customers, band: IncomeBand) -> pd.DataFrame:
    df = as_frame(customers)
    return df[_band_mask(df, band)].copy()


def segment_by_income(customers, bands: Sequence[IncomeBand] = config.VALUE_TIERS) -> list:
    df = as_frame(customers)
    total = len(df)
    summaries = []
    for band in bands:
        members = df[_band_mask(df, band)]
        summaries.append(
            SegmentSummary(
                name=band.label,
                count=len(members),
                average_age=average_age(members),
                average_income=average_income(members),
                percentage=percentage(len(members), total),
            )
        )
    return summaries


def nearest_neighbor_predict(
    customers,
    target_age: int,
    gender: str,
    marital_status: str,
    age_tolerance: int = config.PREDICTION_AGE_TOLERANCE,
) -> Prediction:
    """
    Estimate income from comparable customers.

    Strict tier: earners within ``age_tolerance`` years with the same gender
    and marital status, confidence growing with the number of matches. Broad
    tier: any earner within ten years at a flat 30% confidence. The constants
    are heuristics kept for compatibility, not a calibrated model.
    """
    df = as_frame(customers)
    earners = df[df["income"] > 0]
    distance = (earners["age"] - target_age).abs()

    strict = earners[
        (distance <= age_tolerance)
        & (earners["gender"] == gender)
        & (earners["marital_status"] == marital_status)
    ]
    if not strict.empty:
        confidence = min(len(strict) / config.PREDICTION_FULL_CONFIDENCE_MATCHES, 1) * 100
        return Prediction(round_half_up(strict["income"].mean()), round_half_up(confidence), "strict")

    broad = earners[distance <= config.PREDICTION_BROAD_AGE_TOLERANCE]
    if not broad.empty:
        return Prediction(round_half_up(broad["income"].mean()), config.PREDICTION_BROAD_CONFIDENCE, "broad")

    return Prediction(0, 0, "none")
