import math

import pandas as pd
import pytest

from customer_insights import config
from customer_insights.engine import (
    age_bucket,
    as_frame,
    average_age,
    average_income,
    average_income_by,
    describe_correlation,
    filter_customers,
    group_count,
    nearest_neighbor_predict,
    outlier_bounds,
    pearson_correlation,
    percentage,
    round_half_up,
    segment_by_income,
    standard_deviation,
    to_chart_data,
    unique_values,
)
from customer_insights.models import Customer, IncomeBand, Prediction


# =============================================================================
# ROUNDING AND PERCENTAGES
# =============================================================================

@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (-0.5, 0), (-1.5, -1), (12.5, 13)],
)
def test_round_half_up_rounds_halves_up(value, expected):
    assert round_half_up(value) == expected


def test_round_half_up_maps_nan_and_infinity_to_zero():
    assert round_half_up(float("nan")) == 0
    assert round_half_up(float("inf")) == 0
    assert round_half_up(None) == 0


def test_percentage_with_zero_denominator_is_zero():
    assert percentage(5, 0) == 0
    assert percentage(0, 0) == 0


def test_percentage_rounds_half_up():
    assert percentage(1, 8) == 13
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67


# =============================================================================
# GROUPING AND AVERAGES
# =============================================================================

def test_group_count_keeps_first_occurrence_order(small_customers):
    counts = group_count(small_customers, "division")
    assert list(counts.items()) == [("Dhaka", 2), ("Sylhet", 2), ("Khulna", 1)]


def test_group_count_on_empty_input():
    assert group_count([], "division") == {}


def test_to_chart_data():
    assert to_chart_data({"a": 1, "b": 2}) == [{"name": "a", "value": 1}, {"name": "b", "value": 2}]


def test_unique_values_drops_empty_values(small_customers):
    blank = Customer("C9", "Nobody", "", "M", "Single", 30, 0)
    assert unique_values(small_customers + [blank], "division") == ["Dhaka", "Sylhet", "Khulna"]


def test_average_income_of_empty_collection_is_zero():
    assert average_income([]) == 0


def test_average_income_ignores_zero_incomes(small_customers):
    assert average_income(small_customers) == 25000
    assert average_income(small_customers[:1]) == 0


def test_average_age(small_customers):
    assert average_age(small_customers) == 35
    assert average_age([]) == 0


def test_average_income_by_excludes_non_earners(small_customers):
    assert average_income_by(small_customers, "division") == {
        "Dhaka": 10000,
        "Sylhet": 30000,
        "Khulna": 30000,
    }


def test_age_bucket_counts_in_bucket_order(small_customers):
    assert age_bucket(small_customers, config.AGE_DISTRIBUTION) == {
        "20-29": 1,
        "30-39": 2,
        "40-49": 2,
        "50+": 0,
    }


def test_age_bucket_drops_out_of_range_customers(small_customers):
    buckets = config.TREND_AGE_GROUPS[:2]
    assert age_bucket(small_customers, buckets) == {"20-24": 0, "25-29": 1}


# =============================================================================
# STATISTICS
# =============================================================================

def test_standard_deviation_is_population():
    assert standard_deviation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
    assert standard_deviation([]) == 0.0


def test_outlier_bounds():
    lower, upper = outlier_bounds([1, 2, 3], k=2)
    spread = math.sqrt(2 / 3)
    assert lower == pytest.approx(2 - 2 * spread)
    assert upper == pytest.approx(2 + 2 * spread)


def test_pearson_of_series_with_itself_is_one():
    xs = [23, 31, 40, 52, 60]
    assert pearson_correlation(xs, xs) == pytest.approx(1.0)


def test_pearson_negative_relationship():
    assert pearson_correlation([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)


@pytest.mark.parametrize(
    "xs, ys",
    [([5, 5, 5], [1, 2, 3]), ([1, 2, 3], [7, 7, 7]), ([1], [2]), ([], [])],
)
def test_pearson_degenerate_input_is_zero(xs, ys):
    assert pearson_correlation(xs, ys) == 0.0


def test_pearson_truncates_to_shorter_series():
    assert pearson_correlation([1, 2, 3, 100], [2, 4, 6]) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "r, expected",
    [
        (0.2, ("weak", "positive")),
        (-0.5, ("moderate", "negative")),
        (0.9, ("strong", "positive")),
        (0.3, ("moderate", "positive")),
        (0.0, ("weak", "negative")),
    ],
)
def test_describe_correlation(r, expected):
    assert describe_correlation(r) == expected


# =============================================================================
# FILTERING AND SEGMENTATION
# =============================================================================

def test_filter_with_empty_criteria_returns_equal_copy(reference_frame):
    result = filter_customers(reference_frame, {})
    assert result.equals(reference_frame)
    assert result is not reference_frame


def test_filter_by_gender_returns_subset_in_order(small_customers):
    result = filter_customers(small_customers, {"gender": "M"})
    assert result["id"].tolist() == ["C2", "C4", "C5"]


def test_filter_ands_criteria_and_skips_empty_values(small_customers):
    result = filter_customers(small_customers, {"gender": "M", "division": "Sylhet", "marital_status": ""})
    assert result["id"].tolist() == ["C5"]
    assert filter_customers(small_customers, {"division": None})["id"].tolist() == [
        "C1",
        "C2",
        "C3",
        "C4",
        "C5",
    ]


def test_filter_with_unknown_key_matches_nothing(small_customers):
    assert filter_customers(small_customers, {"region": "North"}).empty


def test_filter_does_not_mutate_source(small_frame):
    before = small_frame.copy()
    result = filter_customers(small_frame, {"gender": "F"})
    result.loc[result.index[0], "income"] = 999
    pd.testing.assert_frame_equal(small_frame, before)


def test_segment_counts_cover_every_customer(reference_customers):
    segments = segment_by_income(reference_customers)
    assert [s.name for s in segments] == [band.label for band in config.VALUE_TIERS]
    assert sum(s.count for s in segments) == len(reference_customers)


def test_segment_summaries(small_customers):
    no_income, low, mid, high = segment_by_income(small_customers)
    assert (no_income.count, no_income.average_income, no_income.percentage) == (1, 0, 20)
    assert (low.count, low.average_income) == (2, 15000)
    assert (mid.count, mid.average_age, mid.average_income, mid.percentage) == (2, 43, 35000, 40)
    assert (high.count, high.average_age, high.average_income, high.percentage) == (0, 0, 0, 0)


def test_segment_with_open_ended_band(small_customers):
    (band,) = segment_by_income(small_customers, [IncomeBand("30K+", 30000)])
    assert band.count == 2


# =============================================================================
# PREDICTION
# =============================================================================

def test_prediction_strict_tier(small_customers):
    prediction = nearest_neighbor_predict(small_customers, 35, "F", "Married")
    assert prediction == Prediction(20000, 10, "strict")


def test_prediction_strict_confidence_caps_at_100():
    peers = [Customer(f"P{i}", "Peer", "Dhaka", "M", "Single", 30, 50000) for i in range(12)]
    assert nearest_neighbor_predict(peers, 31, "M", "Single").confidence == 100


def test_prediction_falls_back_to_broad_tier(small_customers):
    prediction = nearest_neighbor_predict(small_customers, 33, "F", "Divorced")
    assert prediction == Prediction(20000, config.PREDICTION_BROAD_CONFIDENCE, "broad")


def test_prediction_without_matches_is_zero(small_customers):
    assert nearest_neighbor_predict(small_customers, 90, "M", "Single") == Prediction(0, 0, "none")


# =============================================================================
# REFERENCE DATASET
# =============================================================================

def test_reference_division_counts_sum_to_fifty(reference_customers):
    assert sum(group_count(reference_customers, "division").values()) == 50


def test_reference_average_income_matches_manual_computation(reference_customers):
    incomes = [c.income for c in reference_customers if c.income > 0]
    assert average_income(reference_customers) == math.floor(sum(incomes) / len(incomes) + 0.5)


def test_as_frame_passes_frames_through(reference_frame):
    assert as_frame(reference_frame) is reference_frame
