import logging
import os

from .models import AgeBucket, IncomeBand

APP_TITLE = "Customer Insights Dashboard"
PAGE_ICON = "📊"

LOG_LEVEL = os.environ.get("CUSTOMER_INSIGHTS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Fake latency for the simulated backend calls, in seconds.
READ_LATENCY = float(os.environ.get("CUSTOMER_INSIGHTS_READ_LATENCY", "0.5"))
WRITE_LATENCY = float(os.environ.get("CUSTOMER_INSIGHTS_WRITE_LATENCY", "1.0"))
IMPORT_LATENCY = float(os.environ.get("CUSTOMER_INSIGHTS_IMPORT_LATENCY", "3.0"))
IMPORT_STEPS = 10
IMPORT_EXTENSIONS = (".csv", ".xlsx")

PAGE_SIZE = 10

HIGH_VALUE_THRESHOLD = 75000
MID_VALUE_THRESHOLD = 25000
PREMIUM_INCOME_THRESHOLD = 50000

OUTLIER_STD_MULTIPLIER = 2
CORRELATION_WEAK = 0.3
CORRELATION_MODERATE = 0.7

PREDICTION_AGE_TOLERANCE = 5
PREDICTION_BROAD_AGE_TOLERANCE = 10
PREDICTION_FULL_CONFIDENCE_MATCHES = 10
PREDICTION_BROAD_CONFIDENCE = 30

LIFETIME_SPEND_RATE = 0.05
RETIREMENT_AGE = 65
PROJECTED_GROWTH = 1.05

VALUE_TIERS = (
    IncomeBand("No Income", 0, 0),
    IncomeBand("Low Value", 1, MID_VALUE_THRESHOLD - 1),
    IncomeBand("Mid Value", MID_VALUE_THRESHOLD, HIGH_VALUE_THRESHOLD - 1),
    IncomeBand("High Value", HIGH_VALUE_THRESHOLD, None),
)

INCOME_RANGES = (
    IncomeBand("No Income", 0, 0),
    IncomeBand("1-25K", 1, 24999),
    IncomeBand("25K-50K", 25000, 49999),
    IncomeBand("50K-75K", 50000, 74999),
    IncomeBand("75K+", 75000, None),
)

AGE_DISTRIBUTION = (
    AgeBucket("20-29", 0, 29),
    AgeBucket("30-39", 30, 39),
    AgeBucket("40-49", 40, 49),
    AgeBucket("50+", 50, 200),
)

AGE_SEGMENTS = (
    AgeBucket("Young (<30)", 0, 29),
    AgeBucket("Middle-aged (30-44)", 30, 44),
    AgeBucket("Older (45+)", 45, 200),
)

TREND_AGE_GROUPS = (
    AgeBucket("20-24", 20, 24),
    AgeBucket("25-29", 25, 29),
    AgeBucket("30-34", 30, 34),
    AgeBucket("35-39", 35, 39),
    AgeBucket("40-44", 40, 44),
    AgeBucket("45-49", 45, 49),
    AgeBucket("50-54", 50, 54),
)

PROJECTION_AGE_GROUPS = (
    AgeBucket("20-29", 20, 29),
    AgeBucket("30-39", 30, 39),
    AgeBucket("40-49", 40, 49),
    AgeBucket("50-59", 50, 59),
    AgeBucket("60-69", 60, 69),
)

KPI_TARGETS = {
    "total_customers": 60,
    "total_income": 3000000,
    "average_income": 50000,
    "high_value_percentage": 25,
    "customer_retention": 85,
    "customer_satisfaction": 90,
    "market_share": 15,
    "customer_acquisition_cost": 500,
}

PREVIOUS_PERIOD_FACTORS = {
    "total_customers": 0.9,
    "total_income": 0.85,
    "average_income": 0.95,
    "high_value_percentage": 0.9,
}

# Survey-sourced KPIs with no backing data: (current, previous).
SIMULATED_KPIS = {
    "customer_retention": (83, 82),
    "customer_satisfaction": (88, 87),
    "market_share": (14, 12),
    "customer_acquisition_cost": (520, 550),
}

REGIONAL_DRIFT = 0.15
REGIONAL_SEED = 7

SHARE_BASE_URL = os.environ.get("CUSTOMER_INSIGHTS_BASE_URL", "http://localhost:8501")


def configure_logging(level: str = LOG_LEVEL) -> logging.Logger:
    logger = logging.getLogger("customer_insights")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
