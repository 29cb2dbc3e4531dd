"""
Pytest fixtures shared by the dashboard tests.
"""

import pandas as pd
import pytest

from customer_insights.data import customers_frame, load_customers
from customer_insights.models import Customer
from customer_insights.repository import InMemoryCustomerRepository


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def reference_customers() -> list:
    """The 50 bundled reference customers."""
    return load_customers()


@pytest.fixture
def reference_frame(reference_customers) -> pd.DataFrame:
    return customers_frame(reference_customers)


@pytest.fixture
def small_customers() -> list:
    """Five customers with hand-checkable figures."""
    return [
        Customer("C1", "Ayesha", "Dhaka", "F", "Married", 25, 0),
        Customer("C2", "Rahim", "Dhaka", "M", "Single", 30, 10000),
        Customer("C3", "Nadia", "Sylhet", "F", "Married", 35, 20000),
        Customer("C4", "Karim", "Khulna", "M", "Divorced", 40, 30000),
        Customer("C5", "Farhan", "Sylhet", "M", "Married", 45, 40000),
    ]


@pytest.fixture
def small_frame(small_customers) -> pd.DataFrame:
    return customers_frame(small_customers)


@pytest.fixture
def repository(small_customers) -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository(small_customers)
