import pytest

from customer_insights.data import DIVISIONS, customers_frame, load_customers
from customer_insights.formatting import format_currency, format_number, format_percent, gender_label
from customer_insights.models import (
    CUSTOMER_FIELDS,
    Customer,
    InvalidCustomerError,
    validate_customer,
)


def test_reference_dataset(reference_customers):
    assert len(reference_customers) == 50
    assert len({c.id for c in reference_customers}) == 50
    assert {c.division for c in reference_customers} <= set(DIVISIONS)
    for customer in reference_customers:
        validate_customer(customer)


def test_load_customers_returns_a_fresh_list():
    first = load_customers()
    first.clear()
    assert len(load_customers()) == 50


def test_customers_frame_accepts_mappings_and_coerces_numbers():
    frame = customers_frame(
        [{"id": "D1", "name": "Dina", "division": "Rangpur", "gender": "F", "marital_status": "Single", "age": "41", "income": None}]
    )
    assert frame.columns.tolist() == list(CUSTOMER_FIELDS)
    assert frame.loc[0, "age"] == 41
    assert frame.loc[0, "income"] == 0


def test_customers_frame_of_empty_input():
    frame = customers_frame([])
    assert frame.empty
    assert frame.columns.tolist() == list(CUSTOMER_FIELDS)


@pytest.mark.parametrize(
    "changes, message",
    [
        ({"gender": "X"}, "gender"),
        ({"marital_status": "Widowed"}, "marital status"),
        ({"age": 17}, "Age"),
        ({"age": 101}, "Age"),
        ({"income": -1}, "Income"),
        ({"id": ""}, "id"),
        ({"age": "forty"}, "Age"),
        ({"age": True}, "Age"),
        ({"income": None}, "Income"),
        ({"income": 1500.5}, "Income"),
    ],
)
def test_validate_customer_rejects_bad_values(changes, message):
    fields = {"id": "V1", "name": "Valid", "division": "Dhaka", "gender": "M", "marital_status": "Single", "age": 30, "income": 0}
    fields.update(changes)
    with pytest.raises(InvalidCustomerError, match=message):
        validate_customer(Customer(**fields))


def test_formatting():
    assert format_currency(1234567) == "$1,234,567"
    assert format_currency(None) == "$0"
    assert format_number(float("nan")) == "0"
    assert format_percent(12) == "12%"
    assert gender_label("F") == "Female"
    assert gender_label("X") == "X"
