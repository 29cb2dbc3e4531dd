from dataclasses import FrozenInstanceError

import pytest

from customer_insights.models import Customer, InvalidCustomerError
from customer_insights.repository import CustomerNotFoundError, InMemoryCustomerRepository


def test_list_preserves_insertion_order(repository, small_customers):
    assert repository.list() == small_customers
    assert len(repository) == 5


def test_get_missing_customer_returns_none(repository):
    assert repository.get("C1").name == "Ayesha"
    assert repository.get("missing") is None


def test_duplicate_ids_are_rejected(small_customers):
    with pytest.raises(ValueError, match="Duplicate customer id"):
        InMemoryCustomerRepository(small_customers + [small_customers[0]])


def test_update_replaces_record(repository):
    original = repository.get("C2")
    updated = repository.update("C2", {"income": 15000, "id": "HACKED", "unknown": 1})

    assert updated.income == 15000
    assert updated.id == "C2"
    assert repository.get("C2") == updated
    assert original.income == 10000


def test_records_are_immutable(repository):
    with pytest.raises(FrozenInstanceError):
        repository.get("C1").income = 1


def test_update_rejects_invalid_values(repository):
    with pytest.raises(InvalidCustomerError):
        repository.update("C3", {"age": 10})
    assert repository.get("C3").age == 35


def test_update_unknown_customer(repository):
    with pytest.raises(CustomerNotFoundError):
        repository.update("missing", {"income": 1})


def test_delete(repository):
    repository.delete("C4")
    assert repository.get("C4") is None
    assert [c.id for c in repository.list()] == ["C1", "C2", "C3", "C5"]

    with pytest.raises(CustomerNotFoundError):
        repository.delete("C4")


def test_empty_repository():
    repository = InMemoryCustomerRepository()
    assert repository.list() == []
    repository_with_one = InMemoryCustomerRepository([Customer("Z1", "Zara", "Dhaka", "F", "Single", 29, 0)])
    assert len(repository_with_one) == 1
