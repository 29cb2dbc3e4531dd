import asyncio

import pytest

from customer_insights import config
from customer_insights.actions import (
    delete_customer,
    get_customer,
    import_customers,
    run_action,
    save_settings,
    update_customer,
)


def test_get_customer(repository):
    result = asyncio.run(get_customer(repository, "C1", delay=0))
    assert result.success
    assert result.data.name == "Ayesha"
    assert result.error is None


def test_get_missing_customer(repository):
    result = asyncio.run(get_customer(repository, "missing", delay=0))
    assert not result.success
    assert result.error == "Failed to fetch customer"


def test_default_latency_comes_from_config(repository, monkeypatch):
    monkeypatch.setattr(config, "READ_LATENCY", 0)
    assert run_action(get_customer(repository, "C2")).success


def test_update_customer(repository):
    result = asyncio.run(update_customer(repository, "C2", {"name": "Rahim Uddin"}, delay=0))
    assert result.success
    assert result.data.name == "Rahim Uddin"
    assert repository.get("C2").name == "Rahim Uddin"


def test_update_missing_customer(repository):
    result = asyncio.run(update_customer(repository, "missing", {"name": "x"}, delay=0))
    assert not result.success
    assert result.error == "Failed to update customer"


def test_update_with_invalid_values(repository):
    result = asyncio.run(update_customer(repository, "C2", {"gender": "X"}, delay=0))
    assert not result.success
    assert result.error.startswith("Failed to update customer: ")
    assert repository.get("C2").gender == "M"


@pytest.mark.parametrize("changes", [{"income": None}, {"age": "forty"}, {"age": True}])
def test_update_with_non_numeric_values_fails_cleanly(repository, changes):
    result = asyncio.run(update_customer(repository, "C2", changes, delay=0))
    assert not result.success
    assert result.error.startswith("Failed to update customer: ")
    assert repository.get("C2").income == 10000
    assert repository.get("C2").age == 30


def test_delete_customer(repository):
    assert asyncio.run(delete_customer(repository, "C1", delay=0)).success
    assert len(repository) == 4

    again = asyncio.run(delete_customer(repository, "C1", delay=0))
    assert not again.success
    assert again.error == "Failed to delete customer"


def test_save_settings():
    result = asyncio.run(save_settings("profile", {"name": "Admin"}, delay=0))
    assert result.success
    assert result.data == {"name": "Admin"}


def test_save_settings_rejects_non_mapping():
    result = asyncio.run(save_settings("profile", ["name"], delay=0))
    assert not result.success
    assert result.error == "Failed to save profile settings"


def test_import_reports_progress_in_ten_percent_steps():
    progress = []
    result = asyncio.run(import_customers("customers.csv", "replace", delay=0, on_progress=progress.append))
    assert result.success
    assert result.data == {"file": "customers.csv", "mode": "replace"}
    assert progress == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


def test_import_accepts_excel_without_progress_callback():
    assert asyncio.run(import_customers("Q3 Customers.XLSX", delay=0)).success


@pytest.mark.parametrize(
    "file_name, mode",
    [("customers.json", "append"), ("", "append"), (None, "append"), ("customers.csv", "merge")],
)
def test_import_rejects_bad_input(file_name, mode):
    progress = []
    result = asyncio.run(import_customers(file_name, mode, delay=0, on_progress=progress.append))
    assert not result.success
    assert result.error.startswith("Failed to import data")
    assert progress == []


def test_import_default_latency_comes_from_config(monkeypatch):
    monkeypatch.setattr(config, "IMPORT_LATENCY", 0)
    assert run_action(import_customers("customers.csv")).success
