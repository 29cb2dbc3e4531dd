import pytest

from customer_insights.auth import PAGES, authenticate, can_delete, can_edit, can_view, visible_pages


@pytest.fixture
def admin():
    return authenticate("admin@example.com", "admin123")


@pytest.fixture
def sales():
    return authenticate("sales@example.com", "sales123")


@pytest.fixture
def viewer():
    return authenticate("viewer@example.com", "viewer123")


def test_authenticate(admin):
    assert admin.role == "admin"
    assert authenticate("  Admin@Example.com ", "admin123") == admin


def test_authenticate_rejects_bad_credentials():
    assert authenticate("admin@example.com", "wrong") is None
    assert authenticate("nobody@example.com", "admin123") is None
    assert authenticate(None, "") is None


def test_page_access(admin, sales, viewer):
    assert visible_pages(admin) == list(PAGES)
    assert "Settings" not in visible_pages(sales)
    assert "Customers" in visible_pages(sales)
    assert visible_pages(viewer) == ["Dashboard", "Analytics", "Reports", "Database Schema"]
    assert not can_view(None, "Dashboard")
    assert not can_view(admin, "Billing")


def test_record_permissions(admin, sales, viewer):
    assert can_edit(admin) and can_delete(admin)
    assert can_edit(sales) and not can_delete(sales)
    assert not can_edit(viewer) and not can_delete(viewer)
    assert not can_edit(None)
