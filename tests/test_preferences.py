import pytest

from customer_insights.preferences import (
    AccessControlSettings,
    ApiSettings,
    ExportPreferences,
    default_settings,
    generate_api_key,
    settings_payload,
)


def test_generate_api_key():
    key = generate_api_key()
    assert key.startswith("sk_live_")
    assert len(key) == len("sk_live_") + 32
    assert generate_api_key() != key


def test_default_settings_sections():
    assert list(default_settings()) == ["profile", "appearance", "notifications", "access", "api", "data", "export"]


def test_add_and_remove_member():
    access = AccessControlSettings()
    member = access.add_member("Rina", "rina@example.com", "sales", "90days")
    assert member in access.members

    with pytest.raises(ValueError, match="already has access"):
        access.add_member("Rina Again", "RINA@example.com", "viewer")
    with pytest.raises(ValueError, match="required"):
        access.add_member("", "someone@example.com", "viewer")

    access.remove_member("rina@example.com")
    assert all(m.email != "rina@example.com" for m in access.members)


def test_member_search():
    access = AccessControlSettings()
    assert [m.email for m in access.search("sales")] == ["sales@example.com"]
    assert [m.role for m in access.search(role="viewer")] == ["viewer"]
    assert len(access.search()) == 3
    assert access.search("admin", role="viewer") == []


def test_add_webhook():
    api = ApiSettings()
    webhook = api.add_webhook("https://hooks.example.com/customers", ["customer.created"])
    assert api.webhooks == [webhook]

    with pytest.raises(ValueError):
        api.add_webhook("ftp://hooks.example.com", ["customer.created"])
    with pytest.raises(ValueError):
        api.add_webhook("https://hooks.example.com", [])


def test_each_api_settings_gets_its_own_key():
    assert ApiSettings().api_key != ApiSettings().api_key


def test_export_recipients():
    preferences = ExportPreferences(default_recipients=" a@example.com, ,b@example.com ")
    assert preferences.recipients() == ["a@example.com", "b@example.com"]
    assert ExportPreferences().recipients() == []


def test_settings_payload_is_plain_data():
    payload = settings_payload(AccessControlSettings())
    assert payload["members"][0] == {
        "name": "Admin User",
        "email": "admin@example.com",
        "role": "admin",
        "expiry": "never",
    }
