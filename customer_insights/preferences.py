"""Settings screens' data. Nothing here is persisted beyond the browser session."""

import secrets
from dataclasses import asdict, dataclass, field

COLOR_SCHEMES = ("blue", "green", "purple", "orange", "red")
FONT_SIZES = ("small", "medium", "large")
DEFAULT_VIEWS = ("Dashboard", "Customers", "Analytics", "Reports")
ACCESS_EXPIRY = ("30days", "90days", "1year", "never")
API_VERSIONS = ("v1", "v2-beta")
RATE_LIMITS = {
    "standard": "Standard (100 requests/min)",
    "enhanced": "Enhanced (500 requests/min)",
    "unlimited": "Unlimited",
}
AUTH_METHODS = {"bearer": "Bearer Token", "basic": "Basic Auth", "oauth2": "OAuth 2.0"}
TOKEN_EXPIRY = ("1h", "24h", "7d", "30d", "never")
WEBHOOK_EVENTS = (
    "customer.created",
    "customer.updated",
    "customer.deleted",
    "report.generated",
    "export.completed",
)
IMPORT_TYPES = {
    "append": "Append to existing data",
    "replace": "Replace existing data",
    "update": "Update matching records",
}
EXPORT_FORMATS = ("excel", "csv", "pdf", "json")
EXPORT_SCOPES = {
    "all": "All Customer Data",
    "filtered": "Current Filtered View",
    "high-value": "High Value Customers",
}
REFRESH_INTERVALS = ("5", "15", "30", "60")
RETENTION_PERIODS = ("30", "90", "180", "365", "forever")
PDF_TEMPLATES = ("standard", "compact", "detailed", "presentation")
PAGE_SIZES = ("a4", "letter", "legal")
ORIENTATIONS = ("portrait", "landscape")
DELIVERY_METHODS = ("email", "download", "cloud")
DIGEST_FREQUENCIES = ("daily", "weekly", "monthly")


@dataclass
class ProfileSettings:
    name: str = "Admin User"
    email: str = "admin@example.com"
    phone: str = ""
    job_title: str = "Analytics Lead"
    department: str = "Business Intelligence"


@dataclass
class AppearanceSettings:
    theme: str = "system"
    color_scheme: str = "blue"
    font_size: str = "medium"
    reduced_motion: bool = False
    high_contrast: bool = False
    default_view: str = "Dashboard"
    sidebar_collapsed: bool = False
    compact_cards: bool = False


@dataclass
class NotificationSettings:
    email_notifications: bool = True
    email_digest: bool = True
    email_alerts: bool = True
    email_reports: bool = True
    push_notifications: bool = False
    push_high_priority_only: bool = True
    push_sound: bool = False
    in_app_notifications: bool = True
    in_app_toast: bool = True
    in_app_badge: bool = True
    events: dict = field(
        default_factory=lambda: {
            "new_customer": True,
            "data_import": True,
            "data_export": True,
            "report_ready": True,
            "threshold": True,
            "anomaly": True,
            "maintenance": False,
            "security": True,
            "updates": False,
        }
    )
    quiet_hours: bool = False
    quiet_start: str = "22:00"
    quiet_end: str = "07:00"
    notification_days: list = field(default_factory=lambda: ["Mon", "Tue", "Wed", "Thu", "Fri"])
    digest_frequency: str = "daily"


@dataclass
class TeamMember:
    name: str
    email: str
    role: str
    expiry: str = "never"


@dataclass
class AccessControlSettings:
    members: list = field(
        default_factory=lambda: [
            TeamMember("Admin User", "admin@example.com", "admin"),
            TeamMember("Sales User", "sales@example.com", "sales"),
            TeamMember("Viewer User", "viewer@example.com", "viewer"),
        ]
    )
    two_factor: bool = True
    password_expiry: bool = True
    session_timeout: bool = True

    def add_member(self, name: str, email: str, role: str, expiry: str = "never") -> TeamMember:
        if not name or not email:
            raise ValueError("Name and email are required")
        if any(m.email.lower() == email.lower() for m in self.members):
            raise ValueError(f"{email} already has access")
        member = TeamMember(name, email, role, expiry)
        self.members.append(member)
        return member

    def remove_member(self, email: str) -> None:
        self.members = [m for m in self.members if m.email.lower() != email.lower()]

    def search(self, query: str = "", role: str = "all") -> list:
        query = (query or "").lower()
        return [
            m
            for m in self.members
            if (role == "all" or m.role == role)
            and (query in m.name.lower() or query in m.email.lower())
        ]


@dataclass
class Webhook:
    url: str
    events: list
    active: bool = True


@dataclass
class ApiSettings:
    base_url: str = "https://api.example.com"
    version: str = "v1"
    rate_limit: str = "standard"
    request_logging: bool = True
    compression: bool = True
    auth_method: str = "bearer"
    token_expiry: str = "24h"
    api_key: str = field(default_factory=lambda: generate_api_key())
    webhooks: list = field(default_factory=list)
    webhook_secret: str = field(default_factory=lambda: secrets.token_hex(16))
    webhook_retries: bool = True

    def add_webhook(self, url: str, events: list) -> Webhook:
        if not url.startswith(("http://", "https://")):
            raise ValueError("Webhook URL must start with http:// or https://")
        if not events:
            raise ValueError("Select at least one event")
        webhook = Webhook(url, list(events))
        self.webhooks.append(webhook)
        return webhook


@dataclass
class DataManagementSettings:
    import_type: str = "append"
    export_format: str = "csv"
    export_scope: str = "all"
    auto_refresh: bool = False
    refresh_interval: str = "30"
    data_retention: str = "365"


@dataclass
class ExportPreferences:
    default_format: str = "excel"
    available_formats: list = field(default_factory=lambda: list(EXPORT_FORMATS))
    include_headers: bool = True
    include_metadata: bool = True
    preserve_formatting: bool = True
    pdf_template: str = "standard"
    page_size: str = "a4"
    orientation: str = "portrait"
    include_logo: bool = True
    company_name: str = ""
    primary_color: str = "#2563eb"
    footer_text: str = ""
    delivery_method: str = "email"
    default_recipients: str = ""
    notify_on_export: bool = True

    def recipients(self) -> list:
        return [r.strip() for r in self.default_recipients.split(",") if r.strip()]


def generate_api_key() -> str:
    return f"sk_live_{secrets.token_hex(16)}"


def default_settings() -> dict:
    return {
        "profile": ProfileSettings(),
        "appearance": AppearanceSettings(),
        "notifications": NotificationSettings(),
        "access": AccessControlSettings(),
        "api": ApiSettings(),
        "data": DataManagementSettings(),
        "export": ExportPreferences(),
    }


def settings_payload(settings) -> dict:
    return asdict(settings)
