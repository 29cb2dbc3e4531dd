import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger("customer_insights.auth")

ROLES = ("admin", "sales", "viewer")

PAGES = ("Dashboard", "Customers", "Analytics", "Reports", "Database Schema", "Settings")


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    role: str


# Demo accounts only; there is no credential store behind this.
DEMO_USERS = {
    "admin@example.com": (User("1", "Admin User", "admin@example.com", "admin"), "admin123"),
    "sales@example.com": (User("2", "Sales User", "sales@example.com", "sales"), "sales123"),
    "viewer@example.com": (User("3", "Viewer User", "viewer@example.com", "viewer"), "viewer123"),
}


def authenticate(email: str, password: str) -> Optional[User]:
    entry = DEMO_USERS.get((email or "").strip().lower())
    if entry is None or entry[1] != password:
        logger.info("Failed sign-in for %s", email)
        return None
    logger.info("Signed in %s as %s", entry[0].email, entry[0].role)
    return entry[0]


def can_view(user: Optional[User], page: str) -> bool:
    if user is None:
        return False
    if page == "Customers":
        return user.role != "viewer"
    if page == "Settings":
        return user.role == "admin"
    return page in PAGES


def can_edit(user: Optional[User]) -> bool:
    return user is not None and user.role in ("admin", "sales")


def can_delete(user: Optional[User]) -> bool:
    return user is not None and user.role == "admin"


def visible_pages(user: Optional[User]) -> list:
    return [page for page in PAGES if can_view(user, page)]
