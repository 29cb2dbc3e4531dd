from dataclasses import asdict, dataclass, field
from numbers import Integral
from typing import Any, Optional

GENDERS = ("M", "F")
MARITAL_STATUSES = ("Single", "Married", "Divorced")
MIN_AGE = 18
MAX_AGE = 100

CUSTOMER_FIELDS = ("id", "name", "division", "gender", "marital_status", "age", "income")


class InvalidCustomerError(ValueError):
    pass


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    division: str
    gender: str
    marital_status: str
    age: int
    income: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AgeBucket:
    label: str
    minimum: int
    maximum: int


@dataclass(frozen=True)
class IncomeBand:
    """Inclusive income range; ``maximum=None`` leaves the band open-ended."""

    label: str
    minimum: int
    maximum: Optional[int] = None


@dataclass(frozen=True)
class SegmentSummary:
    name: str
    count: int
    average_age: int
    average_income: int
    percentage: int


@dataclass(frozen=True)
class Prediction:
    income: int
    confidence: int
    tier: str


@dataclass
class ActionResult:
    success: bool
    data: Any = None
    error: Optional[str] = None


@dataclass(frozen=True)
class Pattern:
    title: str
    description: str
    count: int


@dataclass
class Recommendation:
    title: str
    detail: str
    area: str
    tags: list = field(default_factory=list)


def validate_customer(customer: Customer) -> Customer:
    if not customer.id:
        raise InvalidCustomerError("Customer id is required")
    if customer.gender not in GENDERS:
        raise InvalidCustomerError(f"Unknown gender: {customer.gender!r}")
    if customer.marital_status not in MARITAL_STATUSES:
        raise InvalidCustomerError(f"Unknown marital status: {customer.marital_status!r}")
    for name in ("age", "income"):
        value = getattr(customer, name)
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidCustomerError(f"{name.title()} must be a whole number, got {value!r}")
    if not MIN_AGE <= customer.age <= MAX_AGE:
        raise InvalidCustomerError(f"Age must be between {MIN_AGE} and {MAX_AGE}, got {customer.age}")
    if customer.income < 0:
        raise InvalidCustomerError(f"Income cannot be negative, got {customer.income}")
    return customer
