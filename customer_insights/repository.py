import logging
from dataclasses import replace
from typing import Iterable, Optional, Protocol

from .models import CUSTOMER_FIELDS, Customer, validate_customer

logger = logging.getLogger("customer_insights.repository")


class CustomerNotFoundError(LookupError):
    pass


class CustomerRepository(Protocol):
    def get(self, customer_id: str) -> Optional[Customer]: ...

    def list(self) -> list: ...

    def update(self, customer_id: str, changes: dict) -> Customer: ...

    def delete(self, customer_id: str) -> None: ...


class InMemoryCustomerRepository:
    """
    Customer store backed by an insertion-ordered dict.

    Records are frozen dataclasses, so callers can never mutate stored state
    except through ``update`` and ``delete``. Assumes a single writer.
    """

    def __init__(self, customers: Iterable[Customer] = ()):
        self._customers = {}
        for customer in customers:
            if customer.id in self._customers:
                raise ValueError(f"Duplicate customer id: {customer.id}")
            self._customers[customer.id] = customer

    def __len__(self) -> int:
        return len(self._customers)

    def get(self, customer_id: str) -> Optional[Customer]:
        return self._customers.get(customer_id)

    def list(self) -> list:
        return list(self._customers.values())

    def update(self, customer_id: str, changes: dict) -> Customer:
        current = self._customers.get(customer_id)
        if current is None:
            raise CustomerNotFoundError(customer_id)

        allowed = {k: v for k, v in changes.items() if k in CUSTOMER_FIELDS and k != "id"}
        updated = validate_customer(replace(current, **allowed))
        self._customers[customer_id] = updated
        logger.info("Updated customer %s (%s)", customer_id, ", ".join(sorted(allowed)) or "no changes")
        return updated

    def delete(self, customer_id: str) -> None:
        if customer_id not in self._customers:
            raise CustomerNotFoundError(customer_id)
        del self._customers[customer_id]
        logger.info("Deleted customer %s", customer_id)
