"""
Asynchronous boundary between the views and the data layer.

The backend is simulated: each action sleeps to mimic network latency and then
talks to the in-memory repository. Callers always receive an ``ActionResult``;
failures are logged and reported, never raised.
"""

import asyncio
import logging
from typing import Callable, Optional

from . import config
from .models import ActionResult, InvalidCustomerError
from .preferences import IMPORT_TYPES
from .repository import CustomerNotFoundError, CustomerRepository

logger = logging.getLogger("customer_insights.actions")


def run_action(coro):
    return asyncio.run(coro)


async def get_customer(
    repository: CustomerRepository, customer_id: str, delay: Optional[float] = None
) -> ActionResult:
    await asyncio.sleep(config.READ_LATENCY if delay is None else delay)
    customer = repository.get(customer_id)
    if customer is None:
        logger.warning("Customer %s not found", customer_id)
        return ActionResult(success=False, error="Failed to fetch customer")
    return ActionResult(success=True, data=customer)


async def update_customer(
    repository: CustomerRepository,
    customer_id: str,
    changes: dict,
    delay: Optional[float] = None,
) -> ActionResult:
    await asyncio.sleep(config.WRITE_LATENCY if delay is None else delay)
    try:
        customer = repository.update(customer_id, changes)
    except CustomerNotFoundError:
        logger.warning("Cannot update missing customer %s", customer_id)
        return ActionResult(success=False, error="Failed to update customer")
    except InvalidCustomerError as exc:
        logger.warning("Rejected update for customer %s: %s", customer_id, exc)
        return ActionResult(success=False, error=f"Failed to update customer: {exc}")
    return ActionResult(success=True, data=customer)


async def delete_customer(
    repository: CustomerRepository, customer_id: str, delay: Optional[float] = None
) -> ActionResult:
    await asyncio.sleep(config.WRITE_LATENCY if delay is None else delay)
    try:
        repository.delete(customer_id)
    except CustomerNotFoundError:
        logger.warning("Cannot delete missing customer %s", customer_id)
        return ActionResult(success=False, error="Failed to delete customer")
    return ActionResult(success=True)


async def save_settings(section: str, values: dict, delay: Optional[float] = None) -> ActionResult:
    await asyncio.sleep(config.WRITE_LATENCY if delay is None else delay)
    if not isinstance(values, dict):
        logger.error("Settings for %s must be a mapping, got %s", section, type(values).__name__)
        return ActionResult(success=False, error=f"Failed to save {section} settings")
    logger.info("Saving %s settings: %s", section, sorted(values))
    return ActionResult(success=True, data=dict(values))


async def import_customers(
    file_name: str,
    mode: str = "append",
    delay: Optional[float] = None,
    on_progress: Optional[Callable[[int], None]] = None,
) -> ActionResult:
    """
    Simulate a bulk import of an uploaded CSV or Excel file.

    Nothing is read or written: the action walks through ``config.IMPORT_STEPS``
    equal steps, reporting the percentage done to ``on_progress`` after each
    one, and returns a summary of what would have been imported.
    """
    if not file_name or not file_name.lower().endswith(config.IMPORT_EXTENSIONS):
        logger.warning("Rejected import of unsupported file %r", file_name)
        return ActionResult(success=False, error="Failed to import data: use a CSV or Excel (.xlsx) file")
    if mode not in IMPORT_TYPES:
        logger.warning("Rejected import with unknown mode %r", mode)
        return ActionResult(success=False, error=f"Failed to import data: unknown import type {mode!r}")

    total = config.IMPORT_LATENCY if delay is None else delay
    step = 100 // config.IMPORT_STEPS
    for done in range(step, 101, step):
        await asyncio.sleep(total / config.IMPORT_STEPS)
        if on_progress is not None:
            on_progress(done)
    logger.info("Imported %s (%s)", file_name, mode)
    return ActionResult(success=True, data={"file": file_name, "mode": mode})
