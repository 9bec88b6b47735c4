"""Customer directory services."""

from __future__ import annotations

from typing import Any, Optional

from .. import errors
from ..domain.repositories.customer import CustomerRepository
from ..errors import NotFoundError, ValidationError
from ..logging_config import get_logger
from ..models.customer import Customer
from .validation import validate_customer_name

logger = get_logger("services.customers")

SEARCH_LIMIT = 20


def _clean(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError.single(field, errors.INVALID_TYPE, f"{field.capitalize()} must be text")
    value = value.strip()
    return value or None


def create_customer(
    *,
    repository: CustomerRepository,
    dairy_id: int,
    name: Any,
    phone: Any = None,
    address: Any = None,
) -> Customer:
    problems = validate_customer_name(name)
    if problems:
        raise ValidationError(problems)
    customer = repository.create(
        Customer(
            dairy_id=dairy_id,
            name=name.strip(),
            phone=_clean(phone, "phone"),
            address=_clean(address, "address"),
        ),
        dairy_id=dairy_id,
    )
    logger.info("Customer created", extra={"dairy_id": dairy_id, "customer_id": customer.id})
    return customer


def get_customer(*, repository: CustomerRepository, dairy_id: int, customer_id: int) -> Customer:
    customer = repository.get_by_id(customer_id, dairy_id=dairy_id)
    if customer is None:
        raise NotFoundError("Customer", customer_id, code=errors.CUSTOMER_NOT_FOUND)
    return customer


def update_customer(
    *,
    repository: CustomerRepository,
    dairy_id: int,
    customer_id: int,
    name: Any = None,
    phone: Any = None,
    address: Any = None,
) -> Customer:
    """Patch the provided fields; ``None`` leaves a field unchanged."""

    customer = get_customer(repository=repository, dairy_id=dairy_id, customer_id=customer_id)
    if name is not None:
        problems = validate_customer_name(name)
        if problems:
            raise ValidationError(problems)
        customer.name = name.strip()
    if phone is not None:
        customer.phone = _clean(phone, "phone")
    if address is not None:
        customer.address = _clean(address, "address")
    return repository.update(customer, dairy_id=dairy_id)


def delete_customer(*, repository: CustomerRepository, dairy_id: int, customer_id: int) -> None:
    """Soft delete: the row stays for historical entries but disappears from lookups."""

    if not repository.soft_delete(customer_id, dairy_id=dairy_id):
        raise NotFoundError("Customer", customer_id, code=errors.CUSTOMER_NOT_FOUND)
    logger.info("Customer deleted", extra={"dairy_id": dairy_id, "customer_id": customer_id})


def list_customers(
    *,
    repository: CustomerRepository,
    dairy_id: int,
    search: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> list[Customer]:
    return repository.list_all(
        dairy_id=dairy_id,
        search=_clean(search, "search"),
        limit=limit,
        offset=max(0, offset),
    )


def search_customers(*, repository: CustomerRepository, dairy_id: int, query: str) -> list[Customer]:
    """Name lookup for entry forms: case-insensitive substring, first 20 matches."""

    return repository.list_all(dairy_id=dairy_id, search=_clean(query, "q"), limit=SEARCH_LIMIT)
