"""Error taxonomy shared by services, repositories and the HTTP layer."""

from __future__ import annotations

from dataclasses import asdict, dataclass

# Field-level validation codes
REQUIRED = "REQUIRED"
INVALID_TYPE = "INVALID_TYPE"
INVALID_FAT = "INVALID_FAT"
INVALID_SNF = "INVALID_SNF"
INVALID_LITERS = "INVALID_LITERS"
INVALID_DATE = "INVALID_DATE"
INVALID_SHIFT = "INVALID_SHIFT"
INVALID_RATE = "INVALID_RATE"
INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
INVALID_CUSTOMER_NAME = "INVALID_CUSTOMER_NAME"
INVALID_EMAIL = "INVALID_EMAIL"
INVALID_PASSWORD = "INVALID_PASSWORD"
DUPLICATE_EMAIL = "DUPLICATE_EMAIL"

# Business-rule and lookup codes
MISSING_RATE = "MISSING_RATE"
CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"
RATE_NOT_FOUND = "RATE_NOT_FOUND"
USER_NOT_FOUND = "USER_NOT_FOUND"
UNAUTHORIZED = "UNAUTHORIZED"
STORE_FAILURE = "STORE_FAILURE"


@dataclass(frozen=True, slots=True)
class FieldError:
    """One problem with one input field."""

    field: str
    code: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class DairyLedgerError(Exception):
    """Base class for every error raised deliberately by the application."""

    code = "ERROR"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict[str, object]:
        return {"code": self.code, "message": self.message}


class ValidationError(DairyLedgerError, ValueError):
    """Malformed or out-of-range input; carries every field problem found."""

    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        message = ", ".join(error.message for error in self.errors) or "Invalid input"
        super().__init__(message)

    @classmethod
    def single(cls, field: str, code: str, message: str) -> ValidationError:
        return cls([FieldError(field=field, code=code, message=message)])

    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        payload["errors"] = [error.to_dict() for error in self.errors]
        return payload


class NoRateConfiguredError(DairyLedgerError):
    """Well-formed input, but the dairy has no rate to price it with."""

    code = MISSING_RATE

    def __init__(self, fat: float, snf: float) -> None:
        self.fat = fat
        self.snf = snf
        super().__init__("No rate configured for this FAT/SNF combination")


class NotFoundError(DairyLedgerError, LookupError):
    """A referenced row does not exist (or is soft-deleted) in the tenant."""

    def __init__(self, entity: str, identifier: object, *, code: str) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}", code=code)


class AuthorizationError(DairyLedgerError):
    """The principal's profile does not allow the requested view."""

    code = UNAUTHORIZED


class StoreError(DairyLedgerError):
    """The underlying data store rejected or failed an operation."""

    code = STORE_FAILURE
