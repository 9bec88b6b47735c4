"""Account services: owner signup, customer logins and credential checks."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from .. import errors
from ..domain.repositories import CustomerRepository, DairyRepository, UserRepository
from ..errors import NotFoundError, StoreError, ValidationError
from ..logging_config import get_logger
from ..models.dairy import Dairy
from ..models.user import ROLE_CUSTOMER, ROLE_OWNER, User

logger = get_logger("services.auth")

_hasher = PasswordHasher()
MIN_PASSWORD_LENGTH = 8


def _normalize_email(email: Any) -> str:
    if email is None:
        return ""
    if not isinstance(email, str):
        raise ValidationError.single("email", errors.INVALID_EMAIL, "Enter a valid email address")
    return email.strip().lower()


def _require_text(field: str, value: Any, code: str, message: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError.single(field, code, message)
    return value


def _check_credentials(email: str, password: Any, users: UserRepository) -> None:
    problems = []
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        problems.append(
            errors.FieldError("email", errors.INVALID_EMAIL, "Enter a valid email address")
        )
    elif users.get_by_email(email) is not None:
        problems.append(
            errors.FieldError("email", errors.DUPLICATE_EMAIL, "An account with this email already exists")
        )
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        problems.append(
            errors.FieldError(
                "password",
                errors.INVALID_PASSWORD,
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            )
        )
    if problems:
        raise ValidationError(problems)


def sign_up_owner(
    *,
    users: UserRepository,
    dairies: DairyRepository,
    email: Any,
    password: Any,
    dairy_name: Any,
) -> User:
    """Create an owner account and its dairy.

    Three writes in order: user, dairy, then the profile link. A failed dairy
    insert removes the user again. A failed link leaves the dairy without an
    owner profile; that case is logged and re-raised, not compensated.
    """

    email = _normalize_email(email)
    dairy_name = _require_text(
        "dairy_name", dairy_name, errors.INVALID_TYPE, "Dairy name must be text"
    ).strip()
    _check_credentials(email, password, users)
    if not dairy_name:
        raise ValidationError.single("dairy_name", errors.REQUIRED, "Dairy name is required")

    user = users.create(User(email=email, password_hash=_hasher.hash(password), role=ROLE_OWNER))

    try:
        dairy = dairies.create(Dairy(name=dairy_name, owner_id=user.id))
    except StoreError:
        logger.warning("Dairy creation failed; removing user", extra={"user_id": user.id})
        users.delete(user.id)  # type: ignore[arg-type]
        raise

    user.dairy_id = dairy.id
    try:
        user = users.update(user)
    except StoreError:
        logger.error(
            "Profile link failed; dairy left without owner profile",
            extra={"user_id": user.id, "dairy_id": dairy.id},
        )
        raise

    logger.info("Owner signed up", extra={"user_id": user.id, "dairy_id": dairy.id})
    return user


def create_customer_login(
    *,
    users: UserRepository,
    customers: CustomerRepository,
    dairy_id: int,
    customer_id: int,
    email: Any,
    password: Any,
) -> User:
    """Give an existing customer portal access."""

    if customers.get_by_id(customer_id, dairy_id=dairy_id) is None:
        raise NotFoundError("Customer", customer_id, code=errors.CUSTOMER_NOT_FOUND)
    email = _normalize_email(email)
    _check_credentials(email, password, users)
    user = users.create(
        User(
            email=email,
            password_hash=_hasher.hash(password),
            role=ROLE_CUSTOMER,
            dairy_id=dairy_id,
            customer_id=customer_id,
        )
    )
    logger.info(
        "Customer login created",
        extra={"user_id": user.id, "dairy_id": dairy_id, "customer_id": customer_id},
    )
    return user


def authenticate(*, users: UserRepository, email: Any, password: Any) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    email = _normalize_email(email)
    password = _require_text("password", password, errors.INVALID_PASSWORD, "Password must be text")
    if not email:
        return None
    user = users.get_by_email(email)
    if user is None:
        return None
    try:
        _hasher.verify(user.password_hash, password)
    except (VerifyMismatchError, InvalidHash, VerificationError):
        logger.info("Rejected login", extra={"user_id": user.id})
        return None

    user.last_login = datetime.now(timezone.utc)
    return users.update(user)


def get_profile(*, users: UserRepository, user_id: int) -> User:
    user = users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id, code=errors.USER_NOT_FOUND)
    return user
