"""JSON shapes for rows returned by the blueprints."""

from __future__ import annotations

from typing import Any, Iterable

from sqlmodel import SQLModel

from ..models.milk_entry import MilkEntry
from ..models.user import User


def dump(row: SQLModel) -> dict[str, Any]:
    payload = row.model_dump(mode="json")
    if isinstance(row, MilkEntry):
        payload["date"] = payload.pop("collected_on")
    elif isinstance(row, User):
        payload.pop("password_hash", None)
    return payload


def dump_all(rows: Iterable[SQLModel]) -> list[dict[str, Any]]:
    return [dump(row) for row in rows]
