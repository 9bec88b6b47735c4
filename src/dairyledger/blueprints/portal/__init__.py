"""Customer portal blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("portal", __name__, url_prefix="/portal/<int:user_id>")

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]
