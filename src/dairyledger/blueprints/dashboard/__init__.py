"""Owner dashboard blueprint package: customers, rates, entries and summaries."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("dashboard", __name__, url_prefix="/dairies/<int:dairy_id>")

from . import routes  # noqa: E402,F401 - ensure routes get registered

__all__ = ["bp"]
