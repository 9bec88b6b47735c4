"""Customer portal routes (JSON)."""

from __future__ import annotations

from datetime import date

from flask import jsonify

from ...extensions import get_context, query_int
from ...services import portal
from ..serializers import dump_all
from . import bp


@bp.get("/entries")
def my_entries(user_id: int):
    ctx = get_context()
    rows = portal.list_my_entries(
        users=ctx.user_repo,
        entries=ctx.entry_repo,
        user_id=user_id,
        limit=query_int("limit", default=portal.DEFAULT_ENTRY_LIMIT),
    )
    return jsonify(dump_all(rows))


@bp.get("/entries/monthly")
def my_monthly_entries(user_id: int):
    ctx = get_context()
    today = date.today()
    rows = portal.monthly_entries(
        users=ctx.user_repo,
        entries=ctx.entry_repo,
        user_id=user_id,
        year=query_int("year", default=today.year),
        month=query_int("month", default=today.month),
    )
    return jsonify(dump_all(rows))


@bp.get("/summary/monthly")
def my_monthly_summary(user_id: int):
    ctx = get_context()
    today = date.today()
    result = portal.monthly_summary(
        users=ctx.user_repo,
        entries=ctx.entry_repo,
        user_id=user_id,
        year=query_int("year", default=today.year),
        month=query_int("month", default=today.month),
    )
    return jsonify(result.to_dict())


@bp.get("/history")
def my_history(user_id: int):
    ctx = get_context()
    results = portal.historical_summaries(
        users=ctx.user_repo,
        entries=ctx.entry_repo,
        user_id=user_id,
        months_back=query_int("months", default=ctx.config.HISTORY_MONTHS),
    )
    return jsonify([item.to_dict() for item in results])
