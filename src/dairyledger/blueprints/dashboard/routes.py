"""Owner dashboard routes (JSON)."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date

from flask import jsonify, request

from ... import errors
from ...errors import ValidationError
from ...extensions import get_context, json_body, query_date, query_int, query_optional_int
from ...services import auth, customers, milk_entries, rates, summary
from ...services.validation import validate_fat_snf
from ..serializers import dump, dump_all
from . import bp

# ---------------------------------------------------------------- customers


@bp.get("/customers")
def list_customers(dairy_id: int):
    ctx = get_context()
    rows = customers.list_customers(
        repository=ctx.customer_repo,
        dairy_id=dairy_id,
        search=request.args.get("search"),
        limit=query_optional_int("limit"),
        offset=query_int("offset", default=0),
    )
    return jsonify(dump_all(rows))


@bp.get("/customers/search")
def search_customers(dairy_id: int):
    ctx = get_context()
    rows = customers.search_customers(
        repository=ctx.customer_repo, dairy_id=dairy_id, query=request.args.get("q", "")
    )
    return jsonify(dump_all(rows))


@bp.post("/customers")
def create_customer(dairy_id: int):
    payload = json_body()
    customer = customers.create_customer(
        repository=get_context().customer_repo,
        dairy_id=dairy_id,
        name=payload.get("name"),
        phone=payload.get("phone"),
        address=payload.get("address"),
    )
    return jsonify(dump(customer)), 201


@bp.get("/customers/<int:customer_id>")
def get_customer(dairy_id: int, customer_id: int):
    customer = customers.get_customer(
        repository=get_context().customer_repo, dairy_id=dairy_id, customer_id=customer_id
    )
    return jsonify(dump(customer))


@bp.patch("/customers/<int:customer_id>")
def update_customer(dairy_id: int, customer_id: int):
    payload = json_body()
    customer = customers.update_customer(
        repository=get_context().customer_repo,
        dairy_id=dairy_id,
        customer_id=customer_id,
        name=payload.get("name"),
        phone=payload.get("phone"),
        address=payload.get("address"),
    )
    return jsonify(dump(customer))


@bp.delete("/customers/<int:customer_id>")
def delete_customer(dairy_id: int, customer_id: int):
    customers.delete_customer(
        repository=get_context().customer_repo, dairy_id=dairy_id, customer_id=customer_id
    )
    return "", 204


# -------------------------------------------------------------------- rates


@bp.get("/rates")
def list_rates(dairy_id: int):
    return jsonify(dump_all(rates.list_rates(repository=get_context().rate_repo, dairy_id=dairy_id)))


@bp.put("/rates")
def set_rate(dairy_id: int):
    payload = json_body()
    rate = rates.set_rate(
        repository=get_context().rate_repo,
        dairy_id=dairy_id,
        fat=payload.get("fat"),
        snf=payload.get("snf"),
        rate_per_liter=payload.get("rate_per_liter"),
    )
    return jsonify(dump(rate))


@bp.get("/rates/resolve")
def resolve_rate(dairy_id: int):
    pair, problems = validate_fat_snf({"fat": request.args.get("fat"), "snf": request.args.get("snf")})
    if problems:
        raise ValidationError(problems)
    fat, snf = pair  # type: ignore[misc]

    resolution = rates.resolve_rate(
        repository=get_context().rate_repo, dairy_id=dairy_id, fat=fat, snf=snf
    )
    if resolution is None:
        raise errors.NoRateConfiguredError(fat, snf)
    return jsonify(asdict(resolution))


@bp.delete("/rates/<int:rate_id>")
def delete_rate(dairy_id: int, rate_id: int):
    rates.delete_rate(repository=get_context().rate_repo, dairy_id=dairy_id, rate_id=rate_id)
    return "", 204


# ------------------------------------------------------------------ entries


@bp.get("/entries")
def list_entries(dairy_id: int):
    ctx = get_context()
    customer_id = query_optional_int("customer_id")
    if customer_id is not None:
        start = query_date("start") if "start" in request.args else None
        end = query_date("end") if "end" in request.args else None
        rows = milk_entries.list_by_customer(
            entries=ctx.entry_repo,
            dairy_id=dairy_id,
            customer_id=customer_id,
            start_date=start,
            end_date=end,
        )
    else:
        rows = milk_entries.list_by_date(
            entries=ctx.entry_repo, dairy_id=dairy_id, day=query_date("date", default=date.today())
        )
    return jsonify(dump_all(rows))


@bp.post("/entries")
def create_entry(dairy_id: int):
    ctx = get_context()
    payload = json_body()
    entry = milk_entries.record_entry(
        entries=ctx.entry_repo,
        rates=ctx.rate_repo,
        customers=ctx.customer_repo,
        dairy_id=dairy_id,
        customer_id=payload.get("customer_id"),
        entry_date=payload.get("date"),
        fat=payload.get("fat"),
        snf=payload.get("snf"),
        liters=payload.get("liters"),
        shift=payload.get("shift"),
    )
    return jsonify(dump(entry)), 201


@bp.get("/entries/<int:entry_id>")
def get_entry(dairy_id: int, entry_id: int):
    entry = milk_entries.get_entry(entries=get_context().entry_repo, dairy_id=dairy_id, entry_id=entry_id)
    return jsonify(dump(entry))


@bp.patch("/entries/<int:entry_id>")
def update_entry(dairy_id: int, entry_id: int):
    ctx = get_context()
    payload = json_body()
    entry = milk_entries.update_entry(
        entries=ctx.entry_repo,
        rates=ctx.rate_repo,
        dairy_id=dairy_id,
        entry_id=entry_id,
        fat=payload.get("fat"),
        snf=payload.get("snf"),
        liters=payload.get("liters"),
        shift=payload.get("shift"),
        entry_date=payload.get("date"),
    )
    return jsonify(dump(entry))


@bp.delete("/entries/<int:entry_id>")
def delete_entry(dairy_id: int, entry_id: int):
    milk_entries.delete_entry(entries=get_context().entry_repo, dairy_id=dairy_id, entry_id=entry_id)
    return "", 204


# ---------------------------------------------------------------- summaries


@bp.get("/summary/daily")
def daily_summary(dairy_id: int):
    result = summary.daily_summary(
        repository=get_context().entry_repo,
        dairy_id=dairy_id,
        day=query_date("date", default=date.today()),
        customer_id=query_optional_int("customer_id"),
    )
    return jsonify(result.to_dict())


@bp.get("/summary/weekly")
def weekly_summary(dairy_id: int):
    result = summary.weekly_summary(
        repository=get_context().entry_repo,
        dairy_id=dairy_id,
        start_date=query_date("start"),
        customer_id=query_optional_int("customer_id"),
    )
    return jsonify(result.to_dict())


@bp.get("/summary/monthly")
def monthly_summary(dairy_id: int):
    today = date.today()
    result = summary.monthly_summary(
        repository=get_context().entry_repo,
        dairy_id=dairy_id,
        year=query_int("year", default=today.year),
        month=query_int("month", default=today.month),
        customer_id=query_optional_int("customer_id"),
    )
    return jsonify(result.to_dict())


@bp.get("/summary/range")
def range_summary(dairy_id: int):
    result = summary.date_range_summary(
        repository=get_context().entry_repo,
        dairy_id=dairy_id,
        start_date=query_date("start"),
        end_date=query_date("end"),
        customer_id=query_optional_int("customer_id"),
    )
    return jsonify(result.to_dict())


# ------------------------------------------------------------------- logins


@bp.post("/customers/<int:customer_id>/login")
def create_customer_login(dairy_id: int, customer_id: int):
    ctx = get_context()
    payload = json_body()
    user = auth.create_customer_login(
        users=ctx.user_repo,
        customers=ctx.customer_repo,
        dairy_id=dairy_id,
        customer_id=customer_id,
        email=payload.get("email", ""),
        password=payload.get("password", ""),
    )
    return jsonify(dump(user)), 201
