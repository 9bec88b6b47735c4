"""Owner signup, login and profile routes (JSON)."""

from __future__ import annotations

from flask import jsonify

from ... import errors
from ...errors import AuthorizationError
from ...extensions import get_context, json_body
from ...services import auth
from ..serializers import dump
from . import bp


@bp.post("/signup")
def signup():
    ctx = get_context()
    payload = json_body()
    user = auth.sign_up_owner(
        users=ctx.user_repo,
        dairies=ctx.dairy_repo,
        email=payload.get("email", ""),
        password=payload.get("password", ""),
        dairy_name=payload.get("dairy_name", ""),
    )
    return jsonify(dump(user)), 201


@bp.post("/login")
def login():
    payload = json_body()
    user = auth.authenticate(
        users=get_context().user_repo,
        email=payload.get("email", ""),
        password=payload.get("password", ""),
    )
    if user is None:
        raise AuthorizationError("Invalid email or password", code=errors.UNAUTHORIZED)
    return jsonify(dump(user))


@bp.get("/<int:user_id>")
def profile(user_id: int):
    return jsonify(dump(auth.get_profile(users=get_context().user_repo, user_id=user_id)))
