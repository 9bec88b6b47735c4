"""DairyLedger application factory."""

from __future__ import annotations

from typing import Iterable, Optional

from flask import Flask

from .config import BaseConfig, DevConfig
from .context import AppContext, create_app_context


def _blueprints() -> Iterable:
    from .blueprints import accounts, dashboard, portal

    yield accounts.bp
    yield dashboard.bp
    yield portal.bp


def create_app(config: Optional[BaseConfig] = None, *, ctx: Optional[AppContext] = None) -> Flask:
    """Create and configure the Flask application instance.

    ``ctx`` lets callers (tests, scripts) share an already-built context;
    otherwise one is created from ``config``.
    """

    from . import cli, extensions
    from .logging_config import setup_logging

    ctx = ctx or create_app_context(config)
    config = ctx.config

    app = Flask(__name__, instance_path=str(config.DATA_DIR))
    app.config.update(
        SECRET_KEY=config.SECRET_KEY,
        DEBUG=config.DEBUG,
        TESTING=config.TESTING,
        DAIRYLEDGER_CONFIG=config,
    )

    setup_logging(config)
    extensions.init_app(app, ctx)
    for blueprint in _blueprints():
        app.register_blueprint(blueprint)
    cli.init_app(app)
    return app


__all__ = ["AppContext", "BaseConfig", "DevConfig", "create_app", "create_app_context"]
