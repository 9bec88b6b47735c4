"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelCustomerRepository,
    SQLModelDairyRepository,
    SQLModelMilkEntryRepository,
    SQLModelRateRepository,
    SQLModelUserRepository,
)


@dataclass
class AppContext:
    """Configuration, session factory and repositories shared by every caller."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory

    customer_repo: SQLModelCustomerRepository
    dairy_repo: SQLModelDairyRepository
    entry_repo: SQLModelMilkEntryRepository
    rate_repo: SQLModelRateRepository
    user_repo: SQLModelUserRepository


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, initialize the schema and build the repositories."""

    config = config or BaseConfig()
    engine, session_factory = bootstrap_database(config)
    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        customer_repo=SQLModelCustomerRepository(session_factory),
        dairy_repo=SQLModelDairyRepository(session_factory),
        entry_repo=SQLModelMilkEntryRepository(session_factory),
        rate_repo=SQLModelRateRepository(session_factory),
        user_repo=SQLModelUserRepository(session_factory),
    )
