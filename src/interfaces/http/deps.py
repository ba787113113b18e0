from __future__ import annotations

import random
from collections.abc import AsyncIterator
from datetime import date

from fastapi import Depends, Request

from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.utils.datetime_tz import local_today


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_today(settings: Settings = Depends(get_app_settings)) -> date:
    return local_today(settings.timezone)


def get_rng(request: Request) -> random.Random | None:
    """Random source for cage registration; tests pin it on app.state.rng."""
    return getattr(request.app.state, "rng", None)
