from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from ovimanager.application.interfaces.secret_verifier import SecretVerifier
from ovimanager.config.settings import Settings, get_settings
from ovimanager.infrastructure.db.session import SQLAlchemyUnitOfWork


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_secret_verifier(request: Request) -> SecretVerifier:
    verifier = getattr(request.app.state, "secret_verifier", None)
    if verifier is None:
        raise RuntimeError("Secret verifier not configured")
    return verifier
