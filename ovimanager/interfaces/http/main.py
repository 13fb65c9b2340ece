from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ovimanager.application.interfaces.secret_verifier import SecretVerifier
from ovimanager.config.settings import Settings, get_settings
from ovimanager.infrastructure.auth.manager_secret import HashedSecretVerifier
from ovimanager.infrastructure.db.session import create_engine, create_session_factory
from ovimanager.interfaces.http.routers import animals, breeding_batches, groups, pregnancies
from ovimanager.interfaces.middleware.error_handler import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    secret_verifier: SecretVerifier | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="OviManager Breeding API",
        version="0.1.0",
        description="Breeding batches, mating cycles and pregnancy tracking for sheep flocks",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.secret_verifier = secret_verifier or HashedSecretVerifier(
        settings.get_manager_secret_hash()
    )
    register_error_handlers(app)

    api = APIRouter(prefix="/api/v1")
    api.include_router(groups.router)
    api.include_router(animals.router)
    api.include_router(breeding_batches.router)
    api.include_router(pregnancies.router)

    @api.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
