from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from ovimanager.config.settings import Settings
from ovimanager.infrastructure.auth.manager_secret import HashedSecretVerifier, SecretHasher
from ovimanager.infrastructure.db.base import Base
from ovimanager.infrastructure.db.orm import (  # noqa: F401
    animal,
    breeding_batch,
    ewe_enrollment,
    group,
    pregnancy_record,
)
from ovimanager.interfaces.http.main import create_app

MANAGER_SECRET = "shepherd-override"


@pytest.fixture(scope="session")
def manager_secret_hash() -> str:
    return SecretHasher().hash(MANAGER_SECRET)


@pytest.fixture()
def test_settings(tmp_path, manager_secret_hash: str) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "log_level": "INFO",
            "environment": "test",
            "manager_secret_hash": manager_secret_hash,
        }
    )


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(
        settings=test_settings,
        secret_verifier=HashedSecretVerifier(test_settings.get_manager_secret_hash()),
    )


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
    await app.state.engine.dispose()
