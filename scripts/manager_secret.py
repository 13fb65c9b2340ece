#!/usr/bin/env python3
"""
Operator helpers for a fresh deployment.

  hash   Print the bcrypt hash of a manager secret, ready for MANAGER_SECRET_HASH.
  seed   Create the herd groups used by breeding batches (VAZIAS, EM MONTA).

Usage:
  python scripts/manager_secret.py hash
  python scripts/manager_secret.py seed
"""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from ovimanager.application.services.group_resolver import resolve_or_create  # noqa: E402
from ovimanager.config.settings import get_settings  # noqa: E402
from ovimanager.domain.value_objects.herd_category import HerdCategory  # noqa: E402
from ovimanager.infrastructure.auth.manager_secret import SecretHasher  # noqa: E402
from ovimanager.infrastructure.db.session import (  # noqa: E402
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


def hash_secret() -> None:
    secret = getpass.getpass("Manager secret: ")
    confirm = getpass.getpass("Repeat secret: ")
    if not secret.strip():
        print("❌ Error: secret must not be empty")
        sys.exit(1)
    if secret != confirm:
        print("❌ Error: secrets do not match")
        sys.exit(1)
    print("\nAdd this to the environment:")
    print(f"   MANAGER_SECRET_HASH='{SecretHasher().hash(secret)}'")


async def seed_groups() -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            for category in HerdCategory:
                group = await resolve_or_create(uow, category)
                print(f"✅ {category.value}: {group.name} ({group.id})")
            await uow.commit()
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Manager secret and herd group setup")
    parser.add_argument("command", choices=["hash", "seed"])
    args = parser.parse_args()

    if args.command == "hash":
        hash_secret()
    else:
        asyncio.run(seed_groups())
