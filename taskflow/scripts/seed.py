"""
Console entry point: load demo data into the configured database.

    taskflow-seed
"""
from __future__ import annotations

import asyncio
import logging

from taskflow.core.config import settings
from taskflow.core.logging_config import configure_logging
from taskflow.db.session import AsyncSessionLocal, engine
from taskflow.services.seed_service import seed_demo_data

logger = logging.getLogger(__name__)


async def run() -> None:
    async with AsyncSessionLocal() as session:
        try:
            summary = await seed_demo_data(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
    await engine.dispose()

    logger.info(
        "Log in as user1@example.com .. user%d@example.com with password %r",
        summary.users,
        settings.SEED_PASSWORD,
    )


def main() -> None:
    configure_logging()
    asyncio.run(run())


if __name__ == "__main__":
    main()
