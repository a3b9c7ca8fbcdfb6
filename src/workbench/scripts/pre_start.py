"""Pre-start script waiting for the database and search index to be reachable.

Usage:
    python -m workbench.scripts.pre_start
"""

import asyncio
import logging

from sqlalchemy import Engine
from sqlmodel import Session, select
from tenacity import after_log, before_log, retry, stop_after_attempt, wait_fixed

from workbench.core.config import settings
from workbench.core.db import engine
from workbench.core.logging import get_logger, setup_logging
from workbench.translations.index import translation_index_lifespan

logger = get_logger(__name__)
stdlib_logger = logging.getLogger(__name__)

max_tries = 60 * 5  # 5 minutes
wait_seconds = 1


@retry(
    stop=stop_after_attempt(max_tries),
    wait=wait_fixed(wait_seconds),
    before=before_log(stdlib_logger, logging.INFO),
    after=after_log(stdlib_logger, logging.WARN),
)
def init(db_engine: Engine) -> None:
    """Wait for the database to answer a trivial query."""
    try:
        with Session(db_engine) as session:
            session.exec(select(1))
    except Exception as e:
        logger.error("database_not_ready", error=str(e))
        raise


@retry(
    stop=stop_after_attempt(max_tries),
    wait=wait_fixed(wait_seconds),
    before=before_log(stdlib_logger, logging.INFO),
    after=after_log(stdlib_logger, logging.WARN),
)
async def init_index() -> None:
    """Wait for OpenSearch to accept a connection, when one is configured."""
    async with translation_index_lifespan():
        pass


def main() -> None:
    setup_logging()
    logger.info("pre_start_begin", opensearch_enabled=settings.opensearch_enabled)
    init(engine)
    asyncio.run(init_index())
    logger.info("pre_start_finished")


if __name__ == "__main__":
    main()
