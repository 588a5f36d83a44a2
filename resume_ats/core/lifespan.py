import contextlib
from contextlib import asynccontextmanager
import asyncio
import logging

from resume_ats.analytics.db import init_db, purge_old_records
from resume_ats.core.scoring import get_scoring_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    tables = get_scoring_tables()
    logger.info("scoring_tables_loaded version=%s keywords=%s", tables.version, len(tables.general_keywords))
    init_db()

    stop_event = asyncio.Event()

    async def periodic_purge() -> None:
        while not stop_event.is_set():
            try:
                deleted = purge_old_records()
                if any(deleted.values()):
                    logger.info("analytics_retention_purge deleted=%s", deleted)
            except Exception as exc:  # pragma: no cover
                logger.warning("analytics_retention_purge_failed: %s", exc)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=3600)
            except asyncio.TimeoutError:
                continue

    purge_task = asyncio.create_task(periodic_purge())
    yield
    stop_event.set()
    if not purge_task.done():
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
