import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from cyclestore.db.session import Database


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database handle for the app's lifetime and release it on shutdown."""
    settings = app.state.settings
    database = Database(settings.database_url, echo=settings.debug)
    database.create_all()
    if not database.is_reachable():
        database.dispose()
        raise RuntimeError("Database is not reachable; check DATABASE_URL")
    app.state.database = database
    logger.info("%s started", settings.app_name)
    try:
        yield
    finally:
        database.dispose()
        logger.info("%s stopped", settings.app_name)
