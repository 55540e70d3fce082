import logging

from nutrifit.core.config import settings
from nutrifit.core.base import Base
from nutrifit.core.db import engine

logger = logging.getLogger(__name__)


async def init_database():
    """Create the users schema, dropping it first when RESET_DATABASE is set."""
    # Register every model on Base.metadata before create_all (imported here
    # to avoid a circular import between nutrifit.core and nutrifit.models)
    from nutrifit.models.user import User  # noqa: F401

    async with engine.begin() as conn:
        if settings.RESET_DATABASE:
            logger.warning("RESET_DATABASE=true, dropping all tables")
            await conn.run_sync(Base.metadata.drop_all, tables=[User.__table__])

        await conn.run_sync(
            Base.metadata.create_all,
            tables=[User.__table__],
        )
        logger.info("Database tables created/verified")
