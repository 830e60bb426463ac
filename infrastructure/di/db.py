from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database import SQLDatabase
from utils import DatabaseSettings

database_settings = DatabaseSettings()

database = SQLDatabase(url=database_settings.url, echo=database_settings.echo)


def get_database() -> SQLDatabase:
    """Process-wide database handle, initialized by the application lifespan."""
    return database


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for an AsyncSession that properly manages session lifecycle.

    Creates one session per request, yields it for use in the endpoint,
    and closes it when done. Uncommitted work is rolled back on close.
    """
    session = database.session()
    try:
        yield session
    finally:
        await session.close()
