import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.exceptions import StorageFailureError
from .models import Base


class SQLDatabase:
    """
    Owns the process-wide AsyncEngine and hands out sessions.

    Call initialize() once at startup; create_schema() creates the exercises
    table when it does not exist yet.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None
        self.logger = logging.getLogger(__name__)

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    def initialize(self) -> None:
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, echo=self.echo)
        self._sessionmaker = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )
        self.logger.info(f"Database engine created for {self._engine.url.render_as_string(hide_password=True)}")

    async def create_schema(self) -> None:
        self.initialize()
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating database schema: {e}")
            raise StorageFailureError("Could not create the exercises table") from e

    def session(self) -> AsyncSession:
        if self._sessionmaker is None:
            self.initialize()
        return self._sessionmaker()

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self.logger.info("Database engine disposed")
        self._engine = None
        self._sessionmaker = None
