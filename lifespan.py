from contextlib import asynccontextmanager
from fastapi import FastAPI

from gymrank.utils.logging_config import setup_logger
from infrastructure.di import get_database

# Setup logger
logger = setup_logger("lifespan", "lifespan.log")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI application.

    Opens the database engine and creates the exercises table on startup,
    then disposes the engine on shutdown.

    Args:
        app: FastAPI application instance
    """
    database = get_database()
    try:
        logger.info("Initializing database...")
        database.initialize()
        await database.create_schema()
        app.state.database = database
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        await database.dispose()
        raise

    yield  # Application runs here

    logger.info("Shutting down database...")
    await database.dispose()
    logger.info("Database shut down successfully")
