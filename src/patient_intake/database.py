"""Database configuration and connection setup.

The SQLModel engine is created lazily after application settings have been
loaded and possibly overridden by CLI flags. The engine always hides bound
parameters so that patient data never appears in SQL logs or error messages.
"""

from collections.abc import Generator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy.engine import make_url
from sqlmodel import Session, SQLModel, create_engine, text
from tenacity import before_sleep_log, retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from patient_intake.settings import get_settings

_engine = None  # type: ignore[var-annotated]


def _build_engine():  # type: ignore[return-value]
    """Create and return a new engine from current settings."""
    settings = get_settings()
    database_url = settings.database_url
    if make_url(database_url).get_backend_name() == "sqlite":
        engine_kwargs = {"connect_args": {"check_same_thread": False}}
    else:
        engine_kwargs = {
            "connect_args": {"connect_timeout": 10},
            "pool_pre_ping": True,
            "pool_recycle": 3600,
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
        }
    engine_local = create_engine(
        database_url,
        echo=settings.sql_log,
        hide_parameters=True,
        **engine_kwargs,
    )
    logger.info(f"SQL echo is {'enabled' if settings.sql_log else 'disabled'}")
    return engine_local


def get_engine():  # type: ignore[return-value]
    """Return a singleton engine instance, creating it lazily."""
    global _engine
    if _engine is None:
        _engine = _build_engine()
    return _engine


def init_db() -> None:
    """Create missing tables for all registered SQLModel tables."""
    from patient_intake.models import db_model  # noqa: F401

    logger.info("Initializing database...")
    SQLModel.metadata.create_all(get_engine())


def dispose_db() -> None:
    """Dispose of the database engine if it was created."""
    global _engine
    if _engine is not None:
        logger.info("Closing database connections")
        _engine.dispose()
        _engine = None


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    reraise=True,
    retry=retry_if_exception_type(Exception),
    before_sleep=before_sleep_log(logger, "DEBUG"),
)
def _create_session() -> Session:
    """Create a database session with retry logic.

    Only establishing the connection is retried. Statements executed on the
    returned session are not.

    Returns:
        Session: A new database session

    Raises:
        Exception: If all retry attempts fail
    """
    global _engine
    try:
        session = Session(get_engine())
        # Test the connection immediately
        session.execute(text("SELECT 1"))
        return session
    except Exception as e:
        # Connection failed - dispose engine so it can be recreated on retry
        if _engine is not None:
            logger.warning("Database connection failed, disposing engine for retry...")
            _engine.dispose()
            _engine = None
        logger.error(f"Failed to create database session: {type(e).__name__}")
        raise


@contextmanager
def borrow_db_session() -> Generator[Session, None, None]:
    """Context manager yielding a database session.

    Will attempt to connect to the database with exponential backoff, up to
    5 times, before giving up.

    Example:
        from patient_intake.database import borrow_db_session
        with borrow_db_session() as session:
            session.exec(text("SELECT 1"))
    """
    session = _create_session()
    session_id = id(session)

    try:
        yield session
    except Exception as e:
        logger.error(f"Error during database session {session_id}: {type(e).__name__}")
        raise
    finally:
        session.close()
        logger.trace(f"Database session {session_id} closed and resources released")
