import time
from typing import Iterator

from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from seat_ledger.core.config import (
    DB_CONNECT_MAX_RETRIES,
    DB_CONNECT_RETRY_DELAY,
    get_database_url,
)


def make_engine(url: str, **kwargs) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # API worker threads share the pool
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True, **kwargs)


class Base(DeclarativeBase):
    pass


engine: Engine = make_engine(get_database_url())

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def wait_for_db(
    bind: Engine | None = None,
    max_retries: int = DB_CONNECT_MAX_RETRIES,
    retry_delay: float = DB_CONNECT_RETRY_DELAY,
) -> None:
    """Block until the database answers ``SELECT 1`` or retries run out."""
    bind = bind or engine
    for attempt in range(1, max_retries + 1):
        try:
            with bind.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database is reachable.")
            return
        except OperationalError:
            if attempt == max_retries:
                logger.exception(
                    "Database not reachable after {} attempts. Check DATABASE_URL.",
                    max_retries,
                )
                raise
            logger.warning(
                "Database not ready (attempt {}/{}). Retrying in {:.1f} seconds...",
                attempt,
                max_retries,
                retry_delay,
            )
            time.sleep(retry_delay)
