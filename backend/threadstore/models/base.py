"""Database base configuration for SQLAlchemy models."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .. import config

# Create declarative base
Base = declarative_base()


def is_sqlite_memory_url(database_url: str) -> bool:
    """True for ``sqlite://`` and ``sqlite:///:memory:`` style URLs."""
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_engine_for_url(database_url: str = None, echo: bool = False) -> Engine:
    """
    Build an engine for the given URL (defaults to config.DATABASE_URL).

    PostgreSQL and on-disk SQLite get a connection pool, so every thread
    works on its own connection. In-memory SQLite only exists inside one
    connection and therefore shares it through StaticPool; such engines are
    meant for single-threaded tests.
    """
    database_url = database_url or config.DATABASE_URL

    if database_url.startswith("postgresql"):
        # PostgreSQL configuration with connection pool
        return create_engine(
            database_url,
            pool_size=config.DB_POOL_SIZE,
            max_overflow=config.DB_MAX_OVERFLOW,
            pool_timeout=config.DB_POOL_TIMEOUT,
            pool_pre_ping=True,
            echo=echo
        )

    if is_sqlite_memory_url(database_url):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo
        )

    # On-disk SQLite (local development): one pooled connection per thread,
    # waiting up to SQLITE_BUSY_TIMEOUT seconds for a concurrent writer
    db_path = make_url(database_url).database
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return create_engine(
        database_url,
        connect_args={"check_same_thread": False, "timeout": config.SQLITE_BUSY_TIMEOUT},
        pool_timeout=config.DB_POOL_TIMEOUT,
        echo=echo
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
