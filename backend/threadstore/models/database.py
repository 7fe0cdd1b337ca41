"""Schema management for the relational backend."""

import logging

from sqlalchemy import event
from sqlalchemy.engine import Engine

from .base import Base

logger = logging.getLogger(__name__)

# Execution option naming the SQLite BEGIN mode ("IMMEDIATE" for writers
# that read before they write)
SQLITE_BEGIN_OPTION = "sqlite_begin"


def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Enable foreign key support and explicit transactions in SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # pysqlite otherwise delays BEGIN until the first INSERT/UPDATE, leaving
    # earlier SELECTs outside the transaction
    dbapi_connection.isolation_level = None


def begin_sqlite_transaction(conn):
    """Emit BEGIN ourselves, honouring the ``sqlite_begin`` execution option."""
    mode = conn.get_execution_options().get(SQLITE_BEGIN_OPTION)
    conn.exec_driver_sql(f"BEGIN {mode}" if mode else "BEGIN")


def install_sqlite_pragmas(engine: Engine) -> None:
    """Turn on foreign keys and real transactions for SQLite connections of ``engine``."""
    if engine.dialect.name != "sqlite":
        return
    if not event.contains(engine, "connect", enable_sqlite_foreign_keys):
        event.listen(engine, "connect", enable_sqlite_foreign_keys)
    if not event.contains(engine, "begin", begin_sqlite_transaction):
        event.listen(engine, "begin", begin_sqlite_transaction)


def init_db(engine: Engine) -> None:
    """Create the post and comment tables if they don't exist."""
    # Import all models to register them with Base
    from . import PostRecord, CommentRecord  # noqa: F401

    install_sqlite_pragmas(engine)
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database tables verified/created on {engine.url.render_as_string(hide_password=True)}")


def drop_db(engine: Engine) -> None:
    """Drop all tables (use with caution!)."""
    Base.metadata.drop_all(bind=engine)
    logger.warning("All tables dropped")


def reset_db(engine: Engine) -> None:
    """Reset database by dropping and recreating all tables."""
    drop_db(engine)
    init_db(engine)
    logger.info("Database reset complete")
