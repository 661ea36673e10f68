# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
SQLAlchemy engine, session factory, declarative base, and the FastAPI
dependency that provides a DB session per request.

``init_db`` creates the database (MySQL) and both tables if they do not
exist yet.  It is idempotent and runs once at process startup.
"""

from datetime import timezone

from sqlalchemy import DateTime, TypeDecorator, create_engine, event, text
from sqlalchemy.dialects import mysql
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from core.config import settings
from core.logger import logger

Base = declarative_base()


class UTCDateTime(TypeDecorator):
    """
    Stored as UTC without an offset, returned as an aware UTC datetime so
    API timestamps serialize with their zone.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        # MySQL keeps microseconds only with an explicit fsp
        if dialect.name == "mysql":
            return dialect.type_descriptor(mysql.DATETIME(fsp=6))
        return dialect.type_descriptor(self.impl)

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


Timestamp = UTCDateTime()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(database_url: str) -> Engine:
    """
    Build an engine for *database_url*.

    Server databases get a bounded pool with pre-ping (keeps idle
    connections alive across MySQL's wait_timeout).  SQLite gets
    foreign-key enforcement and, for in-memory URLs, a single shared
    connection so every session sees the same data.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=0,
    )


engine = make_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    FastAPI dependency.  Yields a session for the duration of the request,
    then closes it.  Use with Depends(get_db).
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _create_database_if_missing(database_url: str) -> None:
    url = make_url(database_url)
    if url.get_backend_name() != "mysql" or not url.database:
        return
    # Connect to the server without selecting a schema
    server_engine = create_engine(url.set(database=None))
    try:
        with server_engine.begin() as conn:
            conn.execute(text(f"CREATE DATABASE IF NOT EXISTS `{url.database}`"))
    finally:
        server_engine.dispose()


def init_db(bind: Engine = None) -> None:
    """Create the database and the users/posts tables if they do not exist."""
    bind = bind or engine

    # Import every ORM model so that Base.metadata knows about all tables.
    import models.user  # noqa: F401
    import models.post  # noqa: F401

    try:
        _create_database_if_missing(bind.url.render_as_string(hide_password=False))
        Base.metadata.create_all(bind=bind)
    except Exception:
        logger.exception("Database initialization failed")
        raise
    logger.info("Database and tables initialized")
