import logging
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from professor_aid import config

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(url: str | None = None, **kwargs) -> Engine:
    """
    Creates the engine. Without a URL falls back to a local SQLite file
    beside the package.
    """
    url = url or config.DATABASE_URL
    if not url:
        db_path = Path(__file__).with_name("app.db")
        url = f"sqlite:///{db_path}"

    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)

    new_engine = create_engine(url, echo=config.SQL_ECHO, **kwargs)
    logger.debug("Engine created for %s", new_engine.url.render_as_string(hide_password=True))
    return new_engine


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES ... ON DELETE CASCADE unless asked per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = build_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine | None = None) -> None:
    # models must be imported so their tables and triggers are registered
    from professor_aid import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def utcnow() -> datetime:
    # naive UTC, SQLite drops tzinfo on round trip anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)
