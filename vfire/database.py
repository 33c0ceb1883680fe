import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from .config import config

# Globals, set by init_db()
engine = None
db_session = None

logger = logging.getLogger(__name__)


def normalize_database_url(database_url: Optional[str]) -> Optional[str]:
    """
    Normalize the database URL.
    - For Postgres, make sure sslmode=require is present.
    """
    if not database_url:
        return None

    try:
        url = make_url(database_url)
    except Exception:
        # Not parseable by SQLAlchemy, let create_engine report it
        return database_url

    if url.drivername.startswith("postgresql") and "sslmode" not in url.query:
        url = url.set(query={**url.query, "sslmode": "require"})

    return url.render_as_string(hide_password=False)


def _engine_options(database_url: str) -> dict:
    url = make_url(database_url)
    if url.drivername.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise every session sees an empty database
            options["poolclass"] = StaticPool
        return options
    # Serverless-friendly: no pooled connections left open between requests.
    return {"pool_pre_ping": True, "poolclass": NullPool}


def init_db(database_url: Optional[str] = None):
    """Create the engine and the scoped session registry."""
    global engine, db_session
    database_url = normalize_database_url(database_url or config.DATABASE_URL)
    if not database_url:
        logger.warning("DATABASE_URL not configured; database layer disabled")
        return None

    masked_url = database_url.split("@")[-1] if "@" in database_url else database_url
    logger.info(f"Connecting to database: {masked_url}")
    try:
        engine = create_engine(database_url, **_engine_options(database_url))
        # Rows stay readable after commit, for serialising responses
        db_session = scoped_session(sessionmaker(autoflush=False, expire_on_commit=False, bind=engine))
    except Exception as e:
        logger.error(f"Failed to create database engine: {e}")
        raise
    logger.info("Database initialized")
    return engine


def create_all():
    """Create missing tables (local development and tests)."""
    from .models_db import Base
    if engine is None:
        init_db()
    Base.metadata.create_all(engine)


def drop_all():
    from .models_db import Base
    if engine is not None:
        Base.metadata.drop_all(engine)


def get_db():
    """Yield the request-scoped session. Cleanup happens at app-context teardown."""
    if db_session is None:
        init_db()

    if db_session is None:
        yield None
        return
    yield db_session()


def remove_session(exception=None):
    if db_session is not None:
        db_session.remove()
