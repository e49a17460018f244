# pyright: reportMissingTypeStubs=false
"""
SQLAlchemy engine, session factory and the declarative base.

The whole application talks to a single logical database. Request handlers
receive a session through the get_db dependency; scripts and tests bind
their own engine and call create_tables/drop_tables directly.
"""

import logging
from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from core.config import DATABASE_URL
from core.constants import DB_POOL_RECYCLE_SECONDS
from core.exceptions import AppError

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_recycle": DB_POOL_RECYCLE_SECONDS,
        "echo": False,
    }
    if url.startswith("sqlite"):
        # Sessions are handed across the request threadpool
        options["connect_args"] = {"check_same_thread": False}
    return options


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

# Loaded rows stay readable after commit; response models are built from them
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base shared by every model in models/."""


@event.listens_for(Base, "before_insert", propagate=True)  # type: ignore
def stamp_created_at(mapper, connection, target):  # type: ignore
    """Fill created_at for models that have the column and left it unset."""
    from utils.datetime_utils import utc_now
    if "created_at" in mapper.columns and getattr(target, "created_at", None) is None:  # type: ignore
        target.created_at = utc_now()  # type: ignore


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding one session per request.

    Anything raised while the request is being handled rolls the session
    back. Domain errors are expected outcomes and are not logged here; they
    are reported by the exception handlers in main.py.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        logger.exception(f"Database error during request: {e}")
        db.rollback()
        raise
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_tables(bind: Engine | None = None) -> None:
    """
    Create every table registered on Base.metadata that does not exist yet.

    Deployed databases are built with Alembic (backend/alembic); this is for
    the test suite and reset_database.py.
    """
    import models  # noqa: F401  # registers the tables on Base.metadata
    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Created tables on {target.url.render_as_string(hide_password=True)}")


def drop_tables(bind: Engine | None = None) -> None:
    """Drop every table registered on Base.metadata. All data is lost."""
    import models  # noqa: F401
    target = bind or engine
    Base.metadata.drop_all(bind=target)
    logger.info(f"Dropped tables on {target.url.render_as_string(hide_password=True)}")
