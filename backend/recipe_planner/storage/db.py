from sqlmodel import SQLModel, Session, create_engine

from recipe_planner.config import settings
from recipe_planner.logging import get_logger

logger = get_logger(__name__)


def _make_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = _make_engine(settings.database_url)


def create_db_and_tables() -> None:
    """Create all tables and indexes if missing. Safe to run repeatedly."""
    # Import for side effect: registers table models on SQLModel.metadata
    from recipe_planner.storage import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("db.initialized tables=%s", sorted(SQLModel.metadata.tables))


def get_session() -> Session:
    return Session(engine)
