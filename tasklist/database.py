import logging
from typing import Iterable

from sqlalchemy import create_engine, make_url, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .config import get_settings
from .errors import StoreUnavailable
from .models import Base

logger = logging.getLogger(__name__)


def build_engine(url: str, pool_size: int = 5, max_overflow: int = 10) -> Engine:
    kwargs: dict = {"pool_pre_ping": True}
    parsed = make_url(url)
    sqlite = parsed.get_backend_name() == "sqlite"
    if sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
    # In-memory SQLite uses a singleton pool that takes no sizing arguments.
    if not (sqlite and parsed.database in (None, "", ":memory:")):
        kwargs["pool_size"] = pool_size
        kwargs["max_overflow"] = max_overflow
    return create_engine(url, **kwargs)


settings = get_settings()
engine = build_engine(settings.database_url, settings.pool_size, settings.max_overflow)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterable[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    if bind is None:
        bind = engine
    try:
        Base.metadata.create_all(bind=bind)
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Failed to connect to the task store at %s: %s", bind.url, exc)
        raise StoreUnavailable("Task store is unreachable.") from exc
    logger.info("Task store connected via pool at %s", bind.url)
