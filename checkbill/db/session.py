import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from checkbill.core.config import settings
from checkbill.db.base import Base

logger = logging.getLogger(__name__)


def create_db_engine(url: str) -> Engine:
    """Build an engine; connection pool tuning only applies to server databases."""
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_recycle=300,      # Recycle connections every 5 minutes
        pool_pre_ping=True,    # Validate connections before use
        pool_timeout=30,
        echo=False,
    )


engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None) -> None:
    """Create the reminders table if it does not exist yet."""
    bind = bind or engine
    # Model import registers the table on Base.metadata
    import checkbill.reminders.models  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info(f"🗄️ [DB] Schema ready on {bind.url.render_as_string(hide_password=True)}")
