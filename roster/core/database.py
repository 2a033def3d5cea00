"""PostgreSQL connection pool and session management."""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from roster.core.config import Settings, settings


def create_db_engine(cfg: Settings) -> Engine:
    """
    Engine over a bounded QueuePool: at most DB_POOL_SIZE + DB_MAX_OVERFLOW
    connections. A checkout waits DB_POOL_TIMEOUT_SEC, then raises
    sqlalchemy.exc.TimeoutError (surfaced by repositories as StorageFailure).
    """
    return create_engine(
        cfg.DATABASE_URL,
        pool_pre_ping=True,
        pool_size=cfg.DB_POOL_SIZE,
        max_overflow=cfg.DB_MAX_OVERFLOW,
        pool_timeout=cfg.DB_POOL_TIMEOUT_SEC,
        echo=cfg.DEBUG,
    )


def create_session_factory(bind: Engine) -> sessionmaker[Session]:
    # rows are read after commit without a reload
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


engine = create_db_engine(settings)
SessionLocal = create_session_factory(engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
