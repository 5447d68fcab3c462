import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from jobboard.core.config import settings


def _engine_kwargs(url: str) -> dict:
    """Pool settings for server databases; SQLite uses its own pool defaults."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": 10,  # Connection pool size
        "max_overflow": 20,  # Allow up to 20 connections beyond pool_size
    }


# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# Upper bound of an INTEGER column; larger ids and page numbers are rejected at validation
MAX_INTEGER = 2**31 - 1


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(create_tables: bool = False):
    """
    Initialize database.

    Importing the models registers them on Base.metadata. Schema changes are
    owned by Alembic ("alembic upgrade head"); create_tables is only meant for
    throwaway SQLite databases in local development.
    """
    from jobboard.models import user, job, application, revoked_token  # noqa: F401
    if create_tables:
        Base.metadata.create_all(bind=engine)
