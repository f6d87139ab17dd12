from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from jobly.core.config import settings


def _engine_options(url: str) -> dict:
    # SQLite does not take QueuePool sizing arguments
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": 10,
        "max_overflow": 20,
    }


# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))


def enable_sqlite_foreign_keys(sqlite_engine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless enabled per connection."""
    @event.listens_for(sqlite_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if settings.DATABASE_URL.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


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


def init_db():
    """
    Initialize database.

    Imports the models so they register on Base.metadata. Tables are only
    created here when AUTO_CREATE_TABLES is set; otherwise the schema is
    expected to exist already.
    """
    from jobly.models import company, job, user, application  # noqa: F401 - register models

    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
