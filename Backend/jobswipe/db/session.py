# backend/jobswipe/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from jobswipe.config import settings

if settings.DATABASE_URL.startswith("sqlite"):
    engine_options = {"connect_args": {"check_same_thread": False}}
else:
    # Keep the pool small; the managed Postgres tier caps connections.
    engine_options = {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 2,
        "pool_recycle": 1800,
    }

engine = create_engine(settings.DATABASE_URL, **engine_options)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# The dependency function to provide a database session per request
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory():
    """
    Dependency returning the factory background work uses to open its own
    sessions once the request session is closed.
    """
    return SessionLocal
