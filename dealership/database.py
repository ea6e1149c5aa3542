import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from dealership.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Create Engine
if settings.DATABASE_URL.startswith("sqlite"):
    # In-memory SQLite must share one connection across threads (TestClient)
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    # pool_pre_ping=True helps reconnect if DB connection drops
    engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_session():
    """Dependency for FastAPI Routes"""
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Database error: {e}")
        db.rollback()
        raise
    finally:
        db.close()

# Alias used by the routers
get_db = get_session
