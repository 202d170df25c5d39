"""
Database engine and session management for the guest record store
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from guest_console.core.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a database session and close it after the request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
