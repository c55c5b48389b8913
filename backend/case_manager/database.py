from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from case_manager.config import get_settings

settings = get_settings()

# SQLite file next to the working directory unless DB_TYPE=mysql
if settings.db_type == "sqlite":
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},  # FastAPI runs sync routes in a threadpool
    )
else:
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_recycle=3600,
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Users, patients and calls all hang off this Base; main.py creates the tables at startup
Base = declarative_base()


def get_db():
    """One session per request. Tests swap this out for an in-memory SQLite session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
