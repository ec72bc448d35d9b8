from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from fortress.core.config import settings
import os

db_url = settings.FORTRESS_DATABASE_URL

# Railway/Heroku style URLs: postgres:// -> postgresql:// (SQLAlchemy requirement)
if db_url.startswith("postgres://"):
    db_url = db_url.replace("postgres://", "postgresql://", 1)


def build_engine(url: str):
    if url.startswith("sqlite"):
        if "./" in url:
            # Relative sqlite paths are anchored to backend/
            base_dir = os.path.dirname(os.path.abspath(__file__))
            backend_dir = os.path.dirname(base_dir)
            db_file = url.replace("sqlite:///./", "")
            url = f"sqlite:///{os.path.join(backend_dir, db_file)}"
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(db_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory():
    """Snapshot reads open one session per query, so they need the factory."""
    return SessionLocal
