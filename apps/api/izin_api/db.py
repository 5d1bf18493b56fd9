from collections.abc import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .core.config import settings

DEFAULT_DATABASE_URL = "sqlite:///./izin_kendaraan.db"


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # sync endpoints run in the FastAPI threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


database_url = settings.database_url or DEFAULT_DATABASE_URL
engine = create_engine(database_url, future=True, **_engine_kwargs(database_url))
SessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)


def get_session() -> Iterator[Session]:
    with SessionLocal() as session:
        yield session


def get_session_factory() -> sessionmaker:
    """Factory for work that outlives the request session (background jobs)."""
    return SessionLocal
