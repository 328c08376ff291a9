# daily_report/db/session.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from daily_report.core.config import settings
from daily_report.db.models import Base


def build_engine(url: str):
    kwargs: dict = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
    engine = create_engine(url, **kwargs)

    if url.startswith("sqlite"):
        # SQLite ignores ON DELETE rules unless asked per connection
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_sessionmaker(bind) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, autocommit=False, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = build_sessionmaker(engine)


def get_db():
    """ Request-scoped session dependency. """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    Base.metadata.create_all(bind=bind or engine)
