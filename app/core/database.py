import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from fastapi import Request

logger = logging.getLogger(__name__)

Base = declarative_base()


def init_db(database_url: str, **engine_kwargs):
    """
    Connect to the metadata store and make sure the tables exist

    Raises sqlalchemy.exc.OperationalError when the database cannot be
    reached; callers treat that as fatal.

    Returns:
        (engine, SessionLocal)
    """
    # Registers Song on Base.metadata
    import app.models  # noqa: F401

    if database_url.startswith("sqlite"):
        # Sessions are opened on the request threadpool
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})

    engine = create_engine(database_url, **engine_kwargs)

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    logger.info("Connected to metadata store (%s)", engine.url.get_backend_name())
    return engine, SessionLocal


def get_db(request: Request):
    SessionLocal = request.app.state.session_factory
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
