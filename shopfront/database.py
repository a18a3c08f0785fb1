# shopfront/database.py
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from shopfront.core.config import get_settings

settings = get_settings()


def build_engine(db_url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for the given URL.

    SQLite:
      - check_same_thread=False: FastAPI runs sync endpoints in a thread pool
      - timeout=30: concurrent writers wait for the lock instead of failing

    Postgres:
      - sslmode is appended when DATABASE_SSLMODE is configured
      - pool_pre_ping=True validates connections before using them
    """
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
        )

    if settings.DATABASE_SSLMODE and "sslmode=" not in db_url:
        sep = "&" if "?" in db_url else "?"
        db_url = f"{db_url}{sep}sslmode={settings.DATABASE_SSLMODE}"

    return create_engine(
        db_url,
        echo=echo,
        pool_pre_ping=True,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


def create_db_and_tables(bind: Engine | None = None) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    One session per request. Leaving the `with` block closes the session,
    which rolls back anything the handler did not commit.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
