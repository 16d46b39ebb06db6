from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from edvora.core import config

Base = declarative_base()


def build_engine(database_url: str, echo: bool | None = None) -> Engine:
    options = {"echo": config.DATABASE_ECHO if echo is None else echo}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in {"sqlite://", "sqlite+pysqlite://"}:
            # One shared connection, otherwise every session gets an empty database.
            options["poolclass"] = StaticPool
    return create_engine(database_url, **options)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def create_schema(engine: Engine) -> None:
    # Models register themselves on Base.metadata when imported.
    from edvora.models import event, pomodoro, task, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
