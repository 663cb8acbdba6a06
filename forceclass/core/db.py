from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool


Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Creates an async engine; the caller owns it and must dispose it."""
    kwargs = {}
    if database_url.startswith("sqlite"):
        # in-memory SQLite must share one connection across sessions
        kwargs = {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}

    return create_async_engine(
        database_url,
        echo=echo,
        **kwargs,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)
