from sqlalchemy.engine import Engine, make_url
from sqlmodel import create_engine
from sqlmodel.pool import StaticPool


def create_store_engine(database_url: str, echo: bool = False) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    # Pooled SQLite connections are handed to threadpool workers.
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, echo=echo, **kwargs)
