import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from userbase import __version__
from userbase.api.users import router as users_router
from userbase.config import Settings, settings as default_settings, setup_logging
from userbase.database import create_store_engine
from userbase.middleware import setup_exception_handlers, setup_middleware
from userbase.migrations import apply_schema
from userbase.repository import UserRepository

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    """Build the service around one store engine.

    When no engine is passed one is created from ``settings.database_url``
    and disposed on shutdown.
    """
    settings = settings or default_settings
    owns_engine = engine is None
    if engine is None:
        engine = create_store_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        if settings.auto_migrate:
            applied = apply_schema(engine)
            if applied:
                logger.info(f"Migrated store to {applied[-1]}")
        yield
        if owns_engine:
            engine.dispose()

    app = FastAPI(title="userbase", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.users = UserRepository(engine)

    setup_middleware(app, settings)
    setup_exception_handlers(app)
    app.include_router(users_router)

    @app.get("/")
    async def root():
        return {"message": "Hello, world!"}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
