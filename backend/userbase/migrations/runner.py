import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import OperationalError

from userbase.errors import StoreUnavailable

logger = logging.getLogger(__name__)

SCRIPT_LOCATION = Path(__file__).resolve().parent


def alembic_config(connection: Connection | None = None) -> Config:
    """Alembic configuration for the bundled revisions.

    With a ``connection`` the revisions run on it instead of an engine
    built from settings.
    """
    config = Config()
    config.set_main_option("script_location", str(SCRIPT_LOCATION))
    if connection is not None:
        config.attributes["connection"] = connection
    return config


def _current_revision(connection: Connection) -> str | None:
    return MigrationContext.configure(connection).get_current_revision()


def _revisions_between(upper: str, lower: str | None) -> list[str]:
    """Revision ids above ``lower`` up to ``upper``, oldest first."""
    script = ScriptDirectory.from_config(alembic_config())
    revisions = script.iterate_revisions(upper, lower or "base")
    return [rev.revision for rev in reversed(list(revisions))]


def applied_migrations(engine: Engine) -> list[str]:
    """Revisions applied to the store, oldest first."""
    try:
        with engine.connect() as connection:
            current = _current_revision(connection)
    except OperationalError as exc:
        raise StoreUnavailable("Could not read migration state") from exc
    if current is None:
        return []
    return _revisions_between(current, None)


def apply_schema(engine: Engine) -> list[str]:
    """Upgrade the store to the newest revision and return the ids applied.

    An empty list means the store was already up to date.
    """
    try:
        with engine.begin() as connection:
            before = _current_revision(connection)
            command.upgrade(alembic_config(connection), "head")
            after = _current_revision(connection)
    except OperationalError as exc:
        raise StoreUnavailable("Could not apply migrations") from exc

    if after == before:
        logger.info("Schema already up to date")
        return []
    applied = _revisions_between(after, before)
    for revision in applied:
        logger.info(f"Applied migration {revision}")
    return applied


def revert_schema(engine: Engine) -> list[str]:
    """Downgrade the store to an empty schema and return the ids reverted,
    newest first. Reverting a store that was never migrated is a no-op.
    """
    reverted = list(reversed(applied_migrations(engine)))
    if not reverted:
        logger.info("Nothing to revert")
        return []
    try:
        with engine.begin() as connection:
            command.downgrade(alembic_config(connection), "base")
    except OperationalError as exc:
        raise StoreUnavailable("Could not revert migrations") from exc
    for revision in reverted:
        logger.info(f"Reverted migration {revision}")
    return reverted
