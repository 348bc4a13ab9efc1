from userbase.migrations.runner import (
    alembic_config,
    applied_migrations,
    apply_schema,
    revert_schema,
)

__all__ = [
    "alembic_config",
    "applied_migrations",
    "apply_schema",
    "revert_schema",
]
