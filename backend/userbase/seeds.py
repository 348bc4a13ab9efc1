import logging

from sqlalchemy import delete, insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

from userbase.errors import StoreUnavailable
from userbase.models.user import User

logger = logging.getLogger(__name__)

SEED_USERS = [
    {"username": "user1", "password": "password1"},
    {"username": "user2", "password": "password2"},
    {"username": "user3", "password": "password3"},
]


def seed_users(engine: Engine) -> int:
    """Replace the contents of ``users`` with the fixture rows."""
    table = User.__table__
    try:
        with engine.begin() as conn:
            removed = conn.execute(delete(table)).rowcount
            conn.execute(insert(table), SEED_USERS)
    except OperationalError as exc:
        raise StoreUnavailable("Could not seed users") from exc
    logger.info(f"Seeded {len(SEED_USERS)} users (removed {removed})")
    return len(SEED_USERS)
