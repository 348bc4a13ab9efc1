import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import pydantic
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlmodel import Session, SQLModel

from userbase.errors import Conflict, StoreUnavailable, ValidationError
from userbase.models.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)

# Range of a signed 64-bit integer column.
MIN_USER_ID = -(2**63)
MAX_USER_ID = 2**63 - 1

users = User.__table__


def _coerce(model: type[ModelT], data: ModelT | Mapping[str, Any]) -> ModelT:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise ValidationError(f"Invalid {model.__name__}: {fields}") from exc


def _check_id(user_id: Any) -> int:
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise ValidationError(f"Malformed user id: {user_id!r}")
    if not MIN_USER_ID <= user_id <= MAX_USER_ID:
        raise ValidationError(f"User id out of range: {user_id}")
    return user_id


def _is_unique_violation(exc: IntegrityError) -> bool:
    # 23505 is unique_violation on PostgreSQL; SQLite only reports it in the message.
    if getattr(exc.orig, "pgcode", None) == "23505":
        return True
    return "unique" in str(exc.orig).lower()


def _to_user(row: Row) -> User:
    return User.model_validate(dict(row._mapping))


class UserRepository:
    """Data access for the ``users`` table.

    Every operation is a single statement on the injected engine; nothing is
    cached between calls, and writes return the row as the store left it.
    Store errors are translated to :mod:`userbase.errors` so callers never
    see driver exceptions.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def find_by_id(self, user_id: int) -> User | None:
        user_id = _check_id(user_id)
        try:
            with Session(self.engine) as session:
                return session.get(User, user_id)
        except DBAPIError as exc:
            raise self._unavailable("find_by_id", exc) from exc

    def create(self, candidate: UserCreate | Mapping[str, Any]) -> User:
        candidate = _coerce(UserCreate, candidate)
        statement = (
            insert(users)
            .values(username=candidate.username, password=candidate.password)
            .returning(*users.c)
        )
        try:
            with self.engine.begin() as conn:
                user = _to_user(conn.execute(statement).one())
        except IntegrityError as exc:
            raise self._integrity("create", candidate.username, exc) from exc
        except DBAPIError as exc:
            raise self._unavailable("create", exc) from exc
        logger.info(f"Created user {user.id}")
        return user

    def update(self, user_id: int, patch: UserUpdate | Mapping[str, Any]) -> User | None:
        user_id = _check_id(user_id)
        patch = _coerce(UserUpdate, patch)
        # Fields sent as null are treated as absent.
        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return self.find_by_id(user_id)

        statement = (
            update(users)
            .where(users.c.id == user_id)
            .values(**changes)
            .returning(*users.c)
        )
        try:
            with self.engine.begin() as conn:
                row = conn.execute(statement).one_or_none()
        except IntegrityError as exc:
            raise self._integrity("update", changes.get("username"), exc) from exc
        except DBAPIError as exc:
            raise self._unavailable("update", exc) from exc
        if row is None:
            return None
        logger.info(f"Updated user {user_id}: {', '.join(sorted(changes))}")
        return _to_user(row)

    def delete(self, user_id: int) -> bool:
        user_id = _check_id(user_id)
        try:
            with self.engine.begin() as conn:
                removed = conn.execute(delete(users).where(users.c.id == user_id)).rowcount
        except DBAPIError as exc:
            raise self._unavailable("delete", exc) from exc
        if not removed:
            return False
        logger.info(f"Deleted user {user_id}")
        return True

    @staticmethod
    def _integrity(operation: str, username: str | None, exc: IntegrityError) -> Exception:
        if _is_unique_violation(exc):
            logger.info(f"{operation}: username {username!r} already exists")
            return Conflict("Username already exists")
        logger.warning(f"{operation}: integrity error: {exc.orig}")
        return ValidationError("User violates a table constraint")

    @staticmethod
    def _unavailable(operation: str, exc: DBAPIError) -> StoreUnavailable:
        logger.error(f"{operation}: store error: {exc.orig}")
        return StoreUnavailable("Store unavailable")
