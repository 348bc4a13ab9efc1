from datetime import datetime

from pydantic import field_validator
from sqlalchemy import func
from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}  # ids are never reused

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(max_length=255, unique=True)
    password: str = Field(max_length=255)  # opaque, stored verbatim
    # Filled in by the store's column defaults, never by the application.
    created_at: datetime | None = Field(
        default=None, nullable=False, sa_column_kwargs={"server_default": func.now()}
    )
    updated_at: datetime | None = Field(
        default=None, nullable=False, sa_column_kwargs={"server_default": func.now()}
    )


def _reject_blank(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


class UserCreate(SQLModel):
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value):
        return _reject_blank(value)


class UserUpdate(SQLModel):
    username: str | None = Field(default=None, min_length=1, max_length=255)
    password: str | None = Field(default=None, min_length=1, max_length=255)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value):
        return _reject_blank(value)


class UserResponse(SQLModel):
    id: int
    username: str
    password: str
    created_at: datetime
    updated_at: datetime
