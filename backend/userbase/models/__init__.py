from userbase.models.user import User, UserCreate, UserResponse, UserUpdate

__all__ = [
    "User",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
