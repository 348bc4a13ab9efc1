from fastapi import Request

from userbase.repository import UserRepository


def get_repository(request: Request) -> UserRepository:
    return request.app.state.users
