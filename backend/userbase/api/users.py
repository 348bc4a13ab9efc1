from fastapi import APIRouter, Depends, HTTPException, Path

from userbase.api.deps import get_repository
from userbase.models.user import UserCreate, UserResponse, UserUpdate
from userbase.repository import MAX_USER_ID, MIN_USER_ID, UserRepository

router = APIRouter(prefix="/users", tags=["users"])

# Handlers are plain functions so FastAPI runs them in its threadpool while
# they wait on the store.


@router.post("", response_model=UserResponse, status_code=201)
def create_user(
    body: UserCreate,
    users: UserRepository = Depends(get_repository),
):
    return users.create(body)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int = Path(ge=MIN_USER_ID, le=MAX_USER_ID),
    users: UserRepository = Depends(get_repository),
):
    user = users.find_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    body: UserUpdate,
    user_id: int = Path(ge=MIN_USER_ID, le=MAX_USER_ID),
    users: UserRepository = Depends(get_repository),
):
    user = users.update(user_id, body)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{user_id}")
def delete_user(
    user_id: int = Path(ge=MIN_USER_ID, le=MAX_USER_ID),
    users: UserRepository = Depends(get_repository),
):
    if not users.delete(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"detail": "User deleted"}
