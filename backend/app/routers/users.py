# backend/app/routers/users.py
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List

from backend.app.database.session import get_db
from backend.app.schemas.user_schemas import UserCreate, UserRead, UserUpdate
from backend.app.services.user_service import UserService

router = APIRouter(tags=["users"])


@router.post("/api/users", response_model=UserRead, status_code=201)
def create_user(data: UserCreate, session: Session = Depends(get_db)):
    return UserService.to_read(UserService.create(session, data))


@router.get("/api/users", response_model=List[UserRead])
def list_users(session: Session = Depends(get_db)):
    return [UserService.to_read(u) for u in UserService.list_users(session)]


@router.get("/api/users/{user_id}", response_model=UserRead)
def get_user(user_id: int, session: Session = Depends(get_db)):
    return UserService.to_read(UserService.get(session, user_id))


@router.put("/api/users/{user_id}", response_model=UserRead)
def update_user(user_id: int, data: UserUpdate, session: Session = Depends(get_db)):
    return UserService.to_read(UserService.update(session, user_id, data))


@router.delete("/api/users/{user_id}")
def delete_user(user_id: int, session: Session = Depends(get_db)):
    UserService.delete(session, user_id)
    return {"msg": "User deleted successfully"}
