# backend/app/schemas/user_schemas.py
from pydantic import BaseModel
from typing import Literal, Optional
from datetime import datetime

Role = Literal["admin", "tutor"]


class UserCreate(BaseModel):
    name: str
    email: str
    role: Role = "tutor"


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    created_at: datetime
