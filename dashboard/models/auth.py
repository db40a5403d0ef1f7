# dashboard/models/auth.py

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class User(BaseModel):
    id: str
    name: str
    email: str
    password: str  # hash


class LoginState(BaseModel):
    message: Optional[str] = None
