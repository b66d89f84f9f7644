"""
Pydantic schemas for request/response models in the auth module.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserCreate(BaseModel):
    """Registration payload. Presence is checked by UsersService so the
    error body keeps the `{"error": ...}` shape."""
    full_name: Optional[str] = None
    user_name: Optional[str] = None
    password: Optional[str] = None
    nickname: Optional[str] = None


class UserOut(BaseModel):
    """Public view of a user; never carries the password hash."""
    id: int
    full_name: Optional[str] = None
    user_name: str
    nickname: Optional[str] = None
    date_created: datetime


class ErrorOut(BaseModel):
    """Error body shared by 4xx/5xx responses."""
    error: str
