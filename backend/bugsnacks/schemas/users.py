"""
User Schemas - request shapes for /api/users
"""
from typing import Optional

from pydantic import EmailStr

from bugsnacks.schemas.common import RequestShape, PatchShape


class UserCreate(RequestShape):
    """Create a user"""
    name: str
    email: EmailStr
    campus_id: str


class UserUpdate(PatchShape):
    """Update user; userId and createdAt are fixed"""
    email: Optional[EmailStr] = None
    campus_id: Optional[str] = None
    name: Optional[str] = None
