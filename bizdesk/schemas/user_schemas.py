from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from bizdesk.models.role import UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    """Add a user to the current tenant (ADMIN only)"""

    email: str = Field(..., max_length=100, pattern=EMAIL_PATTERN)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    role: UserRole = Field(default=UserRole.USER, description="Role to assign (default: USER)")


class UserUpdate(BaseModel):
    """Update user details; only admins may change roles"""

    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    role: Optional[UserRole] = None


class UserResponse(BaseModel):
    """User details"""

    model_config = {"from_attributes": True}

    id: int
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_active: bool
    created_at: datetime


class UserListResponse(BaseModel):
    users: list[UserResponse]
    total: int
