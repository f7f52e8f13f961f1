from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from hr_access.core.rbac import Role


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class UserPublic(BaseModel):
    user_id: str
    username: str
    full_name: str
    role: Role
    role_label: str
    manager_id: Optional[str] = None


class UserProfile(UserPublic):
    capabilities: dict[str, bool] = Field(default_factory=dict)
    accessible_routes: list[str] = Field(default_factory=list)
