from collections.abc import Callable
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from hr_access.core.policy import can
from hr_access.core.rbac import Action, Resource, parse_role
from hr_access.core.security import InvalidTokenError, subject_from_token
from hr_access.services.container import auth_service


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


def get_current_user(token: str = Depends(oauth2_scheme)) -> dict[str, Any]:
    try:
        user_id = subject_from_token(token)
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    user = auth_service.require_user(user_id)
    if parse_role(user.get("role")) is None:
        raise HTTPException(status_code=403, detail="Account has no valid role")
    return user


def require_permission(resource: Resource, action: Action) -> Callable[[dict[str, Any]], dict[str, Any]]:
    def dependency(user: dict[str, Any] = Depends(get_current_user)) -> dict[str, Any]:
        if not can(user["role"], resource, action):
            raise HTTPException(status_code=403, detail="Insufficient role permissions")
        return user

    return dependency
