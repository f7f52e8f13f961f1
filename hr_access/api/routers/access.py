from fastapi import APIRouter, Depends, Query

from hr_access.api.deps import get_current_user
from hr_access.core.policy import ROUTE_REQUIREMENTS, can, can_access_route
from hr_access.models.access import AccessDecision, RouteAccess


router = APIRouter(prefix="/access", tags=["Access Control"])


@router.get("/check", response_model=AccessDecision)
def check_access(
    resource: str = Query(min_length=1, max_length=64),
    action: str = Query(min_length=1, max_length=64),
    current_user: dict = Depends(get_current_user),
) -> AccessDecision:
    return AccessDecision(
        role=current_user["role"],
        resource=resource,
        action=action,
        allowed=can(current_user["role"], resource, action),
    )


@router.get("/routes", response_model=list[RouteAccess])
def list_route_access(current_user: dict = Depends(get_current_user)) -> list[RouteAccess]:
    return [
        RouteAccess(path=path, allowed=can_access_route(current_user["role"], path))
        for path in ROUTE_REQUIREMENTS
    ]
