from fastapi import APIRouter, Depends, HTTPException

from hr_access.api.deps import get_current_user
from hr_access.models.auth import UserPublic
from hr_access.services.container import auth_service, authorizer


router = APIRouter(prefix="/employees", tags=["Employees"])


@router.get("/{employee_id}", response_model=UserPublic)
async def read_employee(
    employee_id: str,
    current_user: dict = Depends(get_current_user),
) -> UserPublic:
    if not await authorizer.can_access_employee(current_user["user_id"], employee_id):
        raise HTTPException(status_code=403, detail="Not allowed to view this employee")
    return auth_service.as_public(auth_service.get_user(employee_id))
