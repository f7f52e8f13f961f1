from fastapi import APIRouter, Depends

from hr_access.api.deps import get_current_user
from hr_access.models.workflow import DecisionRequest, LeaveRequestRecord, TimesheetRecord
from hr_access.services.container import approval_service


router = APIRouter(tags=["Approvals"])


@router.get("/leave", response_model=list[LeaveRequestRecord])
def list_leave_requests(current_user: dict = Depends(get_current_user)) -> list[LeaveRequestRecord]:
    return approval_service.list_leave_requests(current_user)


@router.post("/leave/{request_id}/decision", response_model=LeaveRequestRecord)
async def decide_leave_request(
    request_id: str,
    payload: DecisionRequest,
    current_user: dict = Depends(get_current_user),
) -> LeaveRequestRecord:
    return await approval_service.decide_leave_request(current_user, request_id, payload)


@router.get("/timesheets", response_model=list[TimesheetRecord])
def list_timesheets(current_user: dict = Depends(get_current_user)) -> list[TimesheetRecord]:
    return approval_service.list_timesheets(current_user)


@router.post("/timesheets/{timesheet_id}/decision", response_model=TimesheetRecord)
async def decide_timesheet(
    timesheet_id: str,
    payload: DecisionRequest,
    current_user: dict = Depends(get_current_user),
) -> TimesheetRecord:
    return await approval_service.decide_timesheet(current_user, timesheet_id, payload)
