from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ApprovalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class DecisionRequest(BaseModel):
    approve: bool
    notes: Optional[str] = Field(default=None, max_length=300)


class LeaveRequestRecord(BaseModel):
    request_id: str
    employee_id: str
    start_date: date
    end_date: date
    reason: str
    status: ApprovalStatus
    approver_id: Optional[str] = None
    decision_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TimesheetRecord(BaseModel):
    timesheet_id: str
    employee_id: str
    week_start: date
    hours: float = Field(ge=0, le=168)
    status: ApprovalStatus
    approver_id: Optional[str] = None
    decision_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
