from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from fastapi import HTTPException

from hr_access.core.policy import can
from hr_access.core.rbac import Action, Resource, parse_role
from hr_access.models.workflow import (
    ApprovalStatus,
    DecisionRequest,
    LeaveRequestRecord,
    TimesheetRecord,
)
from hr_access.repositories.data_store import DataStore
from hr_access.services.audit_service import EventLogger
from hr_access.services.auth_service import AuthService
from hr_access.services.authorizer import ApprovalAuthorizer


SEED_LEAVE_REQUESTS: list[dict[str, Any]] = [
    {
        "request_id": "leave-0001",
        "employee_id": "u-emp-001",
        "start_date": "2026-11-02",
        "end_date": "2026-11-06",
        "reason": "Family vacation",
    },
    {
        "request_id": "leave-0002",
        "employee_id": "u-emp-003",
        "start_date": "2026-11-16",
        "end_date": "2026-11-17",
        "reason": "Medical appointment",
    },
    {
        "request_id": "leave-0003",
        "employee_id": "u-mgr-001",
        "start_date": "2026-12-21",
        "end_date": "2026-12-31",
        "reason": "Year end holiday",
    },
]

SEED_TIMESHEETS: list[dict[str, Any]] = [
    {"timesheet_id": "ts-0001", "employee_id": "u-emp-001", "week_start": "2026-10-05", "hours": 40.0},
    {"timesheet_id": "ts-0002", "employee_id": "u-emp-002", "week_start": "2026-10-05", "hours": 38.5},
    {"timesheet_id": "ts-0003", "employee_id": "u-emp-003", "week_start": "2026-10-05", "hours": 42.0},
]


class ApprovalService:
    def __init__(
        self,
        store: DataStore,
        event_logger: EventLogger,
        auth_service: AuthService,
        authorizer: ApprovalAuthorizer,
    ) -> None:
        self.store = store
        self.event_logger = event_logger
        self.auth_service = auth_service
        self.authorizer = authorizer
        self._seed_records()

    @staticmethod
    def _iso_now() -> str:
        return datetime.now(timezone.utc).isoformat()

    def _seed_records(self) -> None:
        now = self._iso_now()
        pending = {"status": ApprovalStatus.PENDING.value, "approver_id": None, "decision_notes": None}
        with self.store.lock:
            if not self.store.leave_requests:
                for row in SEED_LEAVE_REQUESTS:
                    self.store.leave_requests[row["request_id"]] = {
                        **row, **pending, "created_at": now, "updated_at": now,
                    }
            if not self.store.timesheets:
                for row in SEED_TIMESHEETS:
                    self.store.timesheets[row["timesheet_id"]] = {
                        **row, **pending, "created_at": now, "updated_at": now,
                    }

    def _visible(self, user: dict[str, Any], resource: Resource, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        role = parse_role(user["role"])
        if can(role, resource, Action.READ):
            return rows

        visible_ids = {user["user_id"]}
        if can(role, resource, Action.APPROVE):
            visible_ids |= self.auth_service.direct_reports(user["user_id"])
        return [r for r in rows if r["employee_id"] in visible_ids]

    def list_leave_requests(self, user: dict[str, Any]) -> list[LeaveRequestRecord]:
        with self.store.lock:
            rows = list(self.store.leave_requests.values())
        return [self._to_leave_model(r) for r in self._visible(user, Resource.LEAVE, rows)]

    def list_timesheets(self, user: dict[str, Any]) -> list[TimesheetRecord]:
        with self.store.lock:
            rows = list(self.store.timesheets.values())
        return [self._to_timesheet_model(r) for r in self._visible(user, Resource.TIMESHEETS, rows)]

    async def decide_leave_request(
        self,
        user: dict[str, Any],
        request_id: str,
        payload: DecisionRequest,
    ) -> LeaveRequestRecord:
        if not await self.authorizer.can_approve_leave_request(user["user_id"], request_id):
            raise HTTPException(status_code=403, detail="Not allowed to decide this leave request")

        row = self._apply_decision(user, self.store.leave_requests, request_id, payload, "Leave request")
        await self._log_decision(user, "leave_decision", request_id, row["status"])
        return self._to_leave_model(row)

    async def decide_timesheet(
        self,
        user: dict[str, Any],
        timesheet_id: str,
        payload: DecisionRequest,
    ) -> TimesheetRecord:
        if not await self.authorizer.can_approve_timesheet(user["user_id"], timesheet_id):
            raise HTTPException(status_code=403, detail="Not allowed to decide this timesheet")

        row = self._apply_decision(user, self.store.timesheets, timesheet_id, payload, "Timesheet")
        await self._log_decision(user, "timesheet_decision", timesheet_id, row["status"])
        return self._to_timesheet_model(row)

    def _apply_decision(
        self,
        user: dict[str, Any],
        records: dict[str, dict[str, Any]],
        record_id: str,
        payload: DecisionRequest,
        label: str,
    ) -> dict[str, Any]:
        with self.store.lock:
            row = records.get(record_id)
            if not row:
                raise HTTPException(status_code=404, detail=f"{label} not found")
            if row["status"] != ApprovalStatus.PENDING.value:
                raise HTTPException(status_code=400, detail=f"{label} is not pending")

            status = ApprovalStatus.APPROVED if payload.approve else ApprovalStatus.REJECTED
            row["status"] = status.value
            row["approver_id"] = user["user_id"]
            row["decision_notes"] = payload.notes
            row["updated_at"] = self._iso_now()
            return dict(row)

    async def _log_decision(self, user: dict[str, Any], action: str, record_id: str, status: str) -> None:
        await self.event_logger.alog_event(
            event_type="workflow_action",
            actor_id=user["user_id"],
            actor_role=user["role"],
            details={"action": action, "record_id": record_id, "decision": status},
        )

    @staticmethod
    def _to_leave_model(row: dict[str, Any]) -> LeaveRequestRecord:
        return LeaveRequestRecord(
            request_id=row["request_id"],
            employee_id=row["employee_id"],
            start_date=date.fromisoformat(row["start_date"]),
            end_date=date.fromisoformat(row["end_date"]),
            reason=row["reason"],
            status=row["status"],
            approver_id=row.get("approver_id"),
            decision_notes=row.get("decision_notes"),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    @staticmethod
    def _to_timesheet_model(row: dict[str, Any]) -> TimesheetRecord:
        return TimesheetRecord(
            timesheet_id=row["timesheet_id"],
            employee_id=row["employee_id"],
            week_start=date.fromisoformat(row["week_start"]),
            hours=row["hours"],
            status=row["status"],
            approver_id=row.get("approver_id"),
            decision_notes=row.get("decision_notes"),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
