"""Record-aware authorization: approvals and employee record access.

Each check resolves the actor's role and the target record afresh through
the directory. Nothing is cached between calls.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from hr_access.core.policy import approves_any, can, can_manage_employees
from hr_access.core.rbac import Action, Resource, Role, parse_role
from hr_access.repositories.directory import ApprovalKind, Directory
from hr_access.services.audit_service import EventLogger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApprovalContext:
    actor_id: str
    actor_role: Role
    target_record_id: str
    target_owner_employee_id: str
    target_owner_manager_id: Optional[str]

    @property
    def actor_manages_owner(self) -> bool:
        return (
            self.target_owner_manager_id is not None
            and self.target_owner_manager_id == self.actor_id
            and self.target_owner_employee_id != self.actor_id
        )


class ApprovalAuthorizer:
    def __init__(self, directory: Directory, event_logger: EventLogger | None = None) -> None:
        self.directory = directory
        self.event_logger = event_logger

    async def can_approve_leave_request(self, actor_id: str, leave_request_id: str) -> bool:
        return await self._can_approve(actor_id, leave_request_id, ApprovalKind.LEAVE)

    async def can_approve_timesheet(self, actor_id: str, timesheet_id: str) -> bool:
        return await self._can_approve(actor_id, timesheet_id, ApprovalKind.TIMESHEET)

    async def can_access_employee(self, actor_id: str, employee_id: str) -> bool:
        role = await self._resolve_role(actor_id)
        if role is None:
            return False

        employee = await self.directory.get_employee(employee_id)
        if employee is None:
            allowed, reason = False, "employee_not_found"
        elif can_manage_employees(role):
            allowed, reason = True, "manages_all_employees"
        elif employee.employee_id == actor_id:
            allowed, reason = True, "self"
        elif employee.manager_id == actor_id and can(role, Resource.EMPLOYEES, Action.READ):
            allowed, reason = True, "direct_report"
        else:
            allowed, reason = False, "outside_reporting_line"

        await self._record(actor_id, role, "employee_access", employee_id, allowed, reason)
        return allowed

    async def _resolve_role(self, actor_id: str) -> Optional[Role]:
        raw_role = await self.directory.get_role_for_actor(actor_id)
        role = parse_role(raw_role)
        if role is None:
            logger.info("Denied %s: role %r could not be resolved", actor_id, raw_role)
        return role

    async def _can_approve(self, actor_id: str, record_id: str, kind: ApprovalKind) -> bool:
        role = await self._resolve_role(actor_id)
        if role is None:
            return False

        resource = kind.resource
        if not can(role, resource, Action.APPROVE):
            await self._record(actor_id, role, f"{kind.value}_approval", record_id, False, "role_cannot_approve")
            return False

        target = await self.directory.get_approval_target(record_id, kind)
        if target is None:
            await self._record(actor_id, role, f"{kind.value}_approval", record_id, False, "record_not_found")
            return False

        context = ApprovalContext(
            actor_id=actor_id,
            actor_role=role,
            target_record_id=record_id,
            target_owner_employee_id=target.owner_employee_id,
            target_owner_manager_id=target.owner_manager_id,
        )

        if approves_any(context.actor_role, resource):
            allowed, reason = True, "approves_any"
        elif context.actor_manages_owner:
            allowed, reason = True, "direct_report"
        else:
            allowed, reason = False, "not_direct_manager"

        await self._record(actor_id, role, f"{kind.value}_approval", record_id, allowed, reason)
        return allowed

    async def _record(
        self,
        actor_id: str,
        role: Role,
        check: str,
        target_id: str,
        allowed: bool,
        reason: str,
    ) -> None:
        logger.info(
            "%s %s on %s by %s (%s): %s",
            "Allowed" if allowed else "Denied",
            check,
            target_id,
            actor_id,
            role.value,
            reason,
        )
        if self.event_logger is None:
            return
        await self.event_logger.alog_event(
            event_type="authz_decision",
            actor_id=actor_id,
            actor_role=role.value,
            details={
                "check": check,
                "target_id": target_id,
                "allowed": allowed,
                "reason": reason,
            },
        )
