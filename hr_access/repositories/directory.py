"""Lookups the authorizers need from storage.

A lookup that finds nothing returns ``None``. A lookup that cannot reach
storage raises :class:`DirectoryUnavailableError`; callers must not turn that
into a denial.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from hr_access.core.rbac import Resource
from hr_access.repositories.data_store import DataStore


class DirectoryUnavailableError(RuntimeError):
    """Storage could not be reached while gathering authorization inputs."""


class ApprovalKind(str, Enum):
    LEAVE = "leave"
    TIMESHEET = "timesheet"

    @property
    def resource(self) -> Resource:
        return Resource.LEAVE if self is ApprovalKind.LEAVE else Resource.TIMESHEETS


@dataclass(frozen=True)
class ApprovalTarget:
    owner_employee_id: str
    owner_manager_id: Optional[str]


@dataclass(frozen=True)
class EmployeeLink:
    employee_id: str
    manager_id: Optional[str]


class Directory(Protocol):
    async def get_role_for_actor(self, actor_id: str) -> Optional[str]:
        ...

    async def get_approval_target(self, record_id: str, kind: ApprovalKind) -> Optional[ApprovalTarget]:
        ...

    async def get_employee(self, employee_id: str) -> Optional[EmployeeLink]:
        ...


class InMemoryDirectory:
    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def get_role_for_actor(self, actor_id: str) -> Optional[str]:
        with self.store.lock:
            user = self.store.users.get(actor_id)
        if not user:
            return None
        return user.get("role")

    async def get_approval_target(self, record_id: str, kind: ApprovalKind) -> Optional[ApprovalTarget]:
        records = self.store.leave_requests if kind is ApprovalKind.LEAVE else self.store.timesheets
        with self.store.lock:
            row = records.get(record_id)
            if not row:
                return None
            owner = self.store.users.get(row["employee_id"])
        return ApprovalTarget(
            owner_employee_id=row["employee_id"],
            owner_manager_id=owner.get("manager_id") if owner else None,
        )

    async def get_employee(self, employee_id: str) -> Optional[EmployeeLink]:
        with self.store.lock:
            user = self.store.users.get(employee_id)
        if not user:
            return None
        return EmployeeLink(employee_id=user["user_id"], manager_id=user.get("manager_id"))
