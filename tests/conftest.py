"""
Pytest configuration and fixtures for the HR access tests.

The data directory is pointed at a throwaway location before any
``hr_access`` module is imported, so event and log files never land in
the working tree.
"""
import os
import tempfile

os.environ.setdefault("HR_ACCESS_DATA_DIR", tempfile.mkdtemp(prefix="hr-access-test-"))

import pytest

from hr_access.repositories.directory import (
    ApprovalKind,
    ApprovalTarget,
    DirectoryUnavailableError,
    EmployeeLink,
)
from hr_access.services.audit_service import EventLogger
from hr_access.services.authorizer import ApprovalAuthorizer


class FakeDirectory:
    """Directory backed by plain dicts that counts every lookup."""

    def __init__(self) -> None:
        self.roles: dict[str, object] = {}
        self.managers: dict[str, str | None] = {}
        self.leave_owners: dict[str, str] = {}
        self.timesheet_owners: dict[str, str] = {}
        self.unavailable = False
        self.calls: list[tuple[str, str]] = []

    def add_user(self, user_id: str, role: object, manager_id: str | None = None) -> None:
        self.roles[user_id] = role
        self.managers[user_id] = manager_id

    def _check(self, call: str, key: str) -> None:
        self.calls.append((call, key))
        if self.unavailable:
            raise DirectoryUnavailableError("storage offline")

    async def get_role_for_actor(self, actor_id):
        self._check("role", actor_id)
        return self.roles.get(actor_id)

    async def get_approval_target(self, record_id, kind):
        self._check(f"target:{kind.value}", record_id)
        owners = self.leave_owners if kind is ApprovalKind.LEAVE else self.timesheet_owners
        owner = owners.get(record_id)
        if owner is None:
            return None
        return ApprovalTarget(owner_employee_id=owner, owner_manager_id=self.managers.get(owner))

    async def get_employee(self, employee_id):
        self._check("employee", employee_id)
        if employee_id not in self.roles:
            return None
        return EmployeeLink(employee_id=employee_id, manager_id=self.managers.get(employee_id))

    def target_lookups(self) -> int:
        return sum(1 for call, _ in self.calls if call.startswith("target:"))


@pytest.fixture
def directory() -> FakeDirectory:
    d = FakeDirectory()
    d.add_user("owner", "OWNER")
    d.add_user("admin", "ADMIN", manager_id="owner")
    d.add_user("hr", "HR", manager_id="admin")
    d.add_user("mgr-a", "MANAGER", manager_id="admin")
    d.add_user("mgr-b", "MANAGER", manager_id="admin")
    d.add_user("emp-e", "EMPLOYEE", manager_id="mgr-a")
    d.add_user("emp-f", "EMPLOYEE", manager_id="mgr-b")
    d.leave_owners.update({"leave-e": "emp-e", "leave-f": "emp-f", "leave-mgr-a": "mgr-a"})
    d.timesheet_owners.update({"ts-e": "emp-e", "ts-f": "emp-f"})
    return d


@pytest.fixture
def event_logger(tmp_path) -> EventLogger:
    return EventLogger(event_path=tmp_path / "events.jsonl")


@pytest.fixture
def authorizer(directory, event_logger) -> ApprovalAuthorizer:
    return ApprovalAuthorizer(directory=directory, event_logger=event_logger)
