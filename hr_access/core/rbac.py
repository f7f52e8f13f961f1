from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, NamedTuple, Optional

WILDCARD = "*"


class Role(str, Enum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    HR = "HR"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class Resource(str, Enum):
    ANY = WILDCARD
    DASHBOARD = "dashboard"
    EMPLOYEES = "employees"
    TIMESHEETS = "timesheets"
    LEAVE = "leave"
    PAYROLL = "payroll"
    DOCUMENTS = "documents"
    ADMIN = "admin"
    SETTINGS = "settings"
    AUDIT = "audit"


class Action(str, Enum):
    ANY = WILDCARD
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    APPROVE = "approve"
    OWN = "own"
    MANAGE = "manage"


class Permission(NamedTuple):
    resource: Resource
    action: Action

    @property
    def is_superuser(self) -> bool:
        return self.resource == Resource.ANY and self.action == Action.ANY


PermissionTable = Mapping[Role, frozenset[Permission]]


def build_permission_table(
    entries: Mapping[Role, Iterable[tuple[Resource, Action]]],
) -> PermissionTable:
    """Freeze a role -> permissions mapping; roles left out get an empty set."""
    table = {
        role: frozenset(Permission(Resource(r), Action(a)) for r, a in entries.get(role, ()))
        for role in Role
    }
    return MappingProxyType(table)


PERMISSION_TABLE: PermissionTable = build_permission_table(
    {
        Role.OWNER: [
            (Resource.ANY, Action.ANY),
        ],
        Role.ADMIN: [
            (Resource.EMPLOYEES, Action.ANY),
            (Resource.TIMESHEETS, Action.ANY),
            (Resource.LEAVE, Action.ANY),
            (Resource.PAYROLL, Action.ANY),
            (Resource.DOCUMENTS, Action.ANY),
            (Resource.ADMIN, Action.ANY),
            (Resource.SETTINGS, Action.ANY),
            (Resource.DASHBOARD, Action.READ),
            (Resource.AUDIT, Action.READ),
        ],
        Role.HR: [
            (Resource.EMPLOYEES, Action.ANY),
            (Resource.TIMESHEETS, Action.READ),
            (Resource.LEAVE, Action.ANY),
            (Resource.PAYROLL, Action.ANY),
            (Resource.DOCUMENTS, Action.ANY),
            (Resource.DASHBOARD, Action.READ),
            (Resource.SETTINGS, Action.READ),
        ],
        Role.MANAGER: [
            (Resource.EMPLOYEES, Action.READ),
            (Resource.TIMESHEETS, Action.APPROVE),
            (Resource.LEAVE, Action.APPROVE),
            (Resource.DOCUMENTS, Action.READ),
            (Resource.DASHBOARD, Action.READ),
            (Resource.SETTINGS, Action.READ),
        ],
        Role.EMPLOYEE: [
            (Resource.TIMESHEETS, Action.OWN),
            (Resource.LEAVE, Action.OWN),
            (Resource.DOCUMENTS, Action.OWN),
            (Resource.DASHBOARD, Action.READ),
            (Resource.SETTINGS, Action.OWN),
        ],
    }
)

ROLE_LABELS: Mapping[Role, str] = MappingProxyType(
    {
        Role.OWNER: "Owner",
        Role.ADMIN: "Administrator",
        Role.HR: "HR Manager",
        Role.MANAGER: "Manager",
        Role.EMPLOYEE: "Employee",
    }
)


def parse_role(value: Any) -> Optional[Role]:
    """Validate an untrusted role value, returning None for anything unknown."""
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value)
    except ValueError:
        return None


def role_label(role: Any) -> str:
    parsed = parse_role(role)
    if parsed is None:
        return str(role)
    return ROLE_LABELS[parsed]
