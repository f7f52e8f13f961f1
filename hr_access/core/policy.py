"""Permission decisions over the role table.

Every function here is total: unknown roles, resources, actions and routes
are denied rather than raising.
"""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from hr_access.core.rbac import (
    PERMISSION_TABLE,
    Action,
    Permission,
    PermissionTable,
    Resource,
    parse_role,
)


def _key(value: Any) -> Any:
    return value.value if isinstance(value, (Resource, Action)) else value


def can(
    role: Any,
    resource: Any,
    action: Any,
    table: PermissionTable = PERMISSION_TABLE,
) -> bool:
    parsed = parse_role(role)
    if parsed is None:
        return False

    permissions = table.get(parsed)
    if not permissions:
        return False

    if any(p.is_superuser for p in permissions):
        return True

    resource_key = _key(resource)
    action_key = _key(action)
    return any(
        (p.resource == Resource.ANY or p.resource.value == resource_key)
        and (p.action == Action.ANY or p.action.value == action_key)
        for p in permissions
    )


def approves_any(role: Any, resource: Resource, table: PermissionTable = PERMISSION_TABLE) -> bool:
    """True when the role approves every record of the resource, not only its team's."""
    return can(role, resource, Action.MANAGE, table)


def can_approve_timesheets(role: Any) -> bool:
    return can(role, Resource.TIMESHEETS, Action.APPROVE)


def can_approve_leave(role: Any) -> bool:
    return can(role, Resource.LEAVE, Action.APPROVE)


def can_access_payroll(role: Any) -> bool:
    return can(role, Resource.PAYROLL, Action.READ)


def can_manage_employees(role: Any) -> bool:
    return can(role, Resource.EMPLOYEES, Action.MANAGE)


def can_perform_sensitive_action(role: Any) -> bool:
    return can(role, Resource.ADMIN, Action.MANAGE)


CAPABILITIES = MappingProxyType(
    {
        "approve_timesheets": can_approve_timesheets,
        "approve_leave": can_approve_leave,
        "access_payroll": can_access_payroll,
        "manage_employees": can_manage_employees,
        "sensitive_actions": can_perform_sensitive_action,
    }
)


def capabilities(role: Any) -> dict[str, bool]:
    return {name: check(role) for name, check in CAPABILITIES.items()}


# Any one requirement grants the route.
ROUTE_REQUIREMENTS: Mapping[str, tuple[Permission, ...]] = MappingProxyType(
    {
        "/": (Permission(Resource.DASHBOARD, Action.READ),),
        "/dashboard": (Permission(Resource.DASHBOARD, Action.READ),),
        "/employees": (Permission(Resource.EMPLOYEES, Action.READ),),
        "/timesheets": (
            Permission(Resource.TIMESHEETS, Action.READ),
            Permission(Resource.TIMESHEETS, Action.OWN),
        ),
        "/leave": (
            Permission(Resource.LEAVE, Action.READ),
            Permission(Resource.LEAVE, Action.OWN),
        ),
        "/payroll": (Permission(Resource.PAYROLL, Action.READ),),
        "/documents": (
            Permission(Resource.DOCUMENTS, Action.READ),
            Permission(Resource.DOCUMENTS, Action.OWN),
        ),
        "/admin": (Permission(Resource.ADMIN, Action.READ),),
        "/settings": (
            Permission(Resource.SETTINGS, Action.READ),
            Permission(Resource.SETTINGS, Action.OWN),
        ),
    }
)


def can_access_route(role: Any, route: Any) -> bool:
    if not isinstance(route, str):
        return False
    requirements = ROUTE_REQUIREMENTS.get(route)
    if not requirements:
        return False
    return any(can(role, req.resource, req.action) for req in requirements)


def accessible_routes(role: Any) -> list[str]:
    return [route for route in ROUTE_REQUIREMENTS if can_access_route(role, route)]
