"""Tests for the permission decision engine."""
import pytest

from hr_access.core.policy import (
    ROUTE_REQUIREMENTS,
    accessible_routes,
    approves_any,
    can,
    can_access_payroll,
    can_access_route,
    can_approve_leave,
    can_approve_timesheets,
    can_manage_employees,
    can_perform_sensitive_action,
    capabilities,
)
from hr_access.core.rbac import (
    PERMISSION_TABLE,
    Action,
    Resource,
    Role,
    build_permission_table,
)

ODD_VALUES = [None, "", "*", "unknown", "未知", 42, 3.5, ["employees"], {"read": 1}, object()]


class TestTotality:
    @pytest.mark.parametrize("role", list(Role) + ODD_VALUES)
    @pytest.mark.parametrize("resource", list(Resource) + ODD_VALUES)
    @pytest.mark.parametrize("action", [Action.READ, Action.APPROVE, "own", "zap", None, ["read"]])
    def test_never_raises(self, role, resource, action):
        assert can(role, resource, action) in (True, False)

    @pytest.mark.parametrize("role", [None, "", "root", "owner", 7])
    def test_unknown_role_is_denied(self, role):
        assert can(role, Resource.DASHBOARD, Action.READ) is False

    def test_role_with_empty_set_is_denied(self):
        table = build_permission_table({})
        assert can(Role.OWNER, Resource.DASHBOARD, Action.READ, table) is False


class TestWildcards:
    @pytest.mark.parametrize(
        "resource,action",
        [("anything-未listed", "anything"), ("payroll", "delete"), ("", ""), (Resource.AUDIT, Action.MANAGE)],
    )
    def test_owner_superuser_dominates(self, resource, action):
        assert can(Role.OWNER, resource, action) is True

    def test_resource_scoped_action_wildcard(self):
        table = build_permission_table({Role.HR: [(Resource.EMPLOYEES, Action.ANY)]})
        assert can(Role.HR, "employees", "delete", table) is True
        assert can(Role.HR, "timesheets", "delete", table) is False

    def test_action_scoped_resource_wildcard(self):
        table = build_permission_table({Role.MANAGER: [(Resource.ANY, Action.READ)]})
        assert can(Role.MANAGER, "anything", "read", table) is True
        assert can(Role.MANAGER, "anything", "write", table) is False

    def test_exact_entry_grants_only_that_pair(self):
        assert can(Role.MANAGER, Resource.LEAVE, Action.APPROVE) is True
        assert can(Role.MANAGER, Resource.LEAVE, Action.READ) is False
        assert can(Role.MANAGER, Resource.TIMESHEETS, Action.WRITE) is False

    def test_enum_and_string_queries_agree(self):
        for role in Role:
            for resource in Resource:
                for action in Action:
                    assert can(role, resource, action) == can(role.value, resource.value, action.value)


class TestNoImplicitDenyBypass:
    def test_removing_entry_flips_only_that_pair(self):
        entries = {role: [(p.resource, p.action) for p in perms] for role, perms in PERMISSION_TABLE.items()}
        entries[Role.MANAGER] = [
            pair for pair in entries[Role.MANAGER] if pair != (Resource.LEAVE, Action.APPROVE)
        ]
        reduced = build_permission_table(entries)

        assert can(Role.MANAGER, Resource.LEAVE, Action.APPROVE) is True
        assert can(Role.MANAGER, Resource.LEAVE, Action.APPROVE, reduced) is False

        for role in Role:
            for resource in Resource:
                for action in Action:
                    if (role, resource, action) == (Role.MANAGER, Resource.LEAVE, Action.APPROVE):
                        continue
                    assert can(role, resource, action, reduced) == can(role, resource, action)


class TestCoarseCapabilities:
    @pytest.mark.parametrize(
        "check,expected",
        [
            (can_approve_timesheets, {Role.OWNER, Role.ADMIN, Role.MANAGER}),
            (can_approve_leave, {Role.OWNER, Role.ADMIN, Role.HR, Role.MANAGER}),
            (can_access_payroll, {Role.OWNER, Role.ADMIN, Role.HR}),
            (can_manage_employees, {Role.OWNER, Role.ADMIN, Role.HR}),
            (can_perform_sensitive_action, {Role.OWNER, Role.ADMIN}),
        ],
    )
    def test_role_sets(self, check, expected):
        assert {role for role in Role if check(role)} == expected

    @pytest.mark.parametrize(
        "check,resource,action",
        [
            (can_approve_timesheets, "timesheets", "approve"),
            (can_approve_leave, "leave", "approve"),
            (can_access_payroll, "payroll", "read"),
            (can_manage_employees, "employees", "manage"),
            (can_perform_sensitive_action, "admin", "manage"),
        ],
    )
    def test_helpers_agree_with_table(self, check, resource, action):
        for role in Role:
            assert check(role) == can(role, resource, action)

    def test_invalid_role_has_no_capabilities(self):
        assert capabilities("JANITOR") == {name: False for name in capabilities(Role.OWNER)}

    def test_approves_any_tiers(self):
        assert {r for r in Role if approves_any(r, Resource.LEAVE)} == {Role.OWNER, Role.ADMIN, Role.HR}
        assert {r for r in Role if approves_any(r, Resource.TIMESHEETS)} == {Role.OWNER, Role.ADMIN}


class TestScenarios:
    def test_hr_approves_leave(self):
        assert can(Role.HR, "leave", "approve") is True

    def test_employee_cannot_read_payroll(self):
        assert can(Role.EMPLOYEE, "payroll", "read") is False

    def test_owner_unlisted_resource(self):
        assert can(Role.OWNER, "anything-未listed", "anything") is True


class TestRouteAccess:
    @pytest.mark.parametrize("role", list(Role) + ["GHOST", None])
    @pytest.mark.parametrize("path", ["/some/未知/path", "/payroll/", "", "/ADMIN", None, 12])
    def test_unknown_routes_fail_closed(self, role, path):
        assert can_access_route(role, path) is False

    @pytest.mark.parametrize(
        "role,path,expected",
        [
            (Role.EMPLOYEE, "/timesheets", True),
            (Role.EMPLOYEE, "/payroll", False),
            (Role.EMPLOYEE, "/employees", False),
            (Role.EMPLOYEE, "/settings", True),
            (Role.MANAGER, "/timesheets", False),
            (Role.MANAGER, "/employees", True),
            (Role.HR, "/payroll", True),
            (Role.HR, "/admin", False),
            (Role.ADMIN, "/admin", True),
            (Role.OWNER, "/admin", True),
        ],
    )
    def test_known_routes(self, role, path, expected):
        assert can_access_route(role, path) is expected

    def test_every_role_reaches_dashboard(self):
        for role in Role:
            assert can_access_route(role, "/") is True
            assert can_access_route(role, "/dashboard") is True

    def test_accessible_routes_follow_table_order(self):
        assert accessible_routes(Role.OWNER) == list(ROUTE_REQUIREMENTS)
        assert accessible_routes(Role.EMPLOYEE) == [
            "/", "/dashboard", "/timesheets", "/leave", "/documents", "/settings",
        ]
        assert accessible_routes("NOBODY") == []
