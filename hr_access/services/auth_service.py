from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from hr_access.core.policy import accessible_routes, capabilities
from hr_access.core.rbac import Role, parse_role, role_label
from hr_access.core.security import create_access_token, hash_password, verify_password
from hr_access.models.auth import Token, UserProfile, UserPublic
from hr_access.repositories.data_store import DataStore
from hr_access.services.audit_service import EventLogger


SEED_USERS: list[dict[str, Any]] = [
    {
        "user_id": "u-own-001",
        "username": "owner_morgan",
        "full_name": "Morgan Lee",
        "role": Role.OWNER.value,
        "manager_id": None,
        "password": "owner123",
    },
    {
        "user_id": "u-adm-001",
        "username": "admin_casey",
        "full_name": "Casey Nguyen",
        "role": Role.ADMIN.value,
        "manager_id": "u-own-001",
        "password": "admin123",
    },
    {
        "user_id": "u-hr-001",
        "username": "hr_avery",
        "full_name": "Avery Jordan",
        "role": Role.HR.value,
        "manager_id": "u-adm-001",
        "password": "hr123",
    },
    {
        "user_id": "u-mgr-001",
        "username": "mgr_jane",
        "full_name": "Jane Rivera",
        "role": Role.MANAGER.value,
        "manager_id": "u-adm-001",
        "password": "manager123",
    },
    {
        "user_id": "u-mgr-002",
        "username": "mgr_omar",
        "full_name": "Omar Haddad",
        "role": Role.MANAGER.value,
        "manager_id": "u-adm-001",
        "password": "manager456",
    },
    {
        "user_id": "u-emp-001",
        "username": "emp_alex",
        "full_name": "Alex Kim",
        "role": Role.EMPLOYEE.value,
        "manager_id": "u-mgr-001",
        "password": "employee123",
    },
    {
        "user_id": "u-emp-002",
        "username": "emp_sam",
        "full_name": "Sam Patel",
        "role": Role.EMPLOYEE.value,
        "manager_id": "u-mgr-001",
        "password": "employee456",
    },
    {
        "user_id": "u-emp-003",
        "username": "emp_riley",
        "full_name": "Riley Chen",
        "role": Role.EMPLOYEE.value,
        "manager_id": "u-mgr-002",
        "password": "employee789",
    },
]


class AuthService:
    def __init__(self, store: DataStore, event_logger: EventLogger) -> None:
        self.store = store
        self.event_logger = event_logger
        self._seed_users()

    def _seed_users(self) -> None:
        with self.store.lock:
            if self.store.users:
                return
            for user in SEED_USERS:
                record = {
                    **user,
                    "hashed_password": hash_password(user["password"]),
                }
                del record["password"]
                self.store.users[record["user_id"]] = record

    def authenticate(self, username: str, password: str) -> dict[str, Any] | None:
        with self.store.lock:
            users = list(self.store.users.values())
        user = next((u for u in users if u["username"] == username), None)
        if not user:
            return None
        if not verify_password(password, user["hashed_password"]):
            return None
        return user

    def issue_token(self, user: dict[str, Any]) -> Token:
        token, expires_at = create_access_token(subject=user["user_id"])
        self.event_logger.log_event(
            event_type="auth_login",
            actor_id=user["user_id"],
            actor_role=user.get("role"),
            details={"username": user["username"]},
        )
        return Token(access_token=token, expires_at=expires_at)

    def require_user(self, user_id: str) -> dict[str, Any]:
        with self.store.lock:
            user = self.store.users.get(user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found",
            )
        return user

    def get_user(self, user_id: str) -> dict[str, Any]:
        with self.store.lock:
            user = self.store.users.get(user_id)
        if not user:
            raise HTTPException(status_code=404, detail="Employee not found")
        return user

    def as_public(self, user: dict[str, Any]) -> UserPublic:
        return UserPublic(
            user_id=user["user_id"],
            username=user["username"],
            full_name=user["full_name"],
            role=user["role"],
            role_label=role_label(user["role"]),
            manager_id=user.get("manager_id"),
        )

    def as_profile(self, user: dict[str, Any]) -> UserProfile:
        role = parse_role(user["role"])
        return UserProfile(
            **self.as_public(user).model_dump(),
            capabilities=capabilities(role),
            accessible_routes=accessible_routes(role),
        )

    def direct_reports(self, manager_id: str) -> set[str]:
        with self.store.lock:
            return {u["user_id"] for u in self.store.users.values() if u.get("manager_id") == manager_id}
