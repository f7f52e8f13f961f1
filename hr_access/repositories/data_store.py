from __future__ import annotations

from threading import RLock
from typing import Any


class DataStore:
    """Simple in-memory repository for demo-scale HR records."""

    def __init__(self) -> None:
        self.lock = RLock()
        self.users: dict[str, dict[str, Any]] = {}
        self.leave_requests: dict[str, dict[str, Any]] = {}
        self.timesheets: dict[str, dict[str, Any]] = {}
