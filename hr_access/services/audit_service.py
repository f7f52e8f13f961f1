from __future__ import annotations

import json
from collections import deque
from datetime import datetime, timedelta, timezone
from pathlib import Path
from threading import RLock
from typing import Any

from fastapi.concurrency import run_in_threadpool

from hr_access.core.config import settings


class EventLogger:
    """Append-only JSON lines audit trail with age-based retention."""

    def __init__(self, event_path: Path | None = None) -> None:
        self.event_path = event_path or settings.event_log_path
        self.event_path.parent.mkdir(parents=True, exist_ok=True)
        self.lock = RLock()

    def log_event(
        self,
        event_type: str,
        actor_id: str,
        actor_role: str | None,
        details: dict[str, Any],
    ) -> None:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type,
            "actor_id": actor_id,
            "actor_role": actor_role,
            "details": details,
        }
        line = json.dumps(payload)
        with self.lock:
            with self.event_path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")

    async def alog_event(
        self,
        event_type: str,
        actor_id: str,
        actor_role: str | None,
        details: dict[str, Any],
    ) -> None:
        """Same as :meth:`log_event`, with the file write kept off the event loop."""
        await run_in_threadpool(self.log_event, event_type, actor_id, actor_role, details)

    def read_events(self) -> list[dict[str, Any]]:
        if not self.event_path.exists():
            return []

        with self.lock:
            lines = self.event_path.read_text(encoding="utf-8").splitlines()
        return self._parse(lines)

    def recent_events(self, limit: int = 100) -> list[dict[str, Any]]:
        if limit < 1 or not self.event_path.exists():
            return []

        with self.lock:
            with self.event_path.open("r", encoding="utf-8") as f:
                tail = deque((raw for raw in f if raw.strip()), maxlen=limit)
        return self._parse(tail)

    def cleanup_older_than(self, retention_days: int) -> int:
        """Drop events older than ``retention_days``; returns how many were removed."""
        if retention_days < 1 or not self.event_path.exists():
            return 0

        cutoff = datetime.now(timezone.utc) - timedelta(days=retention_days)
        kept: list[str] = []
        removed = 0

        with self.lock:
            lines = self.event_path.read_text(encoding="utf-8").splitlines()
            for raw in lines:
                if not raw.strip():
                    continue
                try:
                    ts = datetime.fromisoformat(json.loads(raw)["timestamp"])
                except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                    kept.append(raw)
                    continue

                if ts >= cutoff:
                    kept.append(raw)
                else:
                    removed += 1

            self.event_path.write_text("\n".join(kept) + ("\n" if kept else ""), encoding="utf-8")

        return removed

    @staticmethod
    def _parse(lines) -> list[dict[str, Any]]:
        events: list[dict[str, Any]] = []
        for raw in lines:
            if not raw.strip():
                continue
            try:
                events.append(json.loads(raw))
            except json.JSONDecodeError:
                continue
        return events
