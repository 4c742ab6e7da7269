"""
Schedule data source.

The sitemap only needs the session IDs of the latest schedule and the time it
was last modified. Any object with an async latest() method returning a
ScheduleSnapshot can serve as the source.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from ..faults import ScheduleFault


@dataclass(frozen=True)
class ScheduleSnapshot:
    """Latest event data: modification time and sessions keyed by ID."""
    modified: datetime
    sessions: Mapping[str, Any] = field(default_factory=dict)


@runtime_checkable
class ScheduleSource(Protocol):
    """Anything that can fetch the latest schedule."""

    async def latest(self, filter: Optional[Mapping[str, Any]] = None) -> ScheduleSnapshot:
        ...


class JsonScheduleSource:
    """
    Schedule source backed by a JSON document on disk.

    Expected shape:
        {"modified": "2015-05-20T10:00:00Z",
         "sessions": {"<id>": {...}, ...}}

    filter is accepted for interface compatibility; this source has no
    per-user data to filter.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    async def latest(self, filter: Optional[Mapping[str, Any]] = None) -> ScheduleSnapshot:
        return await asyncio.to_thread(self._read)

    def _read(self) -> ScheduleSnapshot:
        try:
            with open(self.path) as f:
                data = json.load(f)
        except OSError as e:
            raise ScheduleFault(str(self.path), e.strerror or str(e)) from e
        except json.JSONDecodeError as e:
            raise ScheduleFault(str(self.path), f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ScheduleFault(str(self.path), "top-level value must be an object")

        sessions = data.get("sessions") or {}
        if not isinstance(sessions, dict):
            raise ScheduleFault(str(self.path), "'sessions' must be an object")

        return ScheduleSnapshot(modified=self._modified(data), sessions=sessions)

    def _modified(self, data: dict) -> datetime:
        raw = data.get("modified")
        if raw is None:
            return datetime.fromtimestamp(self.path.stat().st_mtime, tz=timezone.utc)
        try:
            modified = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
        except ValueError:
            raise ScheduleFault(str(self.path), f"'modified' is not a timestamp: {raw!r}")
        if modified.tzinfo is None:
            modified = modified.replace(tzinfo=timezone.utc)
        return modified
