"""Run record for a single pipeline invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class RunStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def _dt_to_iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


@dataclass
class PipelineRun:
    """State machine of one invocation: pending -> running(i) -> succeeded | failed."""

    total: int
    pipeline: str | None = None
    status: RunStatus = RunStatus.PENDING
    index: int | None = None
    action_name: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    duration_ms: int | None = None
    stopped_early: bool = False
    error_code: str | None = None
    error_message: str | None = None
    history: list[int] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.status in {RunStatus.SUCCEEDED, RunStatus.FAILED}

    def start_action(self, index: int, action_name: str | None) -> None:
        if self.finished:
            raise RuntimeError(f"run already {self.status.value}")
        if self.status == RunStatus.PENDING:
            self.started_at = _utcnow()
        self.status = RunStatus.RUNNING
        self.index = int(index)
        self.action_name = action_name
        self.history.append(int(index))

    def succeed(self, *, stopped_early: bool = False) -> None:
        self.stopped_early = bool(stopped_early)
        self._finish(RunStatus.SUCCEEDED)

    def fail(self, error: BaseException) -> None:
        if self.finished:
            raise RuntimeError(f"run already {self.status.value}")
        code = getattr(error, "error_code", None)
        self.error_code = str(code.value if isinstance(code, Enum) else code) if code else None
        self.error_message = str(error)
        self._finish(RunStatus.FAILED)

    def _finish(self, status: RunStatus) -> None:
        if self.finished:
            raise RuntimeError(f"run already {self.status.value}")
        now = _utcnow()
        if self.started_at is None:
            self.started_at = now
        self.completed_at = now
        self.duration_ms = int((now - self.started_at).total_seconds() * 1000)
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        return {
            "pipeline": self.pipeline,
            "status": self.status.value,
            "total": int(self.total),
            "index": self.index,
            "action_name": self.action_name,
            "started_at": _dt_to_iso(self.started_at),
            "completed_at": _dt_to_iso(self.completed_at),
            "duration_ms": self.duration_ms,
            "stopped_early": bool(self.stopped_early),
            "error_code": self.error_code,
            "error_message": self.error_message,
            "history": list(self.history),
        }
