"""
InstallationRun — one execution of one profile.

State machine:

    NOT_STARTED ──start()──→ RUNNING ──complete()──→ COMPLETED
                                │
                                └──────fail()──────→ FAILED

Any other transition raises ``InvalidTransition``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from dotinstall.core.models.result import ComponentReceipt


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class RunState(StrEnum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class InvalidTransition(RuntimeError):
    """A run state change that the state machine does not allow."""


_ALLOWED = {
    RunState.NOT_STARTED: {RunState.RUNNING},
    RunState.RUNNING: {RunState.COMPLETED, RunState.FAILED},
    RunState.COMPLETED: set(),
    RunState.FAILED: set(),
}


class InstallationRun(BaseModel):
    """Progress and outcome of an installation run."""

    profile: str
    assume_yes: bool = False
    skip_sync: bool = False
    state: RunState = RunState.NOT_STARTED
    receipts: list[ComponentReceipt] = Field(default_factory=list)
    error: str | None = None
    started_at: str | None = None
    ended_at: str | None = None

    # ── Transitions ──────────────────────────────────────────────

    def _move(self, target: RunState) -> None:
        if target not in _ALLOWED[self.state]:
            raise InvalidTransition(f"Cannot move run from {self.state} to {target}")
        self.state = target

    def start(self) -> None:
        self._move(RunState.RUNNING)
        self.started_at = _now_iso()

    def complete(self) -> None:
        self._move(RunState.COMPLETED)
        self.ended_at = _now_iso()

    def fail(self, error: str) -> None:
        self._move(RunState.FAILED)
        self.error = error
        self.ended_at = _now_iso()

    def record(self, receipt: ComponentReceipt) -> None:
        if self.state is not RunState.RUNNING:
            raise InvalidTransition(f"Cannot record receipts while {self.state}")
        self.receipts.append(receipt)

    # ── Counters ─────────────────────────────────────────────────

    @property
    def installed_count(self) -> int:
        """Components that ended in a good state, already-present included."""
        return sum(1 for r in self.receipts if r.ok)

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self.receipts if r.status == "skipped")

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def failed_components(self) -> list[str]:
        return [r.component for r in self.receipts if r.failed]

    def summary(self) -> dict:
        return {
            "profile": self.profile,
            "state": str(self.state),
            "installed": self.installed_count,
            "skipped": self.skipped_count,
            "failed": self.failed_count,
            "error": self.error,
        }
