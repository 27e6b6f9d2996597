"""
Component receipts — the outcome of running one component.

Same contract shape as an adapter receipt: built through the
``installed()`` / ``skipped()`` / ``failure()`` constructors.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


class ComponentReceipt(BaseModel):
    """Result of one component in an installation run."""

    component: str
    status: Literal["installed", "skipped", "failed"]
    error: str | None = None
    error_kind: str | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Installed now or already satisfied."""
        return self.status != "failed"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def installed(cls, component: str, **kwargs: Any) -> ComponentReceipt:
        """Create a receipt for a component that was installed now."""
        return cls(component=component, status="installed", **kwargs)

    @classmethod
    def skipped(cls, component: str, **kwargs: Any) -> ComponentReceipt:
        """Create a receipt for a component that was already present."""
        return cls(component=component, status="skipped", **kwargs)

    @classmethod
    def failure(
        cls,
        component: str,
        error: str,
        error_kind: str | None = None,
        **kwargs: Any,
    ) -> ComponentReceipt:
        """Create a failure receipt."""
        return cls(
            component=component,
            status="failed",
            error=error,
            error_kind=error_kind,
            **kwargs,
        )
