"""
Component — one installable unit of the workstation setup.

A component is three callables over an ``InstallContext``:

    check(ctx)    → bool   already satisfied?  (no side effects)
    install(ctx)  → None   bring it into the satisfied state
    validate(ctx) → None   raise ValidationError if still broken

Installing is safe to repeat: the executor only calls ``install`` when
``check`` says the component is missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from dotinstall.core.context import InstallContext

CheckFn = Callable[["InstallContext"], bool]
ActionFn = Callable[["InstallContext"], None]


@dataclass(frozen=True)
class Component:
    """A named installable unit."""

    key: str
    description: str
    check: CheckFn
    install: ActionFn
    validate: Optional[ActionFn] = None
    requires: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "description": self.description,
            "requires": list(self.requires),
        }
