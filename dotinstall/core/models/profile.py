"""
Profile — a named, ordered list of components plus a disk requirement.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Profile(BaseModel):
    """An installation profile.

    ``fail_fast`` profiles abort on the first component error; the
    custom profile counts recoverable errors and moves on.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    components: tuple[str, ...]
    min_disk_mb: int
    description: str = ""
    estimated_minutes: str = ""
    fail_fast: bool = True

    def with_disk_requirement(self, min_disk_mb: int) -> Profile:
        return self.model_copy(update={"min_disk_mb": min_disk_mb})
