"""Ability — the capability descriptor attached to every store key."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Permission = Literal["r", "w", "rw", "none"]


@dataclass(frozen=True)
class Ability:
    """Immutable read/write capability for a single key.

    Attributes:
        permission: One of ``"r"``, ``"w"``, ``"rw"`` or ``"none"``.
    """

    permission: Permission = "none"

    def can_read(self) -> bool:
        return self.permission in ("r", "rw")

    def can_write(self) -> bool:
        return self.permission in ("w", "rw")
