# fitclub/principal.py
"""Principal abstraction for callers of the scheduling API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.enums import ClubRole


@dataclass(frozen=True)
class ClubPrincipal:
    """
    The role a caller acts under, plus the trainer or member it acts as.

    Passed explicitly to every operation that needs it; nothing reads the
    caller from module state.
    """

    role: ClubRole
    actor_id: Optional[str] = None
