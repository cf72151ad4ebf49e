# fitclub/api/dependencies/auth.py
"""
Caller identification for the scheduling API.

Authentication itself happens upstream; the gateway forwards the caller's
role and, for trainers and members, the id they act as:

    X-Club-Role: member | trainer | admin
    X-Club-Actor-Id: <trainer or member id>
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Header

from ...core.enums import ClubRole
from ...core.exceptions import ForbiddenException
from ...principal import ClubPrincipal

logger = logging.getLogger(__name__)


def get_principal(
    x_club_role: ClubRole = Header(...),
    x_club_actor_id: Optional[str] = Header(default=None),
) -> ClubPrincipal:
    """Build the principal from the forwarded identity headers."""
    actor_id = (x_club_actor_id or "").strip() or None
    if x_club_role != ClubRole.ADMIN and actor_id is None:
        raise ForbiddenException(
            f"A {x_club_role.value} must identify itself with X-Club-Actor-Id",
            code="ACTOR_REQUIRED",
        )
    return ClubPrincipal(role=x_club_role, actor_id=actor_id)


def require_role(role: ClubRole) -> Callable[..., ClubPrincipal]:
    """
    Dependency factory restricting a route to one role.

    Usage:
        principal: ClubPrincipal = Depends(require_role(ClubRole.TRAINER))
    """

    def _require(principal: ClubPrincipal = Depends(get_principal)) -> ClubPrincipal:
        if principal.role != role:
            logger.info(
                "Role %s denied on %s-only route", principal.role.value, role.value
            )
            raise ForbiddenException(
                f"Only a {role.value} can perform this action",
                code="ROLE_REQUIRED",
                details={"required_role": role.value, "role": principal.role.value},
            )
        return principal

    return _require
