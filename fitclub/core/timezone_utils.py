# fitclub/core/timezone_utils.py
"""
Timezone utilities for the club.

"Today" is evaluated in the club's configured timezone so that past-date
checks do not depend on the server's local clock.
"""

from datetime import date, datetime
from typing import Optional

import pytz

from .config import settings


def get_club_timezone(tz_name: Optional[str] = None) -> pytz.BaseTzInfo:
    """
    Get the club's timezone.

    Args:
        tz_name: Optional override of the configured zone name

    Returns:
        pytz timezone object
    """
    return pytz.timezone(tz_name or settings.club_timezone)


def get_club_now(tz_name: Optional[str] = None) -> datetime:
    """Get current datetime in the club's timezone."""
    return datetime.now(get_club_timezone(tz_name))


def get_club_today(tz_name: Optional[str] = None) -> date:
    """Get 'today' in the club's timezone."""
    return get_club_now(tz_name).date()
