"""
Season utilities.
"""

from datetime import datetime
from typing import Optional


REGULAR_SEASON_GAMES = 17


def get_current_season(now: Optional[datetime] = None) -> int:
    """
    Get the current NFL season year.

    The season is labelled by the year it kicks off:
    - September-December: current year
    - January-August: previous year (postseason and offseason)

    Args:
        now: Reference time, defaults to the current local time

    Returns:
        The current season year
    """
    if now is None:
        now = datetime.now()

    if now.month >= 9:
        return now.year
    return now.year - 1
