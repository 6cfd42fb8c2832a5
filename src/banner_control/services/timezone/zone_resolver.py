from functools import lru_cache
from typing import FrozenSet, Optional
from zoneinfo import ZoneInfo, available_timezones

FALLBACK_ZONE = "UTC"

@lru_cache(maxsize=1)
def known_zone_ids() -> FrozenSet[str]:
    # scanning the zone database is slow, and it does not change while running
    return frozenset(available_timezones())

def resolve_zone(timezone: Optional[str]) -> ZoneInfo:
    """
    Browser timezone string ("Asia/Tokyo", "UTC" ...) -> ZoneInfo.
    Empty, malformed and unknown names all fall back to UTC.
    """
    if timezone and timezone in known_zone_ids():
        return ZoneInfo(timezone)
    return ZoneInfo(FALLBACK_ZONE)
