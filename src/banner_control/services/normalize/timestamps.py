# src/banner_control/services/normalize/timestamps.py
import re
from datetime import datetime, timezone, tzinfo
from typing import Optional, Union

STORAGE_FORMAT = "%Y-%m-%d %H:%M:%S"

# stores hand back "2018-11-01 00:00:00", "2018-11-01 00:00:00.0", "2018-11-01T00:00:00+09" ...
_SECONDS_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})[ T](\d{2}:\d{2}:\d{2})")

def truncate_to_seconds(value: Union[str, datetime]) -> datetime:
    """
    Normalize a stored timestamp to a naive datetime with whole seconds.

    Anything after the seconds field (fraction, zone suffix) is discarded
    without conversion, so "2018-11-01 09:00:00+09:00" becomes 09:00:00.
    """
    if isinstance(value, datetime):
        return value.replace(microsecond=0, tzinfo=None)
    m = _SECONDS_PREFIX.match(str(value))
    if m is None:
        raise ValueError(f"unrecognised timestamp: {value!r}")
    return datetime.strptime(f"{m.group(1)} {m.group(2)}", STORAGE_FORMAT)

def format_timestamp(dt: datetime) -> str:
    return dt.strftime(STORAGE_FORMAT)

def to_storage_text(dt: datetime) -> str:
    # keeps sub-second precision; readers truncate
    return dt.isoformat(sep=" ")

def local_to_utc(ldt: datetime, from_zone: Optional[tzinfo] = None) -> datetime:
    """
    Wall-clock time in from_zone (host zone when None) -> naive UTC.
    An aware datetime keeps its own offset whatever from_zone says.
    """
    if ldt.tzinfo is not None:
        aware = ldt
    elif from_zone is not None:
        aware = ldt.replace(tzinfo=from_zone)
    else:
        aware = ldt.astimezone()
    return aware.astimezone(timezone.utc).replace(tzinfo=None)

def utc_to_local(dt: datetime, to_zone: Optional[tzinfo] = None) -> datetime:
    aware = dt.replace(tzinfo=timezone.utc)
    local = aware.astimezone(to_zone) if to_zone is not None else aware.astimezone()
    return local.replace(tzinfo=None)
