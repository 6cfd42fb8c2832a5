# src/banner_control/services/window/term_evaluator.py
from datetime import datetime, timezone, tzinfo
from typing import Callable, Union
from ...domain.time_window import TimeWindow
from ..normalize.timestamps import truncate_to_seconds

NowProvider = Callable[[tzinfo], datetime]

def current_utc(zone: tzinfo, now_provider: NowProvider = datetime.now) -> datetime:
    """
    Current time in the visitor's zone, sub-seconds dropped, converted back to
    naive UTC to match how banner windows are stored.
    """
    local = now_provider(zone).replace(microsecond=0)
    if local.tzinfo is None:
        local = local.replace(tzinfo=zone)
    return local.astimezone(timezone.utc).replace(tzinfo=None)

def is_allowed_term(start: Union[str, datetime], end: Union[str, datetime], zone: tzinfo,
                    now_provider: NowProvider = datetime.now) -> bool:
    window = TimeWindow(truncate_to_seconds(start), truncate_to_seconds(end))
    return window.contains(current_utc(zone, now_provider))
