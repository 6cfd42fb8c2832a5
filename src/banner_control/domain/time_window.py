# src/banner_control/domain/time_window.py
from dataclasses import dataclass
from datetime import datetime

@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        # inclusive on both ends; an inverted window is evaluated as-is
        return not (self.start > instant or self.end < instant)
