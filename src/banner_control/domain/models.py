from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict
from ..services.normalize.timestamps import format_timestamp

@dataclass(frozen=True)
class Banner:
    banner_id: int
    url: str
    start_time: datetime      # naive UTC, whole seconds
    end_time: datetime        # naive UTC, whole seconds; start <= end is not checked

    def to_dict(self) -> Dict[str, Any]:
        return {
            "banner_id": self.banner_id,
            "url": self.url,
            "start_time": format_timestamp(self.start_time),
            "end_time": format_timestamp(self.end_time),
        }
