from datetime import datetime
from typing import Dict, List, Optional
from ...domain.models import Banner
from ...ports.banner_repository import BannerRepository
from ...services.normalize.timestamps import truncate_to_seconds

class MemoryBannerRepository(BannerRepository):
    def __init__(self):
        self._db: Dict[int, Banner] = {}
        self._next_id = 1

    def create_table_if_absent(self) -> None:
        pass

    def insert(self, url: str, start_utc: datetime, end_utc: datetime) -> None:
        self._db[self._next_id] = Banner(
            banner_id=self._next_id,
            url=url,
            start_time=truncate_to_seconds(start_utc),
            end_time=truncate_to_seconds(end_utc),
        )
        self._next_id += 1

    def delete_by_id(self, banner_id: int) -> None:
        self._db.pop(banner_id, None)

    def select_by_id(self, banner_id: int) -> Optional[Banner]:
        return self._db.get(banner_id)

    def select_all(self) -> List[Banner]:
        return [self._db[k] for k in sorted(self._db)]
