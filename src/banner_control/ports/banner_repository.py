from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from ..domain.models import Banner

class BannerRepository(ABC):
    """Record store for banners. Implementations raise DataAccessError on failure."""
    @abstractmethod
    def create_table_if_absent(self) -> None: ...
    @abstractmethod
    def insert(self, url: str, start_utc: datetime, end_utc: datetime) -> None: ...
    @abstractmethod
    def delete_by_id(self, banner_id: int) -> None: ...
    @abstractmethod
    def select_by_id(self, banner_id: int) -> Optional[Banner]: ...
    @abstractmethod
    def select_all(self) -> List[Banner]: ...
