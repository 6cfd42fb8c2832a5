import logging
from datetime import datetime, tzinfo
from typing import List, Optional
from ..domain.models import Banner
from ..ports.banner_repository import BannerRepository
from ..services.access.ip_allowlist import IpAllowlist
from ..services.normalize.timestamps import local_to_utc
from ..services.timezone.zone_resolver import resolve_zone
from ..services.window.term_evaluator import NowProvider, is_allowed_term

class BannerControl:
    """
    Decides whether a banner is shown to a visitor, and manages the stored banners.

    Store errors (DataAccessError) are never caught here; they reach the caller as-is.
    """
    def __init__(
        self,
        repository: BannerRepository,
        *,
        allowlist: Optional[IpAllowlist] = None,
        system_zone: Optional[tzinfo] = None,
        now_provider: NowProvider = datetime.now,
    ):
        self.repository = repository
        self.allowlist = allowlist if allowlist is not None else IpAllowlist()
        self.system_zone = system_zone
        self.now_provider = now_provider
        self.repository.create_table_if_absent()

    def determine_banner_display(self, banner_id: int, ip_address: Optional[str],
                                 timezone: Optional[str]) -> str:
        """
        Returns the banner url when it should be shown, "" otherwise.

        Allowlisted addresses always get the url. Everyone else gets it only
        while "now" in their browser zone lies inside [start_time, end_time].
        """
        banner = self.repository.select_by_id(banner_id)
        if banner is None:
            logging.info("banner_id=%s not found", banner_id)
            return ""

        if self.allowlist.is_allowed(ip_address):
            logging.info("banner_id=%s ip=%s allowlisted", banner_id, ip_address)
            return banner.url

        zone = resolve_zone(timezone)
        shown = is_allowed_term(banner.start_time, banner.end_time, zone, self.now_provider)
        logging.info("banner_id=%s ip=%s zone=%s shown=%s", banner_id, ip_address, zone.key, shown)
        return banner.url if shown else ""

    def register_banner(self, url: str, start_time: datetime, end_time: datetime) -> None:
        # wall-clock times of the system zone; stored as UTC, no ordering check
        utc_start = local_to_utc(start_time, self.system_zone)
        utc_end = local_to_utc(end_time, self.system_zone)
        self.repository.insert(url, utc_start, utc_end)
        logging.info("registered url=%s start_utc=%s end_utc=%s", url, utc_start, utc_end)

    def delete_banner(self, banner_id: int) -> None:
        self.repository.delete_by_id(banner_id)
        logging.info("deleted banner_id=%s", banner_id)

    def fetch_banner_list(self) -> List[Banner]:
        return self.repository.select_all()
