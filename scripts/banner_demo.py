# scripts/banner_demo.py
import argparse, logging
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from banner_control.config import load_config
from banner_control.adapters.banner_repo.sqlite_banner_repo import SqliteBannerRepository
from banner_control.orchestrators.banner_control_usecase import BannerControl
from banner_control.presenters.json_presenter import JsonPresenter
from banner_control.services.access.ip_allowlist import IpAllowlist

def main():
    p = argparse.ArgumentParser(description="Register sample banners and show display decisions")
    p.add_argument("--db", default="banner_demo.db", help="sqlite file to use")
    p.add_argument("--ip", default="10.0.0.0", help="Visitor source address")
    p.add_argument("--timezone", default="Asia/Tokyo", help="Visitor browser timezone")
    p.add_argument("--allowed-ip", action="append", default=None,
                   help="Allowlisted address (repeatable). Default: 10.0.0.1 and 10.0.0.2")
    p.add_argument("--system-tz", default=None, help="Zone of the registration times. Default: host zone")
    p.add_argument("--log-level", default=None, help="Default: LOG_LEVEL from the environment (INFO)")
    args = p.parse_args()

    logging.basicConfig(level=args.log_level or load_config().log_level)
    allowlist = IpAllowlist(args.allowed_ip) if args.allowed_ip else IpAllowlist()
    system_zone = ZoneInfo(args.system_tz) if args.system_tz else None
    control = BannerControl(SqliteBannerRepository(args.db), allowlist=allowlist, system_zone=system_zone)

    now = datetime.now()
    samples = [
        ("https://example.com/past.png", datetime(2018, 11, 1), datetime(2018, 11, 30, 23, 59, 59)),
        ("https://example.com/past_to_now.png", datetime(2018, 11, 1), now + timedelta(minutes=1)),
        ("https://example.com/now_to_future.png", now, datetime(2100, 12, 31, 23, 59, 59)),
        ("https://example.com/future.png", datetime(2100, 11, 1), datetime(2100, 11, 30, 23, 59, 59)),
    ]
    for url, start, end in samples:
        control.register_banner(url, start, end)

    banners = control.fetch_banner_list()
    JsonPresenter().render({
        "ip": args.ip,
        "timezone": args.timezone,
        "allowed_ips": sorted(allowlist.addresses),
        "decisions": [
            dict(b.to_dict(), shown=control.determine_banner_display(b.banner_id, args.ip, args.timezone))
            for b in banners
        ],
    })

if __name__ == "__main__":
    main()
