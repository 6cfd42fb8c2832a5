import json
import logging
from datetime import datetime
from zoneinfo import ZoneInfo
from .config import Config, load_config
from .adapters.banner_repo.memory_banner_repo import MemoryBannerRepository
from .adapters.banner_repo.sqlite_banner_repo import SqliteBannerRepository
from .adapters.redshift_data_api_banner_repo import RedshiftDataApiBannerRepository
from .orchestrators.banner_control_usecase import BannerControl
from .ports.banner_repository import BannerRepository
from .services.access.ip_allowlist import IpAllowlist

def _build_repository(cfg: Config) -> BannerRepository:
    if cfg.store == "redshift":
        return RedshiftDataApiBannerRepository(
            workgroup_or_cluster=cfg.redshift_workgroup_or_cluster,
            database=cfg.redshift_database,
            secret_arn=cfg.redshift_secret_arn,
            schema=cfg.redshift_schema,
            table=cfg.redshift_table,
        )
    if cfg.store == "memory":
        return MemoryBannerRepository()
    return SqliteBannerRepository(cfg.sqlite_path)

def build_banner_control(cfg: Config) -> BannerControl:
    return BannerControl(
        _build_repository(cfg),
        allowlist=IpAllowlist(cfg.allowed_ips),
        system_zone=ZoneInfo(cfg.system_timezone) if cfg.system_timezone else None,
    )

def _response(status: int, payload) -> dict:
    return {"statusCode": status, "body": json.dumps(payload, ensure_ascii=False)}

def lambda_handler(event, _context=None):
    """
    event:
      {"action": "display", "banner_id": 1, "ip": "10.0.0.3", "timezone": "Asia/Tokyo"}
      {"action": "register", "url": "...", "start": "2018-11-01T00:00:00", "end": "..."}
      {"action": "delete", "banner_id": 1}
      {"action": "list"}
    """
    cfg = load_config()
    action = event.get("action")
    if not isinstance(action, str):
        return _response(400, {"error": f"action must be a string, got {action!r}"})
    action = action.lower()
    if action not in ("display", "register", "delete", "list"):
        return _response(400, {"error": f"unknown action {action!r}"})

    try:
        if action == "display":
            args = (int(event["banner_id"]), event.get("ip"), event.get("timezone"))
        elif action == "register":
            args = (event["url"], datetime.fromisoformat(event["start"]), datetime.fromisoformat(event["end"]))
        elif action == "delete":
            args = (int(event["banner_id"]),)
        else:
            args = ()
    except (KeyError, TypeError, ValueError) as e:
        return _response(400, {"error": f"bad request: {e}"})

    control = build_banner_control(cfg)
    if action == "display":
        return _response(200, {"url": control.determine_banner_display(*args)})
    if action == "register":
        control.register_banner(*args)
        return _response(200, {"registered": True})
    if action == "delete":
        control.delete_banner(*args)
        return _response(200, {"deleted": args[0]})
    return _response(200, {"banners": [b.to_dict() for b in control.fetch_banner_list()]})

if __name__ == "__main__":
    # local run: pipe the event JSON to stdin
    import sys
    logging.basicConfig(level=load_config().log_level)
    payload = json.loads(sys.stdin.read())
    out = lambda_handler(payload, None)
    print(out["body"])
