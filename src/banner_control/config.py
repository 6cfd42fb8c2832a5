# src/banner_control/config.py
import os
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from .services.access.ip_allowlist import DEFAULT_ALLOWED_IPS
from .services.timezone.zone_resolver import known_zone_ids

def _env(name: str, default: Optional[str] = None):
    return lambda: os.getenv(name, default)

def _split_csv(raw: str) -> List[str]:
    return [p.strip() for p in raw.split(",") if p.strip()]

class Config(BaseModel):
    model_config = ConfigDict(validate_default=True)

    store: str = Field(default_factory=_env("BANNER_STORE", "sqlite"))
    sqlite_path: str = Field(default_factory=_env("BANNER_SQLITE_PATH", "banner.db"))

    redshift_workgroup_or_cluster: str = Field(default_factory=_env("REDSHIFT_WORKGROUP_OR_CLUSTER", ""))
    redshift_database: str = Field(default_factory=_env("REDSHIFT_DATABASE", "dev"))
    redshift_secret_arn: str = Field(default_factory=_env("REDSHIFT_SECRET_ARN", ""))
    redshift_schema: str = Field(default_factory=_env("REDSHIFT_SCHEMA", "public"))
    redshift_table: str = Field(default_factory=_env("REDSHIFT_TABLE_BANNER", "banner"))

    allowed_ips: List[str] = Field(
        default_factory=lambda: _split_csv(os.getenv("BANNER_ALLOWED_IPS", ",".join(DEFAULT_ALLOWED_IPS)))
    )
    # None = zone of the host running the process
    system_timezone: Optional[str] = Field(default_factory=_env("BANNER_SYSTEM_TZ"))
    log_level: str = Field(default_factory=_env("LOG_LEVEL", "INFO"))

    @field_validator("store")
    @classmethod
    def _known_store(cls, v: str) -> str:
        v = v.lower()
        if v not in ("memory", "sqlite", "redshift"):
            raise ValueError(f"unknown store {v!r}; expected memory, sqlite or redshift")
        return v

    @field_validator("system_timezone")
    @classmethod
    def _known_zone(cls, v: Optional[str]) -> Optional[str]:
        if v and v not in known_zone_ids():
            raise ValueError(f"unknown system timezone {v!r}")
        return v or None

    @field_validator("allowed_ips", mode="before")
    @classmethod
    def _csv_ips(cls, v):
        if isinstance(v, str):
            return _split_csv(v)
        return v

def load_config(**overrides) -> Config:
    return Config(**overrides)
