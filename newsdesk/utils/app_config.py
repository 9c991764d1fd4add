# newsdesk/utils/app_config.py
from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RolesBlock(BaseModel):
    admin_hash: str = ""                  # sha256(pin), hex
    user_hash:  str = ""
    admin_name: str = "Admin"
    user_name:  str = "User"


class SupabasePublicConfig(BaseModel):
    url:      str = Field("", alias="URL")
    anon_key: str = Field("", alias="ANON_KEY", repr=False)

    model_config = ConfigDict(populate_by_name=True)


class SettingsBlock(BaseModel):
    user_quota:      int = 5
    request_timeout: float = 20.0
    serialize_quota: bool = False
    local_db:        str = "data/local_storage.duckdb"


class LoggingBlock(BaseModel):
    level:    str = "INFO"
    log_file: Optional[str] = "newsdesk.log"


class AppConfig(BaseModel):
    roles:                  RolesBlock = RolesBlock()
    supabase_public_config: Optional[SupabasePublicConfig] = None
    settings:               SettingsBlock = SettingsBlock()
    logging:                LoggingBlock = LoggingBlock()

    model_config = ConfigDict(extra="forbid")
