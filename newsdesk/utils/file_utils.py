# newsdesk/utils/file_utils.py
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from newsdesk.utils.paths import BASE_DIR, CONFIG_PATH, ENV_DIR
from newsdesk.utils.app_config import AppConfig, SupabasePublicConfig   # ← pydantic models


# ─────────────────── env ─────────────────── #
def load_env(path: Optional[Path] = None):
    """Loads .env into os.environ (if the file exists)."""
    load_dotenv(dotenv_path=path or ENV_DIR)


# ─────────────────── config ───────────────── #
def load_app_config(path: Optional[Path] = None) -> AppConfig:
    """
    Reads config.yml and validates it with the AppConfig model.

    Environment overrides:
      - ADMIN_PASSWORD_HASH
      - USER_PASSWORD_HASH
    """
    config_path = Path(path or CONFIG_PATH)
    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    roles = data.get("roles") or {}
    roles["admin_hash"] = os.getenv("ADMIN_PASSWORD_HASH") or (roles.get("admin_hash") or "")
    roles["user_hash"] = os.getenv("USER_PASSWORD_HASH") or (roles.get("user_hash") or "")
    data["roles"] = roles

    return AppConfig.model_validate(data)


def resolve_path(p) -> Path:
    """Relative paths from config are anchored at the project root."""
    p = Path(p)
    return p if p.is_absolute() else BASE_DIR / p


def load_public_config(path: Optional[Path] = None) -> Optional[SupabasePublicConfig]:
    """
    Re-reads only the supabase_public_config block, so edits to config.yml
    are seen without a restart. A missing file, bad YAML or an invalid
    block reads as "not configured".
    """
    config_path = Path(path or CONFIG_PATH)
    if not config_path.exists():
        return None
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return None
    block = data.get("supabase_public_config") if isinstance(data, dict) else None
    if not isinstance(block, dict):
        return None
    try:
        return SupabasePublicConfig.model_validate(block)
    except PydanticValidationError:
        return None
