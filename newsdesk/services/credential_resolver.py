# newsdesk/services/credential_resolver.py
import json
import os
from typing import Callable, Mapping, Optional

from newsdesk.data_manager.local_storage import LocalStorage
from newsdesk.data_manager.models import StoreCredentials
from newsdesk.utils.app_config import SupabasePublicConfig

SYNC_SETTINGS_KEY = "supabaseSyncSettings"


class CredentialResolver:
    """
    Finds the remote store endpoint and access key. Sources, in order:
    1. process environment: SB_URL / SB_KEY
    2. public config object: supabase_public_config.URL / ANON_KEY
    3. local storage slot "supabaseSyncSettings": {"url": ..., "key": ...}

    The first source with both values wins; otherwise empty credentials
    (local fallback). Nothing is cached, every call reads fresh.
    """

    def __init__(
        self,
        storage: LocalStorage,
        public_config: Callable[[], Optional[SupabasePublicConfig]] = lambda: None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.storage = storage
        self.public_config = public_config
        self.environ = environ

    def resolve(self) -> StoreCredentials:
        for source in (self._from_env, self._from_public_config, self._from_sync_settings):
            creds = source()
            if creds is not None:
                return creds
        return StoreCredentials()

    def store_sync_settings(self, url: str, key: str) -> None:
        self.storage.set_item(SYNC_SETTINGS_KEY, json.dumps({"url": url, "key": key}))

    # ─────────────────── sources ─────────────────── #
    @staticmethod
    def _pair(url, key) -> Optional[StoreCredentials]:
        url = url.strip() if isinstance(url, str) else ""
        key = key.strip() if isinstance(key, str) else ""
        if url and key:
            return StoreCredentials(endpoint=url, access_key=key)
        return None

    def _from_env(self):
        env = os.environ if self.environ is None else self.environ
        return self._pair(env.get("SB_URL"), env.get("SB_KEY"))

    def _from_public_config(self):
        cfg = self.public_config()
        if cfg is None:
            return None
        return self._pair(cfg.url, cfg.anon_key)

    def _from_sync_settings(self):
        raw = self.storage.get_item(SYNC_SETTINGS_KEY)
        if not raw:
            return None
        try:
            settings = json.loads(raw)
        except ValueError:
            return None
        if not isinstance(settings, dict):
            return None
        return self._pair(settings.get("url"), settings.get("key"))
