# newsdesk/di.py
# ────────────── 0. stdlib / third-party ────────────── #
from types import SimpleNamespace
from typing import Callable, Optional

# ────────────── 1. util layer ────────────── #
from newsdesk.utils.app_config import AppConfig
from newsdesk.utils.file_utils import load_app_config, load_env, load_public_config, resolve_path
from newsdesk.logger.logger import setup_logger, setup_notifier

# ────────────── 2. storage ────────────── #
from newsdesk.data_manager.duckdb_client import DuckDBClient
from newsdesk.data_manager.local_storage import LocalStorage
from newsdesk.data_manager.local_repository import LocalNewsRepository

# ────────────── 3. service layer ────────────── #
from newsdesk.services.credential_resolver import CredentialResolver
from newsdesk.services.auth_service import RoleAuthenticator, build_role_rules
from newsdesk.services.quota_service import QuotaPolicy
from newsdesk.services.remote_client import RemoteNewsClient
from newsdesk.services.content_store import ContentStore
from newsdesk.services.publication_service import PublicationPipeline


def build_services(
    cfg: Optional[AppConfig] = None,
    *,
    logger=None,
    notify: Optional[Callable[[str], None]] = None,
    db_path=None,
    config_path=None,
) -> SimpleNamespace:
    # ────────────── 4. config + environment ────────────── #
    if cfg is None:
        load_env()                               # .env → os.environ
        cfg = load_app_config(config_path)
        # public block is re-read on every resolve
        public_config = lambda: load_public_config(config_path)
    else:
        public_config = lambda: cfg.supabase_public_config

    # ────────────── 5. logger, notices ────────────── #
    logger = logger or setup_logger(cfg)
    notify = notify or setup_notifier()

    # ────────────── 6. local storage ────────────── #
    db_client = DuckDBClient(db_path or resolve_path(cfg.settings.local_db))
    storage   = LocalStorage(db_client.conn)
    local_repo = LocalNewsRepository(storage, logger)

    # ────────────── 7. services ────────────── #
    resolver = CredentialResolver(
        storage,
        public_config=public_config,
    )

    rules         = build_role_rules(cfg.roles, cfg.settings.user_quota)
    authenticator = RoleAuthenticator(rules, logger)
    quota         = QuotaPolicy({r.role: r.quota_limit for r in rules})

    store = ContentStore(
        resolver   = resolver,
        local_repo = local_repo,
        remote     = RemoteNewsClient(logger, timeout=cfg.settings.request_timeout),
        logger     = logger,
        notify     = notify,
    )

    pipeline = PublicationPipeline(
        store           = store,
        authenticator   = authenticator,
        quota           = quota,
        logger          = logger,
        serialize_quota = cfg.settings.serialize_quota,
    )

    # ────────────── 8. export ────────────── #
    return SimpleNamespace(
        cfg=cfg,
        logger=logger,
        db_client=db_client,
        resolver=resolver,
        store=store,
        pipeline=pipeline,
    )
