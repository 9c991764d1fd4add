import pytest
from pydantic import ValidationError as ModelValidationError

from newsdesk.di import build_services
from newsdesk.utils.file_utils import load_app_config


def test_missing_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("ADMIN_PASSWORD_HASH", raising=False)
    monkeypatch.delenv("USER_PASSWORD_HASH", raising=False)
    cfg = load_app_config(tmp_path / "absent.yml")
    assert cfg.settings.user_quota == 5
    assert cfg.settings.request_timeout == 20
    assert cfg.supabase_public_config is None
    assert cfg.roles.admin_hash == ""


def test_yaml_sections_and_env_override(tmp_path, monkeypatch):
    path = tmp_path / "config.yml"
    path.write_text(
        "roles:\n"
        "  admin_hash: aaa\n"
        "  user_hash: bbb\n"
        "supabase_public_config:\n"
        "  URL: https://proj.supabase.co\n"
        "  ANON_KEY: anon\n"
        "settings:\n"
        "  user_quota: 3\n"
        "  serialize_quota: true\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("USER_PASSWORD_HASH", "from-env")
    monkeypatch.delenv("ADMIN_PASSWORD_HASH", raising=False)

    cfg = load_app_config(path)

    assert cfg.roles.admin_hash == "aaa"
    assert cfg.roles.user_hash == "from-env"
    assert cfg.supabase_public_config.url == "https://proj.supabase.co"
    assert cfg.supabase_public_config.anon_key == "anon"
    assert cfg.settings.user_quota == 3 and cfg.settings.serialize_quota is True


def test_unknown_section_rejected(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("telegram_channels: {}\n", encoding="utf-8")
    with pytest.raises(ModelValidationError):
        load_app_config(path)


def test_public_config_edits_seen_without_rebuild(tmp_path, monkeypatch, logger, notices):
    monkeypatch.delenv("ADMIN_PASSWORD_HASH", raising=False)
    monkeypatch.delenv("USER_PASSWORD_HASH", raising=False)
    path = tmp_path / "config.yml"
    monkeypatch.setattr("newsdesk.di.load_env", lambda: None)
    path.write_text("settings:\n  user_quota: 5\n", encoding="utf-8")

    svc = build_services(logger=logger, notify=notices.append, db_path=":memory:", config_path=path)
    try:
        assert svc.resolver.resolve().is_empty

        path.write_text(
            "supabase_public_config:\n  URL: https://proj.supabase.co\n  ANON_KEY: anon\n",
            encoding="utf-8",
        )
        assert svc.resolver.resolve().endpoint == "https://proj.supabase.co"

        path.write_text("supabase_public_config: [not, a, mapping\n", encoding="utf-8")
        assert svc.resolver.resolve().is_empty
    finally:
        svc.db_client.close()
