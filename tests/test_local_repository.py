import json
from datetime import datetime, timezone

from newsdesk.data_manager.duckdb_client import DuckDBClient
from newsdesk.data_manager.local_repository import NEWS_KEY
from newsdesk.data_manager.local_storage import LocalStorage
from newsdesk.data_manager.models import NewsItem, Role


def _item(title="Hi", **kw):
    return NewsItem(
        title=title,
        content="World",
        author="Admin",
        date=datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc),
        publisher_role=Role.ADMIN,
        **kw,
    )


def test_empty_slot_lists_nothing(local_repo):
    assert local_repo.fetch_all() == []


def test_append_assigns_id_and_keeps_insertion_order(local_repo):
    first = local_repo.append(_item("first"))
    second = local_repo.append(_item("second"))

    assert first.id and second.id and first.id != second.id
    assert [it.title for it in local_repo.fetch_all()] == ["first", "second"]


def test_slot_holds_plain_json_array(local_repo, storage):
    local_repo.append(_item(link_url="https://example.com"))
    rows = json.loads(storage.get_item(NEWS_KEY))
    assert isinstance(rows, list) and len(rows) == 1
    assert rows[0]["publisher_role"] == "admin"
    assert rows[0]["link_url"] == "https://example.com"
    assert rows[0]["date"].startswith("2026-10-19T09:30:00")


def test_malformed_slot_is_empty(local_repo, storage):
    storage.set_item(NEWS_KEY, "[{broken")
    assert local_repo.fetch_all() == []

    storage.set_item(NEWS_KEY, json.dumps({"not": "a list"}))
    assert local_repo.fetch_all() == []


def test_malformed_rows_are_skipped(local_repo, storage):
    storage.set_item(NEWS_KEY, json.dumps([
        {"id": "a", "title": "ok", "content": "fine", "publisher_role": "user"},
        {"id": "b", "title": "bad role", "content": "x", "publisher_role": "root"},
        "junk",
    ]))
    assert [it.id for it in local_repo.fetch_all()] == ["a"]


def test_delete_compares_ids_as_text(local_repo, storage):
    storage.set_item(NEWS_KEY, json.dumps([
        {"id": "42", "title": "t", "content": "c"},
        {"id": 7, "title": "t", "content": "c"},
    ]))

    assert local_repo.delete_by_id(42) == 1
    assert local_repo.delete_by_id("7") == 1
    assert local_repo.fetch_all() == []


def test_delete_unknown_id_is_noop(local_repo):
    local_repo.append(_item())
    assert local_repo.delete_by_id("missing") == 0
    assert len(local_repo.fetch_all()) == 1


def test_clear(local_repo):
    local_repo.append(_item())
    local_repo.append(_item())
    local_repo.clear()
    assert local_repo.fetch_all() == []


def test_file_backed_storage_survives_reopen(tmp_path):
    db_path = tmp_path / "nested" / "local.duckdb"

    client = DuckDBClient(db_path)
    LocalStorage(client.conn).set_item(NEWS_KEY, "[]")
    client.close()

    client = DuckDBClient(db_path)
    try:
        assert LocalStorage(client.conn).get_item(NEWS_KEY) == "[]"
    finally:
        client.close()
