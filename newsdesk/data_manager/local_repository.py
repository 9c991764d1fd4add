# newsdesk/data_manager/local_repository.py
import json
import uuid

from pydantic import ValidationError as ModelValidationError

from newsdesk.data_manager.local_storage import LocalStorage
from newsdesk.data_manager.models import NewsItem

NEWS_KEY = "mh_news_data"


class LocalNewsRepository:
    """News items kept as one JSON array in a single local storage slot."""

    def __init__(self, storage: LocalStorage, logger, key: str = NEWS_KEY):
        self.storage = storage
        self.logger = logger
        self.key = key

    def _read_rows(self) -> list[dict]:
        raw = self.storage.get_item(self.key)
        if not raw:
            return []
        try:
            rows = json.loads(raw)
        except ValueError:
            self.logger.warning("Local news slot %r is not valid JSON, treating as empty", self.key)
            return []
        if not isinstance(rows, list):
            return []
        return [r for r in rows if isinstance(r, dict)]

    def _write_rows(self, rows: list[dict]) -> None:
        self.storage.set_item(self.key, json.dumps(rows, ensure_ascii=False))

    def fetch_all(self) -> list[NewsItem]:
        items = []
        for row in self._read_rows():
            try:
                items.append(NewsItem.model_validate(row))
            except ModelValidationError:
                # skip malformed rows
                self.logger.debug("Skipping malformed local row id=%s", row.get("id"))
        return items

    def append(self, item: NewsItem) -> NewsItem:
        if item.id in (None, ""):
            item = item.model_copy(update={"id": uuid.uuid4().hex[:16]})
        rows = self._read_rows()
        rows.append(item.model_dump(mode="json"))
        self._write_rows(rows)
        return item

    def delete_by_id(self, id_) -> int:
        # ids compared as text: numeric and string ids must match each other
        rows = self._read_rows()
        kept = [r for r in rows if str(r.get("id")) != str(id_)]
        self._write_rows(kept)
        return len(rows) - len(kept)

    def clear(self) -> None:
        self._write_rows([])
