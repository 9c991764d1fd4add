# newsdesk/services/remote_client.py
import asyncio

import aiohttp
from pydantic import ValidationError as ModelValidationError

from newsdesk.data_manager.models import MediaFile, NewsItem, StoreCredentials
from newsdesk.exceptions import TransportError, UploadError
from newsdesk.utils.formatters import media_object_name

NEWS_TABLE = "news"
MEDIA_BUCKET = "news-images"


class RemoteNewsClient:
    """
    Thin aiohttp client for the Supabase REST and storage endpoints.
    Any non-2xx status, connection error or timeout becomes TransportError.
    """

    def __init__(self, logger, timeout: float = 20.0):
        self.logger = logger
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    # ─────────────────── REST: news ─────────────────── #
    async def fetch_news(self, creds: StoreCredentials) -> list[NewsItem]:
        url = f"{creds.base_url}/rest/v1/{NEWS_TABLE}"
        rows = await self._request(
            "GET", url, creds, params={"order": "news_date.desc"}, parse_json=True
        )
        if not isinstance(rows, list):
            raise TransportError("Unexpected list response", body=str(rows)[:200])
        items = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            try:
                items.append(self._row_to_item(row))
            except ModelValidationError:
                self.logger.debug("Skipping malformed remote row id=%s", row.get("id"))
        return items

    async def insert_news(self, creds: StoreCredentials, item: NewsItem) -> None:
        url = f"{creds.base_url}/rest/v1/{NEWS_TABLE}"
        await self._request(
            "POST", url, creds,
            json=self._item_to_row(item),
            headers={"Content-Type": "application/json", "Prefer": "return=minimal"},
        )

    async def delete_news(self, creds: StoreCredentials, id_) -> None:
        url = f"{creds.base_url}/rest/v1/{NEWS_TABLE}"
        await self._request("DELETE", url, creds, params={"id": f"eq.{id_}"})

    async def delete_all(self, creds: StoreCredentials) -> None:
        # PostgREST refuses an unfiltered DELETE; id != 0 matches every row
        url = f"{creds.base_url}/rest/v1/{NEWS_TABLE}"
        await self._request("DELETE", url, creds, params={"id": "neq.0"})

    # ─────────────────── storage: media ─────────────────── #
    async def upload(self, creds: StoreCredentials, file: MediaFile) -> str:
        name = media_object_name(file.extension)
        url = f"{creds.base_url}/storage/v1/object/{MEDIA_BUCKET}/{name}"
        try:
            await self._request(
                "POST", url, creds,
                data=file.data,
                headers={
                    "Content-Type": file.content_type or "application/octet-stream",
                    "x-upsert": "true",
                },
            )
        except TransportError as e:
            raise UploadError(f"Upload of {file.name} failed: {e}", status=e.status, body=e.body) from e
        return f"{creds.base_url}/storage/v1/object/public/{MEDIA_BUCKET}/{name}"

    # ─────────────────── helpers ─────────────────── #
    async def _request(self, method, url, creds, *, headers=None, parse_json=False, **kwargs):
        hdrs = {"apikey": creds.access_key, "Authorization": f"Bearer {creds.access_key}"}
        hdrs.update(headers or {})
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as s:
                async with s.request(method, url, headers=hdrs, **kwargs) as resp:
                    if not 200 <= resp.status < 300:
                        body = await resp.text()
                        raise TransportError(
                            f"{method} {url} -> HTTP {resp.status}",
                            status=resp.status,
                            body=body,
                        )
                    if parse_json:
                        return await resp.json(content_type=None)
                    return None
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{method} {url} failed: {e!r}") from e
        except ValueError as e:
            raise TransportError(f"{method} {url} returned invalid JSON") from e

    @staticmethod
    def _row_to_item(row: dict) -> NewsItem:
        return NewsItem(
            id=row.get("id"),
            title=row.get("title") or "",
            content=row.get("content") or "",
            author=row.get("author"),
            date=row.get("news_date"),
            image_url=row.get("image_url"),
            video_url=row.get("video_url"),
            link_url=row.get("link_url"),
            publisher_role=row.get("publisher_role"),
        )

    @staticmethod
    def _item_to_row(item: NewsItem) -> dict:
        row = item.model_dump(mode="json", exclude={"id"})
        row["news_date"] = row.pop("date")
        return row
