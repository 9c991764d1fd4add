# newsdesk/services/content_store.py
from __future__ import annotations

from typing import Callable, Optional

from newsdesk.data_manager.local_repository import LocalNewsRepository
from newsdesk.data_manager.models import (
    LocalFallbackMode,
    MediaFile,
    NewsItem,
    RemoteMode,
    StoreMode,
)
from newsdesk.exceptions import TransportError, UploadError
from newsdesk.services.credential_resolver import CredentialResolver
from newsdesk.services.remote_client import RemoteNewsClient


class ContentStore:
    """
    Remote store when credentials resolve, local storage otherwise.

    Reads fall back to local data when the remote call fails.
    Writes never do: a failed remote write is reported through notify()
    and returned as False.
    """

    def __init__(
        self,
        *,
        resolver: CredentialResolver,
        local_repo: LocalNewsRepository,
        remote: RemoteNewsClient,
        logger,
        notify: Callable[[str], None],
    ):
        self.resolver = resolver
        self.local = local_repo
        self.remote = remote
        self.logger = logger
        self.notify = notify

    def mode(self) -> StoreMode:
        creds = self.resolver.resolve()
        if creds.is_empty:
            return LocalFallbackMode()
        return RemoteMode(creds)

    async def list_news(self) -> list[NewsItem]:
        mode = self.mode()
        if isinstance(mode, LocalFallbackMode):
            self.logger.warning("Remote store not configured. Using local storage.")
            return self.local.fetch_all()
        try:
            return await self.remote.fetch_news(mode.credentials)
        except TransportError as e:
            self.logger.error("News fetch failed, serving local copy: %s", e)
            return self.local.fetch_all()

    async def save(self, item: NewsItem) -> bool:
        mode = self.mode()
        if isinstance(mode, LocalFallbackMode):
            stored = self.local.append(item)
            self.logger.info("Saved news %s to local storage", stored.id)
            return True
        try:
            await self.remote.insert_news(mode.credentials, item)
        except TransportError as e:
            self.logger.error("News save failed: %s", e)
            self._notify_failure("Error saving to cloud", "Network error: Could not save news.", e)
            return False
        self.logger.info("Saved news %r to remote store", item.title)
        return True

    async def delete_one(self, id_) -> bool:
        mode = self.mode()
        if isinstance(mode, LocalFallbackMode):
            removed = self.local.delete_by_id(id_)
            self.logger.info("Deleted %d local news item(s) with id %s", removed, id_)
            return True
        try:
            await self.remote.delete_news(mode.credentials, id_)
        except TransportError as e:
            self.logger.error("News delete failed for id %s: %s", id_, e)
            self._notify_failure("Error deleting", "Network Error", e)
            return False
        self.logger.info("Deleted remote news %s", id_)
        return True

    async def delete_all(self) -> bool:
        mode = self.mode()
        if isinstance(mode, LocalFallbackMode):
            self.local.clear()
            self.logger.info("Cleared local news storage")
            return True
        try:
            await self.remote.delete_all(mode.credentials)
        except TransportError as e:
            self.logger.error("Clearing news failed: %s", e)
            self._notify_failure("Error clearing news", "Network Error", e)
            return False
        self.logger.info("Cleared remote news table")
        return True

    async def upload_media(self, file: MediaFile) -> Optional[str]:
        mode = self.mode()
        if isinstance(mode, LocalFallbackMode):
            self.logger.warning("Media upload skipped for %s: no remote store", file.name)
            return None
        try:
            url = await self.remote.upload(mode.credentials, file)
        except UploadError as e:
            self.logger.error("Upload error: %s", e)
            return None
        self.logger.debug("Uploaded %s -> %s", file.name, url)
        return url

    def _notify_failure(self, status_prefix: str, network_msg: str, e: TransportError) -> None:
        if e.status is None:
            self.notify(network_msg)
        else:
            self.notify(f"{status_prefix}: {e.body or e.status}")
