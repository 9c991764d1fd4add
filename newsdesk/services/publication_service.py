# newsdesk/services/publication_service.py
from __future__ import annotations

import asyncio
import contextlib
from typing import Callable, Optional

from newsdesk.data_manager.models import (
    MediaFile,
    NewsDraft,
    NewsItem,
    PipelineResult,
    QuotaExceeded,
    ResultStatus,
    Role,
)
from newsdesk.exceptions import (
    AuthenticationError,
    NewsdeskError,
    QuotaExceededError,
    TransportError,
    ValidationError,
)
from newsdesk.services.auth_service import RoleAuthenticator
from newsdesk.services.content_store import ContentStore
from newsdesk.services.quota_service import QuotaPolicy
from newsdesk.utils.formatters import normalize_link, utc_now

Confirm = Callable[[str], bool]


class PublicationPipeline:
    """
    validate → authenticate → quota → upload media → normalize → persist

    Every outcome comes back as a PipelineResult; nothing here raises to
    the caller for an expected failure. With serialize_quota=False the
    quota check and the save are not atomic, so concurrent user
    submissions may overshoot the limit.
    """

    def __init__(
        self,
        *,
        store: ContentStore,
        authenticator: RoleAuthenticator,
        quota: QuotaPolicy,
        logger,
        serialize_quota: bool = False,
    ):
        self.store = store
        self.auth = authenticator
        self.quota = quota
        self.logger = logger
        self.serialize_quota = serialize_quota
        self._quota_locks: dict[Role, asyncio.Lock] = {}

    async def list_news(self) -> list[NewsItem]:
        return await self.store.list_news()

    async def publish(
        self,
        draft: NewsDraft,
        secret: str,
        image: Optional[MediaFile] = None,
        video: Optional[MediaFile] = None,
    ) -> PipelineResult:
        # 1) validate
        title = (draft.title or "").strip()
        content = (draft.content or "").strip()
        if not title or not content:
            return self._reject(ValidationError("Please fill in title and content."))
        if not (secret or "").strip():
            return self._reject(ValidationError("Please enter a Publish PIN."))

        # 2) authenticate
        role = self.auth.authenticate(secret)
        if role is Role.UNAUTHENTICATED:
            return self._reject(AuthenticationError("Incorrect PIN. Please try again."))
        rule = self.auth.rule_for(role)

        async with self._quota_guard(role):
            # 3) quota, against a fresh listing
            decision = self.quota.check(role, await self.store.list_news())
            if isinstance(decision, QuotaExceeded):
                return self._reject(QuotaExceededError(decision.current, decision.limit))

            # 4) media: image first, then video; a failed upload leaves the field empty
            image_url = await self._upload(image)
            video_url = await self._upload(video)

            # 5) normalize
            item = NewsItem(
                title=title,
                content=content,
                author=rule.display_name,
                date=utc_now(),
                image_url=image_url,
                video_url=video_url,
                link_url=normalize_link(draft.link_url),
                publisher_role=role,
            )

            # 6) persist
            if not await self.store.save(item):
                err = TransportError("Could not save news.")
                self.logger.warning("Publish of %r failed at persist step", title)
                return PipelineResult(ResultStatus.PERSIST_FAILED, item=item, error=err, message=str(err))

        self.logger.info("Published %r as %s", title, role.value)
        return PipelineResult(ResultStatus.PUBLISHED, item=item, message="News item published!")

    async def delete_one(self, item_id, confirm: Optional[Confirm] = None) -> PipelineResult:
        if confirm is not None and not confirm("Are you sure you want to delete this news item?"):
            return PipelineResult(ResultStatus.REJECTED, message="Deletion cancelled.")
        if not await self.store.delete_one(item_id):
            return PipelineResult(
                ResultStatus.PERSIST_FAILED,
                error=TransportError(f"Could not delete news item {item_id}."),
                message=f"Could not delete news item {item_id}.",
            )
        return PipelineResult(ResultStatus.DELETED, message="News item deleted.")

    async def clear_all(self, secret: str, confirm: Optional[Confirm] = None) -> PipelineResult:
        """Deletes every item. Needs the admin PIN on every call, whatever role published before."""
        if confirm is not None and not confirm(
            "WARNING: This will delete ALL news items. This action cannot be undone.\n\nAre you sure?"
        ):
            return PipelineResult(ResultStatus.REJECTED, message="Clear cancelled.")
        if not (secret or "").strip() or self.auth.authenticate(secret) is not Role.ADMIN:
            return self._reject(
                AuthenticationError("Access Denied: Incorrect PIN. Only Admin can clear all news.")
            )
        if not await self.store.delete_all():
            err = TransportError("Could not clear news.")
            return PipelineResult(ResultStatus.PERSIST_FAILED, error=err, message=str(err))
        self.logger.warning("All news items cleared by admin")
        return PipelineResult(ResultStatus.CLEARED, message="All news items have been deleted.")

    # ─────────────────── helpers ─────────────────── #
    async def _upload(self, file: Optional[MediaFile]) -> str:
        if file is None:
            return ""
        return await self.store.upload_media(file) or ""

    def _quota_guard(self, role: Role):
        if not self.serialize_quota:
            return contextlib.nullcontext()
        return self._quota_locks.setdefault(role, asyncio.Lock())

    def _reject(self, error: NewsdeskError) -> PipelineResult:
        self.logger.info("Rejected: %s", type(error).__name__)
        return PipelineResult(ResultStatus.REJECTED, error=error, message=str(error))
