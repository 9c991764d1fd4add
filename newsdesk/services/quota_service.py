# newsdesk/services/quota_service.py
from typing import Iterable, Optional

from newsdesk.data_manager.models import (
    Allowed,
    NewsItem,
    QuotaDecision,
    QuotaExceeded,
    Role,
)


class QuotaPolicy:
    """
    Caps how many items a role may have published. The count is taken
    from the listing passed in on every check; no counter is stored.
    """

    def __init__(self, limits: dict[Role, Optional[int]]):
        self.limits = limits

    def check(self, role: Role, existing: Iterable[NewsItem]) -> QuotaDecision:
        limit = self.limits.get(role)
        if limit is None:
            return Allowed()
        current = sum(1 for it in existing if it.publisher_role == role)
        if current >= limit:
            return QuotaExceeded(current=current, limit=limit)
        return Allowed()
