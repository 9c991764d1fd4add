# newsdesk/utils/formatters.py
import random
import re
import string
import time
from datetime import datetime, timezone

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_BASE36 = string.digits + string.ascii_lowercase


def normalize_link(url: str | None) -> str:
    """'example.com' -> 'https://example.com'; blank stays blank."""
    url = (url or "").strip()
    if url and not _SCHEME_RE.match(url):
        url = "https://" + url
    return url


def media_object_name(extension: str) -> str:
    """<epoch ms>_<9 base36 chars>.<ext>"""
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"{int(time.time() * 1000)}_{suffix}.{extension}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
