# newsdesk/logger/logger.py
from __future__ import annotations

import logging
import re
import sys
from typing import Callable

from newsdesk.utils.app_config import AppConfig
from newsdesk.utils.file_utils import resolve_path

_SECRET_PATTERNS = [
    # apikey / key / token assignments
    re.compile(r"(?:apikey|api[_-]?key|access[_-]?key|key|token|pin)\s*[:=]\s*[\"']?[^\s'\",}]+", re.IGNORECASE),
    # Authorization: Bearer <jwt>
    re.compile(r"Bearer\s+\S+", re.IGNORECASE),
    # role digests (sha256 hex)
    re.compile(r"\b[a-fA-F0-9]{64}\b"),
]
_REPLACEMENT = "***REDACTED***"


def redact_secrets(msg: str) -> str:
    if not msg:
        return msg
    for pattern in _SECRET_PATTERNS:
        msg = pattern.sub(_REPLACEMENT, msg)
    return msg


class SecretRedactionFilter(logging.Filter):
    """
    Masks access keys, bearer tokens and PIN digests before a record is written.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact_secrets(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact_secrets(v) if isinstance(v, str) else v for v in record.args
            )
        return True


class SingleLevelFilter(logging.Filter):
    """
    Lets through only records of exactly the given level.
    """

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno == self.level


def setup_logger(cfg: AppConfig, name: str = "newsdesk") -> logging.Logger:
    """
    • DEBUG+ → file (if configured)
    • cfg.logging.level+ → stdout
    Every handler redacts secrets.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    redact = SecretRedactionFilter()

    # ── file ──
    if cfg.logging.log_file:
        fh = logging.FileHandler(resolve_path(cfg.logging.log_file), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        fh.addFilter(redact)
        logger.addHandler(fh)

    # ── console ──
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(logging.getLevelName(cfg.logging.level.upper()))
    ch.setFormatter(fmt)
    ch.addFilter(redact)
    logger.addHandler(ch)

    return logger


def setup_notifier(name: str = "newsdesk.notice") -> Callable[[str], None]:
    """
    User-facing notices (the messages a person at the terminal must see).
    Plain text on stdout, WARNING level only, not propagated to the main log.
    """
    notice = logging.getLogger(name)
    notice.propagate = False
    if not notice.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter("%(message)s"))
        h.addFilter(SingleLevelFilter(logging.WARNING))
        h.addFilter(SecretRedactionFilter())
        notice.addHandler(h)
    notice.setLevel(logging.WARNING)
    return notice.warning
