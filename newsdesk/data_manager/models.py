# newsdesk/data_manager/models.py
from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Optional, Union

from pydantic import BaseModel, Field, field_validator

# --------- Roles ---------

class Role(str, Enum):
    ADMIN           = "admin"
    USER            = "user"
    UNAUTHENTICATED = "unauthenticated"


class RoleRule(NamedTuple):
    role:         Role
    digest:       str
    display_name: str
    quota_limit:  Optional[int]     # None -> unlimited


# --------- News Models ---------

class NewsItem(BaseModel):
    id:             Optional[Union[int, str]] = None
    title:          str
    content:        str
    author:         str = ""
    date:           Optional[datetime] = None
    image_url:      str = ""
    video_url:      str = ""
    link_url:       str = ""
    publisher_role: Optional[Role] = None

    # rows written by older clients carry null instead of ''
    @field_validator("author", "image_url", "video_url", "link_url", mode="before")
    def _v_blank(cls, v):
        return "" if v is None else v


class NewsDraft(BaseModel):
    title:    str = ""
    content:  str = ""
    link_url: str = ""


class MediaFile(BaseModel):
    name:         str
    data:         bytes
    content_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "MediaFile":
        path = Path(path)
        mime, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, data=path.read_bytes(), content_type=mime)

    @property
    def extension(self) -> str:
        return Path(self.name).suffix.lstrip(".") or "bin"


# --------- Store Models ---------

class StoreCredentials(BaseModel):
    endpoint:   str = ""
    access_key: str = Field(default="", repr=False)

    @property
    def is_empty(self) -> bool:
        return not (self.endpoint and self.access_key)

    @property
    def base_url(self) -> str:
        return self.endpoint.rstrip("/")


@dataclass(frozen=True, slots=True)
class RemoteMode:
    credentials: StoreCredentials


@dataclass(frozen=True, slots=True)
class LocalFallbackMode:
    pass


StoreMode = Union[RemoteMode, LocalFallbackMode]


# --------- Outcomes ---------

@dataclass(frozen=True, slots=True)
class Allowed:
    pass


@dataclass(frozen=True, slots=True)
class QuotaExceeded:
    current: int
    limit:   int


QuotaDecision = Union[Allowed, QuotaExceeded]


class ResultStatus(str, Enum):
    PUBLISHED      = "published"
    DELETED        = "deleted"
    CLEARED        = "cleared"
    REJECTED       = "rejected"
    PERSIST_FAILED = "persist_failed"


@dataclass(slots=True)
class PipelineResult:
    status:  ResultStatus
    item:    Optional[NewsItem] = None
    error:   Optional[Exception] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status in (
            ResultStatus.PUBLISHED, ResultStatus.DELETED, ResultStatus.CLEARED
        )
