"""Data models for the feed store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from dateutil.parser import isoparse

from feedstore.errors import DataIntegrityError, InvalidStatus


class FeedStatus(str, Enum):
    """Subscription state of a feed, persisted as its lowercase value."""

    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"

    def render(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: Any) -> FeedStatus:
        """Parse the persisted form. Only the exact lowercase spellings are accepted."""
        if not isinstance(text, str):
            raise InvalidStatus(text)
        try:
            return cls(text)
        except ValueError:
            raise InvalidStatus(text) from None


@dataclass(frozen=True)
class Feed:
    """A stored feed as read back from the ``feeds`` table."""

    id: int
    title: str
    link: str
    status: FeedStatus
    checked_at: datetime

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Feed:
        feed_id = row["id"]
        try:
            status = FeedStatus.parse(row["status"])
        except InvalidStatus as exc:
            raise DataIntegrityError(
                f"feed {feed_id} has unknown status {exc.value!r}",
                feed_id=feed_id,
                column="status",
            ) from exc
        return cls(
            id=feed_id,
            title=row["title"],
            link=row["link"],
            status=status,
            checked_at=_stored_ts(row["checked_at"], feed_id),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "status": self.status.render(),
            "checked_at": self.checked_at.isoformat(),
        }


@dataclass
class FeedToCreate:
    """Input for creating a feed. Status and checked_at are set by the store."""

    title: str
    link: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> FeedToCreate:
        return cls(title=payload["title"], link=payload["link"])


@dataclass
class FeedToUpdate:
    """Partial update of a feed. Fields left as None are not touched."""

    id: int
    title: Optional[str] = None
    link: Optional[str] = None
    status: Optional[FeedStatus] = None
    checked_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> FeedToUpdate:
        status = payload.get("status")
        checked_at = payload.get("checked_at")
        return cls(
            id=payload["id"],
            title=payload.get("title"),
            link=payload.get("link"),
            status=FeedStatus.parse(status) if status is not None else None,
            checked_at=_parse_ts(checked_at) if checked_at is not None else None,
        )

    def changes(self) -> Dict[str, Any]:
        """Column -> stored value for every supplied field, in column order."""
        values: Dict[str, Any] = {}
        if self.title is not None:
            values["title"] = self.title
        if self.link is not None:
            values["link"] = self.link
        if self.status is not None:
            values["status"] = FeedStatus.parse(self.status).render()
        if self.checked_at is not None:
            values["checked_at"] = _parse_ts(self.checked_at).isoformat()
        return values


# --- Helpers ---

def _parse_ts(val: Any) -> datetime:
    """Parse an ISO-8601 timestamp that must carry a UTC offset."""
    ts = val if isinstance(val, datetime) else isoparse(str(val))
    if ts.tzinfo is None:
        raise ValueError(f"timestamp without timezone: {val!r}")
    return ts


def _stored_ts(val: Any, feed_id: Any) -> datetime:
    if val is None:
        raise DataIntegrityError(
            f"feed {feed_id} has no checked_at", feed_id=feed_id, column="checked_at"
        )
    try:
        return _parse_ts(val)
    except (ValueError, OverflowError) as exc:
        raise DataIntegrityError(
            f"feed {feed_id} has unreadable checked_at {val!r}",
            feed_id=feed_id,
            column="checked_at",
        ) from exc
