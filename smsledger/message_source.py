"""Readers that supply raw SMS messages to the parser.

The device inbox itself lives outside this package; these readers work on
exported message dumps so the parser can be run on real inbox data.
"""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Protocol, Tuple, Union

from pydantic import BaseModel, Field

from .config import settings
from .models import RawMessage


logger = logging.getLogger(__name__)


class MessageFilter(BaseModel):
    """Which messages to read: a time window and a count limit.

    ``min_date`` overrides ``days_back``; ``max_date`` defaults to now.
    """

    max_count: int = Field(default_factory=lambda: settings.max_count, ge=1)
    days_back: int = Field(default_factory=lambda: settings.days_back, ge=0)
    min_date: Optional[datetime] = None
    max_date: Optional[datetime] = None

    def window(self, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        end = self.max_date or now or datetime.now()
        start = self.min_date or (end - timedelta(days=self.days_back))
        return start, end


class MessageSource(Protocol):
    def list_messages(self, message_filter: MessageFilter) -> List[RawMessage]:
        ...


def _to_datetime(value) -> datetime:
    # Android providers report epoch milliseconds.
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000)
    if isinstance(value, str) and value.strip().isdigit():
        return datetime.fromtimestamp(int(value) / 1000)
    return datetime.fromisoformat(str(value))


def _normalize_timestamp(value: datetime, reference: datetime) -> datetime:
    """Match ``value``'s awareness to ``reference`` so they compare."""
    if value.tzinfo is not None and reference.tzinfo is None:
        return value.astimezone().replace(tzinfo=None)
    if value.tzinfo is None and reference.tzinfo is not None:
        return value.replace(tzinfo=reference.tzinfo)
    return value


def raw_message_from_export(record: dict) -> RawMessage:
    """Build a RawMessage from one Android SMS export record.

    Accepts the provider's field names (``_id``, ``address``, ``date``,
    ``body``) as well as the RawMessage field names.
    """

    try:
        provider_id = record.get("_id", record.get("provider_id"))
        received = record.get("date", record.get("received_at"))
        body = record["body"]
    except (AttributeError, KeyError):
        raise ValueError(f"Not an SMS record: {record!r}")
    if provider_id is None or received is None:
        raise ValueError(f"SMS record is missing its id or date: {record!r}")

    return RawMessage(
        provider_id=str(provider_id),
        sender=str(record.get("address", record.get("sender", "")) or ""),
        received_at=_to_datetime(received),
        body=body,
    )


class JsonExportSource:
    """Messages from a JSON export of the device inbox.

    The file holds a list of message records, or an object with a
    ``messages`` list. Only inbox messages are returned (records without a
    ``type`` field are assumed to be inbox), newest first.
    """

    INBOX_TYPE = 1

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load_records(self) -> list:
        with self.path.open(encoding="utf-8") as fh:
            data = json.load(fh)
        if isinstance(data, dict):
            data = data.get("messages", [])
        if not isinstance(data, list):
            raise ValueError(f"{self.path} does not contain a list of messages")
        return data

    def list_messages(self, message_filter: Optional[MessageFilter] = None) -> List[RawMessage]:
        message_filter = message_filter or MessageFilter()

        messages = []
        for record in self._load_records():
            if isinstance(record, dict) and int(record.get("type", self.INBOX_TYPE)) != self.INBOX_TYPE:
                continue
            messages.append(raw_message_from_export(record))

        if not messages:
            return []

        start, end = message_filter.window()
        start = _normalize_timestamp(start, messages[0].received_at)
        end = _normalize_timestamp(end, messages[0].received_at)

        in_window = [m for m in messages if start <= m.received_at <= end]
        in_window.sort(key=lambda m: m.received_at, reverse=True)
        selected = in_window[: message_filter.max_count]
        logger.info(
            "[Source] %s: %d messages, %d in window, returning %d",
            self.path.name, len(messages), len(in_window), len(selected),
        )
        return selected


def read_template_messages(path: Union[str, Path]) -> List[str]:
    """Read SMS bodies from a text file, one message per blank-line-separated block."""

    text = Path(path).read_text(encoding="utf-8")
    blocks = text.replace("\r\n", "\n").split("\n\n")
    return [block.strip() for block in blocks if block.strip()]
