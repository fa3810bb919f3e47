"""Wire encodings for event types and epoch timestamps."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator
from pydantic_core import PydanticCustomError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Error types reported through pydantic so that decode_payload can map them
INVALID_EVENT_TYPE = "invalid_event_type"
INVALID_TIMESTAMP = "invalid_timestamp"


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

class EventType(str, Enum):
    MESSAGE_CREATED = "message_created"
    MESSAGE_UPDATED = "message_updated"
    MENTION_TO_ME = "mention_to_me"

    def __str__(self) -> str:
        return self.value


_EVENT_TYPES: dict[str, EventType] = {member.value: member for member in EventType}


def parse_event_type(value: Any) -> EventType:
    """Map a wire literal to its EventType. Only the exact literals are accepted."""
    if isinstance(value, EventType):
        return value
    if not isinstance(value, str):
        raise PydanticCustomError(
            INVALID_EVENT_TYPE,
            "data should be a string, got {value}",
            {"value": value},
        )
    try:
        return _EVENT_TYPES[value]
    except KeyError:
        raise PydanticCustomError(
            INVALID_EVENT_TYPE,
            "invalid EventType {value}",
            {"value": value},
        ) from None


def event_type_name(value: Any) -> str:
    """Render an event type for diagnostics; anything unrecognised is "unknown"."""
    if isinstance(value, EventType):
        return value.value
    return "unknown"


WireEventType = Annotated[
    EventType,
    PlainValidator(parse_event_type),
    PlainSerializer(lambda e: e.value, return_type=str),
]


# ---------------------------------------------------------------------------
# Epoch timestamps
# ---------------------------------------------------------------------------

def decode_epoch(value: Any) -> datetime:
    """Convert integer seconds since the epoch into an aware UTC datetime."""
    if isinstance(value, datetime):
        # Already an instant, e.g. when a model is built in Python
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    # bool is an int subclass but true/false is not a timestamp
    if not isinstance(value, int) or isinstance(value, bool):
        raise PydanticCustomError(
            INVALID_TIMESTAMP,
            "data should be number, got {value}",
            {"value": value},
        )
    try:
        return EPOCH + timedelta(seconds=value)
    except OverflowError:
        raise PydanticCustomError(
            INVALID_TIMESTAMP,
            "timestamp {value} is out of range",
            {"value": value},
        ) from None


def encode_epoch(value: datetime) -> int:
    """Whole seconds since the epoch, truncated toward zero."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - EPOCH
    seconds = delta.days * 86400 + delta.seconds
    if seconds < 0 and delta.microseconds:
        seconds += 1
    return seconds


EpochTime = Annotated[
    datetime,
    PlainValidator(decode_epoch),
    PlainSerializer(encode_epoch, return_type=int),
]
