"""ChatWork webhook payload models and their JSON codec."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chatworkhook.errors import (
    InvalidEventTypeError,
    InvalidTimestampError,
    MalformedPayloadError,
)
from chatworkhook.types import (
    EPOCH,
    INVALID_EVENT_TYPE,
    INVALID_TIMESTAMP,
    EpochTime,
    EventType,
    WireEventType,
)


class WebhookEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    message_id: str | None = None
    room_id: int | None = None
    body: str | None = None
    send_time: EpochTime | None = None
    update_time: EpochTime | None = None

    # Absent when the event type is mention_to_me
    account_id: int | None = None

    # Absent when the event type is message_created or message_updated
    from_account_id: int | None = None
    to_account_id: int | None = None


class WebhookPayload(BaseModel):
    # Python code may build payloads by field name; the wire only accepts aliases
    model_config = ConfigDict(frozen=True, validate_by_alias=True, validate_by_name=True)

    setting_id: str = Field(default="", alias="webhook_setting_id")
    event_type: WireEventType = Field(
        default=EventType.MESSAGE_CREATED, alias="webhook_event_type"
    )
    time: EpochTime = Field(default=EPOCH, alias="webhook_event_time")
    event: WebhookEvent = Field(default_factory=WebhookEvent, alias="webhook_event")


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------

def decode_payload(data: bytes | str) -> WebhookPayload:
    """Decode a raw webhook body.

    Primitive fields are typed strictly, unknown keys are ignored and
    missing top-level fields fall back to their zero values. Only the wire
    key names are recognised, and an explicit null for webhook_event is
    rejected as malformed rather than read as an empty event.
    """
    try:
        return WebhookPayload.model_validate_json(
            data, strict=True, by_alias=True, by_name=False
        )
    except ValidationError as exc:
        raise _decode_error(exc) from exc


def encode_payload(payload: WebhookPayload) -> bytes:
    """Encode a payload with wire key names, omitting absent optional fields."""
    return payload.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def _decode_error(
    exc: ValidationError,
) -> InvalidEventTypeError | InvalidTimestampError | MalformedPayloadError:
    for error in exc.errors():
        if error["type"] == INVALID_EVENT_TYPE:
            return InvalidEventTypeError(error["input"])
        if error["type"] == INVALID_TIMESTAMP:
            return InvalidTimestampError(error["input"])

    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if location:
        return MalformedPayloadError(f"{location}: {first['msg']}")
    return MalformedPayloadError(first["msg"])
