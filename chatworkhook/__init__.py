"""chatworkhook - verify and decode inbound ChatWork webhooks."""

from chatworkhook.errors import (
    BodyReadError,
    ChatworkHookError,
    InvalidEventTypeError,
    InvalidTimestampError,
    KeyDecodeError,
    MalformedPayloadError,
    MissingSignatureError,
    PayloadError,
    RequestError,
    SignatureError,
    SignatureMismatchError,
    UnsupportedMethodError,
)
from chatworkhook.hook import SIGNATURE_HEADER, Hook, InboundRequest, new_hook, parse
from chatworkhook.models import WebhookEvent, WebhookPayload, decode_payload, encode_payload
from chatworkhook.signature import compute_signature, is_valid_signature, verify_signature
from chatworkhook.types import EventType

__version__ = "0.1.0"

__all__ = [
    "SIGNATURE_HEADER",
    "BodyReadError",
    "ChatworkHookError",
    "EventType",
    "Hook",
    "InboundRequest",
    "InvalidEventTypeError",
    "InvalidTimestampError",
    "KeyDecodeError",
    "MalformedPayloadError",
    "MissingSignatureError",
    "PayloadError",
    "RequestError",
    "SignatureError",
    "SignatureMismatchError",
    "UnsupportedMethodError",
    "WebhookEvent",
    "WebhookPayload",
    "compute_signature",
    "decode_payload",
    "encode_payload",
    "is_valid_signature",
    "new_hook",
    "parse",
    "verify_signature",
]
