"""Error taxonomy for webhook extraction, verification and decoding."""

from __future__ import annotations


class ChatworkHookError(Exception):
    """Base class for every error raised by chatworkhook."""


# ---------------------------------------------------------------------------
# Request extraction
# ---------------------------------------------------------------------------

class RequestError(ChatworkHookError):
    pass


class UnsupportedMethodError(RequestError):
    def __init__(self, method: str) -> None:
        super().__init__(f"unsupported method {method!r}, expected POST")
        self.method = method


class MissingSignatureError(RequestError):
    def __init__(self, header: str) -> None:
        super().__init__(f"missing signature header {header}")
        self.header = header


class BodyReadError(RequestError):
    pass


# ---------------------------------------------------------------------------
# Signature verification
# ---------------------------------------------------------------------------

class SignatureError(ChatworkHookError):
    pass


class KeyDecodeError(SignatureError):
    pass


class SignatureMismatchError(SignatureError):
    def __init__(self) -> None:
        super().__init__("invalid signature")


# ---------------------------------------------------------------------------
# Payload decoding
# ---------------------------------------------------------------------------

class PayloadError(ChatworkHookError):
    pass


class MalformedPayloadError(PayloadError):
    pass


class InvalidEventTypeError(PayloadError):
    def __init__(self, value: object) -> None:
        super().__init__(f"invalid EventType {value!r}")
        self.value = value


class InvalidTimestampError(PayloadError):
    def __init__(self, value: object) -> None:
        super().__init__(f"timestamp should be an integer number of seconds, got {value!r}")
        self.value = value
