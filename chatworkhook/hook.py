"""Inbound webhook requests: extraction, verification and decoding.

``parse`` is the entry point. By default it is strict: the signature is
verified first and the body is only decoded once the signature matches.

With ``strict=False`` verification and decoding run independently, which is
how the upstream client library behaves. A decode error is still raised,
but a signature failure is not: the Hook comes back populated with the
failure recorded on ``Hook.signature_error``. Callers using lenient mode
must check ``Hook.verified`` before trusting the payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import IO

from chatworkhook.errors import (
    BodyReadError,
    MissingSignatureError,
    SignatureError,
    UnsupportedMethodError,
)
from chatworkhook.models import WebhookPayload, decode_payload
from chatworkhook.signature import verify_signature

SIGNATURE_HEADER = "X-ChatWorkWebhookSignature"


@dataclass
class InboundRequest:
    method: str
    headers: Mapping[str, str]
    body: bytes | IO[bytes] = b""


@dataclass
class Hook:
    signature: str
    raw_payload: bytes
    payload: WebhookPayload | None = None
    signature_error: SignatureError | None = field(default=None, repr=False)

    @property
    def verified(self) -> bool:
        return self.payload is not None and self.signature_error is None

    def signed_by(self, secret: bytes | str) -> None:
        """Raise a SignatureError unless the hook was signed with ``secret``."""
        verify_signature(secret, self.raw_payload, self.signature)

    def verify_and_decode(self, secret: bytes | str, *, strict: bool = True) -> Hook:
        # Results of an earlier call must not leak into this one
        self.payload = None
        self.signature_error = None

        if strict:
            self.signed_by(secret)
            self.payload = decode_payload(self.raw_payload)
            return self

        try:
            self.signed_by(secret)
        except SignatureError as exc:
            self.signature_error = exc
        self.payload = decode_payload(self.raw_payload)
        return self


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract_signature(
    method: str, headers: Mapping[str, str], header_name: str = SIGNATURE_HEADER
) -> str:
    if method.upper() != "POST":
        raise UnsupportedMethodError(method)

    signature = headers.get(header_name)
    if signature is None:
        wanted = header_name.lower()
        for key, value in headers.items():
            if key.lower() == wanted:
                signature = value
                break

    if not signature:
        raise MissingSignatureError(header_name)
    return signature


def read_body(body: bytes | IO[bytes]) -> bytes:
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    try:
        return body.read()
    except OSError as exc:
        raise BodyReadError(f"failed to read request body: {exc}") from exc


def new_hook(request: InboundRequest, header_name: str = SIGNATURE_HEADER) -> Hook:
    """Extract the claimed signature and raw body without verifying anything."""
    signature = extract_signature(request.method, request.headers, header_name)
    raw = read_body(request.body)
    return Hook(signature=signature, raw_payload=raw)


def parse(
    secret: bytes | str,
    request: InboundRequest,
    *,
    strict: bool = True,
    header_name: str = SIGNATURE_HEADER,
) -> Hook:
    """Read, verify and decode the hook in an inbound request."""
    hook = new_hook(request, header_name)
    return hook.verify_and_decode(secret, strict=strict)
