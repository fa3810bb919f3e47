"""Webhook signature validation.

ChatWork signs the raw request body with HMAC-SHA256, keyed with the
webhook token after base64-decoding it, and sends the base64 digest in the
``X-ChatWorkWebhookSignature`` header.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac

from chatworkhook.errors import KeyDecodeError, SignatureError, SignatureMismatchError


def decode_secret(secret: bytes | str) -> bytes:
    """Decode the base64 webhook token into raw HMAC key bytes."""
    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise KeyDecodeError(f"secret is not valid base64: {exc}") from exc


def compute_signature(key: bytes, body: bytes) -> str:
    digest = hmac.new(key, body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(secret: bytes | str, body: bytes, signature: str) -> None:
    """Check ``signature`` against the body signed with ``secret``.

    Raises KeyDecodeError if the secret is malformed (before any HMAC is
    computed) and SignatureMismatchError if the signature does not match.
    """
    key = decode_secret(secret)
    expected = compute_signature(key, body)
    if not hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8")):
        raise SignatureMismatchError()


def is_valid_signature(secret: bytes | str, body: bytes, signature: str) -> bool:
    """Boolean form of verify_signature. A malformed secret is never valid."""
    if not secret or not signature:
        return False
    try:
        verify_signature(secret, body, signature)
    except SignatureError:
        return False
    return True
