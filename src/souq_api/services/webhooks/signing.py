"""Wire encoding and HMAC signatures for outbound webhook bodies."""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any, Mapping

SIGNATURE_HEADER = "X-Webhook-Signature"
SIGNATURE_PREFIX = "sha256="


def serialize_payload(payload: Mapping[str, Any]) -> bytes:
    """Encode a payload as compact UTF-8 JSON, preserving key order."""

    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def sign_payload(body: bytes | str, secret: str) -> str:
    """Return the lowercase hex HMAC-SHA256 of ``body`` keyed by ``secret``."""

    raw = body.encode("utf-8") if isinstance(body, str) else body
    return hmac.new(secret.encode("utf-8"), raw, hashlib.sha256).hexdigest()


def signature_header_value(body: bytes | str, secret: str) -> str:
    return f"{SIGNATURE_PREFIX}{sign_payload(body, secret)}"


__all__ = [
    "SIGNATURE_HEADER",
    "SIGNATURE_PREFIX",
    "serialize_payload",
    "sign_payload",
    "signature_header_value",
]
