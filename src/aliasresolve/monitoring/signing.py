"""HMAC signing for outbound webhook deliveries."""

import hashlib
import hmac
import json
from typing import Any

SIGNATURE_HEADER = "X-Webhook-Signature"
EVENT_HEADER = "X-Webhook-Event"


def sign_payload(body: bytes, secret: str) -> str:
    """Hex HMAC-SHA256 of ``body`` keyed with ``secret``."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def encode_body(payload: dict[str, Any]) -> bytes:
    """Serialize a payload exactly once so the signature covers the sent bytes."""
    return json.dumps(payload, separators=(",", ":"), default=str).encode("utf-8")


def signed_headers(body: bytes, secret: str, event: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        SIGNATURE_HEADER: sign_payload(body, secret),
        EVENT_HEADER: event,
    }
