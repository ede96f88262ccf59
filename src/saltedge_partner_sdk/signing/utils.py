"""
Utility functions for request signing

This module provides the clock, digest, encoding and body serialization
helpers shared by the signers and the signature protocol.
"""

import base64
import hashlib
import inspect
import json
import time
from typing import Any, Optional

from .types import EXPIRY_WINDOW_MS, RequestBody


def generate_timestamp_ms() -> int:
    """
    Generate current Unix timestamp in milliseconds.

    Returns:
        int: Milliseconds since epoch
    """
    return int(time.time() * 1000)


def calculate_expires_at(now_ms: Optional[int] = None) -> int:
    """
    Compute the expiry of a signature created at ``now_ms``.

    Args:
        now_ms: Current time in milliseconds (uses the clock if None)

    Returns:
        int: Whole-second Unix timestamp 70 seconds after ``now_ms``
    """
    if now_ms is None:
        now_ms = generate_timestamp_ms()
    return (now_ms + EXPIRY_WINDOW_MS) // 1000


def serialize_body(body: RequestBody) -> str:
    """
    Serialize a request payload to the exact JSON text sent on the wire.

    Compact separators and unescaped non-ASCII characters, so the output
    matches what JavaScript's ``JSON.stringify`` produces for the same value.

    Args:
        body: JSON-serializable payload, or None

    Returns:
        str: JSON text, or an empty string when there is no payload
    """
    if body is None:
        return ""
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def sha256_digest(data: str) -> bytes:
    """Return the SHA-256 digest of a UTF-8 string."""
    return hashlib.sha256(data.encode("utf-8")).digest()


def to_base64(data: bytes) -> str:
    """Encode bytes as standard base64 text."""
    return base64.b64encode(data).decode("ascii")


async def resolve(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000
