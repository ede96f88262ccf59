"""
Type definitions for request signing functionality

This module provides the signer capability protocols and the value objects
exchanged by the Salt Edge request-signing protocol.
"""

from typing import Any, Awaitable, Callable, Dict, Protocol, Union, runtime_checkable
from dataclasses import dataclass
from enum import Enum


# Seconds a signed request stays valid; the server rejects it afterwards.
EXPIRY_WINDOW_SECONDS = 70
EXPIRY_WINDOW_MS = EXPIRY_WINDOW_SECONDS * 1000

# Canonical string field separator
CANONICAL_SEPARATOR = "|"

EXPIRES_AT_HEADER = "Expires-At"
SIGNATURE_HEADER = "Signature"

REMOTE_SIGNING_ALGORITHM = "RS256"


class HttpMethod(str, Enum):
    """HTTP methods issued by the client"""
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class SignatureHeaders:
    """
    Signature headers for a single outgoing request

    Attributes:
        expires_at: Unix timestamp (seconds) as a decimal string
        value: Base64-encoded signature over the canonical string
    """
    expires_at: str
    value: str

    def as_headers(self) -> Dict[str, str]:
        """Return the wire headers for this signature"""
        return {
            EXPIRES_AT_HEADER: self.expires_at,
            SIGNATURE_HEADER: self.value,
        }


@runtime_checkable
class Signer(Protocol):
    """
    Capability producing a base64 signature over an arbitrary string.

    Implementations may return the signature directly or an awaitable
    resolving to it.
    """

    def sign(self, data: str) -> Union[str, Awaitable[str]]:
        ...


@runtime_checkable
class RemoteSigningService(Protocol):
    """
    External asymmetric signing service, e.g. an Azure Key Vault
    ``CryptographyClient``.

    ``sign`` receives an algorithm name and a pre-computed digest and returns
    the raw signature bytes, a result object exposing them as ``signature``
    or ``result``, or an awaitable of either.
    """

    def sign(self, algorithm: Any, digest: bytes) -> Any:
        ...


# Type aliases for convenience
TimestampGenerator = Callable[[], int]
RequestBody = Any
