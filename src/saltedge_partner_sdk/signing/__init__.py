"""
Salt Edge Partner SDK - Request Signing Module

Implements the Salt Edge request-signing scheme: a pipe-delimited canonical
string covering expiry, method, URL and body, signed with SHA-256 and sent as
the ``Expires-At`` and ``Signature`` headers.
"""

from .types import (
    EXPIRY_WINDOW_SECONDS,
    EXPIRES_AT_HEADER,
    SIGNATURE_HEADER,
    REMOTE_SIGNING_ALGORITHM,
    HttpMethod,
    SignatureHeaders,
    Signer,
    RemoteSigningService,
)

from .signers import (
    LocalKeySigner,
    RemoteKeySigner,
)

from .canonical_message import (
    build_canonical_message,
    normalize_method,
)

from .signature import create_signature_headers

from .utils import (
    calculate_expires_at,
    generate_timestamp_ms,
    serialize_body,
    sha256_digest,
)

# Public API exports
__all__ = [
    # Signers
    'LocalKeySigner',
    'RemoteKeySigner',
    # Protocol
    'create_signature_headers',
    'build_canonical_message',
    'normalize_method',
    # Types
    'EXPIRY_WINDOW_SECONDS',
    'EXPIRES_AT_HEADER',
    'SIGNATURE_HEADER',
    'REMOTE_SIGNING_ALGORITHM',
    'HttpMethod',
    'SignatureHeaders',
    'Signer',
    'RemoteSigningService',
    # Utilities
    'calculate_expires_at',
    'generate_timestamp_ms',
    'serialize_body',
    'sha256_digest',
]
