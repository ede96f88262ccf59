"""
Salt Edge signature protocol

Produces the ``Expires-At`` and ``Signature`` headers for one outgoing
request. Every call computes a fresh expiry and signature; nothing is cached.
"""

import logging
from typing import Optional, Union

from ..exceptions import ConfigurationError, SigningError, SigningErrorCodes
from .canonical_message import build_canonical_message, normalize_method
from .types import HttpMethod, RequestBody, SignatureHeaders, Signer
from .utils import PerformanceTimer, calculate_expires_at, resolve

logger = logging.getLogger(__name__)


async def create_signature_headers(
    signer: Optional[Signer],
    url: str,
    method: Union[str, HttpMethod],
    body: RequestBody = None,
    timestamp_ms: Optional[int] = None
) -> SignatureHeaders:
    """
    Sign a request and return the headers to attach.

    Args:
        signer: Signer to use; required
        url: Absolute request URL (scheme, host, path and query)
        method: HTTP method
        body: Request payload, or None
        timestamp_ms: Current time in milliseconds (uses the clock if None)

    Returns:
        SignatureHeaders: Expiry and base64 signature

    Raises:
        ConfigurationError: If no signer is configured
        SigningError: If the signer fails
    """
    if signer is None:
        raise ConfigurationError("Signer is required", SigningErrorCodes.SIGNER_REQUIRED)

    timer = PerformanceTimer()
    expires_at = calculate_expires_at(timestamp_ms)
    canonical_message = build_canonical_message(expires_at, method, url, body)

    try:
        signature = await resolve(signer.sign(canonical_message))
    except SigningError:
        raise
    except Exception as e:
        raise SigningError(
            f"Signer failed: {e}",
            SigningErrorCodes.SIGNING_FAILED,
            {"signer": type(signer).__name__, "original_error": str(e)}
        )

    if not isinstance(signature, str) or not signature:
        raise SigningError(
            "Signer returned an empty or non-string signature",
            SigningErrorCodes.INVALID_SIGNATURE_RESULT,
            {"signer": type(signer).__name__}
        )

    logger.debug(
        f"Signed {normalize_method(method)} {url} (expires at {expires_at}) "
        f"in {timer.elapsed_ms():.2f}ms"
    )

    return SignatureHeaders(expires_at=str(expires_at), value=signature)
