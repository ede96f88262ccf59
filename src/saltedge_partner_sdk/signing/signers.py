"""
Signer implementations for Salt Edge request signing

Two interchangeable signers are provided:

- ``LocalKeySigner`` keeps a PEM private key in memory and signs synchronously.
- ``RemoteKeySigner`` hashes locally and delegates the RS256 signature over the
  digest to an external key service such as Azure Key Vault.

Given the same RSA key both produce signatures that verify against the same
public key, so the client never needs to know which one it holds.
"""

import logging
from typing import Any, Optional, Union

from ..crypto.keys import load_private_key, sign_message
from ..exceptions import SigningError, SigningErrorCodes
from .types import REMOTE_SIGNING_ALGORITHM, RemoteSigningService
from .utils import resolve, sha256_digest, to_base64

logger = logging.getLogger(__name__)


class LocalKeySigner:
    """
    Signs with an in-memory private key.

    The key is parsed once at construction so a bad key or wrong passphrase
    fails at client startup instead of on the first request.
    """

    def __init__(self, private_key: Union[str, bytes], passphrase: Optional[str] = None):
        """
        Initialize the signer.

        Args:
            private_key: PEM-encoded RSA or EC private key
            passphrase: Passphrase for an encrypted key

        Raises:
            SigningError: If the key cannot be loaded
        """
        self._private_key = load_private_key(private_key, passphrase)

    def sign(self, data: str) -> str:
        """
        Sign ``data`` with SHA-256 and return the base64 signature.

        Raises:
            SigningError: If signing fails
        """
        try:
            return to_base64(sign_message(self._private_key, data))
        except Exception as e:
            raise SigningError(
                f"Message signing failed: {e}",
                SigningErrorCodes.SIGNING_FAILED,
                {"original_error": str(e)}
            )

    def __repr__(self) -> str:
        return f"LocalKeySigner(key_type={type(self._private_key).__name__})"


class RemoteKeySigner:
    """
    Signs through a remote key service.

    Only the SHA-256 digest of the canonical string leaves the process.
    """

    def __init__(self, service: RemoteSigningService, algorithm: Any = REMOTE_SIGNING_ALGORITHM):
        """
        Initialize the signer.

        Args:
            service: Object exposing ``sign(algorithm, digest)``, sync or async
            algorithm: Algorithm name passed to the service
        """
        self.service = service
        self.algorithm = algorithm

    async def sign(self, data: str) -> str:
        """
        Hash ``data``, have the service sign the digest and return base64.

        Raises:
            SigningError: If the service fails or returns no signature bytes
        """
        digest = sha256_digest(data)
        logger.debug(f"Requesting remote {self.algorithm} signature")

        try:
            sign_result = await resolve(self.service.sign(self.algorithm, digest))
        except Exception as e:
            raise SigningError(
                f"Remote signing failed: {e}",
                SigningErrorCodes.REMOTE_SIGNING_FAILED,
                {"original_error": str(e), "algorithm": str(self.algorithm)}
            )

        return to_base64(_extract_signature_bytes(sign_result))


def _extract_signature_bytes(sign_result: Any) -> bytes:
    """Pull raw signature bytes out of a key service response."""
    if isinstance(sign_result, (bytes, bytearray)):
        return bytes(sign_result)

    for attribute in ("signature", "result"):
        value = getattr(sign_result, attribute, None)
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)

    raise SigningError(
        f"Remote signing service returned no signature bytes: {type(sign_result).__name__}",
        SigningErrorCodes.INVALID_SIGNATURE_RESULT
    )
