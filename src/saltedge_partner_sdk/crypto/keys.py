"""
RSA key handling for Salt Edge request signing

This module provides key pair generation, PEM loading and signature
verification using the cryptography package. Salt Edge verifies request
signatures with the public key uploaded to the partner dashboard, so the
private half stays with the client.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from ..exceptions import SigningError, SigningErrorCodes, ValidationError

DEFAULT_KEY_SIZE = 2048
MIN_KEY_SIZE = 2048

PrivateKey = Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey]
PublicKey = Union[rsa.RSAPublicKey, ec.EllipticCurvePublicKey]


@dataclass
class RSAKeyPair:
    """
    PEM-encoded RSA key pair.

    Attributes:
        private_pem: PKCS#8 private key (unencrypted unless a passphrase was used)
        public_pem: SubjectPublicKeyInfo public key, as uploaded to Salt Edge
    """
    private_pem: bytes
    public_pem: bytes


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return value


def generate_key_pair(key_size: int = DEFAULT_KEY_SIZE, passphrase: Optional[str] = None) -> RSAKeyPair:
    """
    Generate a new RSA key pair for request signing.

    Args:
        key_size: Modulus size in bits (at least 2048)
        passphrase: Optional passphrase to encrypt the private key with

    Returns:
        RSAKeyPair: PEM-encoded private and public keys

    Raises:
        ValidationError: If the key size is too small
    """
    if key_size < MIN_KEY_SIZE:
        raise ValidationError(
            f"Key size must be at least {MIN_KEY_SIZE} bits",
            "INVALID_KEY_SIZE"
        )

    private_key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)

    if passphrase:
        encryption = serialization.BestAvailableEncryption(passphrase.encode("utf-8"))
    else:
        encryption = serialization.NoEncryption()

    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=encryption,
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return RSAKeyPair(private_pem=private_pem, public_pem=public_pem)


def load_private_key(pem: Union[str, bytes], passphrase: Optional[str] = None) -> PrivateKey:
    """
    Load a PEM private key.

    Args:
        pem: PEM-encoded private key
        passphrase: Passphrase for encrypted keys

    Returns:
        The loaded RSA or EC private key

    Raises:
        SigningError: If the key cannot be loaded or is of an unsupported type
    """
    password = passphrase.encode("utf-8") if passphrase else None
    try:
        key = serialization.load_pem_private_key(_to_bytes(pem), password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(
            f"Failed to load private key: {e}",
            SigningErrorCodes.INVALID_PRIVATE_KEY,
            {"original_error": str(e)}
        )

    if not isinstance(key, (rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey)):
        raise SigningError(
            f"Unsupported private key type: {type(key).__name__}",
            SigningErrorCodes.UNSUPPORTED_KEY_TYPE
        )
    return key


def load_public_key(pem: Union[str, bytes]) -> PublicKey:
    """Load a PEM public key."""
    try:
        key = serialization.load_pem_public_key(_to_bytes(pem))
    except (ValueError, UnsupportedAlgorithm) as e:
        raise ValidationError(f"Failed to load public key: {e}", "INVALID_PUBLIC_KEY")

    if not isinstance(key, (rsa.RSAPublicKey, ec.EllipticCurvePublicKey)):
        raise ValidationError(
            f"Unsupported public key type: {type(key).__name__}",
            "INVALID_PUBLIC_KEY"
        )
    return key


def sign_message(private_key: PrivateKey, message: str) -> bytes:
    """
    Sign a UTF-8 message with SHA-256.

    RSA keys use RSASSA-PKCS1-v1_5 (the RS256 scheme); EC keys use ECDSA.

    Args:
        private_key: Loaded private key
        message: Message to sign

    Returns:
        bytes: Raw signature
    """
    data = message.encode("utf-8")
    if isinstance(private_key, rsa.RSAPrivateKey):
        return private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
    return private_key.sign(data, ec.ECDSA(hashes.SHA256()))


def verify_signature(public_pem: Union[str, bytes], message: str, signature_b64: str) -> bool:
    """
    Verify a base64 signature over a UTF-8 message.

    Args:
        public_pem: PEM-encoded public key
        message: Message that was signed
        signature_b64: Base64-encoded signature

    Returns:
        bool: True if the signature is valid
    """
    public_key = load_public_key(public_pem)
    try:
        signature = base64.b64decode(signature_b64, validate=True)
    except (binascii.Error, ValueError):
        return False

    data = message.encode("utf-8")
    try:
        if isinstance(public_key, rsa.RSAPublicKey):
            public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
        else:
            public_key.verify(signature, data, ec.ECDSA(hashes.SHA256()))
    except InvalidSignature:
        return False
    return True
