"""
Cryptographic key utilities for Salt Edge Partner SDK
"""

from .keys import (
    RSAKeyPair,
    generate_key_pair,
    load_private_key,
    load_public_key,
    sign_message,
    verify_signature,
)

__all__ = [
    'RSAKeyPair',
    'generate_key_pair',
    'load_private_key',
    'load_public_key',
    'sign_message',
    'verify_signature',
]
