"""
Salt Edge Partner SDK
Async client for the Salt Edge Partners API with request signing
"""

from .version import __version__
from .exceptions import (
    SaltedgePartnerError,
    ConfigurationError,
    ValidationError,
    SigningError,
    SigningErrorCodes,
)
from .result import (
    Ok,
    Err,
    Result,
    EndpointError,
    EndpointResult,
    ErrorClass,
    SaltedgeError,
    ResponseData,
    ResponseMeta,
    STRUCTURED_ERROR_STATUSES,
    classify_error,
    ok_from_body,
)
from .signing import (
    Signer,
    RemoteSigningService,
    LocalKeySigner,
    RemoteKeySigner,
    SignatureHeaders,
    HttpMethod,
    EXPIRY_WINDOW_SECONDS,
    build_canonical_message,
    create_signature_headers,
)
from .crypto import (
    RSAKeyPair,
    generate_key_pair,
    load_private_key,
    verify_signature,
)
from .http_client import (
    SaltedgePartnerClient,
    ClientConfig,
    DEFAULT_BASE_URL,
)
from .resources import (
    Providers,
    PaymentTemplates,
    Leads,
    to_query_string,
)
from .config import SaltedgeSettings

__all__ = [
    '__version__',
    # Exceptions
    'SaltedgePartnerError',
    'ConfigurationError',
    'ValidationError',
    'SigningError',
    'SigningErrorCodes',
    # Result model
    'Ok',
    'Err',
    'Result',
    'EndpointError',
    'EndpointResult',
    'ErrorClass',
    'SaltedgeError',
    'ResponseData',
    'ResponseMeta',
    'STRUCTURED_ERROR_STATUSES',
    'classify_error',
    'ok_from_body',
    # Signing
    'Signer',
    'RemoteSigningService',
    'LocalKeySigner',
    'RemoteKeySigner',
    'SignatureHeaders',
    'HttpMethod',
    'EXPIRY_WINDOW_SECONDS',
    'build_canonical_message',
    'create_signature_headers',
    # Keys
    'RSAKeyPair',
    'generate_key_pair',
    'load_private_key',
    'verify_signature',
    # Client
    'SaltedgePartnerClient',
    'ClientConfig',
    'DEFAULT_BASE_URL',
    'Providers',
    'PaymentTemplates',
    'Leads',
    'to_query_string',
    # Configuration
    'SaltedgeSettings',
]
