"""
Result and error model for Salt Edge API calls

Every client call returns a ``Result``: either ``Ok`` carrying the decoded
response envelope or ``Err`` carrying the failure. Failures with a status the
API documents as carrying an ``error`` object are classified into a
``SaltedgeError``; everything else is passed through as the raw exception.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar, Union

import httpx

T = TypeVar('T')
E = TypeVar('E')
V = TypeVar('V')

# Statuses whose body carries a structured ``error`` object
STRUCTURED_ERROR_STATUSES = frozenset({
    httpx.codes.BAD_REQUEST,
    httpx.codes.NOT_FOUND,
    httpx.codes.NOT_ACCEPTABLE,
    httpx.codes.CONFLICT,
})


class ErrorClass(str, Enum):
    """Error classes documented by the Salt Edge Partners API"""
    EXECUTION_TIMEOUT = "ExecutionTimeout"
    INTERACTIVE_ADAPTER_TIMEOUT = "InteractiveAdapterTimeout"
    INVALID_CREDENTIALS = "InvalidCredentials"
    INVALID_INTERACTIVE_CREDENTIALS = "InvalidInteractiveCredentials"
    PAYMENT_FAILED = "PaymentFailed"
    PAYMENT_STATUS_UNKNOWN = "PaymentStatusUnknown"
    PAYMENT_VALIDATION_ERROR = "PaymentValidationError"
    PROVIDER_ERROR = "ProviderError"
    ACTION_NOT_SUPPORTED = "ActionNotSupported"
    CERTIFICATE_NOT_FOUND = "CertificateNotFound"
    CUSTOM_FIELDS_FORMAT_INVALID = "CustomFieldsFormatInvalid"
    CUSTOM_FIELDS_SIZE_TOO_BIG = "CustomFieldsSizeTooBig"
    CUSTOMER_LOCKED = "CustomerLocked"
    CUSTOMER_NOT_FOUND = "CustomerNotFound"
    DATE_FORMAT_INVALID = "DateFormatInvalid"
    DATE_OUT_OF_RANGE = "DateOutOfRange"
    IDENTIFIER_INVALID = "IdentifierInvalid"
    INVALID_PAYMENT_ATTRIBUTES = "InvalidPaymentAttributes"
    PAYMENT_ALREADY_AUTHORIZED = "PaymentAlreadyAuthorized"
    PAYMENT_ALREADY_FINISHED = "PaymentAlreadyFinished"
    PAYMENT_ALREADY_STARTED = "PaymentAlreadyStarted"
    PAYMENT_ATTRIBUTE_NOT_SET = "PaymentAttributeNotSet"
    PAYMENT_INITIATION_TIMEOUT = "PaymentInitiationTimeout"
    PAYMENT_NOT_FINISHED = "PaymentNotFinished"
    PAYMENT_NOT_FOUND = "PaymentNotFound"
    PAYMENT_TEMPLATE_NOT_FOUND = "PaymentTemplateNotFound"
    PAYMENT_TEMPLATE_NOT_SUPPORTED = "PaymentTemplateNotSupported"
    PROVIDER_DISABLED = "ProviderDisabled"
    PROVIDER_INACTIVE = "ProviderInactive"
    PROVIDER_KEY_NOT_FOUND = "ProviderKeyNotFound"
    PROVIDER_NOT_FOUND = "ProviderNotFound"
    PROVIDER_UNAVAILABLE = "ProviderUnavailable"
    RETURN_URL_INVALID = "ReturnURLInvalid"
    RETURN_URL_TOO_LONG = "ReturnURLTooLong"
    VALUE_OUT_OF_RANGE = "ValueOutOfRange"
    WRONG_PROVIDER_MODE = "WrongProviderMode"
    WRONG_REQUEST_FORMAT = "WrongRequestFormat"
    ACTION_NOT_ALLOWED = "ActionNotAllowed"
    API_KEY_NOT_FOUND = "ApiKeyNotFound"
    APP_ID_NOT_PROVIDED = "AppIdNotProvided"
    CLIENT_DISABLED = "ClientDisabled"
    CLIENT_NOT_FOUND = "ClientNotFound"
    CLIENT_PENDING = "ClientPending"
    CLIENT_RESTRICTED = "ClientRestricted"
    CONNECTION_FAILED = "ConnectionFailed"
    CONNECTION_LOST = "ConnectionLost"
    EXPIRES_AT_INVALID = "ExpiresAtInvalid"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    INVALID_ENCODING = "InvalidEncoding"
    JSON_PARSE_ERROR = "JsonParseError"
    MISSING_EXPIRES_AT = "MissingExpiresAt"
    MISSING_SIGNATURE = "MissingSignature"
    PAYMENT_LIMIT_REACHED = "PaymentLimitReached"
    PAYMENT_SETTINGS_EXCEEDED = "PaymentSettingsExceeded"
    PUBLIC_KEY_NOT_PROVIDED = "PublicKeyNotProvided"
    RATE_LIMIT_EXCEEDED = "RateLimitExceeded"
    REQUEST_EXPIRED = "RequestExpired"
    SECRET_NOT_PROVIDED = "SecretNotProvided"
    SIGNATURE_NOT_MATCH = "SignatureNotMatch"
    TOO_MANY_REQUESTS = "TooManyRequests"


@dataclass
class SaltedgeError:
    """
    Structured error returned by the API in the ``error`` body field.

    Compares equal to the ``error`` object exactly as received, as well as
    to another ``SaltedgeError`` with the same fields.

    Attributes:
        error_class: Machine-readable error code, see ``ErrorClass``
        error_message: Human-readable description
        request: Echo of the request as seen by the server
        status_code: HTTP status of the response
        payload: The ``error`` object exactly as received
    """
    error_class: str
    error_message: str
    request: Mapping[str, Any] = field(default_factory=dict)
    status_code: Optional[int] = None
    payload: Dict[str, Any] = field(default_factory=dict, repr=False)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SaltedgeError):
            return self._astuple() == other._astuple()
        if isinstance(other, Mapping):
            return self.payload == dict(other)
        return NotImplemented

    def _astuple(self):
        return (self.error_class, self.error_message, self.request, self.status_code, self.payload)

    @property
    def known_class(self) -> Optional[ErrorClass]:
        """The documented ``ErrorClass`` for this error, if any."""
        try:
            return ErrorClass(self.error_class)
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        """Return the error object as received from the API."""
        return dict(self.payload)

    @classmethod
    def from_payload(cls, payload: Any, status_code: Optional[int] = None) -> Optional['SaltedgeError']:
        """
        Build from a response ``error`` object.

        Returns None when the payload is not a mapping with a string
        ``error_class``.
        """
        if not isinstance(payload, dict):
            return None
        error_class = payload.get('error_class')
        if not isinstance(error_class, str):
            return None

        request = payload.get('request')
        return cls(
            error_class=error_class,
            error_message=str(payload.get('error_message') or ''),
            request=request if isinstance(request, dict) else {},
            status_code=status_code,
            payload=payload,
        )


@dataclass
class ResponseMeta:
    """Pagination cursor returned by list endpoints"""
    next_id: Optional[str] = None
    next_page: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ResponseMeta':
        """Create from the response ``meta`` object."""
        return cls(
            next_id=data.get('next_id'),
            next_page=data.get('next_page'),
        )


@dataclass
class ResponseData(Generic[T]):
    """Success envelope: ``{"data": ..., "meta": {...}}``"""
    data: T
    meta: Optional[ResponseMeta] = None

    @property
    def has_more(self) -> bool:
        """Check if the list endpoint has more pages."""
        return bool(self.meta and self.meta.next_id)

    @classmethod
    def from_body(cls, body: Any) -> 'ResponseData[Any]':
        """Create from a decoded response body."""
        if not isinstance(body, dict):
            return cls(data=body)

        meta = body.get('meta')
        return cls(
            data=body.get('data'),
            meta=ResponseMeta.from_dict(meta) if isinstance(meta, dict) else None,
        )


@dataclass(frozen=True)
class Ok(Generic[V]):
    """Successful result carrying ``value``"""
    value: V

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result carrying ``error``"""
    error: E

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True


Result = Union[Err[E], Ok[V]]

# Error payload of a client call: a classified API error or the raw exception
EndpointError = Union[SaltedgeError, Exception]
EndpointResult = Union[Err[EndpointError], Ok[ResponseData[T]]]


def ok_from_body(body: Any) -> Ok[ResponseData[Any]]:
    """Wrap a decoded success body."""
    return Ok(ResponseData.from_body(body))


def _structured_error(error: httpx.HTTPStatusError) -> Optional[SaltedgeError]:
    response = error.response
    if response.status_code not in STRUCTURED_ERROR_STATUSES:
        return None

    try:
        body = response.json()
    except (ValueError, httpx.ResponseNotRead):
        return None

    if not isinstance(body, dict):
        return None
    return SaltedgeError.from_payload(body.get('error'), response.status_code)


def classify_error(error: BaseException) -> Err[EndpointError]:
    """
    Convert a failed exchange into an ``Err``.

    Status errors with a 400, 404, 406 or 409 response and an ``error``
    object in the body become a ``SaltedgeError``. Anything else (network
    failures, timeouts, other statuses, unparseable bodies) is returned as
    the original exception object. Never raises.

    Args:
        error: Exception raised while performing the request

    Returns:
        Err: The classified or raw error
    """
    if isinstance(error, httpx.HTTPStatusError):
        structured = _structured_error(error)
        if structured is not None:
            return Err(structured)
    return Err(error)
