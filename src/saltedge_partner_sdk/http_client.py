"""
HTTP client for the Salt Edge Partners API

This module provides the single authenticated gateway to the API. Every call
runs the same explicit pipeline:

1. build the request (base URL, path, JSON body),
2. attach the ``App-id`` and ``Secret`` headers,
3. attach ``Expires-At`` and ``Signature`` when a signer is configured,
4. dispatch exactly once,

and the outcome is converted into a ``Result`` at one place, so transport,
HTTP and signing failures never escape as exceptions.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

import httpx

from .exceptions import SigningError, ValidationError
from .resources import Leads, PaymentTemplates, Providers
from .result import EndpointResult, SaltedgeError, classify_error, ok_from_body
from .signing import HttpMethod, SignatureHeaders, Signer, create_signature_headers, serialize_body
from .signing.types import RequestBody, TimestampGenerator
from .version import __version__

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.saltedge.com/api"
DEFAULT_TIMEOUT = 30.0

APP_ID_HEADER = "App-id"
SECRET_HEADER = "Secret"


@dataclass
class ClientConfig:
    """HTTP client configuration"""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = f"Saltedge-Partner-Python-SDK/{__version__}"
    default_headers: Dict[str, str] = field(default_factory=dict)
    debug_logging: bool = False

    def __post_init__(self):
        """Validate configuration"""
        if not self.base_url:
            raise ValidationError("Base URL cannot be empty")

        self.base_url = self.base_url.rstrip('/')

        parsed = urlparse(self.base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValidationError(f"Invalid base URL format: {self.base_url}")

        if self.timeout <= 0:
            raise ValidationError("Timeout must be positive")


class SaltedgePartnerClient:
    """
    Async client for the Salt Edge Partners API.

    Resource wrappers are exposed as ``providers``, ``payment_templates`` and
    ``leads``. The primitives ``get``, ``post`` and ``delete`` return an
    ``Ok`` with the decoded envelope or an ``Err`` with either a
    ``SaltedgeError`` or the raw exception. A body that cannot be encoded
    as JSON or a path that does not form a valid URL also comes back as
    ``Err`` with the raw exception.

    Redirects are not followed: the signature covers the original URL, so a
    3xx response is returned as a raw ``httpx.HTTPStatusError``.

    Example:
        async with SaltedgePartnerClient(app_id, secret, LocalKeySigner(pem)) as client:
            result = await client.providers.show("fake_oauth_client_xf")
            if result.is_ok:
                print(result.value.data["name"])
    """

    def __init__(
        self,
        app_id: str,
        secret: str,
        signer: Optional[Signer] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timestamp_generator: Optional[TimestampGenerator] = None
    ):
        """
        Initialize the client.

        Args:
            app_id: Application id from the Salt Edge dashboard
            secret: Application secret
            signer: Optional signer; requests are sent unsigned without one
            config: HTTP client configuration
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
            timestamp_generator: Optional clock returning milliseconds, used
                for signature expiry

        Raises:
            ValidationError: If credentials are missing
        """
        if not app_id:
            raise ValidationError("app_id cannot be empty")
        if not secret:
            raise ValidationError("secret cannot be empty")

        self.app_id = app_id
        self.secret = secret
        self.signer = signer
        self.config = config or ClientConfig()
        self.timestamp_generator = timestamp_generator
        self.http_client = self._create_http_client(transport)

        self.providers = Providers(self)
        self.payment_templates = PaymentTemplates(self)
        self.leads = Leads(self)

        logger.info(f"Salt Edge partner client initialized for: {self.config.base_url}")
        if signer is not None:
            logger.info(f"Request signing enabled with {type(signer).__name__}")

    def _create_http_client(self, transport: Optional[httpx.AsyncBaseTransport]) -> httpx.AsyncClient:
        """Create the underlying httpx client"""
        default_headers = {
            'Accept': 'application/json',
            'User-Agent': self.config.user_agent,
        }
        default_headers.update(self.config.default_headers)

        return httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=default_headers,
            timeout=self.config.timeout,
            follow_redirects=False,
            transport=transport,
        )

    @property
    def is_signing_enabled(self) -> bool:
        """Check if outgoing requests are signed"""
        return self.signer is not None

    # Pipeline steps

    def _build_request(self, method: HttpMethod, path: str, body: RequestBody) -> httpx.Request:
        """Build the request; the body is serialized exactly once here."""
        if body is None:
            return self.http_client.build_request(method.value, path)

        return self.http_client.build_request(
            method.value,
            path,
            content=serialize_body(body).encode('utf-8'),
            headers={'Content-Type': 'application/json'},
        )

    def _attach_auth_headers(self, request: httpx.Request) -> None:
        request.headers[APP_ID_HEADER] = self.app_id
        request.headers[SECRET_HEADER] = self.secret

    async def _attach_signature_headers(self, request: httpx.Request, body: RequestBody) -> None:
        """Sign the final method, URL and body, if a signer is configured."""
        if self.signer is None:
            return

        signature = await self.create_signature_headers(str(request.url), request.method, body)
        request.headers.update(signature.as_headers())

    async def create_signature_headers(
        self,
        url: str,
        method: Union[str, HttpMethod],
        body: RequestBody = None
    ) -> SignatureHeaders:
        """
        Compute signature headers for a request with this client's signer.

        Args:
            url: Absolute request URL
            method: HTTP method
            body: Request payload, or None

        Returns:
            SignatureHeaders: Fresh expiry and signature

        Raises:
            ConfigurationError: If the client has no signer
            SigningError: If the signer fails
        """
        timestamp_ms = self.timestamp_generator() if self.timestamp_generator else None
        return await create_signature_headers(self.signer, url, method, body, timestamp_ms)

    async def _request(self, method: HttpMethod, path: str, body: RequestBody = None) -> EndpointResult[Any]:
        """
        Run the request pipeline and convert the outcome into a Result.

        Args:
            method: HTTP method
            path: API path relative to the base URL, including any query string
            body: JSON payload for POST requests

        Returns:
            EndpointResult: ``Ok`` with the response envelope or ``Err``
        """
        if not path:
            raise ValidationError("Request path cannot be empty")

        try:
            request = self._build_request(method, path, body)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            logger.error(f"{method.value} {path} could not be built: {type(e).__name__}: {e}")
            return classify_error(e)

        self._attach_auth_headers(request)

        try:
            await self._attach_signature_headers(request, body)

            if self.config.debug_logging:
                logger.debug(f"Making {request.method} request to {request.url}")

            response = await self.http_client.send(request)
            response.raise_for_status()
            return ok_from_body(response.json())

        except (httpx.HTTPError, SigningError, ValueError) as e:
            result = classify_error(e)
            self._log_failure(request, result.error)
            return result

    def _log_failure(self, request: httpx.Request, error: Any) -> None:
        if isinstance(error, SaltedgeError):
            logger.warning(
                f"{request.method} {request.url.path} failed with "
                f"{error.status_code} {error.error_class}: {error.error_message}"
            )
        else:
            logger.error(f"{request.method} {request.url.path} failed: {type(error).__name__}: {error}")
            if self.config.debug_logging:
                logger.debug("Request failure details", exc_info=error)

    # Public API methods

    async def get(self, path: str) -> EndpointResult[Any]:
        """Make a GET request."""
        return await self._request(HttpMethod.GET, path)

    async def post(self, path: str, body: RequestBody) -> EndpointResult[Any]:
        """Make a POST request with a JSON body."""
        return await self._request(HttpMethod.POST, path, body)

    async def delete(self, path: str) -> EndpointResult[Any]:
        """Make a DELETE request."""
        return await self._request(HttpMethod.DELETE, path)

    async def aclose(self) -> None:
        """Close the underlying HTTP client"""
        await self.http_client.aclose()
        logger.debug("Salt Edge partner client closed")

    async def __aenter__(self) -> 'SaltedgePartnerClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

