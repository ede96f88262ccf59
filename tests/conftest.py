"""
Shared fixtures for Salt Edge Partner SDK tests
"""

import json
from typing import Callable, List, Optional

import httpx
import pytest

from saltedge_partner_sdk import SaltedgePartnerClient, generate_key_pair
from saltedge_partner_sdk.crypto import RSAKeyPair

# 2023-11-14T22:13:20.000Z; signatures made at this instant expire at 1700000070
FIXED_NOW_MS = 1_700_000_000_000
FIXED_EXPIRES_AT = "1700000070"

BASE_URL = "https://www.saltedge.com/api"


@pytest.fixture(scope="session")
def rsa_key_pair() -> RSAKeyPair:
    """RSA key pair shared across the test session."""
    return generate_key_pair()


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)


def json_response(status_code: int = 200, body=None) -> Callable[[httpx.Request], httpx.Response]:
    """Handler returning the same JSON response for every request."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body if body is not None else {"data": {}})
    return handler


@pytest.fixture
def make_client():
    """Factory building a client on top of a RecordingTransport."""
    def factory(handler=None, signer=None, timestamp_generator: Optional[Callable[[], int]] = None, **kwargs):
        transport = RecordingTransport(handler or json_response())
        client = SaltedgePartnerClient(
            "test-app-id",
            "test-secret",
            signer=signer,
            transport=transport,
            timestamp_generator=timestamp_generator,
            **kwargs
        )
        return client, transport
    return factory
