"""
Tests for the providers, payment templates and leads endpoints
"""

import httpx
import pytest

from saltedge_partner_sdk import ValidationError, to_query_string
from saltedge_partner_sdk.resources import base

from conftest import BASE_URL, json_response


def paged_handler(pages):
    """Serve ``pages`` keyed by the ``from_id`` query parameter."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=pages[request.url.params.get("from_id")])
    return handler


class TestQueryString:
    """Test query string encoding"""

    def test_booleans_and_none(self):
        """Booleans are lowercase and None values are dropped"""
        query = to_query_string({"country_code": "XF", "include_fake_providers": True, "mode": None, "deprecated": False})
        assert query == "country_code=XF&include_fake_providers=true&deprecated=false"

    def test_values_are_encoded(self):
        assert to_query_string({"customer_id": "a b&c"}) == "customer_id=a+b%26c"

    def test_empty(self):
        assert to_query_string({"from_id": None}) == ""


class TestProviders:
    """Test provider endpoints"""

    @pytest.mark.asyncio
    async def test_list_with_filters(self, make_client):
        client, transport = make_client(json_response(200, {"data": [{"code": "fake_oauth_client_xf"}], "meta": {"next_id": None}}))
        async with client:
            result = await client.providers.list(country_code="XF", include_fake_providers=True, mode="oauth")

        assert result.value.data == [{"code": "fake_oauth_client_xf"}]
        assert str(transport.last_request.url) == (
            f"{BASE_URL}/partners/v1/providers?country_code=XF&mode=oauth&include_fake_providers=true"
        )

    @pytest.mark.asyncio
    async def test_list_without_filters(self, make_client):
        client, transport = make_client()
        async with client:
            await client.providers.list()
        assert str(transport.last_request.url) == f"{BASE_URL}/partners/v1/providers"

    @pytest.mark.asyncio
    async def test_show(self, make_client):
        client, transport = make_client(json_response(200, {"data": {"code": "fake_oauth_client_xf"}}))
        async with client:
            result = await client.providers.show("fake_oauth_client_xf")

        assert result.value.data["code"] == "fake_oauth_client_xf"
        assert str(transport.last_request.url) == f"{BASE_URL}/partners/v1/providers/fake_oauth_client_xf"

    @pytest.mark.asyncio
    async def test_show_with_payments_fields(self, make_client):
        client, transport = make_client()
        async with client:
            await client.providers.show("fake_oauth_client_xf", include_payments_fields=True)
        assert transport.last_request.url.params["include_payments_fields"] == "true"

    @pytest.mark.asyncio
    async def test_show_requires_code(self, make_client):
        client, _ = make_client()
        async with client:
            with pytest.raises(ValidationError):
                await client.providers.show("")

    @pytest.mark.asyncio
    async def test_list_all_follows_cursor(self, make_client):
        """Pages are concatenated until next_id is empty"""
        pages = {
            None: {"data": [{"code": "a"}], "meta": {"next_id": "2", "next_page": "/partners/v1/providers?from_id=2"}},
            "2": {"data": [{"code": "b"}], "meta": {"next_id": "3"}},
            "3": {"data": [{"code": "c"}], "meta": {"next_id": None}},
        }
        client, transport = make_client(paged_handler(pages))
        async with client:
            result = await client.providers.list_all(country_code="XF")

        assert [provider["code"] for provider in result.value.data] == ["a", "b", "c"]
        assert len(transport.requests) == 3
        assert all(request.url.params["country_code"] == "XF" for request in transport.requests)

    @pytest.mark.asyncio
    async def test_list_all_stops_at_first_error(self, make_client):
        def handler(request):
            if request.url.params.get("from_id") is None:
                return httpx.Response(200, json={"data": [{"code": "a"}], "meta": {"next_id": "2"}})
            return httpx.Response(500, json={})

        client, transport = make_client(handler)
        async with client:
            result = await client.providers.list_all()

        assert isinstance(result.error, httpx.HTTPStatusError)
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_list_all_page_limit(self, make_client, monkeypatch):
        """Pagination stops after the page limit"""
        monkeypatch.setattr(base, "MAX_PAGES", 2)
        client, transport = make_client(json_response(200, {"data": [1], "meta": {"next_id": "again"}}))
        async with client:
            result = await client.providers.list_all()

        assert result.value.data == [1, 1]
        assert len(transport.requests) == 2


class TestPaymentTemplates:
    """Test payment template endpoints"""

    @pytest.mark.asyncio
    async def test_list(self, make_client):
        client, transport = make_client(json_response(200, {"data": [{"identifier": "SEPA"}]}))
        async with client:
            result = await client.payment_templates.list(deprecated=False)

        assert result.value.data == [{"identifier": "SEPA"}]
        assert str(transport.last_request.url) == f"{BASE_URL}/partners/v1/payments/templates?deprecated=false"

    @pytest.mark.asyncio
    async def test_show(self, make_client):
        client, transport = make_client(json_response(200, {"data": {"identifier": "SEPA"}}))
        async with client:
            await client.payment_templates.show("SEPA")
        assert str(transport.last_request.url) == f"{BASE_URL}/partners/v1/payments/templates/SEPA"

    @pytest.mark.asyncio
    async def test_list_all(self, make_client):
        pages = {
            None: {"data": [{"identifier": "SEPA"}], "meta": {"next_id": "7"}},
            "7": {"data": [{"identifier": "FPS"}], "meta": {"next_id": None}},
        }
        client, _ = make_client(paged_handler(pages))
        async with client:
            result = await client.payment_templates.list_all()

        assert [template["identifier"] for template in result.value.data] == ["SEPA", "FPS"]


class TestLeads:
    """Test lead endpoints"""

    @pytest.mark.asyncio
    async def test_create_minimal(self, make_client):
        lead = {"email": "a@b.com", "customer_id": "111", "identifier": "222"}
        client, transport = make_client(json_response(200, {"data": lead}))
        async with client:
            result = await client.leads.create("a@b.com")

        assert result.value.data == lead
        assert transport.last_request.method == "POST"
        assert str(transport.last_request.url) == f"{BASE_URL}/partners/v1/leads"
        assert transport.last_json() == {"email": "a@b.com"}

    @pytest.mark.asyncio
    async def test_create_with_identifier_and_kyc(self, make_client):
        """Unset KYC fields are not sent"""
        client, transport = make_client()
        async with client:
            await client.leads.create(
                "a@b.com",
                identifier="DE89370400440532013000",
                kyc={"full_name": "Jane Doe", "type_of_account": "own", "gender": None},
            )

        assert transport.last_json() == {
            "email": "a@b.com",
            "identifier": "DE89370400440532013000",
            "kyc": {"full_name": "Jane Doe", "type_of_account": "own"},
        }

    @pytest.mark.asyncio
    async def test_create_requires_email(self, make_client):
        client, transport = make_client()
        async with client:
            with pytest.raises(ValidationError):
                await client.leads.create("")
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_remove(self, make_client):
        client, transport = make_client(json_response(200, {"data": {"customer_id": "111", "deleted": True}}))
        async with client:
            result = await client.leads.remove("111")

        assert result.value.data["deleted"] is True
        assert transport.last_request.method == "DELETE"
        assert str(transport.last_request.url) == f"{BASE_URL}/partners/v1/leads?customer_id=111"

    @pytest.mark.asyncio
    async def test_conflict_is_structured(self, make_client):
        body = {"error": {"error_class": "DuplicatedCustomer", "error_message": "Customer already exists"}}
        client, _ = make_client(json_response(409, body))
        async with client:
            result = await client.leads.create("a@b.com")

        assert result.error.error_class == "DuplicatedCustomer"
        assert result.error.status_code == 409
