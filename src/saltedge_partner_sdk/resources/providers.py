"""
Providers endpoints

A provider is a financial institution which can execute payments. Salt Edge
recommends refreshing the provider list at least daily.
"""

from typing import Any, Dict, List, Literal, Optional, TypedDict

from ..result import EndpointResult
from .base import Resource, path_segment, with_query

ProviderMode = Literal['oauth', 'web', 'api', 'file']


class Provider(TypedDict, total=False):
    """Provider attributes most callers rely on; the full catalog passes through."""
    id: str
    code: str
    name: str
    mode: str
    status: str
    automatic_fetch: bool
    customer_notified_on_sign_in: bool
    interactive: bool
    instruction: str
    home_url: str
    login_url: str
    logo_url: str
    country_code: str
    refresh_timeout: int
    regulated: bool
    created_at: str
    updated_at: str
    payment_templates: List[str]
    supported_payment_fields: Dict[str, List[str]]
    required_payment_fields: Dict[str, List[str]]


class Providers(Resource):
    """``/partners/v1/providers``"""

    BASE_URL = '/partners/v1/providers'

    def _list_params(
        self,
        from_id: Optional[str],
        from_date: Optional[str],
        country_code: Optional[str],
        mode: Optional[ProviderMode],
        include_fake_providers: Optional[bool],
        include_payments_fields: Optional[bool]
    ) -> Dict[str, Any]:
        return {
            'from_id': from_id,
            'from_date': from_date,
            'country_code': country_code,
            'mode': mode,
            'include_fake_providers': include_fake_providers,
            'include_payments_fields': include_payments_fields,
        }

    async def list(
        self,
        from_id: Optional[str] = None,
        from_date: Optional[str] = None,
        country_code: Optional[str] = None,
        mode: Optional[ProviderMode] = None,
        include_fake_providers: Optional[bool] = None,
        include_payments_fields: Optional[bool] = None
    ) -> EndpointResult[List[Provider]]:
        """
        List providers, one page at a time.

        Args:
            from_id: Cursor from a previous page's ``meta.next_id``
            from_date: Only providers updated since this date (YYYY-MM-DD)
            country_code: ISO 3166-1 alpha-2 country code
            mode: Provider access mode
            include_fake_providers: Include sandbox providers
            include_payments_fields: Include payment field descriptions

        Returns:
            EndpointResult: Page of providers with pagination ``meta``
        """
        params = self._list_params(
            from_id, from_date, country_code, mode, include_fake_providers, include_payments_fields
        )
        return await self._client.get(with_query(self.BASE_URL, params))

    async def list_all(
        self,
        from_date: Optional[str] = None,
        country_code: Optional[str] = None,
        mode: Optional[ProviderMode] = None,
        include_fake_providers: Optional[bool] = None,
        include_payments_fields: Optional[bool] = None
    ) -> EndpointResult[List[Provider]]:
        """List providers across every page."""
        params = self._list_params(
            None, from_date, country_code, mode, include_fake_providers, include_payments_fields
        )
        return await self._list_all(params)

    async def show(
        self,
        provider_code: str,
        include_payments_fields: Optional[bool] = None
    ) -> EndpointResult[Provider]:
        """
        Fetch a single provider by code.

        Args:
            provider_code: Provider code, e.g. ``fake_oauth_client_xf``
            include_payments_fields: Include payment field descriptions
        """
        url = f"{self.BASE_URL}/{path_segment(provider_code, 'provider_code')}"
        if include_payments_fields:
            url = with_query(url, {'include_payments_fields': include_payments_fields})
        return await self._client.get(url)
