"""
Payment templates endpoints
"""

from typing import Any, Dict, List, Optional, TypedDict

from ..result import EndpointResult
from .base import Resource, path_segment, with_query


class PaymentTemplate(TypedDict, total=False):
    """
    A payment template describes the fields a payment of a given scheme
    (SEPA, FPS, SWIFT, ...) requires.
    """
    id: str
    identifier: str
    description: str
    deprecated: bool
    payment_fields: List[Dict[str, Any]]
    created_at: str
    updated_at: str


class PaymentTemplates(Resource):
    """``/partners/v1/payments/templates``"""

    BASE_URL = '/partners/v1/payments/templates'

    async def list(
        self,
        from_id: Optional[str] = None,
        deprecated: Optional[bool] = None
    ) -> EndpointResult[List[PaymentTemplate]]:
        """
        List payment templates, one page at a time.

        Args:
            from_id: Cursor from a previous page's ``meta.next_id``
            deprecated: Filter on deprecated templates
        """
        return await self._client.get(
            with_query(self.BASE_URL, {'from_id': from_id, 'deprecated': deprecated})
        )

    async def list_all(self, deprecated: Optional[bool] = None) -> EndpointResult[List[PaymentTemplate]]:
        """List payment templates across every page."""
        return await self._list_all({'deprecated': deprecated})

    async def show(self, template_identifier: str) -> EndpointResult[PaymentTemplate]:
        """Fetch a single payment template, e.g. ``SEPA``."""
        return await self._client.get(
            f"{self.BASE_URL}/{path_segment(template_identifier, 'template_identifier')}"
        )
