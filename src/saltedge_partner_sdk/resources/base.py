"""
Shared helpers for resource wrappers
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from urllib.parse import quote, urlencode

from ..exceptions import ValidationError
from ..result import EndpointResult, Ok, ResponseData

if TYPE_CHECKING:
    from ..http_client import SaltedgePartnerClient

logger = logging.getLogger(__name__)

# Upper bound on pages followed by ``list_all``
MAX_PAGES = 1000


def to_query_string(params: Dict[str, Any]) -> str:
    """
    Encode query parameters the way the API expects.

    Booleans are rendered as ``true``/``false`` and ``None`` values are
    dropped; everything else is stringified and form-encoded.

    Args:
        params: Query parameters

    Returns:
        str: Encoded query string without the leading ``?``
    """
    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        pairs.append((key, str(value)))
    return urlencode(pairs)


def with_query(path: str, params: Optional[Dict[str, Any]]) -> str:
    """Append encoded ``params`` to ``path`` when there are any."""
    query = to_query_string(params) if params else ''
    return f"{path}?{query}" if query else path


def path_segment(value: str, name: str) -> str:
    """Validate and percent-encode a single path segment."""
    if not value:
        raise ValidationError(f"{name} cannot be empty")
    return quote(str(value), safe='')


class Resource:
    """Base class holding a non-owning reference to the client"""

    BASE_URL = ''

    def __init__(self, client: 'SaltedgePartnerClient'):
        self._client = client

    async def _list_all(self, params: Dict[str, Any]) -> EndpointResult[List[Any]]:
        """
        Follow ``meta.next_id`` cursors and concatenate every page.

        The first failed page is returned as-is.
        """
        items: List[Any] = []
        page_params = dict(params)

        for _ in range(MAX_PAGES):
            result = await self._client.get(with_query(self.BASE_URL, page_params))
            if result.is_err:
                return result

            page = result.value
            items.extend(page.data or [])
            if not page.has_more:
                return Ok(ResponseData(data=items, meta=page.meta))

            page_params['from_id'] = page.meta.next_id

        logger.warning(f"Stopped paginating {self.BASE_URL} after {MAX_PAGES} pages")
        return Ok(ResponseData(data=items, meta=page.meta))
