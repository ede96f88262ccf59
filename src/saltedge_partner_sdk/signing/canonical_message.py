"""
Canonical message construction for Salt Edge request signatures

The signed string is the pipe-delimited concatenation of the expiry
timestamp, the upper-cased HTTP method, the absolute request URL and the
JSON request body (empty when there is none):

    1700000070|POST|https://www.saltedge.com/api/partners/v1/leads|{"email":"a@b.com"}

Fields are not escaped. A pipe inside the URL or body is carried through
verbatim, which is what the server reproduces on its side.
"""

from typing import Union

from .types import CANONICAL_SEPARATOR, HttpMethod, RequestBody
from .utils import serialize_body


def normalize_method(method: Union[str, HttpMethod]) -> str:
    """Return the upper-cased method name."""
    if isinstance(method, HttpMethod):
        return method.value
    return str(method).upper()


def build_canonical_message(
    expires_at: int,
    method: Union[str, HttpMethod],
    url: str,
    body: RequestBody = None
) -> str:
    """
    Build the canonical string to be signed.

    Args:
        expires_at: Whole-second Unix expiry timestamp
        method: HTTP method
        url: Absolute request URL including the query string
        body: Request payload, or None

    Returns:
        str: ``"{expires_at}|{METHOD}|{url}|{body}"``
    """
    return CANONICAL_SEPARATOR.join([
        str(expires_at),
        normalize_method(method),
        url,
        serialize_body(body),
    ])
