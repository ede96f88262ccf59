"""
Leads endpoints

A lead is an end-user the partner hands over to Salt Edge for payment
initiation.
"""

from typing import Any, Dict, Optional, TypedDict

from ..exceptions import ValidationError
from ..result import EndpointResult
from .base import Resource, with_query


class Lead(TypedDict):
    email: str
    customer_id: str
    identifier: str


class LeadKyc(TypedDict, total=False):
    """
    Additional information about the lead.

    ``type_of_account`` is one of ``own``, ``legal`` or ``shared``; country
    codes are ISO 3166-1 alpha-2.
    """
    full_name: str
    type_of_account: str
    citizenship_code: str
    residence_address: str
    date_of_birth: str
    place_of_birth: str
    gender: str
    legal_name: str
    registered_office_code: str
    registered_office_address: str
    registration_number: str


class _CreateLeadRequired(TypedDict):
    email: str


class CreateLeadBody(_CreateLeadRequired, total=False):
    identifier: str
    kyc: LeadKyc


class Leads(Resource):
    """``/partners/v1/leads``"""

    BASE_URL = '/partners/v1/leads'

    async def create(
        self,
        email: str,
        identifier: Optional[str] = None,
        kyc: Optional[LeadKyc] = None
    ) -> EndpointResult[Lead]:
        """
        Create a lead.

        Args:
            email: Lead email address
            identifier: Optional extra reference (IBAN, phone, ...), echoed back
                only when sent
            kyc: Optional KYC details

        Returns:
            EndpointResult: The created lead
        """
        if not email:
            raise ValidationError("email cannot be empty")

        body: Dict[str, Any] = {'email': email}
        if identifier is not None:
            body['identifier'] = identifier
        if kyc is not None:
            body['kyc'] = {key: value for key, value in kyc.items() if value is not None}

        return await self._client.post(self.BASE_URL, body)

    async def remove(self, customer_id: str) -> EndpointResult[Lead]:
        """Remove the lead with the given customer id."""
        if not customer_id:
            raise ValidationError("customer_id cannot be empty")
        return await self._client.delete(with_query(self.BASE_URL, {'customer_id': customer_id}))
