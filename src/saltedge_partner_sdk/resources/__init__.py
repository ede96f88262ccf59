"""
Resource wrappers for the Salt Edge Partners API

Thin per-endpoint-group helpers built on ``SaltedgePartnerClient``.
"""

from .base import to_query_string
from .leads import CreateLeadBody, Lead, LeadKyc, Leads
from .payment_templates import PaymentTemplate, PaymentTemplates
from .providers import Provider, ProviderMode, Providers

__all__ = [
    'to_query_string',
    'Providers',
    'Provider',
    'ProviderMode',
    'PaymentTemplates',
    'PaymentTemplate',
    'Leads',
    'Lead',
    'LeadKyc',
    'CreateLeadBody',
]
