"""
Interledger Quoting Protocol client.
"""

from .amounts import compare_quotes, parse_amount
from .connector import quote_by_connector
from .models import ConnectorResponse, Quote, QuoteParams, QuoteQuery
from .quoter import quote, quote_by_packet
from .request_codec import build_quote_request, encode_quote_request

__all__ = [
    'compare_quotes',
    'parse_amount',
    'quote_by_connector',
    'ConnectorResponse',
    'Quote',
    'QuoteParams',
    'QuoteQuery',
    'quote',
    'quote_by_packet',
    'build_quote_request',
    'encode_quote_request',
]
