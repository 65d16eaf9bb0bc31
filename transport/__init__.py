"""
Transports for the quote client.
"""

from .base_transport import BaseTransport, safe_connect
from .http_transport import HttpTransport

__all__ = ['BaseTransport', 'safe_connect', 'HttpTransport']
