"""
Clients for the eodhistoricaldata REST API.

EodHistConnector is the asyncio client (httpx); EodHistClient offers the
same operations as blocking calls (requests).
"""

from .connector import EodHistConnector
from .client import EodHistClient

__all__ = ['EodHistConnector', 'EodHistClient']
