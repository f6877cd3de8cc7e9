"""
RD Station CRM clients.

This package provides the synchronous and asynchronous clients and the
builder functions that configure them.
"""

from .crm_client import RDStationClient
from .async_client import AsyncRDStationClient
from .builder import create_client, create_async_client

__all__ = [
    "RDStationClient",
    "AsyncRDStationClient",
    "create_client",
    "create_async_client",
]
