"""Typed client for the RD Station CRM API."""

from .core import (
    ClientConfig,
    RequestContext,
    ConfigError,
    RDStationError,
    InvalidInput,
    SerializationError,
    TransportError,
    BodyReadError,
    ApiError,
    DecodeError,
    encode_query,
)
from .client import (
    RDStationClient,
    AsyncRDStationClient,
    create_client,
    create_async_client,
)

__all__ = [
    "ClientConfig",
    "RequestContext",
    "ConfigError",
    "RDStationError",
    "InvalidInput",
    "SerializationError",
    "TransportError",
    "BodyReadError",
    "ApiError",
    "DecodeError",
    "encode_query",
    "RDStationClient",
    "AsyncRDStationClient",
    "create_client",
    "create_async_client",
]
