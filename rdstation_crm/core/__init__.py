"""Core components for the RD Station CRM client."""

from .models import (
    ClientConfig,
    RequestContext,
    ConfigError,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
)
from .errors import (
    RDStationError,
    InvalidInput,
    SerializationError,
    TransportError,
    BodyReadError,
    ApiError,
    DecodeError,
)
from .query import encode_query, query_pairs, build_path, format_query_value
from .config_store import (
    get_base_dir,
    config_path,
    save_config,
    load_config_file,
    load_config,
)

__all__ = [
    "ClientConfig",
    "RequestContext",
    "ConfigError",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "RDStationError",
    "InvalidInput",
    "SerializationError",
    "TransportError",
    "BodyReadError",
    "ApiError",
    "DecodeError",
    "encode_query",
    "query_pairs",
    "build_path",
    "format_query_value",
    "get_base_dir",
    "config_path",
    "save_config",
    "load_config_file",
    "load_config",
]
