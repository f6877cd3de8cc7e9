"""
Builder functions for configured RD Station CRM clients.

These resolve the token and base URL through the configuration store so
callers do not have to assemble a ClientConfig themselves.
"""

from pathlib import Path

import httpx

from ..core.config_store import load_config
from .async_client import AsyncRDStationClient
from .crm_client import RDStationClient


def create_client(
    token: str | None = None,
    base_url: str | None = None,
    env_file: str | Path | None = None,
    http_client: httpx.Client | None = None,
) -> RDStationClient:
    """
    Create a configured synchronous client.

    Args:
        token: API token (falls back to RD_STATION_TOKEN, then the saved config)
        base_url: API base URL (falls back to RD_STATION_BASE_URL, the saved
            config, then the public API URL)
        env_file: Optional .env file to load first
        http_client: Optional httpx client to reuse

    Returns:
        RDStationClient ready to use

    Raises:
        ConfigError: If no token can be found

    Example:
        >>> with create_client() as client:
        ...     deals = client.list_deals(ListDealsFilter(limit="5"))
    """
    config = load_config(token=token, base_url=base_url, env_file=env_file)
    return RDStationClient(config, http_client=http_client)


def create_async_client(
    token: str | None = None,
    base_url: str | None = None,
    env_file: str | Path | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> AsyncRDStationClient:
    """Create a configured asynchronous client. Arguments as for create_client."""
    config = load_config(token=token, base_url=base_url, env_file=env_file)
    return AsyncRDStationClient(config, http_client=http_client)
