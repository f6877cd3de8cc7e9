"""Configuration loading and persistence for the RD Station CRM client."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .models import ClientConfig, ConfigError, DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

TOKEN_ENV = "RD_STATION_TOKEN"
BASE_URL_ENV = "RD_STATION_BASE_URL"
TIMEOUT_ENV = "RD_STATION_TIMEOUT"
HOME_ENV = "RDSTATION_CRM_HOME"


def get_base_dir() -> Path:
    """
    Get the base directory for storing configuration.

    The directory is determined by:
    1. Environment variable RDSTATION_CRM_HOME if set
    2. Otherwise, ~/.rdstation_crm

    The directory is created if it does not exist.

    Returns:
        Path to the base directory
    """
    env_home = os.environ.get(HOME_ENV)
    if env_home:
        base_dir = Path(env_home)
    else:
        base_dir = Path.home() / ".rdstation_crm"

    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir


def config_path() -> Path:
    """Get the path of the saved client configuration file."""
    return get_base_dir() / "config.json"


def save_config(config: ClientConfig) -> Path:
    """
    Save a ClientConfig to disk.

    Args:
        config: Configuration to save

    Returns:
        Path to the saved file

    Raises:
        ConfigError: If the file cannot be written
    """
    path = config_path()

    try:
        with open(path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
        logger.debug(f"Saved client configuration to {path}")
        return path
    except OSError as e:
        raise ConfigError(f"Failed to save configuration to {path}: {e}") from e


def load_config_file() -> dict[str, Any]:
    """
    Load the saved client configuration.

    Returns:
        The stored settings as a dictionary

    Raises:
        ConfigError: If the file does not exist or JSON is invalid
    """
    path = config_path()

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load configuration from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}")

    logger.debug(f"Loaded client configuration from {path}")
    return data


def load_config(
    token: str | None = None,
    base_url: str | None = None,
    env_file: str | Path | None = None,
) -> ClientConfig:
    """
    Resolve the client configuration.

    Each setting is taken from the first source that provides it:
    1. Explicit arguments
    2. Environment variables (RD_STATION_TOKEN, RD_STATION_BASE_URL,
       RD_STATION_TIMEOUT), after loading a .env file
    3. The saved configuration file
    4. Defaults (base URL and timeout only)

    Args:
        token: API token
        base_url: API base URL
        env_file: Path of a .env file (searched for when None)

    Returns:
        Resolved ClientConfig

    Raises:
        ConfigError: If no token is available or a setting is invalid
    """
    if env_file is not None:
        load_dotenv(dotenv_path=env_file)
    else:
        load_dotenv()

    try:
        stored = load_config_file()
    except ConfigError:
        stored = {}

    token = token or os.environ.get(TOKEN_ENV) or stored.get("token")
    if not token:
        raise ConfigError(
            f"No API token configured. Set {TOKEN_ENV} or run 'rdstation-crm configure'."
        )

    base_url = base_url or os.environ.get(BASE_URL_ENV) or stored.get("base_url") or DEFAULT_BASE_URL

    # Zero is passed on so ClientConfig rejects it
    raw_timeout = os.environ.get(TIMEOUT_ENV)
    if not raw_timeout:
        raw_timeout = stored.get("timeout_seconds")
    if raw_timeout is None:
        raw_timeout = DEFAULT_TIMEOUT_SECONDS
    try:
        timeout_seconds = float(raw_timeout)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid timeout value: {raw_timeout!r}") from e

    return ClientConfig(token=token, base_url=base_url, timeout_seconds=timeout_seconds)
