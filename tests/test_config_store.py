"""Tests for the configuration store."""

import json
import pytest

from rdstation_crm.core.models import ClientConfig, ConfigError, DEFAULT_BASE_URL
from rdstation_crm.core.config_store import (
    get_base_dir,
    config_path,
    save_config,
    load_config_file,
    load_config,
)


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Set up a temporary home directory and a clean environment."""
    home = tmp_path / "home"
    monkeypatch.setenv("RDSTATION_CRM_HOME", str(home))
    for name in ("RD_STATION_TOKEN", "RD_STATION_BASE_URL", "RD_STATION_TIMEOUT"):
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return home


@pytest.fixture
def env_file(tmp_path):
    """Path of a .env file for the test (absent unless written)."""
    return tmp_path / ".env"


def test_get_base_dir_with_env_var(temp_home):
    """Test get_base_dir uses RDSTATION_CRM_HOME environment variable."""
    base_dir = get_base_dir()
    assert base_dir == temp_home
    assert base_dir.exists()


def test_get_base_dir_default(tmp_path, monkeypatch):
    """Test get_base_dir falls back to ~/.rdstation_crm."""
    monkeypatch.delenv("RDSTATION_CRM_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    base_dir = get_base_dir()

    assert base_dir == tmp_path / ".rdstation_crm"
    assert base_dir.is_dir()


def test_config_path(temp_home):
    """Test config_path points into the base directory."""
    assert config_path() == temp_home / "config.json"


def test_save_and_load_config_file(temp_home):
    """Test saving and loading the client configuration."""
    config = ClientConfig(token="abc", base_url="https://crm.test", timeout_seconds=4.0)

    path = save_config(config)
    assert path.exists()

    assert load_config_file() == config.to_dict()


def test_saved_config_is_formatted(temp_home):
    """Test that saved JSON is properly formatted."""
    path = save_config(ClientConfig(token="abc"))

    content = path.read_text()
    assert "\n" in content
    assert json.loads(content)["token"] == "abc"


def test_load_config_file_missing(temp_home):
    """Test load_config_file raises ConfigError for missing file."""
    with pytest.raises(ConfigError) as exc_info:
        load_config_file()

    assert "not found" in str(exc_info.value).lower()


def test_load_config_file_invalid_json(temp_home):
    """Test load_config_file raises ConfigError for invalid JSON."""
    config_path().write_text("{ invalid json content")

    with pytest.raises(ConfigError) as exc_info:
        load_config_file()

    assert "invalid json" in str(exc_info.value).lower()


def test_load_config_file_not_an_object(temp_home):
    """Test load_config_file rejects JSON that is not an object."""
    config_path().write_text("[1, 2]")

    with pytest.raises(ConfigError):
        load_config_file()


# ===== Resolution Order Tests =====

def test_load_config_without_token(temp_home, env_file):
    """Test that a missing token raises ConfigError."""
    with pytest.raises(ConfigError) as exc_info:
        load_config(env_file=env_file)

    assert "RD_STATION_TOKEN" in str(exc_info.value)


def test_load_config_from_arguments(temp_home, env_file, monkeypatch):
    """Test that explicit arguments win over everything else."""
    monkeypatch.setenv("RD_STATION_TOKEN", "from-env")
    save_config(ClientConfig(token="from-file", base_url="https://file.test"))

    config = load_config(token="explicit", base_url="https://explicit.test", env_file=env_file)

    assert config.token == "explicit"
    assert config.base_url == "https://explicit.test"


def test_load_config_from_environment(temp_home, env_file, monkeypatch):
    """Test that environment variables win over the config file."""
    monkeypatch.setenv("RD_STATION_TOKEN", "from-env")
    monkeypatch.setenv("RD_STATION_BASE_URL", "https://env.test")
    monkeypatch.setenv("RD_STATION_TIMEOUT", "2.5")
    save_config(ClientConfig(token="from-file", base_url="https://file.test"))

    config = load_config(env_file=env_file)

    assert config.token == "from-env"
    assert config.base_url == "https://env.test"
    assert config.timeout_seconds == 2.5


def test_load_config_from_file(temp_home, env_file):
    """Test that the saved config is used when nothing else is set."""
    save_config(ClientConfig(token="from-file", base_url="https://file.test", timeout_seconds=7.0))

    config = load_config(env_file=env_file)

    assert config.token == "from-file"
    assert config.base_url == "https://file.test"
    assert config.timeout_seconds == 7.0


def test_load_config_defaults(temp_home, env_file):
    """Test defaults for base URL and timeout."""
    config = load_config(token="abc", env_file=env_file)

    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout_seconds == 10.0


def test_load_config_from_dotenv(temp_home, env_file):
    """Test that a .env file populates the environment."""
    env_file.write_text("RD_STATION_TOKEN=from-dotenv\n")

    config = load_config(env_file=env_file)

    assert config.token == "from-dotenv"


def test_load_config_invalid_timeout(temp_home, env_file, monkeypatch):
    """Test that a non-numeric timeout raises ConfigError."""
    monkeypatch.setenv("RD_STATION_TIMEOUT", "soon")

    with pytest.raises(ConfigError):
        load_config(token="abc", env_file=env_file)


@pytest.mark.parametrize("raw_timeout", ["0", "-1"])
def test_load_config_rejects_non_positive_env_timeout(temp_home, env_file, monkeypatch, raw_timeout):
    """Test that a zero or negative timeout is rejected, not replaced by the default."""
    monkeypatch.setenv("RD_STATION_TIMEOUT", raw_timeout)

    with pytest.raises(ConfigError):
        load_config(token="abc", env_file=env_file)


def test_load_config_rejects_zero_stored_timeout(temp_home, env_file):
    """Test that a stored timeout of 0 is rejected, not replaced by the default."""
    config_path().write_text(json.dumps({"token": "abc", "timeout_seconds": 0}))

    with pytest.raises(ConfigError):
        load_config(env_file=env_file)
