"""Core data models for the RD Station CRM client."""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_BASE_URL = "https://crm.rdstation.com/api/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings shared by every call of a client."""
    token: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        if not self.token:
            raise ConfigError("An API token is required")
        if not self.base_url:
            raise ConfigError("A base URL is required")
        if self.timeout_seconds <= 0:
            raise ConfigError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert ClientConfig to a dictionary."""
        return {
            "token": self.token,
            "base_url": self.base_url,
            "timeout_seconds": self.timeout_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """Create ClientConfig from a dictionary."""
        return cls(
            token=data["token"],
            base_url=data.get("base_url", DEFAULT_BASE_URL),
            timeout_seconds=float(data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
        )


@dataclass
class RequestContext:
    """
    Per-call execution context.

    Attributes:
        timeout: Deadline for this call in seconds. Overrides the client
            timeout when set.
        cancel_event: threading.Event (sync client) or asyncio.Event
            (async client). Setting it aborts the call.
    """
    timeout: float | None = None
    cancel_event: Any = field(default=None, repr=False)

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


class ConfigError(Exception):
    """Raised when there is an error loading or saving configuration."""
    pass
