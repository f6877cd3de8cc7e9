"""
Request pipeline steps shared by the sync and async clients.

The clients own the transport call and response lifetime; everything that
does not touch the network lives here.
"""

import json
import logging
from typing import Any
from urllib.parse import quote

from ..core.errors import ApiError, DecodeError, SerializationError
from ..resources.base import Record

logger = logging.getLogger(__name__)

# Acceptable status sets
OK = frozenset({200})
OK_OR_CREATED = frozenset({200, 201})

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def encode_body(body: Any) -> bytes | None:
    """
    Serialize a request body to UTF-8 JSON.

    Args:
        body: Record, JSON-serializable value, or None

    Returns:
        Encoded body, or None when there is no body

    Raises:
        SerializationError: If the value cannot be encoded
    """
    if body is None:
        return None

    if isinstance(body, Record):
        body = body.to_dict()

    try:
        return json.dumps(body, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode request body: {e}", cause=e) from e


def build_url(base_url: str, endpoint: str, token: str) -> str:
    """
    Build the full request URL with the API token appended.

    Args:
        base_url: API base URL
        endpoint: Endpoint path, possibly with a query string
        token: API token

    Returns:
        Full URL ending in a "token" query parameter
    """
    base_url = base_url.rstrip("/")
    endpoint = endpoint.lstrip("/")
    url = f"{base_url}/{endpoint}"

    separator = "&" if "?" in url else "?"
    return f"{url}{separator}token={quote(token, safe='')}"


def rejected(method: str, endpoint: str, status_code: int, content: bytes) -> ApiError:
    """Build the error for a response outside the acceptable status set."""
    body = content.decode("utf-8", errors="replace")
    logger.warning(f"{method} {endpoint} rejected with status {status_code}")
    return ApiError(
        f"API request failed: {method} {endpoint} (status: {status_code}): {body}",
        status_code=status_code,
        body=body,
    )


def decode_body(content: bytes, response_type: type | None, endpoint: str) -> Any:
    """
    Decode a response body into the target type.

    Args:
        content: Raw response body
        response_type: Record class to decode into, or None for the plain
            JSON value
        endpoint: Endpoint path, for error messages

    Returns:
        Decoded value

    Raises:
        DecodeError: If the body is not JSON or does not fit the target type
    """
    try:
        payload = json.loads(content)
    except ValueError as e:
        raise DecodeError(f"Invalid JSON in response from {endpoint}: {e}", cause=e) from e

    if response_type is None:
        return payload

    try:
        return response_type.from_dict(payload)
    except (TypeError, ValueError) as e:
        raise DecodeError(
            f"Response from {endpoint} does not match {response_type.__name__}: {e}",
            cause=e,
        ) from e
