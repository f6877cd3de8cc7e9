"""
RD Station CRM Client

Synchronous client for the deals and contacts resources of the
RD Station CRM API.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any

import httpx

from ..core.errors import BodyReadError, DecodeError, TransportError
from ..core.models import ClientConfig, RequestContext
from ..core.query import build_path
from ..resources import endpoints
from ..resources.contacts import (
    ContactResponse,
    CreateContactRequest,
    ListContactsFilter,
    ListContactsResponse,
    UpdateContactRequest,
)
from ..resources.deals import (
    CreateDealRequest,
    DealResponse,
    ListDealsFilter,
    ListDealsResponse,
    UpdateDealRequest,
)
from .request import (
    DEFAULT_HEADERS,
    OK,
    OK_OR_CREATED,
    build_url,
    decode_body,
    encode_body,
    rejected,
)

logger = logging.getLogger(__name__)

# How often a waiting call checks its cancel event and deadline
CANCEL_POLL_INTERVAL = 0.01


class RDStationClient:
    """
    Client for the RD Station CRM API.

    Features:
    - Token authentication via the "token" query parameter
    - Declarative query strings for listing filters
    - Typed request and response records
    - Every failure raised as an RDStationError subclass

    Requests are never retried. A call made with a cancel event or a
    deadline runs on a worker thread so that it can be abandoned while the
    request or the response body is still in flight.
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Token, base URL and default timeout
            http_client: Optional httpx client (created if None)
        """
        self.config = config

        # Track if we own the HTTP client (for cleanup)
        self._owns_client = http_client is None

        if http_client is None:
            self.http_client = httpx.Client(timeout=config.timeout_seconds)
        else:
            self.http_client = http_client

        self._executor: ThreadPoolExecutor | None = None

    def close(self) -> None:
        """Close the HTTP client if we created it."""
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None
        if self._owns_client and self.http_client:
            self.http_client.close()

    def __enter__(self):
        """Context manager support."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager cleanup."""
        self.close()
        return False

    def _request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        response_type: type | None = None,
        acceptable: frozenset[int] = OK,
        context: RequestContext | None = None,
    ) -> Any:
        """
        Make one authenticated request and decode the response.

        Args:
            method: HTTP method (GET, POST, PUT)
            endpoint: Endpoint path, including any query string
            body: Request body record or JSON value
            response_type: Record class to decode the response into
            acceptable: Status codes treated as success
            context: Per-call timeout and cancellation

        Returns:
            Decoded response

        Raises:
            SerializationError: If the body cannot be encoded
            TransportError: On connection failure, timeout or cancellation
            BodyReadError: If a rejected response body cannot be read
            ApiError: On a status outside ``acceptable``
            DecodeError: If the response does not decode into response_type
        """
        content = encode_body(body)
        url = build_url(self.config.base_url, endpoint, self.config.token)

        if context is None:
            context = RequestContext()
        if context.cancelled:
            raise TransportError(f"{method} {endpoint} cancelled before sending")

        timeout = context.timeout if context.timeout is not None else self.config.timeout_seconds
        request = self.http_client.build_request(
            method,
            url,
            content=content,
            headers=DEFAULT_HEADERS,
            timeout=timeout,
        )

        logger.debug(f"{method} {endpoint}")
        if context.cancel_event is None and context.timeout is None:
            return self._exchange(request, endpoint, acceptable, response_type)
        return self._run_cancellable(request, endpoint, acceptable, response_type, context)

    def _exchange(
        self,
        request: httpx.Request,
        endpoint: str,
        acceptable: frozenset[int],
        response_type: type | None,
    ) -> Any:
        """Send the request, read and classify the response, then release it."""
        method = request.method
        try:
            response = self.http_client.send(request, stream=True)
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {method} {endpoint}: {e}", cause=e) from e

        try:
            if response.status_code not in acceptable:
                try:
                    raw = response.read()
                except (httpx.HTTPError, httpx.StreamError) as e:
                    raise BodyReadError(
                        f"Failed to read response body of {method} {endpoint} "
                        f"(status: {response.status_code}): {e}",
                        status_code=response.status_code,
                        cause=e,
                    ) from e
                raise rejected(method, endpoint, response.status_code, raw)

            try:
                raw = response.read()
            except (httpx.HTTPError, httpx.StreamError) as e:
                raise DecodeError(
                    f"Failed to read response body of {method} {endpoint}: {e}", cause=e
                ) from e
            return decode_body(raw, response_type, endpoint)
        finally:
            response.close()

    def _run_cancellable(
        self,
        request: httpx.Request,
        endpoint: str,
        acceptable: frozenset[int],
        response_type: type | None,
        context: RequestContext,
    ) -> Any:
        """
        Run the exchange on a worker thread until it finishes, the cancel
        event is set or the context deadline passes.

        An abandoned exchange keeps running in the background and closes its
        own response when the transport returns.

        Raises:
            TransportError: If the call was cancelled or ran out of time
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(thread_name_prefix="rdstation-crm")
        future = self._executor.submit(self._exchange, request, endpoint, acceptable, response_type)

        deadline = None
        if context.timeout is not None:
            deadline = time.monotonic() + context.timeout

        while True:
            done, _ = wait([future], timeout=CANCEL_POLL_INTERVAL)
            if done:
                return future.result()

            if context.cancelled:
                future.cancel()
                logger.debug(f"{request.method} {endpoint} cancelled in flight")
                raise TransportError(f"{request.method} {endpoint} cancelled")
            if deadline is not None and time.monotonic() >= deadline:
                future.cancel()
                raise TransportError(
                    f"{request.method} {endpoint} exceeded deadline of {context.timeout}s"
                )

    # ===== DEALS METHODS =====

    def list_deals(
        self,
        filter: ListDealsFilter | None = None,
        context: RequestContext | None = None,
    ) -> ListDealsResponse:
        """
        List deals matching a filter.

        Args:
            filter: Search parameters; pass ``next_page`` from a previous
                response to continue a listing
            context: Per-call timeout and cancellation

        Returns:
            One page of deals
        """
        return self._request(
            "GET",
            build_path(endpoints.DEALS, filter or ListDealsFilter()),
            response_type=ListDealsResponse,
            context=context,
        )

    def create_deal(
        self,
        deal: CreateDealRequest,
        context: RequestContext | None = None,
    ) -> DealResponse:
        """Create a deal."""
        return self._request(
            "POST",
            endpoints.DEALS,
            body=deal,
            response_type=DealResponse,
            acceptable=OK_OR_CREATED,
            context=context,
        )

    def update_deal(
        self,
        deal_id: str,
        deal: UpdateDealRequest,
        context: RequestContext | None = None,
    ) -> DealResponse:
        """Update a deal. Only fields set on the request are changed."""
        return self._request(
            "PUT",
            endpoints.endpoint_for(endpoints.DEAL_BY_ID, deal_id),
            body=deal,
            response_type=DealResponse,
            context=context,
        )

    # ===== CONTACTS METHODS =====

    def list_contacts(
        self,
        filter: ListContactsFilter | None = None,
        context: RequestContext | None = None,
    ) -> ListContactsResponse:
        """
        List contacts matching a filter.

        Args:
            filter: Search parameters (``q`` searches by name)
            context: Per-call timeout and cancellation

        Returns:
            One page of contacts
        """
        return self._request(
            "GET",
            build_path(endpoints.CONTACTS, filter or ListContactsFilter()),
            response_type=ListContactsResponse,
            context=context,
        )

    def create_contact(
        self,
        contact: CreateContactRequest,
        context: RequestContext | None = None,
    ) -> ContactResponse:
        """Create a contact."""
        return self._request(
            "POST",
            endpoints.CONTACTS,
            body=contact,
            response_type=ContactResponse,
            acceptable=OK_OR_CREATED,
            context=context,
        )

    def update_contact(
        self,
        contact_id: str,
        contact: UpdateContactRequest,
        context: RequestContext | None = None,
    ) -> ContactResponse:
        """Update a contact. Only fields set on the request are changed."""
        return self._request(
            "PUT",
            endpoints.endpoint_for(endpoints.CONTACT_BY_ID, contact_id),
            body=contact,
            response_type=ContactResponse,
            context=context,
        )
