"""Asynchronous RD Station CRM client."""

import asyncio
import logging
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


class AsyncRDStationClient:
    """
    Async counterpart of RDStationClient.

    A call is aborted as soon as ``context.cancel_event`` (an asyncio.Event)
    is set or ``context.timeout`` elapses, whether it is waiting for the
    response or still reading its body, and fails with TransportError.
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config
        self._owns_client = http_client is None

        if http_client is None:
            self.http_client = httpx.AsyncClient(timeout=config.timeout_seconds)
        else:
            self.http_client = http_client

    async def aclose(self) -> None:
        """Close the HTTP client if we created it."""
        if self._owns_client and self.http_client:
            await self.http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False

    async def _request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        response_type: type | None = None,
        acceptable: frozenset[int] = OK,
        context: RequestContext | None = None,
    ) -> Any:
        """Make one authenticated request and decode the response. See RDStationClient._request."""
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
        return await self._run_cancellable(request, endpoint, acceptable, response_type, context)

    async def _exchange(
        self,
        request: httpx.Request,
        endpoint: str,
        acceptable: frozenset[int],
        response_type: type | None,
    ) -> Any:
        """Send the request, read and classify the response, then release it."""
        method = request.method
        try:
            response = await self.http_client.send(request, stream=True)
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {method} {endpoint}: {e}", cause=e) from e

        try:
            if response.status_code not in acceptable:
                try:
                    raw = await response.aread()
                except (httpx.HTTPError, httpx.StreamError) as e:
                    raise BodyReadError(
                        f"Failed to read response body of {method} {endpoint} "
                        f"(status: {response.status_code}): {e}",
                        status_code=response.status_code,
                        cause=e,
                    ) from e
                raise rejected(method, endpoint, response.status_code, raw)

            try:
                raw = await response.aread()
            except (httpx.HTTPError, httpx.StreamError) as e:
                raise DecodeError(
                    f"Failed to read response body of {method} {endpoint}: {e}", cause=e
                ) from e
            return decode_body(raw, response_type, endpoint)
        finally:
            await response.aclose()

    async def _run_cancellable(
        self,
        request: httpx.Request,
        endpoint: str,
        acceptable: frozenset[int],
        response_type: type | None,
        context: RequestContext,
    ) -> Any:
        """
        Race the whole exchange, body included, against the context's cancel
        event and deadline.

        Raises:
            TransportError: If the call was cancelled or ran out of time
        """
        exchange = asyncio.ensure_future(
            self._exchange(request, endpoint, acceptable, response_type)
        )
        waiters = {exchange}

        cancel_wait = None
        if context.cancel_event is not None:
            cancel_wait = asyncio.ensure_future(context.cancel_event.wait())
            waiters.add(cancel_wait)

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=context.timeout, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            await _abandon(exchange)
            raise
        finally:
            if cancel_wait is not None:
                cancel_wait.cancel()

        if exchange in done:
            return exchange.result()

        await _abandon(exchange)
        if context.cancelled:
            raise TransportError(f"{request.method} {endpoint} cancelled")
        raise TransportError(
            f"{request.method} {endpoint} exceeded deadline of {context.timeout}s"
        )

    # ===== DEALS METHODS =====

    async def list_deals(
        self,
        filter: ListDealsFilter | None = None,
        context: RequestContext | None = None,
    ) -> ListDealsResponse:
        return await self._request(
            "GET",
            build_path(endpoints.DEALS, filter or ListDealsFilter()),
            response_type=ListDealsResponse,
            context=context,
        )

    async def create_deal(
        self,
        deal: CreateDealRequest,
        context: RequestContext | None = None,
    ) -> DealResponse:
        return await self._request(
            "POST",
            endpoints.DEALS,
            body=deal,
            response_type=DealResponse,
            acceptable=OK_OR_CREATED,
            context=context,
        )

    async def update_deal(
        self,
        deal_id: str,
        deal: UpdateDealRequest,
        context: RequestContext | None = None,
    ) -> DealResponse:
        return await self._request(
            "PUT",
            endpoints.endpoint_for(endpoints.DEAL_BY_ID, deal_id),
            body=deal,
            response_type=DealResponse,
            context=context,
        )

    # ===== CONTACTS METHODS =====

    async def list_contacts(
        self,
        filter: ListContactsFilter | None = None,
        context: RequestContext | None = None,
    ) -> ListContactsResponse:
        return await self._request(
            "GET",
            build_path(endpoints.CONTACTS, filter or ListContactsFilter()),
            response_type=ListContactsResponse,
            context=context,
        )

    async def create_contact(
        self,
        contact: CreateContactRequest,
        context: RequestContext | None = None,
    ) -> ContactResponse:
        return await self._request(
            "POST",
            endpoints.CONTACTS,
            body=contact,
            response_type=ContactResponse,
            acceptable=OK_OR_CREATED,
            context=context,
        )

    async def update_contact(
        self,
        contact_id: str,
        contact: UpdateContactRequest,
        context: RequestContext | None = None,
    ) -> ContactResponse:
        return await self._request(
            "PUT",
            endpoints.endpoint_for(endpoints.CONTACT_BY_ID, contact_id),
            body=contact,
            response_type=ContactResponse,
            context=context,
        )


async def _abandon(exchange: asyncio.Future) -> None:
    """Cancel an exchange and wait until it has closed its response."""
    exchange.cancel()
    await asyncio.wait({exchange})
    if not exchange.cancelled():
        # Finished before the cancellation landed
        exchange.exception()
