"""Sends HubRequests over the network. The only place in the package performing I/O."""

from __future__ import annotations

import logging
from asyncio import TimeoutError
from ssl import SSLContext
from typing import Protocol

from aiohttp import ClientError, ClientSession

from ..exceptions import TransportError
from .request_builder import HubRequest
from .response_parser import HubResponse

_LOGGER = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything able to execute one HubRequest and hand back the raw response."""

    async def send(self, request: HubRequest) -> HubResponse:
        ...

    async def close(self):
        ...


class AiohttpTransport:
    """
    Transport backed by an aiohttp ClientSession.
    A session passed in stays owned by the caller, otherwise one is created on first use and closed by close().
    """

    def __init__(self, session: ClientSession | None = None, ssl: SSLContext | bool = False):
        self._session = session
        self._owns_session = session is None
        # hubs serve a self signed certificate
        self._ssl = ssl

    async def send(self, request: HubRequest) -> HubResponse:
        if self._session is None:
            self._session = ClientSession()
            self._owns_session = True

        try:
            async with self._session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                ssl=self._ssl,
            ) as resp:
                body = await resp.read()
                return HubResponse(resp.status, body)
        except TimeoutError as ex:
            msg = f"Timeout error during query of url {request.url}: {ex}"
            raise TransportError(msg) from ex
        except ClientError as ex:
            msg = f"Error during query of url {request.url}: {ex}"
            raise TransportError(msg) from ex

    async def close(self):
        if self._owns_session and self._session is not None:
            await self._session.close()
            _LOGGER.debug("Closed owned HTTP session")
        self._session = None
