from __future__ import annotations

import types
import typing as tp

import httpx

from .._policies import CachePolicy
from ._requests import AsyncCachingRequestFactory
from ._stores import AsyncBaseStore, AsyncInMemoryStore

if tp.TYPE_CHECKING:  # pragma: no cover
    from typing_extensions import Self

__all__ = ("AsyncCacheTransport",)


class AsyncCacheTransport(httpx.AsyncBaseTransport):
    """
    An HTTPX Transport that revalidates GET responses with their ETag.

    :param transport: `Transport` that our class wraps in order to add an HTTP Cache layer on top of
    :type transport: httpx.AsyncBaseTransport
    :param store: Store that keeps the cached responses, defaults to None
    :type store: tp.Optional[AsyncBaseStore], optional
    :param policy: Policy that decides which methods are cached or purge the cache, defaults to None
    :type policy: tp.Optional[CachePolicy], optional
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport,
        store: tp.Optional[AsyncBaseStore] = None,
        policy: tp.Optional[CachePolicy] = None,
    ) -> None:
        self._transport = transport
        # Only a store created here is closed with the transport.
        self._owns_store = store is None
        self._store = store if store is not None else AsyncInMemoryStore()
        self._factory = AsyncCachingRequestFactory(transport=transport, store=self._store, policy=policy)

    @property
    def store(self) -> AsyncBaseStore:
        return self._store

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """
        Sends the request, serving the cached body when the origin answers 304.

        :param request: An HTTP request
        :type request: httpx.Request
        :return: An HTTP response
        :rtype: httpx.Response
        """
        pending = await self._factory.prepare(request)
        return await pending.execute()

    async def aclose(self) -> None:
        if self._owns_store:
            await self._store.aclose()
        await self._transport.aclose()

    async def __aenter__(self) -> "Self":
        return self

    async def __aexit__(
        self,
        exc_type: tp.Optional[tp.Type[BaseException]] = None,
        exc_value: tp.Optional[BaseException] = None,
        traceback: tp.Optional[types.TracebackType] = None,
    ) -> None:
        await self.aclose()
