from __future__ import annotations

import types
import typing as tp

import httpx

from .._policies import CachePolicy
from ._requests import CachingRequestFactory
from ._stores import BaseStore, InMemoryStore

if tp.TYPE_CHECKING:  # pragma: no cover
    from typing_extensions import Self

__all__ = ("CacheTransport",)


class CacheTransport(httpx.BaseTransport):
    """
    An HTTPX Transport that revalidates GET responses with their ETag.

    :param transport: `Transport` that our class wraps in order to add an HTTP Cache layer on top of
    :type transport: httpx.BaseTransport
    :param store: Store that keeps the cached responses, defaults to None
    :type store: tp.Optional[BaseStore], optional
    :param policy: Policy that decides which methods are cached or purge the cache, defaults to None
    :type policy: tp.Optional[CachePolicy], optional
    """

    def __init__(
        self,
        transport: httpx.BaseTransport,
        store: tp.Optional[BaseStore] = None,
        policy: tp.Optional[CachePolicy] = None,
    ) -> None:
        self._transport = transport
        # Only a store created here is closed with the transport.
        self._owns_store = store is None
        self._store = store if store is not None else InMemoryStore()
        self._factory = CachingRequestFactory(transport=transport, store=self._store, policy=policy)

    @property
    def store(self) -> BaseStore:
        return self._store

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """
        Sends the request, serving the cached body when the origin answers 304.

        :param request: An HTTP request
        :type request: httpx.Request
        :return: An HTTP response
        :rtype: httpx.Response
        """
        pending = self._factory.prepare(request)
        return pending.execute()

    def close(self) -> None:
        if self._owns_store:
            self._store.close()
        self._transport.close()

    def __enter__(self) -> "Self":
        return self

    def __exit__(
        self,
        exc_type: tp.Optional[tp.Type[BaseException]] = None,
        exc_value: tp.Optional[BaseException] = None,
        traceback: tp.Optional[types.TracebackType] = None,
    ) -> None:
        self.close()
