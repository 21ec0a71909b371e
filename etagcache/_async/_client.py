import typing as tp

import httpx

from .._policies import CachePolicy
from ._stores import AsyncBaseStore, AsyncInMemoryStore
from ._transports import AsyncCacheTransport

__all__ = ("AsyncCacheClient",)


class AsyncCacheClient(httpx.AsyncClient):
    def __init__(
        self,
        *args: tp.Any,
        store: tp.Optional[AsyncBaseStore] = None,
        policy: tp.Optional[CachePolicy] = None,
        **kwargs: tp.Any,
    ):
        # Every mounted transport shares one store.
        self._store = store if store is not None else AsyncInMemoryStore()
        self._policy = policy
        super().__init__(*args, **kwargs)

    @property
    def store(self) -> AsyncBaseStore:
        return self._store

    def _init_transport(self, *args, **kwargs) -> AsyncCacheTransport:  # type: ignore
        _transport = super()._init_transport(*args, **kwargs)
        return AsyncCacheTransport(
            transport=_transport,
            store=self._store,
            policy=self._policy,
        )

    def _init_proxy_transport(self, *args, **kwargs) -> AsyncCacheTransport:  # type: ignore
        _transport = super()._init_proxy_transport(*args, **kwargs)  # pragma: no cover
        return AsyncCacheTransport(  # pragma: no cover
            transport=_transport,
            store=self._store,
            policy=self._policy,
        )
