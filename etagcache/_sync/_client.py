import typing as tp

import httpx

from .._policies import CachePolicy
from ._stores import BaseStore, InMemoryStore
from ._transports import CacheTransport

__all__ = ("CacheClient",)


class CacheClient(httpx.Client):
    def __init__(
        self,
        *args: tp.Any,
        store: tp.Optional[BaseStore] = None,
        policy: tp.Optional[CachePolicy] = None,
        **kwargs: tp.Any,
    ):
        # Every mounted transport shares one store.
        self._store = store if store is not None else InMemoryStore()
        self._policy = policy
        super().__init__(*args, **kwargs)

    @property
    def store(self) -> BaseStore:
        return self._store

    def _init_transport(self, *args, **kwargs) -> CacheTransport:  # type: ignore
        _transport = super()._init_transport(*args, **kwargs)
        return CacheTransport(
            transport=_transport,
            store=self._store,
            policy=self._policy,
        )

    def _init_proxy_transport(self, *args, **kwargs) -> CacheTransport:  # type: ignore
        _transport = super()._init_proxy_transport(*args, **kwargs)  # pragma: no cover
        return CacheTransport(  # pragma: no cover
            transport=_transport,
            store=self._store,
            policy=self._policy,
        )
