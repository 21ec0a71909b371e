from __future__ import annotations

import logging
import typing as tp
from collections import OrderedDict

import anyio

try:
    import redis.asyncio as redis
except ImportError:  # pragma: no cover
    redis = None  # type: ignore

from .._models import CacheEntry
from .._serializers import BaseSerializer, JSONSerializer
from .._utils import float_seconds_to_int_milliseconds

logger = logging.getLogger("etagcache.stores")

__all__ = (
    "AsyncBaseStore",
    "AsyncInMemoryStore",
    "AsyncRedisStore",
)


class AsyncBaseStore:
    """
    The associative store the cache layer borrows.

    Implementations do not synchronize themselves. Callers that share a store
    take ``store.lock`` around every operation, so one lock guards the store
    no matter how many transports use it. Subclasses must call
    ``super().__init__()``, which creates that lock.
    """

    def __init__(self) -> None:
        self.lock = anyio.Lock()

    async def contains_key(self, key: str) -> bool:
        raise NotImplementedError()

    async def get(self, key: str) -> tp.Optional[CacheEntry]:
        raise NotImplementedError()

    async def put(self, key: str, entry: CacheEntry) -> None:
        raise NotImplementedError()

    async def remove(self, key: str) -> bool:
        raise NotImplementedError()

    async def aclose(self) -> None:
        raise NotImplementedError()


class AsyncInMemoryStore(AsyncBaseStore):
    """
    A simple in-memory store.

    :param capacity: The maximum number of entries to keep, the least recently used
        entry is dropped first. Defaults to None, which means unbounded
    :type capacity: tp.Optional[int], optional
    """

    def __init__(self, capacity: tp.Optional[int] = None) -> None:
        super().__init__()

        if capacity is not None and capacity <= 0:
            raise ValueError("Capacity must be positive")

        self._capacity = capacity
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    async def contains_key(self, key: str) -> bool:
        return key in self._entries

    async def get(self, key: str) -> tp.Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is not None:
            self._entries.move_to_end(key)
        return entry

    async def put(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry
        self._entries.move_to_end(key)

        if self._capacity is not None and len(self._entries) > self._capacity:
            evicted_key, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted {evicted_key} to stay within {self._capacity} entries")

    async def remove(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def aclose(self) -> None:
        return

    def __len__(self) -> int:
        return len(self._entries)


class AsyncRedisStore(AsyncBaseStore):
    """
    A simple redis store.

    :param serializer: Serializer capable of serializing and de-serializing cache entries, defaults to None
    :type serializer: tp.Optional[BaseSerializer], optional
    :param client: A client for redis, defaults to None
    :type client: tp.Optional["redis.Redis"], optional
    :param ttl: Specifies the maximum number of seconds that an entry is kept, defaults to None
    :type ttl: tp.Optional[tp.Union[int, float]], optional
    :param namespace: Prefix prepended to every key, defaults to "etagcache"
    :type namespace: str, optional
    """

    def __init__(
        self,
        serializer: tp.Optional[BaseSerializer] = None,
        client: tp.Optional[redis.Redis] = None,  # type: ignore
        ttl: tp.Optional[tp.Union[int, float]] = None,
        namespace: str = "etagcache",
    ) -> None:
        if redis is None:  # pragma: no cover
            raise RuntimeError(
                f"The `{type(self).__name__}` was used, but the required packages were not found. "
                "Check that you have `etagcache` installed with the `redis` extension as shown.\n"
                "```pip install etagcache[redis]```"
            )
        super().__init__()

        self._serializer = serializer or JSONSerializer()
        self._ttl = ttl
        self._namespace = namespace

        if client is None:  # pragma: no cover
            self._client = redis.Redis()  # type: ignore
        else:
            self._client = client

    def _full_key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def contains_key(self, key: str) -> bool:
        return bool(await self._client.exists(self._full_key(key)))

    async def get(self, key: str) -> tp.Optional[CacheEntry]:
        data = await self._client.get(self._full_key(key))
        if data is None:
            return None
        return self._serializer.loads(data)

    async def put(self, key: str, entry: CacheEntry) -> None:
        px = float_seconds_to_int_milliseconds(self._ttl) if self._ttl is not None else None
        await self._client.set(self._full_key(key), self._serializer.dumps(entry), px=px)

    async def remove(self, key: str) -> bool:
        return bool(await self._client.delete(self._full_key(key)))

    async def aclose(self) -> None:  # pragma: no cover
        await self._client.aclose()
