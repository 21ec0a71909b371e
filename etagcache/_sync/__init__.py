from ._buffering import BufferedResponse, BufferedStream
from ._client import CacheClient
from ._mock import MockTransport
from ._requests import CachingRequestFactory, ConditionalRequest, TransportRequest
from ._stores import BaseStore, InMemoryStore, RedisStore
from ._transports import CacheTransport

__all__ = (
    "BufferedResponse",
    "BufferedStream",
    "CacheClient",
    "MockTransport",
    "CachingRequestFactory",
    "ConditionalRequest",
    "TransportRequest",
    "BaseStore",
    "InMemoryStore",
    "RedisStore",
    "CacheTransport",
)
