from ._buffering import AsyncBufferedResponse, AsyncBufferedStream
from ._client import AsyncCacheClient
from ._mock import MockAsyncTransport
from ._requests import AsyncCachingRequestFactory, AsyncConditionalRequest, AsyncTransportRequest
from ._stores import AsyncBaseStore, AsyncInMemoryStore, AsyncRedisStore
from ._transports import AsyncCacheTransport

__all__ = (
    "AsyncBufferedResponse",
    "AsyncBufferedStream",
    "AsyncCacheClient",
    "MockAsyncTransport",
    "AsyncCachingRequestFactory",
    "AsyncConditionalRequest",
    "AsyncTransportRequest",
    "AsyncBaseStore",
    "AsyncInMemoryStore",
    "AsyncRedisStore",
    "AsyncCacheTransport",
)
