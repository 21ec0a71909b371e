from __future__ import annotations

import logging
import typing as tp

import httpx
from typing_extensions import assert_never

from .._models import CacheEntry
from .._policies import CachePolicy, MethodKind
from .._utils import IF_NONE_MATCH_HEADER, NOT_MODIFIED, get_content_length, get_validator
from ._buffering import BufferedResponse
from ._stores import BaseStore

logger = logging.getLogger("etagcache.requests")

__all__ = ("CachingRequestFactory", "ConditionalRequest", "TransportRequest")


def without_validator(request: httpx.Request) -> httpx.Request:
    headers = request.headers.copy()
    headers.pop(IF_NONE_MATCH_HEADER, None)
    return httpx.Request(
        method=request.method,
        url=request.url,
        headers=headers,
        stream=request.stream,
        extensions=request.extensions,
    )


class TransportRequest:
    """
    A request bound to the transport that will send it.

    :param transport: Transport the request is sent through
    :type transport: httpx.BaseTransport
    :param request: The outgoing request
    :type request: httpx.Request
    """

    def __init__(self, transport: httpx.BaseTransport, request: httpx.Request) -> None:
        self._transport = transport
        self.request = request

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def url(self) -> httpx.URL:
        return self.request.url

    @property
    def headers(self) -> httpx.Headers:
        return self.request.headers

    def execute(self) -> httpx.Response:
        return self._transport.handle_request(self.request)


class ConditionalRequest(TransportRequest):
    """
    A cacheable request that revalidates and refreshes the cached entry of its key.

    :param transport: Transport the request is sent through
    :type transport: httpx.BaseTransport
    :param request: The outgoing request, already carrying `If-None-Match` when a validator was known
    :type request: httpx.Request
    :param key: Cache key of the requested resource
    :type key: str
    :param store: The shared store
    :type store: BaseStore
    :param policy: Policy in effect
    :type policy: CachePolicy
    """

    def __init__(
        self,
        transport: httpx.BaseTransport,
        request: httpx.Request,
        key: str,
        store: BaseStore,
        policy: CachePolicy,
    ) -> None:
        super().__init__(transport, request)
        self.key = key
        self._store = store
        self._policy = policy

    def execute(self) -> httpx.Response:
        request = self.request
        retries = 0

        while True:
            response = self._transport.handle_request(request)

            logger.debug(f"Response status: {response.status_code}")

            if response.status_code != NOT_MODIFIED:
                return self._handle_response(response)

            with self._store.lock:
                entry = self._store.get(self.key)

            if entry is not None:
                response.close()
                logger.debug(f"Returning cached response of {self.key}")
                return entry.response.to_response()

            if retries >= self._policy.max_revalidation_retries:
                logger.warning(f"Got 304 for {self.key} without a cached response, giving up after {retries} retries")
                return response

            # The entry was evicted after the validator was attached.
            response.close()
            request = without_validator(request)
            retries += 1
            logger.debug(f"No cached response of {self.key}, retrying without a validator")

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        validator = get_validator(response.headers)

        if validator is None or self._policy.classify(self.request.method) is not MethodKind.READ:
            return response

        content_length = get_content_length(response.headers)
        if content_length is not None and self._policy.exceeds_body_limit(content_length):
            self._evict(f"Removed cache of {self.key} because its response is too large to be cached!")
            return response

        buffered = BufferedResponse.drain(response)

        if not buffered.content:
            self._evict(f"Removed cache of {self.key} because it has no content!")
        elif self._policy.exceeds_body_limit(len(buffered.content)):
            self._evict(f"Removed cache of {self.key} because its response is too large to be cached!")
        else:
            with self._store.lock:
                self._store.put(self.key, CacheEntry(validator=validator, response=buffered.to_stored()))
            logger.debug(f"Response of {self.key} has been cached.")

        return buffered.to_response()

    def _evict(self, message: str) -> None:
        with self._store.lock:
            self._store.remove(self.key)
        logger.debug(message)


class CachingRequestFactory:
    """
    Creates requests that apply ETag caching on top of a transport.

    :param transport: `Transport` that actually sends the requests
    :type transport: httpx.BaseTransport
    :param store: Store shared by every request the factory creates
    :type store: BaseStore
    :param policy: Decides which methods are cached or purge the cache, defaults to None
    :type policy: tp.Optional[CachePolicy], optional
    """

    def __init__(
        self,
        transport: httpx.BaseTransport,
        store: BaseStore,
        policy: tp.Optional[CachePolicy] = None,
    ) -> None:
        self._transport = transport
        self._store = store
        self._policy = policy if policy is not None else CachePolicy()

    @property
    def store(self) -> BaseStore:
        return self._store

    @property
    def policy(self) -> CachePolicy:
        return self._policy

    def create_request(
        self,
        url: tp.Union[httpx.URL, str],
        method: str,
        *,
        headers: tp.Optional[tp.Mapping[str, str]] = None,
        content: tp.Optional[bytes] = None,
    ) -> TransportRequest:
        return self.prepare(httpx.Request(method, url, headers=headers, content=content))

    def prepare(self, request: httpx.Request) -> TransportRequest:
        key = self._policy.key_generator(request)
        kind = self._policy.classify(request.method)

        if kind is MethodKind.MUTATE:
            with self._store.lock:
                self._store.remove(key)
            logger.debug(f"Cache of {key} response has been removed.")
            return TransportRequest(self._transport, request)
        elif kind is MethodKind.READ:
            if request.extensions.get("cache_disabled", False):
                return TransportRequest(self._transport, request)

            with self._store.lock:
                entry = self._store.get(key)
            if entry is not None:
                logger.debug(f"Setting header {IF_NONE_MATCH_HEADER}: {entry.validator}")
                request.headers[IF_NONE_MATCH_HEADER] = entry.validator
            return ConditionalRequest(self._transport, request, key, self._store, self._policy)
        elif kind is MethodKind.OTHER:
            return TransportRequest(self._transport, request)
        else:
            assert_never(kind)
