from __future__ import annotations

import typing as tp

import httpx

HEADERS_ENCODING = "iso-8859-1"

ETAG_HEADER = "ETag"
IF_NONE_MATCH_HEADER = "If-None-Match"
CONTENT_LENGTH_HEADER = "Content-Length"

NOT_MODIFIED = 304


def normalized_url(url: httpx.URL) -> str:
    return str(url.copy_with(fragment=None))


def generate_key(request: httpx.Request) -> str:
    """
    Build the cache key of a request.

    The key is the request URL without its fragment, so `http://a/b#x` and
    `http://a/b` share one cache entry. The method is not part of the key:
    mutations must evict the entry that reads created.
    """
    return normalized_url(request.url)


def get_validator(headers: httpx.Headers) -> tp.Optional[str]:
    return headers.get(ETAG_HEADER)


def get_content_length(headers: httpx.Headers) -> tp.Optional[int]:
    value = headers.get(CONTENT_LENGTH_HEADER)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def float_seconds_to_int_milliseconds(seconds: float) -> int:
    return int(seconds * 1000)
