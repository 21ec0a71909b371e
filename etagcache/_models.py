from __future__ import annotations

import typing as tp
from dataclasses import dataclass, field

import httpx

from etagcache._utils import HEADERS_ENCODING

KNOWN_RESPONSE_EXTENSIONS = ("http_version", "reason_phrase")

__all__ = ("CacheEntry", "StoredResponse", "KNOWN_RESPONSE_EXTENSIONS")


@dataclass(frozen=True)
class StoredResponse:
    """
    A fully materialized response, safe to hand out to any number of callers.

    :param status_code: The status code the origin answered with
    :type status_code: int
    :param headers: Raw response headers
    :type headers: tp.Tuple[tp.Tuple[bytes, bytes], ...]
    :param content: The complete response body
    :type content: bytes
    :param extensions: Known response extensions, decoded to text
    :type extensions: tp.Dict[str, str]
    """

    status_code: int
    headers: tp.Tuple[tp.Tuple[bytes, bytes], ...]
    content: bytes
    extensions: tp.Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_response(cls, response: httpx.Response, content: bytes) -> "StoredResponse":
        extensions = {
            key: value.decode(HEADERS_ENCODING) if isinstance(value, bytes) else str(value)
            for key, value in response.extensions.items()
            if key in KNOWN_RESPONSE_EXTENSIONS
        }
        return cls(
            status_code=response.status_code,
            headers=tuple(response.headers.raw),
            content=content,
            extensions=extensions,
        )

    def to_response(self) -> httpx.Response:
        extensions: tp.Dict[str, tp.Any] = {
            key: value.encode(HEADERS_ENCODING) for key, value in self.extensions.items()
        }
        extensions["from_cache"] = True
        return httpx.Response(
            status_code=self.status_code,
            headers=list(self.headers),
            stream=httpx.ByteStream(self.content),
            extensions=extensions,
        )


@dataclass(frozen=True)
class CacheEntry:
    validator: str
    """The ETag exactly as the origin sent it, quotes included."""

    response: StoredResponse
