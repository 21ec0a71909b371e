from __future__ import annotations

import io
import typing as tp

import httpx
from httpx import SyncByteStream

from .._models import StoredResponse

__all__ = ("BufferedResponse", "BufferedStream")


class BufferedStream(SyncByteStream):
    def __init__(self, content: bytes, owner: "BufferedResponse"):
        self._content = content
        self._owner = owner

    def __iter__(self) -> tp.Iterator[bytes]:
        if self._content:
            yield self._content

    def close(self) -> None:
        self._owner.close()


class BufferedResponse:
    """
    Buffers the body of a transport response so it can be read any number of times.

    Status, reason phrase and headers are read from the original response,
    which is closed at most once, by whoever consumes the buffered response last.

    :param response: The response the body was read from
    :type response: httpx.Response
    :param content: The complete body of `response`
    :type content: bytes
    """

    def __init__(self, response: httpx.Response, content: bytes) -> None:
        self._response = response
        self._content = content
        self._closed = False

    @classmethod
    def drain(cls, response: httpx.Response) -> "BufferedResponse":
        assert isinstance(response.stream, tp.Iterable)
        buffer = bytearray()
        for chunk in response.stream:
            buffer.extend(chunk)
        return cls(response, bytes(buffer))

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason_phrase(self) -> str:
        return self._response.reason_phrase

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    @property
    def content(self) -> bytes:
        return self._content

    @property
    def is_closed(self) -> bool:
        return self._closed

    def body(self) -> io.BytesIO:
        return io.BytesIO(self._content)

    def to_response(self) -> httpx.Response:
        extensions = dict(self._response.extensions)
        extensions["from_cache"] = False
        return httpx.Response(
            status_code=self._response.status_code,
            headers=self._response.headers.raw,
            stream=BufferedStream(self._content, self),
            extensions=extensions,
        )

    def to_stored(self) -> StoredResponse:
        return StoredResponse.from_response(self._response, self._content)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._response.close()
