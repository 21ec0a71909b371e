import typing as tp

import httpx

__all__ = ("MockTransport",)


class MockTransport(httpx.BaseTransport):
    """Answers with queued responses and remembers every request it was given."""

    def __init__(self) -> None:
        self.mocked_responses: tp.List[tp.Union[httpx.Response, Exception]] = []
        self.requests: tp.List[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(httpx.Request(request.method, request.url, headers=request.headers.copy()))
        response = self.mocked_responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def add_responses(self, responses: tp.List[tp.Union[httpx.Response, Exception]]) -> None:
        self.mocked_responses.extend(responses)
