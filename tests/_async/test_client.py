import httpx
import pytest

import etagcache

ETAG = '"1234"'


@pytest.mark.anyio
async def test_client_replays_cached_body():
    transport = etagcache.MockAsyncTransport()
    transport.add_responses(
        [
            httpx.Response(200, headers=[("ETag", ETAG)], content=b"Test"),
            httpx.Response(304, headers=[("ETag", ETAG)]),
        ]
    )

    async with etagcache.AsyncCacheClient(transport=transport) as client:
        first = await client.get("https://www.example.com/r1")
        second = await client.get("https://www.example.com/r1")

        assert first.text == "Test"
        assert not first.extensions["from_cache"]
        assert second.status_code == 200
        assert second.text == "Test"
        assert second.extensions["from_cache"]
        assert transport.requests[1].headers["If-None-Match"] == ETAG


@pytest.mark.anyio
async def test_client_delete_evicts_entry():
    store = etagcache.AsyncInMemoryStore()
    transport = etagcache.MockAsyncTransport()
    transport.add_responses(
        [
            httpx.Response(200, headers=[("ETag", ETAG)], content=b"Test"),
            httpx.Response(204),
            httpx.Response(200, headers=[("ETag", '"5678"')], content=b"Recreated"),
        ]
    )

    async with etagcache.AsyncCacheClient(transport=transport, store=store) as client:
        await client.get("https://www.example.com/r1")
        assert client.store is store
        assert await store.contains_key("https://www.example.com/r1")

        response = await client.delete("https://www.example.com/r1")
        assert response.status_code == 204
        assert not await store.contains_key("https://www.example.com/r1")

        response = await client.get("https://www.example.com/r1")
        assert response.text == "Recreated"
        assert "If-None-Match" not in transport.requests[2].headers


@pytest.mark.anyio
async def test_client_response_without_etag_is_not_cached():
    store = etagcache.AsyncInMemoryStore()
    transport = etagcache.MockAsyncTransport()
    transport.add_responses([httpx.Response(200, content=b"Test")])

    async with etagcache.AsyncCacheClient(transport=transport, store=store) as client:
        response = await client.get("https://www.example.com/r1")

        assert response.text == "Test"
        assert not await store.contains_key("https://www.example.com/r1")


@pytest.mark.anyio
async def test_closing_one_client_keeps_the_shared_store():
    store = etagcache.AsyncInMemoryStore()
    first_transport = etagcache.MockAsyncTransport()
    first_transport.add_responses([httpx.Response(200, headers=[("ETag", ETAG)], content=b"Test")])
    second_transport = etagcache.MockAsyncTransport()
    second_transport.add_responses([httpx.Response(304, headers=[("ETag", ETAG)])])

    async with etagcache.AsyncCacheClient(transport=first_transport, store=store) as client:
        await client.get("https://www.example.com/r1")

    async with etagcache.AsyncCacheClient(transport=second_transport, store=store) as client:
        response = await client.get("https://www.example.com/r1")

        assert second_transport.requests[0].headers["If-None-Match"] == ETAG
        assert response.status_code == 200
        assert response.text == "Test"
        assert response.extensions["from_cache"]
