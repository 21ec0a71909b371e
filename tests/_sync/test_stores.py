import typing as tp

import pytest

import etagcache

URL = "http://localhost/1234"


def make_entry(content: bytes = b"Test", validator: str = '"1234"') -> etagcache.CacheEntry:
    return etagcache.CacheEntry(
        validator=validator,
        response=etagcache.StoredResponse(
            status_code=200,
            headers=((b"ETag", validator.encode("ascii")), (b"Content-Type", b"application/json")),
            content=content,
            extensions={"reason_phrase": "OK"},
        ),
    )


class FakeRedis:
    def __init__(self) -> None:
        self.data: tp.Dict[str, tp.Union[str, bytes]] = {}
        self.expirations: tp.Dict[str, tp.Optional[int]] = {}

    def exists(self, key: str) -> int:
        return int(key in self.data)

    def get(self, key: str) -> tp.Optional[tp.Union[str, bytes]]:
        return self.data.get(key)

    def set(self, key: str, value: tp.Union[str, bytes], px: tp.Optional[int] = None) -> None:
        self.data[key] = value
        self.expirations[key] = px

    def delete(self, key: str) -> int:
        return int(self.data.pop(key, None) is not None)



def test_inmemory_store_round_trip():
    store = etagcache.InMemoryStore()
    entry = make_entry()

    store.put(URL, entry)

    assert store.contains_key(URL)
    stored = store.get(URL)
    assert stored == entry
    assert stored is not None and stored.response.content == b"Test"



def test_inmemory_store_put_replaces_entry():
    store = etagcache.InMemoryStore()

    store.put(URL, make_entry(b"Test1"))
    store.put(URL, make_entry(b"Test2", validator='"5678"'))

    assert len(store) == 1
    assert store.get(URL) == make_entry(b"Test2", validator='"5678"')



def test_inmemory_store_remove():
    store = etagcache.InMemoryStore()
    store.put(URL, make_entry())

    assert store.remove(URL)
    assert not store.remove(URL)
    assert store.get(URL) is None
    assert not store.contains_key(URL)



def test_inmemory_store_evicts_least_recently_used():
    store = etagcache.InMemoryStore(capacity=2)

    store.put("http://localhost/1", make_entry(b"1"))
    store.put("http://localhost/2", make_entry(b"2"))
    store.get("http://localhost/1")
    store.put("http://localhost/3", make_entry(b"3"))

    assert store.contains_key("http://localhost/1")
    assert not store.contains_key("http://localhost/2")
    assert store.contains_key("http://localhost/3")


def test_inmemory_store_invalid_capacity():
    with pytest.raises(ValueError, match="Capacity must be positive"):
        etagcache.InMemoryStore(capacity=0)



def test_closing_inmemory_store_keeps_entries():
    store = etagcache.InMemoryStore()
    store.put(URL, make_entry())

    store.close()

    assert len(store) == 1
    assert store.get(URL) == make_entry()



@pytest.mark.parametrize("serializer", [etagcache.JSONSerializer(), etagcache.PickleSerializer()])
def test_redis_store_round_trip(serializer: etagcache.BaseSerializer):
    client = FakeRedis()
    store = etagcache.RedisStore(serializer=serializer, client=client)  # type: ignore[arg-type]
    entry = make_entry()

    store.put(URL, entry)

    assert list(client.data) == ["etagcache:http://localhost/1234"]
    assert client.expirations["etagcache:http://localhost/1234"] is None
    assert store.contains_key(URL)
    assert store.get(URL) == entry



def test_redis_store_ttl_and_namespace():
    client = FakeRedis()
    store = etagcache.RedisStore(client=client, ttl=1.5, namespace="responses")  # type: ignore[arg-type]

    store.put(URL, make_entry())

    assert client.expirations == {"responses:http://localhost/1234": 1500}



def test_redis_store_remove():
    store = etagcache.RedisStore(client=FakeRedis())  # type: ignore[arg-type]
    store.put(URL, make_entry())

    assert store.remove(URL)
    assert not store.remove(URL)
    assert store.get(URL) is None
