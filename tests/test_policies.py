import httpx
import pytest

from etagcache import CachePolicy, ConfigurationError, MethodKind


@pytest.mark.parametrize(
    "method, kind",
    [
        ("GET", MethodKind.READ),
        ("get", MethodKind.READ),
        (b"GET", MethodKind.READ),
        ("POST", MethodKind.MUTATE),
        ("PUT", MethodKind.MUTATE),
        ("PATCH", MethodKind.MUTATE),
        ("DELETE", MethodKind.MUTATE),
        ("HEAD", MethodKind.OTHER),
        ("OPTIONS", MethodKind.OTHER),
        ("TRACE", MethodKind.OTHER),
    ],
)
def test_default_decision_table(method, kind):
    assert CachePolicy().classify(method) is kind


def test_custom_methods():
    policy = CachePolicy(cacheable_methods=("GET", "QUERY"), purging_methods=("DELETE",))

    assert policy.classify("QUERY") is MethodKind.READ
    assert policy.classify("POST") is MethodKind.OTHER
    assert policy.classify("DELETE") is MethodKind.MUTATE


def test_overlapping_methods_are_rejected():
    with pytest.raises(ConfigurationError, match="both cacheable and purging"):
        CachePolicy(cacheable_methods=("GET", "POST"))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_body_size": -1},
        {"max_revalidation_retries": -1},
    ],
)
def test_negative_limits_are_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        CachePolicy(**kwargs)


def test_body_limit():
    assert not CachePolicy().exceeds_body_limit(10**9)

    policy = CachePolicy(max_body_size=4)
    assert not policy.exceeds_body_limit(4)
    assert policy.exceeds_body_limit(5)


def test_custom_key_generator():
    policy = CachePolicy(key_generator=lambda request: request.url.path)

    assert policy.key_generator(httpx.Request("GET", "https://example.com/a?b=c")) == "/a"
