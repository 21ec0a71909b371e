from __future__ import annotations

import enum
import typing as t
from dataclasses import dataclass, field

import httpx

from etagcache._exceptions import ConfigurationError
from etagcache._utils import generate_key

__all__ = ("CachePolicy", "MethodKind")


class MethodKind(enum.Enum):
    READ = "read"
    """Responses may be cached and revalidated with a stored ETag."""

    MUTATE = "mutate"
    """The request may change the resource, so the cached entry is evicted up front."""

    OTHER = "other"
    """Passed through without touching the cache."""


@dataclass
class CachePolicy:
    """
    Decides how each request interacts with the cache.

    Attributes:
    ----------
    cacheable_methods : tuple of str
        Methods whose responses are stored and revalidated. Defaults to ``("GET",)``.

    purging_methods : tuple of str
        Methods that evict the cached entry for their URL before they are sent.
        Defaults to ``("POST", "PUT", "PATCH", "DELETE")``.

    max_body_size : int or None
        Responses with a larger body are not stored and evict the existing
        entry. ``None`` disables the limit.

    max_revalidation_retries : int
        How many times a request answered with 304 but missing from the cache
        is sent again without ``If-None-Match``. Once exhausted, the 304 is
        returned to the caller.

    key_generator : callable
        Maps a request to its cache key. Defaults to the URL without fragment.
    """

    cacheable_methods: t.Tuple[str, ...] = ("GET",)
    purging_methods: t.Tuple[str, ...] = ("POST", "PUT", "PATCH", "DELETE")
    max_body_size: t.Optional[int] = None
    max_revalidation_retries: int = 1
    key_generator: t.Callable[[httpx.Request], str] = generate_key

    _decision_table: t.Dict[str, MethodKind] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        cacheable = {method.upper() for method in self.cacheable_methods}
        purging = {method.upper() for method in self.purging_methods}

        overlap = cacheable & purging
        if overlap:
            raise ConfigurationError(f"Methods cannot be both cacheable and purging: {sorted(overlap)}")
        if self.max_body_size is not None and self.max_body_size < 0:
            raise ConfigurationError("max_body_size must be a non-negative integer or None")
        if self.max_revalidation_retries < 0:
            raise ConfigurationError("max_revalidation_retries must be a non-negative integer")

        self._decision_table = {
            **{method: MethodKind.MUTATE for method in purging},
            **{method: MethodKind.READ for method in cacheable},
        }

    def classify(self, method: t.Union[str, bytes]) -> MethodKind:
        if isinstance(method, bytes):
            method = method.decode("ascii")
        return self._decision_table.get(method.upper(), MethodKind.OTHER)

    def exceeds_body_limit(self, size: int) -> bool:
        return self.max_body_size is not None and size > self.max_body_size
