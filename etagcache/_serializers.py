import base64
import binascii
import json
import pickle
import typing as tp

from etagcache._exceptions import SerializationError
from etagcache._models import CacheEntry, StoredResponse
from etagcache._utils import HEADERS_ENCODING

__all__ = ("PickleSerializer", "JSONSerializer", "BaseSerializer")


class BaseSerializer:
    def dumps(self, entry: CacheEntry) -> tp.Union[str, bytes]:
        raise NotImplementedError()

    def loads(self, data: tp.Union[str, bytes]) -> CacheEntry:
        raise NotImplementedError()

    @property
    def is_binary(self) -> bool:
        raise NotImplementedError()


class PickleSerializer(BaseSerializer):
    """
    A simple pickle-based serializer.
    """

    def dumps(self, entry: CacheEntry) -> tp.Union[str, bytes]:
        """
        Dumps the cache entry.

        :param entry: A validator and the response it identifies
        :type entry: CacheEntry
        :return: Serialized entry
        :rtype: tp.Union[str, bytes]
        """
        return pickle.dumps(entry)

    def loads(self, data: tp.Union[str, bytes]) -> CacheEntry:
        """
        Loads the cache entry from serialized data.

        :param data: Serialized data
        :type data: tp.Union[str, bytes]
        :return: The cache entry
        :rtype: CacheEntry
        """
        if not isinstance(data, bytes):
            raise SerializationError(f"Expected bytes, got {type(data).__name__}")
        try:
            entry = pickle.loads(data)
        except (pickle.UnpicklingError, EOFError) as exc:
            raise SerializationError("Could not unpickle the cache entry") from exc
        if not isinstance(entry, CacheEntry):
            raise SerializationError(f"Expected a CacheEntry, got {type(entry).__name__}")
        return entry

    @property
    def is_binary(self) -> bool:  # pragma: no cover
        return True


class JSONSerializer(BaseSerializer):
    """A simple json-based serializer."""

    def dumps(self, entry: CacheEntry) -> tp.Union[str, bytes]:
        """
        Dumps the cache entry.

        :param entry: A validator and the response it identifies
        :type entry: CacheEntry
        :return: Serialized entry
        :rtype: tp.Union[str, bytes]
        """
        response = entry.response
        response_dict = {
            "status_code": response.status_code,
            "headers": [
                (key.decode(HEADERS_ENCODING), value.decode(HEADERS_ENCODING)) for key, value in response.headers
            ],
            "content": base64.b64encode(response.content).decode("ascii"),
            "extensions": dict(response.extensions),
        }

        full_json = {
            "validator": entry.validator,
            "response": response_dict,
        }

        return json.dumps(full_json, indent=4)

    def loads(self, data: tp.Union[str, bytes]) -> CacheEntry:
        """
        Loads the cache entry from serialized data.

        :param data: Serialized data
        :type data: tp.Union[str, bytes]
        :return: The cache entry
        :rtype: CacheEntry
        """
        try:
            full_json = json.loads(data)
            response_dict = full_json["response"]

            response = StoredResponse(
                status_code=response_dict["status_code"],
                headers=tuple(
                    (key.encode(HEADERS_ENCODING), value.encode(HEADERS_ENCODING))
                    for key, value in response_dict["headers"]
                ),
                content=base64.b64decode(response_dict["content"].encode("ascii"), validate=True),
                extensions=response_dict["extensions"],
            )
            return CacheEntry(validator=full_json["validator"], response=response)
        except (KeyError, TypeError, ValueError, binascii.Error) as exc:
            raise SerializationError("Malformed cache entry") from exc

    @property
    def is_binary(self) -> bool:
        return False
