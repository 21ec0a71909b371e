__all__ = ("EtagCacheError", "ConfigurationError", "SerializationError")


class EtagCacheError(Exception): ...


class ConfigurationError(EtagCacheError): ...


class SerializationError(EtagCacheError): ...
