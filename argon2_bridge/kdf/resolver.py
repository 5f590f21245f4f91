# argon2_bridge/kdf/resolver.py
from __future__ import annotations

from typing import Any, Mapping

from ..errors import Argon2BridgeError, MissingField
from ..hashing import normalize_hex, to_bytes, wipe
from ..schemas import HashingConfig
from .params import (
    DEFAULT_HASH_LENGTH,
    DEFAULT_ITERATIONS,
    DEFAULT_MEMORY_KIB,
    DEFAULT_PARALLELISM,
    ResolvedRequest,
    Variant,
    Version,
)


def _default(value: int | None, fallback: int) -> int:
    return fallback if value is None else value


class HashRequestResolver:
    """
    Turns a caller configuration into a ResolvedRequest.

    Everything that can be rejected without touching the engine is rejected
    here, before any byte conversion: presence, hex shape, version.
    Cost parameters are only defaulted; their bounds belong to the engine.
    """

    def resolve(self, config: HashingConfig | Mapping[str, Any]) -> ResolvedRequest:
        if not isinstance(config, HashingConfig):
            config = HashingConfig.from_mapping(config)

        # presence
        for field in ("password", "salt"):
            if getattr(config, field) is None:
                raise MissingField(field)

        # hex shape, both fields, before decoding either
        if config.is_hex_encoded:
            normalize_hex(config.password, "password")
            normalize_hex(config.salt, "salt")

        # variant is lenient, version is strict
        variant = Variant.parse(config.variant)
        version = Version.parse(config.version)

        # bytes
        password = to_bytes(config.password, config.is_hex_encoded, "password")
        try:
            salt = to_bytes(config.salt, config.is_hex_encoded, "salt")
        except Argon2BridgeError:
            wipe(password)
            raise

        return ResolvedRequest(
            password=password,
            salt=salt,
            variant=variant,
            version=version,
            iterations=_default(config.iterations, DEFAULT_ITERATIONS),
            memory=_default(config.memory, DEFAULT_MEMORY_KIB),
            parallelism=_default(config.parallelism, DEFAULT_PARALLELISM),
            hash_length=_default(config.hash_length, DEFAULT_HASH_LENGTH),
        )


_resolver = HashRequestResolver()


def resolve(config: HashingConfig | Mapping[str, Any]) -> ResolvedRequest:
    return _resolver.resolve(config)
