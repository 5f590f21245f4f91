# argon2_bridge/kdf/params.py
from __future__ import annotations

import enum
from dataclasses import dataclass

from argon2.low_level import Type

from ..errors import InvalidVersion
from ..hashing import wipe
from ..utils.logging import logger

# -----------------------------
# Defaults (portable contract)
# -----------------------------
DEFAULT_ITERATIONS = 2
DEFAULT_MEMORY_KIB = 32 * 1024
DEFAULT_PARALLELISM = 1
DEFAULT_HASH_LENGTH = 32


class ArgonEncoding:
    UTF8 = "utf8"
    HEX = "hex"


class ArgonVersion:
    V10 = 0x10
    V13 = 0x13


class Variant(enum.Enum):
    ARGON2D = "argon2d"
    ARGON2I = "argon2i"
    ARGON2ID = "argon2id"

    @property
    def type(self) -> Type:
        return _VARIANT_TYPES[self]

    @property
    def tag(self) -> str:
        # "argon2id" -> "id", as written after "$argon2" in the encoded form
        return self.value[len("argon2"):]

    @classmethod
    def parse(cls, value) -> Variant:
        """Lenient: anything unrecognized becomes argon2id."""
        if value is None:
            return cls.ARGON2ID
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unknown Argon2 variant %r, falling back to argon2id", value)
            return cls.ARGON2ID

    @classmethod
    def from_tag(cls, tag: str) -> Variant:
        return cls("argon2" + tag)


_VARIANT_TYPES = {
    Variant.ARGON2D: Type.D,
    Variant.ARGON2I: Type.I,
    Variant.ARGON2ID: Type.ID,
}


class Version(enum.IntEnum):
    V10 = ArgonVersion.V10
    V13 = ArgonVersion.V13

    @classmethod
    def parse(cls, value) -> Version:
        """Strict: only the integers 0x10 and 0x13 are accepted."""
        if value is None:
            return cls.V13
        # bool is an int subclass; True must not sneak through as 0x01
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidVersion(value)
        try:
            return cls(value)
        except ValueError:
            raise InvalidVersion(value) from None


@dataclass(frozen=True)
class ResolvedRequest:
    """
    Fully specified hashing request. Password and salt live in bytearrays
    that are zeroed when the `with` block exits, whatever the outcome.
    """
    password: bytearray
    salt: bytearray
    variant: Variant
    version: Version
    iterations: int
    memory: int
    parallelism: int
    hash_length: int

    def wipe(self) -> None:
        wipe(self.password)
        wipe(self.salt)

    def __enter__(self) -> ResolvedRequest:
        return self

    def __exit__(self, *exc_info) -> None:
        self.wipe()

    def __repr__(self) -> str:
        return (
            f"ResolvedRequest(variant={self.variant.value}, version={self.version:#x}, "
            f"t={self.iterations}, m={self.memory}, p={self.parallelism}, "
            f"hash_length={self.hash_length})"
        )
