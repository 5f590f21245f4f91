# argon2_bridge/kdf/encoder.py
from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from ..errors import InvalidParameter
from ..hashing import encode_hex
from ..schemas import HashResult
from .params import Variant, Version

# $argon2<type>[$v=<version>]$m=<m>,t=<t>,p=<p>$<salt>$<hash>
ENCODED_RE = re.compile(
    r"^\$argon2(?P<tag>id|i|d)"
    r"(?:\$v=(?P<version>\d+))?"
    r"\$m=(?P<memory>\d+),t=(?P<iterations>\d+),p=(?P<parallelism>\d+)"
    r"\$(?P<salt>[A-Za-z0-9+/]+)"
    r"\$(?P<hash>[A-Za-z0-9+/]+)$"
)


def b64_nopad(data: bytes | bytearray) -> str:
    return base64.b64encode(bytes(data)).decode("ascii").rstrip("=")


def b64_nopad_decode(text: str) -> bytes:
    return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)


def encode_string(raw_hash: bytes, variant: Variant, version: int, memory: int, iterations: int,
                  parallelism: int, salt: bytes | bytearray) -> str:
    return (
        f"$argon2{variant.tag}$v={int(version)}"
        f"$m={memory},t={iterations},p={parallelism}"
        f"${b64_nopad(salt)}${b64_nopad(raw_hash)}"
    )


def encode(raw_hash: bytes, variant: Variant, version: int, memory: int, iterations: int,
           parallelism: int, salt: bytes | bytearray) -> HashResult:
    return HashResult(
        rawHash=encode_hex(raw_hash),
        encodedHash=encode_string(raw_hash, variant, version, memory, iterations, parallelism, salt),
    )


@dataclass(frozen=True)
class ParsedHash:
    variant: Variant
    version: Version
    memory: int
    iterations: int
    parallelism: int
    salt: bytes
    hash: bytes


def parse_encoded(encoded: str) -> ParsedHash:
    """
    Inverse of encode_string. A missing v= segment means 0x10, which is how
    the reference decoder reads hashes written before version 1.3.
    """
    m = ENCODED_RE.match(encoded or "")
    if not m:
        raise InvalidParameter("Malformed Argon2 encoded hash")
    version = int(m["version"]) if m["version"] is not None else Version.V10
    if version not in (Version.V10, Version.V13):
        raise InvalidParameter(f"Unsupported Argon2 version in encoded hash: {version}")
    try:
        salt = b64_nopad_decode(m["salt"])
        digest = b64_nopad_decode(m["hash"])
    except binascii.Error as e:
        raise InvalidParameter(f"Malformed base64 in encoded hash: {e}") from e
    return ParsedHash(
        variant=Variant.from_tag(m["tag"]),
        version=Version(version),
        memory=int(m["memory"]),
        iterations=int(m["iterations"]),
        parallelism=int(m["parallelism"]),
        salt=salt,
        hash=digest,
    )
