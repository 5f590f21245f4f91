import re

from .errors import InvalidHexEncoding, InvalidParameter

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]+$")
_WHITESPACE = re.compile(r"\s+")

def normalize_hex(value: str | bytes, field: str = "value") -> str:
    """
    Strip whitespace and validate a hex string prior to decoding.
    - bytes input must be ASCII text
    - at least one hex digit pair, even length
    """
    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode("ascii")
        except UnicodeDecodeError:
            raise InvalidHexEncoding(field) from None
    v = _WHITESPACE.sub("", value)
    if not HEX_PATTERN.match(v) or len(v) % 2 != 0:
        raise InvalidHexEncoding(field)
    return v

def decode_hex(value: str | bytes, field: str = "value") -> bytearray:
    """Each pair of hex digits becomes one byte, left to right."""
    v = normalize_hex(value, field)
    return bytearray(int(v[i:i + 2], 16) for i in range(0, len(v), 2))

def encode_hex(data: bytes | bytearray) -> str:
    # always lowercase, two digits per byte
    return "".join(f"{b:02x}" for b in data)

def to_bytes(value: str | bytes, is_hex: bool, field: str) -> bytearray:
    """
    Returns a mutable copy of the input material so the caller can wipe it.
    - hex: decoded digit pairs
    - text: UTF-8 encoding, bytes taken as-is
    Text that cannot be UTF-8 encoded (lone surrogates) raises InvalidParameter.
    """
    if is_hex:
        return decode_hex(value, field)
    if isinstance(value, (bytes, bytearray)):
        return bytearray(value)
    try:
        return bytearray(value.encode("utf-8"))
    except UnicodeEncodeError:
        raise InvalidParameter(f"{field} is not encodable as UTF-8 text") from None

def wipe(buf: bytearray) -> None:
    for i in range(len(buf)):
        buf[i] = 0
