# argon2_bridge/errors.py
from __future__ import annotations


class Argon2BridgeError(Exception):
    """Base for every failure surfaced to callers.

    `code` is the stable identifier callers switch on; the exception class is
    an implementation detail of this package.
    """

    code = "Argon2Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class MissingField(Argon2BridgeError):
    code = "MissingField"

    def __init__(self, field: str):
        super().__init__(f"{field} is required")
        self.field = field


class InvalidHexEncoding(Argon2BridgeError):
    code = "InvalidHexEncoding"

    def __init__(self, field: str):
        super().__init__(f"Invalid hex string for {field}")
        self.field = field


class InvalidVersion(Argon2BridgeError):
    code = "InvalidVersion"

    def __init__(self, value):
        super().__init__(f"Invalid Argon2 version {value!r}. Use 0x10 or 0x13")
        self.value = value


class InvalidParameter(Argon2BridgeError):
    code = "InvalidParameter"


class EngineRejected(Argon2BridgeError):
    code = "EngineRejected"

    def __init__(self, reason: str):
        super().__init__(f"Argon2 engine rejected the request: {reason}")
        self.reason = reason
