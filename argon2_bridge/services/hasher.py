# argon2_bridge/services/hasher.py
from __future__ import annotations

from typing import Any, Mapping

from ..errors import Argon2BridgeError
from ..kdf.encoder import encode
from ..kdf.engine import Argon2Engine, engine as default_engine
from ..kdf.params import ResolvedRequest
from ..kdf.resolver import resolve
from ..schemas import HashingConfig, HashResult
from ..utils.logging import logger


def hash_resolved(request: ResolvedRequest, engine: Argon2Engine = default_engine) -> HashResult:
    """Engine + encoder for an already resolved request. Wipes the request buffers."""
    with request:
        logger.info(
            "Argon2 hash start variant=%s v=%#x t=%s m=%s p=%s len=%s",
            request.variant.value, request.version, request.iterations,
            request.memory, request.parallelism, request.hash_length,
        )
        try:
            raw = engine.hash(
                request.variant,
                request.password,
                request.salt,
                request.iterations,
                request.memory,
                request.parallelism,
                request.hash_length,
                request.version,
            )
        except Argon2BridgeError as e:
            logger.warning("Argon2 hash rejected (%s): %s", e.code, e.message)
            raise
        result = encode(
            raw,
            request.variant,
            request.version,
            request.memory,
            request.iterations,
            request.parallelism,
            request.salt,
        )
    logger.info("Argon2 hash done variant=%s", request.variant.value)
    return result


def argon2_hash(config: HashingConfig | Mapping[str, Any], engine: Argon2Engine = default_engine) -> HashResult:
    """resolve -> hash -> encode. Raises Argon2BridgeError subclasses."""
    return hash_resolved(resolve(config), engine)


def run_argon2(config: Mapping[str, Any]) -> dict:
    """
    Key-value boundary used by the bridges:
      success -> {"rawHash": ..., "encodedHash": ...}
      failure -> {"error": {"code": ..., "message": ...}}
    """
    try:
        return argon2_hash(config).model_dump()
    except Argon2BridgeError as e:
        return {"error": e.to_dict()}
