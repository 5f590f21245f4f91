# argon2_bridge/kdf/engine.py
from argon2.exceptions import HashingError
from argon2.low_level import hash_secret_raw

from ..errors import EngineRejected
from .params import Variant, Version

# floors of the reference C implementation bound by argon2-cffi
MIN_SALT_LENGTH = 8
MIN_HASH_LENGTH = 4
MIN_MEMORY_PER_LANE_KIB = 8


class Argon2Engine:
    """
    Thin adapter over argon2.low_level.hash_secret_raw.

    Runs to completion on the calling thread; the binding releases the GIL
    while the C code works, so callers parallelize with threads.
    """

    def check(self, salt_length: int, iterations: int, memory: int, parallelism: int, hash_length: int) -> None:
        if salt_length < MIN_SALT_LENGTH:
            raise EngineRejected(f"salt must be at least {MIN_SALT_LENGTH} bytes, got {salt_length}")
        if hash_length < MIN_HASH_LENGTH:
            raise EngineRejected(f"hashLength must be at least {MIN_HASH_LENGTH}, got {hash_length}")
        if iterations < 1:
            raise EngineRejected(f"iterations must be at least 1, got {iterations}")
        if parallelism < 1:
            raise EngineRejected(f"parallelism must be at least 1, got {parallelism}")
        if memory < MIN_MEMORY_PER_LANE_KIB * parallelism:
            raise EngineRejected(
                f"memory must be at least {MIN_MEMORY_PER_LANE_KIB} x parallelism "
                f"({MIN_MEMORY_PER_LANE_KIB * parallelism} KiB), got {memory}"
            )

    def hash(self, variant: Variant, password: bytes, salt: bytes, iterations: int, memory: int,
             parallelism: int, hash_length: int, version: Version) -> bytes:
        self.check(len(salt), iterations, memory, parallelism, hash_length)
        try:
            return hash_secret_raw(
                # the binding copies into C buffers; it does not take bytearrays
                bytes(password),
                bytes(salt),
                time_cost=iterations,
                memory_cost=memory,
                parallelism=parallelism,
                hash_len=hash_length,
                type=variant.type,
                version=int(version),
            )
        except HashingError as e:
            raise EngineRejected(str(e)) from e
        except OverflowError as e:
            # cffi refuses values that do not fit the C uint32 arguments
            raise EngineRejected(str(e)) from e


engine = Argon2Engine()
