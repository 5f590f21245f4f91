# tests/test_hasher.py
import re

import pytest

from argon2 import PasswordHasher

from argon2_bridge.errors import EngineRejected, InvalidVersion, MissingField
from argon2_bridge.kdf.encoder import parse_encoded
from argon2_bridge.kdf.engine import Argon2Engine
from argon2_bridge.kdf.params import Variant
from argon2_bridge.services.hasher import argon2_hash, run_argon2

HEX64 = re.compile(r"^[0-9a-f]{64}$")

class RecordingEngine(Argon2Engine):
    """Keeps a handle on the buffers it was given so tests can see them wiped."""
    def __init__(self, fail=False):
        self.fail = fail
        self.seen = []

    def hash(self, variant, password, salt, *args):
        self.seen.append((password, salt))
        if self.fail:
            raise EngineRejected("nope")
        return b"\x11" * args[3]

def test_default_scenario():
    res = argon2_hash({"password": "password", "salt": "somesalt"})
    assert HEX64.match(res.rawHash)
    assert res.encodedHash.startswith("$argon2id$v=19$m=32768,t=2,p=1$")

def test_result_verifies_with_password_hasher():
    res = argon2_hash({"password": "password", "salt": "somesalt", "variant": "argon2i",
                       "iterations": 1, "memory": 1024, "parallelism": 2})
    assert PasswordHasher().verify(res.encodedHash, "password")

def test_deterministic():
    cfg = {"password": "password", "salt": "somesalt", "memory": 256, "iterations": 1}
    assert argon2_hash(cfg) == argon2_hash(cfg)

def test_hex_input_equals_text_input():
    text = argon2_hash({"password": "password", "salt": "somesalt", "memory": 256})
    hexed = argon2_hash({"password": "70617373776f7264", "salt": "736f6d6573616c74",
                         "isHexEncoded": True, "memory": 256})
    assert hexed == text

def test_four_byte_salt_rejected_in_both_encodings():
    # "salt" decodes fine but is under the engine's 8-byte floor
    with pytest.raises(EngineRejected):
        argon2_hash({"password": "70617373776f7264", "salt": "73616c74", "isHexEncoded": True})
    with pytest.raises(EngineRejected):
        argon2_hash({"password": "password", "salt": "salt"})

@pytest.mark.parametrize("version,tag", [(0x10, "v=16"), (0x13, "v=19")])
def test_version_echoed(version, tag):
    res = argon2_hash({"password": "password", "salt": "somesalt", "version": version, "memory": 64})
    assert res.encodedHash.split("$")[2] == tag

def test_versions_differ():
    a = argon2_hash({"password": "password", "salt": "somesalt", "version": 0x10, "memory": 64})
    b = argon2_hash({"password": "password", "salt": "somesalt", "version": 0x13, "memory": 64})
    assert a.rawHash != b.rawHash

def test_round_trip_through_parse():
    res = argon2_hash({"password": "pw", "salt": "0123456789", "variant": "argon2d", "version": 0x10,
                       "iterations": 3, "memory": 128, "parallelism": 2, "hashLength": 20})
    p = parse_encoded(res.encodedHash)
    assert p.variant is Variant.ARGON2D
    assert p.version == 0x10
    assert (p.memory, p.iterations, p.parallelism) == (128, 3, 2)
    assert p.salt == b"0123456789"
    assert p.hash.hex() == res.rawHash
    assert len(res.rawHash) == 40

def test_invalid_version_fails_before_engine():
    eng = RecordingEngine()
    with pytest.raises(InvalidVersion):
        argon2_hash({"password": "p", "salt": "somesalt", "version": 0x11}, eng)
    assert eng.seen == []

def test_buffers_wiped_after_success():
    eng = RecordingEngine()
    res = argon2_hash({"password": "password", "salt": "somesalt", "hashLength": 4}, eng)
    assert res.rawHash == "11111111"
    password, salt = eng.seen[0]
    assert not any(password) and not any(salt)

def test_buffers_wiped_after_engine_failure():
    eng = RecordingEngine(fail=True)
    with pytest.raises(EngineRejected):
        argon2_hash({"password": "password", "salt": "somesalt"}, eng)
    password, salt = eng.seen[0]
    assert len(password) == 8 and not any(password)
    assert not any(salt)

def test_run_argon2_success_shape():
    out = run_argon2({"password": "password", "salt": "somesalt", "memory": 64})
    assert set(out) == {"rawHash", "encodedHash"}

@pytest.mark.parametrize("cfg,code", [
    ({"salt": "somesalt"}, MissingField.code),
    ({"password": "zz", "salt": "somesalt", "isHexEncoded": True}, "InvalidHexEncoding"),
    ({"password": "p", "salt": "somesalt", "version": 0x11}, "InvalidVersion"),
    ({"password": "p", "salt": "somesalt", "memory": "lots"}, "InvalidParameter"),
    ({"password": "pa\ud800ss", "salt": "somesalt"}, "InvalidParameter"),
    ({"password": "p", "salt": "short"}, "EngineRejected"),
])
def test_run_argon2_error_codes(cfg, code):
    out = run_argon2(cfg)
    assert out["error"]["code"] == code
    assert out["error"]["message"]
