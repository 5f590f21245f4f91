# tests/test_celery_task.py
from argon2_bridge.celery_worker import argon2_hash, celery, ping

def test_ping():
    assert ping() == "pong"

def test_task_returns_plain_result():
    out = argon2_hash({"password": "password", "salt": "somesalt", "memory": 64})
    assert set(out) == {"rawHash", "encodedHash"}
    assert out["encodedHash"].startswith("$argon2id$v=19$m=64,t=2,p=1$")

def test_task_returns_error_dict():
    out = argon2_hash({"password": "password", "salt": "somesalt", "version": 0x11})
    assert out == {"error": {"code": "InvalidVersion",
                             "message": "Invalid Argon2 version 17. Use 0x10 or 0x13"}}

def test_task_registered_without_autoretry():
    task = celery.tasks["argon2_hash"]
    assert not getattr(task, "autoretry_for", ())
    assert celery.conf.worker_prefetch_multiplier == 1
