from celery import Celery

from argon2_bridge.config import settings
from argon2_bridge.services.hasher import run_argon2
from argon2_bridge.utils.logging import logger

REDIS_URL = settings.REDIS_URL

celery = Celery("argon2_bridge", broker=REDIS_URL, backend=REDIS_URL)

celery.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    broker_connection_retry_on_startup=True,
    # one hash per worker process at a time; memory is the scarce resource
    worker_prefetch_multiplier=1,
    task_acks_late=True,
)


@celery.task(name="ping")
def ping():
    logger.info("ping received")
    return "pong"


# no autoretry: each attempt costs a full hash, retry policy is the caller's
@celery.task(name="argon2_hash")
def argon2_hash(config: dict) -> dict:
    result = run_argon2(config)
    if "error" in result:
        logger.warning("argon2_hash task failed: %s", result["error"]["code"])
    return result
