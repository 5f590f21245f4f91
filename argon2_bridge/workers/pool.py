# argon2_bridge/workers/pool.py
from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from ..config import settings
from ..kdf.engine import Argon2Engine, engine as default_engine
from ..kdf.params import DEFAULT_MEMORY_KIB, ResolvedRequest
from ..kdf.resolver import resolve
from ..schemas import HashingConfig, HashResult
from ..services.hasher import hash_resolved
from ..utils.logging import logger


class MemoryBudget:
    """
    Counts KiB committed to in-flight hashes. A reservation larger than the
    whole budget is clamped to it, so such a job waits for an idle pool and
    then runs alone.
    """

    def __init__(self, total_kib: int):
        if total_kib < 1:
            raise ValueError("memory budget must be positive")
        self.total_kib = total_kib
        self.in_use_kib = 0
        self._cond = threading.Condition()

    def acquire(self, kib: int) -> int:
        kib = min(max(kib, 0), self.total_kib)
        with self._cond:
            self._cond.wait_for(lambda: self.in_use_kib + kib <= self.total_kib)
            self.in_use_kib += kib
        return kib

    def release(self, kib: int) -> None:
        with self._cond:
            self.in_use_kib -= kib
            self._cond.notify_all()

    @contextmanager
    def reserve(self, kib: int) -> Iterator[int]:
        held = self.acquire(kib)
        try:
            yield held
        finally:
            self.release(held)


def default_worker_count(max_workers: int, memory_budget_kib: int) -> int:
    # enough threads to fill the budget with default-cost hashes, never more than configured
    return max(1, min(max_workers, memory_budget_kib // DEFAULT_MEMORY_KIB))


class HashWorkerPool:
    """
    Runs hashes off the request-accepting thread. Started jobs are never
    cancelled; callers wanting a timeout wait on the future and drop it.
    """

    def __init__(self, max_workers: int | None = None, memory_budget_kib: int | None = None,
                 engine: Argon2Engine = default_engine):
        budget = memory_budget_kib or settings.HASH_MEMORY_BUDGET_KIB
        workers = max_workers or default_worker_count(settings.HASH_WORKERS, budget)
        self.budget = MemoryBudget(budget)
        self.max_workers = workers
        self._engine = engine
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="argon2")
        logger.info("Argon2 worker pool started workers=%s budget=%s KiB", workers, budget)

    def _job(self, request: ResolvedRequest) -> HashResult:
        with request:
            # reject impossible costs before they hold any of the budget
            self._engine.check(len(request.salt), request.iterations, request.memory,
                               request.parallelism, request.hash_length)
            with self.budget.reserve(request.memory):
                return hash_resolved(request, self._engine)

    def submit(self, config: HashingConfig | Mapping[str, Any]) -> Future:
        """Validation errors raise here, synchronously; engine errors land in the future."""
        request = resolve(config)
        try:
            fut = self._executor.submit(self._job, request)
        except BaseException:
            request.wipe()
            raise
        # a job cancelled while queued never reaches _job's `with request`
        fut.add_done_callback(lambda f: request.wipe() if f.cancelled() else None)
        return fut

    async def run(self, config: HashingConfig | Mapping[str, Any]) -> HashResult:
        return await asyncio.wrap_future(self.submit(config))

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
        logger.info("Argon2 worker pool stopped")

    def __enter__(self) -> HashWorkerPool:
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
