import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field

from docdiff.database.models import JobRecord
from docdiff.logging.logger import Log
from docdiff.worker.job_runner import JobRunner


@dataclass
class _EntityLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0  # runs holding or waiting for the lock


class JobDispatcher:
    """Runs claimed job requests on a bounded thread pool.

    Each submission returns a Future. Runs for the same (kind, entity_id)
    are serialized, so a re-trigger waits for the run in progress instead of
    racing it for the entity's final state.
    """

    def __init__(self, job_runner: JobRunner, max_workers: int) -> None:
        self._job_runner = job_runner
        self._max_workers = max(1, max_workers)
        self._executor = ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix="docdiff-job",
        )
        self._lock = threading.Lock()
        self._in_flight = 0
        self._entity_locks: dict[tuple[str, int], _EntityLock] = {}

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    def has_capacity(self) -> bool:
        return self.in_flight < self._max_workers

    def submit(self, job: JobRecord) -> "Future[None]":
        with self._lock:
            self._in_flight += 1
        try:
            future = self._executor.submit(self._run_serialized, job)
        except RuntimeError:
            with self._lock:
                self._in_flight -= 1
            raise
        future.add_done_callback(lambda f: self._on_done(job, f))
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run_serialized(self, job: JobRecord) -> None:
        key = (job.kind, job.entity_id)
        entity_lock = self._acquire_entity_lock(key)
        try:
            with entity_lock:
                self._job_runner.run(job)
        finally:
            self._release_entity_lock(key)

    def _acquire_entity_lock(self, key: tuple[str, int]) -> threading.Lock:
        with self._lock:
            entry = self._entity_locks.get(key)
            if entry is None:
                entry = self._entity_locks[key] = _EntityLock()
            entry.holders += 1
            return entry.lock

    def _release_entity_lock(self, key: tuple[str, int]) -> None:
        with self._lock:
            entry = self._entity_locks[key]
            entry.holders -= 1
            if entry.holders == 0:
                del self._entity_locks[key]

    def _on_done(self, job: JobRecord, future: "Future[None]") -> None:
        with self._lock:
            self._in_flight -= 1
        if future.cancelled():
            Log.warning(f"Job {job.id} was cancelled before it ran")
            return
        exc = future.exception()
        if exc is not None:
            Log.exception(f"Job {job.id} ({job.kind} {job.entity_id}) crashed: {exc}", exc)
