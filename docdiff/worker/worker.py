import time

from docdiff.config.settings import Settings
from docdiff.database.connection import get_connection
from docdiff.database.models import JobRecord
from docdiff.database.repositories.job_repository import JobRepository
from docdiff.logging.logger import Log
from docdiff.worker.dispatcher import JobDispatcher

_CAPACITY_WAIT_SECONDS = 0.5


class Worker:
    """Poll loop: wait for capacity -> claim -> dispatch."""

    def __init__(
        self,
        job_repo: JobRepository,
        dispatcher: JobDispatcher,
        settings: Settings,
    ) -> None:
        self._job_repo = job_repo
        self._dispatcher = dispatcher
        self._settings = settings

    def run(self, max_jobs: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_jobs is set, stop after dispatching that many jobs and wait
        for them to finish (for testing).
        """
        Log.info("Worker started, polling for jobs")
        jobs_dispatched = 0
        try:
            while max_jobs is None or jobs_dispatched < max_jobs:
                if not self._dispatcher.has_capacity():
                    time.sleep(_CAPACITY_WAIT_SECONDS)
                    continue
                job = self._try_claim_job()
                if job:
                    self._dispatcher.submit(job)
                    jobs_dispatched += 1
                else:
                    Log.debug("No jobs available, sleeping")
                    time.sleep(self._settings.job_poll_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        finally:
            self._dispatcher.shutdown(wait=True)

    def _try_claim_job(self) -> JobRecord | None:
        """Attempt to claim the next pending job. Gracefully handle DB errors."""
        try:
            with get_connection() as conn:
                return self._job_repo.claim_next_job(conn)
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return None
