from docdiff.config.settings import Settings
from docdiff.database.models import JOB_KIND_COMPARE, JOB_KIND_OCR, JobRecord
from docdiff.database.repositories.job_repository import JobRepository
from docdiff.jobs.compare_job import CompareJob
from docdiff.jobs.exceptions import error_message
from docdiff.jobs.ocr_job import OcrJob
from docdiff.logging.logger import Log


class JobRunner:
    """Run one job request, catch exceptions, and apply redelivery logic.

    The jobs persist their own ERROR states; anything reaching this runner
    means the entity could not be found or its terminal state could not be
    written, so the request goes back to pending until max attempts.
    """

    def __init__(
        self,
        ocr_job: OcrJob,
        compare_job: CompareJob,
        job_repo: JobRepository,
        settings: Settings,
    ) -> None:
        self._ocr_job = ocr_job
        self._compare_job = compare_job
        self._job_repo = job_repo
        self._settings = settings

    def run(self, job: JobRecord) -> None:
        """Execute a single job request with error handling."""
        Log.info(
            f"Running {job.kind} job {job.id} for entity {job.entity_id} "
            f"(attempt {job.attempts + 1})"
        )
        try:
            self._dispatch(job)
            self._job_repo.mark_done(job.id)
            Log.info(f"Job {job.id} completed")
        except Exception as exc:
            self._handle_failure(job, exc)

    def _dispatch(self, job: JobRecord) -> None:
        if job.kind == JOB_KIND_OCR:
            self._ocr_job.run(job.entity_id)
        elif job.kind == JOB_KIND_COMPARE:
            self._compare_job.run(job.entity_id)
        else:
            raise ValueError(f"Unknown job kind '{job.kind}'")

    def _handle_failure(self, job: JobRecord, exc: Exception) -> None:
        """Increment attempts; mark failed if at max, otherwise back to pending."""
        message = error_message(exc)
        Log.error(f"Job {job.id} failed: {message}")
        if job.attempts + 1 >= self._settings.max_job_attempts:
            self._job_repo.mark_failed(job.id, message)
            Log.error(f"Job {job.id} permanently failed after {job.attempts + 1} attempts")
        else:
            self._job_repo.increment_attempts(job.id, message)
            Log.warning(f"Job {job.id} will be retried (attempt {job.attempts + 1})")
