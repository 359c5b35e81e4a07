from pathlib import Path

from docdiff.comparison.factory import ComparatorFactory
from docdiff.config.settings import Settings
from docdiff.database.connection import apply_schema, close_pool, init_pool
from docdiff.database.repositories.comparisons_repository import ComparisonsRepository
from docdiff.database.repositories.documents_repository import DocumentsRepository
from docdiff.database.repositories.job_repository import JobRepository
from docdiff.intake.service import IntakeService
from docdiff.jobs.compare_job import CompareJob
from docdiff.jobs.ocr_job import OcrJob
from docdiff.logging.logger import Log
from docdiff.ocr.factory import OcrClientFactory
from docdiff.storage.local_blob_store import LocalBlobStore
from docdiff.worker.dispatcher import JobDispatcher
from docdiff.worker.job_runner import JobRunner
from docdiff.worker.worker import Worker


def build_worker(settings: Settings) -> Worker:
    """Build the worker with provider clients constructed once and injected."""
    doc_repo = DocumentsRepository()
    comparison_repo = ComparisonsRepository()
    job_repo = JobRepository(settings.max_job_attempts)
    ocr_job = OcrJob(
        doc_repo=doc_repo,
        blob_store=LocalBlobStore(Path(settings.blob_store_root)),
        ocr_client=OcrClientFactory.create(settings),
    )
    compare_job = CompareJob(
        comparison_repo=comparison_repo,
        doc_repo=doc_repo,
        comparator=ComparatorFactory.create(settings),
    )
    job_runner = JobRunner(ocr_job, compare_job, job_repo, settings)
    dispatcher = JobDispatcher(job_runner, settings.max_concurrent_jobs)
    return Worker(job_repo, dispatcher, settings)


def build_intake_service(settings: Settings) -> IntakeService:
    """Build the trigger-side service used by the HTTP layer."""
    return IntakeService(
        blob_store=LocalBlobStore(Path(settings.blob_store_root)),
        doc_repo=DocumentsRepository(),
        comparison_repo=ComparisonsRepository(),
        job_repo=JobRepository(settings.max_job_attempts),
        max_upload_mb=settings.max_upload_mb,
    )


def main() -> None:
    """Entry point: initialize pool -> ensure schema -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        apply_schema()
        worker = build_worker(settings)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
