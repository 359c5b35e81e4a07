import time

from docdiff.comparison.comparator import Comparator
from docdiff.comparison.resolver import resolve_differences
from docdiff.database.models import OCR_DONE
from docdiff.database.repositories.comparisons_repository import ComparisonsRepository
from docdiff.database.repositories.documents_repository import DocumentsRepository
from docdiff.jobs.exceptions import PreconditionError, error_message
from docdiff.logging.logger import Log


class CompareJob:
    """Drives one comparison through CREATED -> COMPARE_RUNNING -> DONE | ERROR.

    OCR readiness is checked when the job runs, not when it is scheduled.
    A re-run replaces the previous run's differences, token usage and
    duration.
    """

    def __init__(
        self,
        comparison_repo: ComparisonsRepository,
        doc_repo: DocumentsRepository,
        comparator: Comparator,
    ) -> None:
        self._comparison_repo = comparison_repo
        self._doc_repo = doc_repo
        self._comparator = comparator

    def run(self, comparison_id: int) -> None:
        """Run the compare job; every failure after COMPARE_RUNNING ends in ERROR.

        Raises:
            ComparisonNotFoundError: if the comparison does not exist.
        """
        comparison = self._comparison_repo.find_by_id(comparison_id)
        self._comparison_repo.mark_running(comparison_id)
        Log.info(f"[compare-job] COMPARE_RUNNING compId={comparison_id}")
        start = time.monotonic()
        try:
            doc_a = self._doc_repo.find_by_id(comparison.doc_a_id)
            doc_b = self._doc_repo.find_by_id(comparison.doc_b_id)
            if doc_a.ocr_status != OCR_DONE or doc_b.ocr_status != OCR_DONE:
                raise PreconditionError(
                    "One or both documents have not completed OCR "
                    f"(document {doc_a.id}: {doc_a.ocr_status}, "
                    f"document {doc_b.id}: {doc_b.ocr_status})"
                )

            result = self._comparator.compare(doc_a.ocr_paragraphs, doc_b.ocr_paragraphs)
            differences = resolve_differences(
                result.changes,
                doc_a.ocr_paragraphs,
                doc_b.ocr_paragraphs,
            )

            duration_ms = int((time.monotonic() - start) * 1000)
            self._comparison_repo.mark_done(
                comparison_id,
                differences=differences,
                tokens_used=result.tokens_used,
                duration_ms=duration_ms,
            )
            Log.info(
                f"[compare-job] DONE compId={comparison_id} diffs={len(differences)} "
                f"tokens={result.tokens_used} durationMs={duration_ms}"
            )
        except Exception as exc:
            message = error_message(exc)
            Log.error(f"[compare-job] ERROR compId={comparison_id}: {message}")
            self._comparison_repo.mark_failed(comparison_id, message)
