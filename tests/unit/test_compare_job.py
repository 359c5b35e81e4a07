from unittest.mock import MagicMock

import pytest

from docdiff.comparison.exceptions import ComparisonValidationError
from docdiff.comparison.models import Change, ComparisonResult, ComparisonSummary, Highlight
from docdiff.database.models import OCR_DONE, OCR_RUNNING, ComparisonRecord, DocumentRecord
from docdiff.jobs.compare_job import CompareJob
from docdiff.jobs.exceptions import ComparisonNotFoundError
from docdiff.ocr.models import BoundingBox, Paragraph

PARAGRAPH_A = Paragraph("P1_0_0", 1, 0, 0, "Total: 100", BoundingBox(10, 10, 50, 20))
PARAGRAPH_B = Paragraph("P1_0_0", 1, 0, 0, "Total: 120", BoundingBox(12, 10, 52, 20))


def _document(document_id: int, status: str = OCR_DONE, paragraph: Paragraph = PARAGRAPH_A) -> DocumentRecord:
    return DocumentRecord(
        id=document_id,
        filename=f"{document_id}.pdf",
        blob_id="ab" * 16,
        sha256="0" * 64,
        mime_type="application/pdf",
        ocr_status=status,
        ocr_paragraphs=[paragraph],
    )


def _result(tokens: int = 50) -> ComparisonResult:
    change = Change(
        category="MODIFIED",
        description="Total changed",
        doc1_text="100",
        doc2_text="120",
        doc1_paragraph_refs=["P1_0_0"],
        doc2_paragraph_refs=["P1_0_0"],
    )
    return ComparisonResult(
        changes=[change],
        summary=ComparisonSummary(total_changes=1, modified_count=1),
        tokens_used=tokens,
    )


def _make_job(
    doc_a_status: str = OCR_DONE,
    doc_b_status: str = OCR_DONE,
) -> tuple[CompareJob, MagicMock, MagicMock, MagicMock]:
    comparison_repo = MagicMock()
    comparison_repo.find_by_id.return_value = ComparisonRecord(id=5, doc_a_id=1, doc_b_id=2)
    doc_repo = MagicMock()
    doc_repo.find_by_id.side_effect = lambda document_id: {
        1: _document(1, doc_a_status, PARAGRAPH_A),
        2: _document(2, doc_b_status, PARAGRAPH_B),
    }[document_id]
    comparator = MagicMock()
    comparator.compare.return_value = _result()
    job = CompareJob(comparison_repo=comparison_repo, doc_repo=doc_repo, comparator=comparator)
    return job, comparison_repo, doc_repo, comparator


class TestCompareJobSuccess:
    def test_marks_running_then_done(self) -> None:
        job, comparison_repo, _docs, _comparator = _make_job()
        job.run(5)
        comparison_repo.mark_running.assert_called_once_with(5)
        comparison_repo.mark_done.assert_called_once()
        comparison_repo.mark_failed.assert_not_called()

    def test_compares_stored_paragraphs(self) -> None:
        job, _repo, _docs, comparator = _make_job()
        job.run(5)
        comparator.compare.assert_called_once_with([PARAGRAPH_A], [PARAGRAPH_B])

    def test_persists_resolved_differences_tokens_and_duration(self) -> None:
        job, comparison_repo, _docs, _comparator = _make_job()
        job.run(5)
        args = comparison_repo.mark_done.call_args
        assert args.args == (5,)
        [difference] = args.kwargs["differences"]
        assert difference.doc1_highlights == [Highlight(1, PARAGRAPH_A.bbox_percent)]
        assert difference.doc2_highlights == [Highlight(1, PARAGRAPH_B.bbox_percent)]
        assert args.kwargs["tokens_used"] == 50
        assert args.kwargs["duration_ms"] >= 0

    def test_rerun_replaces_previous_outcome(self) -> None:
        job, comparison_repo, _docs, comparator = _make_job()
        job.run(5)
        comparator.compare.return_value = ComparisonResult(
            changes=[], summary=ComparisonSummary(), tokens_used=9
        )
        job.run(5)
        last = comparison_repo.mark_done.call_args.kwargs
        assert last["differences"] == []
        assert last["tokens_used"] == 9


class TestCompareJobFailure:
    def test_precondition_failure_marks_error(self) -> None:
        job, comparison_repo, _docs, comparator = _make_job(doc_b_status=OCR_RUNNING)
        job.run(5)
        comparator.compare.assert_not_called()
        message = comparison_repo.mark_failed.call_args.args[1]
        assert comparison_repo.mark_failed.call_args.args[0] == 5
        assert "not completed OCR" in message
        comparison_repo.mark_done.assert_not_called()

    def test_provider_failure_marks_error(self) -> None:
        job, comparison_repo, _docs, comparator = _make_job()
        comparator.compare.side_effect = ComparisonValidationError("Invalid JSON response: x")
        job.run(5)
        comparison_repo.mark_failed.assert_called_once_with(5, "Invalid JSON response: x")

    def test_resolution_failure_marks_error(self) -> None:
        job, comparison_repo, _docs, comparator = _make_job()
        broken = MagicMock()
        broken.changes = None
        comparator.compare.return_value = broken
        job.run(5)
        comparison_repo.mark_failed.assert_called_once()
        comparison_repo.mark_done.assert_not_called()

    def test_unknown_comparison_propagates(self) -> None:
        job, comparison_repo, _docs, _comparator = _make_job()
        comparison_repo.find_by_id.side_effect = ComparisonNotFoundError("Comparison 5 not found")
        with pytest.raises(ComparisonNotFoundError):
            job.run(5)
        comparison_repo.mark_running.assert_not_called()
