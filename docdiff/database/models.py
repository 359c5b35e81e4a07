from dataclasses import dataclass, field
from datetime import datetime

from docdiff.comparison.models import Difference
from docdiff.ocr.models import Paragraph

OCR_PENDING = "PENDING"
OCR_RUNNING = "RUNNING"
OCR_DONE = "DONE"
OCR_ERROR = "ERROR"

COMPARISON_CREATED = "CREATED"
COMPARISON_RUNNING = "COMPARE_RUNNING"
COMPARISON_DONE = "DONE"
COMPARISON_ERROR = "ERROR"

JOB_KIND_OCR = "ocr"
JOB_KIND_COMPARE = "compare"


@dataclass
class JobRecord:
    """Represents a row from the job_requests table."""

    id: int
    kind: str
    entity_id: int
    status: str
    attempts: int
    error_message: str | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: int
    filename: str
    blob_id: str
    sha256: str
    mime_type: str
    ocr_status: str = OCR_PENDING
    ocr_error: str | None = None
    ocr_paragraphs: list[Paragraph] = field(default_factory=list)
    ocr_text_payload: str | None = None
    page_count: int | None = None
    uploaded_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class ComparisonRecord:
    """Represents a row from the comparisons table."""

    id: int
    doc_a_id: int
    doc_b_id: int
    status: str = COMPARISON_CREATED
    error_message: str | None = None
    differences: list[Difference] = field(default_factory=list)
    tokens_used: int | None = None
    duration_ms: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
