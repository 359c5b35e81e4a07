from dataclasses import dataclass, field

from docdiff.ocr.models import BoundingBox, bbox_from_dict, bbox_to_dict

CATEGORIES = ("MODIFIED", "ADDED", "REMOVED", "STRUCTURAL")


@dataclass(frozen=True)
class Change:
    """Provider-emitted difference citing paragraph ids, before resolution.

    ADDED changes are expected to carry no doc1 refs/text and REMOVED
    changes no doc2 refs/text; the provider is asked to, but not trusted to.
    """

    category: str
    description: str
    doc1_text: str | None = None
    doc2_text: str | None = None
    doc1_paragraph_refs: list[str] = field(default_factory=list)
    doc2_paragraph_refs: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Highlight:
    page_number: int
    bbox_percent: BoundingBox


@dataclass(frozen=True)
class Difference:
    """Resolved change with concrete page geometry for each side."""

    category: str
    description: str
    doc1_text: str | None = None
    doc2_text: str | None = None
    doc1_highlights: list[Highlight] = field(default_factory=list)
    doc2_highlights: list[Highlight] = field(default_factory=list)


@dataclass(frozen=True)
class ComparisonSummary:
    total_changes: int = 0
    modified_count: int = 0
    added_count: int = 0
    removed_count: int = 0
    structural_count: int = 0


@dataclass(frozen=True)
class ComparisonResult:
    """Output of the comparison provider after validation."""

    changes: list[Change]
    summary: ComparisonSummary
    tokens_used: int = 0


@dataclass(frozen=True)
class CompletionResponse:
    """Raw provider completion plus token accounting."""

    content: str
    total_tokens: int = 0


def difference_to_dict(difference: Difference) -> dict[str, object]:
    """JSONB-ready representation of a difference."""
    return {
        "category": difference.category,
        "description": difference.description,
        "doc1_text": difference.doc1_text,
        "doc2_text": difference.doc2_text,
        "doc1_highlights": [_highlight_to_dict(h) for h in difference.doc1_highlights],
        "doc2_highlights": [_highlight_to_dict(h) for h in difference.doc2_highlights],
    }


def difference_from_dict(raw: dict[str, object]) -> Difference:
    return Difference(
        category=str(raw.get("category", "")),
        description=str(raw.get("description", "")),
        doc1_text=raw.get("doc1_text"),  # type: ignore[arg-type]
        doc2_text=raw.get("doc2_text"),  # type: ignore[arg-type]
        doc1_highlights=[
            _highlight_from_dict(h) for h in raw.get("doc1_highlights") or []  # type: ignore[attr-defined]
        ],
        doc2_highlights=[
            _highlight_from_dict(h) for h in raw.get("doc2_highlights") or []  # type: ignore[attr-defined]
        ],
    )


def _highlight_to_dict(highlight: Highlight) -> dict[str, object]:
    return {
        "page_number": highlight.page_number,
        "bbox_percent": bbox_to_dict(highlight.bbox_percent),
    }


def _highlight_from_dict(raw: dict[str, object]) -> Highlight:
    return Highlight(
        page_number=int(raw.get("page_number", 1)),  # type: ignore[call-overload]
        bbox_percent=bbox_from_dict(raw.get("bbox_percent")),  # type: ignore[arg-type]
    )
