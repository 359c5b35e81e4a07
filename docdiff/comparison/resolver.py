"""Resolves provider paragraph citations into highlight geometry."""

from collections.abc import Iterable, Mapping, Sequence

from docdiff.comparison.models import Change, Difference, Highlight
from docdiff.ocr.models import ZERO_BOX, Paragraph

# "Something changed but the cited paragraphs are unknown" marker.
FALLBACK_HIGHLIGHT = Highlight(page_number=1, bbox_percent=ZERO_BOX)


def resolve_differences(
    changes: Sequence[Change],
    doc1_paragraphs: Iterable[Paragraph],
    doc2_paragraphs: Iterable[Paragraph],
) -> list[Difference]:
    """Map each change to a Difference, preserving count and order."""
    doc1_lookup = {p.id: p for p in doc1_paragraphs}
    doc2_lookup = {p.id: p for p in doc2_paragraphs}
    return [
        Difference(
            category=change.category,
            description=change.description,
            doc1_text=change.doc1_text,
            doc2_text=change.doc2_text,
            doc1_highlights=resolve_refs(change.doc1_paragraph_refs, doc1_lookup),
            doc2_highlights=resolve_refs(change.doc2_paragraph_refs, doc2_lookup),
        )
        for change in changes
    ]


def resolve_refs(refs: Sequence[str], lookup: Mapping[str, Paragraph]) -> list[Highlight]:
    """Highlights for the refs that resolve; the fallback if none do."""
    if not refs:
        return []
    highlights = [
        Highlight(page_number=lookup[ref].page_number, bbox_percent=lookup[ref].bbox_percent)
        for ref in refs
        if ref in lookup
    ]
    return highlights or [FALLBACK_HIGHLIGHT]
