"""Validates the parsed comparison response and builds typed records."""

from typing import Any

from docdiff.comparison.exceptions import ComparisonValidationError
from docdiff.comparison.models import CATEGORIES, Change, ComparisonSummary

_MAX_CHANGES = 500
_SUMMARY_FIELDS = (
    "total_changes",
    "modified_count",
    "added_count",
    "removed_count",
    "structural_count",
)


def validate_and_build(data: dict[str, Any]) -> tuple[list[Change], ComparisonSummary]:
    """Validate raw parsed JSON and build the change list and summary.

    A missing summary is derived from the change list.

    Raises:
        ComparisonValidationError: on any validation failure.
    """
    if "changes" not in data:
        raise ComparisonValidationError("Missing required top-level field: changes")
    changes = _build_changes(data["changes"])
    summary = _build_summary(data.get("summary"), changes)
    return changes, summary


def _build_changes(raw: Any) -> list[Change]:
    if not isinstance(raw, list):
        raise ComparisonValidationError("'changes' must be a list")
    if len(raw) > _MAX_CHANGES:
        raise ComparisonValidationError(
            f"Too many changes: {len(raw)} (max {_MAX_CHANGES})"
        )
    return [_build_change(item, i) for i, item in enumerate(raw)]


def _build_change(raw: Any, index: int) -> Change:
    if not isinstance(raw, dict):
        raise ComparisonValidationError(f"Change at index {index} must be an object")
    for field in ("category", "description", "doc1_paragraph_refs", "doc2_paragraph_refs"):
        if field not in raw:
            raise ComparisonValidationError(
                f"Change at index {index}: missing required field '{field}'"
            )
    category = raw["category"]
    if not isinstance(category, str) or category.strip().upper() not in CATEGORIES:
        raise ComparisonValidationError(
            f"Change at index {index}: 'category' must be one of "
            f"{list(CATEGORIES)}, got {category!r}"
        )
    description = raw["description"]
    if not isinstance(description, str):
        raise ComparisonValidationError(
            f"Change at index {index}: 'description' must be a string"
        )
    return Change(
        category=category.strip().upper(),
        description=description,
        doc1_text=_optional_text(raw.get("doc1_text"), "doc1_text", index),
        doc2_text=_optional_text(raw.get("doc2_text"), "doc2_text", index),
        doc1_paragraph_refs=_refs(raw["doc1_paragraph_refs"], "doc1_paragraph_refs", index),
        doc2_paragraph_refs=_refs(raw["doc2_paragraph_refs"], "doc2_paragraph_refs", index),
    )


def _optional_text(raw: Any, field: str, index: int) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ComparisonValidationError(
            f"Change at index {index}: '{field}' must be a string or null"
        )
    return raw


def _refs(raw: Any, field: str, index: int) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(ref, str) for ref in raw):
        raise ComparisonValidationError(
            f"Change at index {index}: '{field}' must be a list of strings"
        )
    refs = [ref.strip() for ref in raw]
    # A cited-but-blank list must stay non-empty so it resolves to the fallback.
    return [ref for ref in refs if ref] or refs


def _build_summary(raw: Any, changes: list[Change]) -> ComparisonSummary:
    if raw is None:
        return summarize(changes)
    if not isinstance(raw, dict):
        raise ComparisonValidationError("'summary' must be an object")
    counts: dict[str, int] = {}
    for field in _SUMMARY_FIELDS:
        value = raw.get(field, 0)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ComparisonValidationError(f"'summary.{field}' must be an integer")
        counts[field] = value
    return ComparisonSummary(**counts)


def summarize(changes: list[Change]) -> ComparisonSummary:
    def count(category: str) -> int:
        return sum(1 for change in changes if change.category == category)

    return ComparisonSummary(
        total_changes=len(changes),
        modified_count=count("MODIFIED"),
        added_count=count("ADDED"),
        removed_count=count("REMOVED"),
        structural_count=count("STRUCTURAL"),
    )
