from collections.abc import Iterable

from docdiff.ocr.models import Paragraph


def build_text_payload(paragraphs: Iterable[Paragraph], label: str) -> str:
    """Render paragraphs as an ID-tagged, page-delimited text block.

    Example::

        === DOCUMENT 1 ===

        --- Page 1 ---

        [P1_0_0] First paragraph

    """
    parts = [f"=== {label} ===\n\n"]
    current_page: int | None = None
    for paragraph in paragraphs:
        if paragraph.page_number != current_page:
            current_page = paragraph.page_number
            parts.append(f"--- Page {current_page} ---\n\n")
        parts.append(f"[{paragraph.id}] {paragraph.text}\n\n")
    return "".join(parts)
