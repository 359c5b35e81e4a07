"""Validates raw OCR provider pages and builds typed OCR records.

Accepts the provider's dict form in either snake_case (protobuf field names)
or camelCase (JSON API) keys. Structural defects (a page that is not an
object, children that are not lists) raise OcrContractError; geometry defects
are tolerated and simply drop the affected polygon or coordinate.
"""

from typing import Any

from docdiff.ocr.exceptions import OcrContractError
from docdiff.ocr.models import (
    BoundingPoly,
    OcrBlock,
    OcrPage,
    OcrParagraph,
    OcrSymbol,
    OcrWord,
    Vertex,
)


def parse_pages(raw: Any) -> list[OcrPage]:
    """Build OcrPage records from a list of raw page dicts.

    Raises:
        OcrContractError: if the page structure is malformed.
    """
    if not isinstance(raw, list):
        raise OcrContractError("OCR response 'pages' must be a list")
    return [_build_page(item, i) for i, item in enumerate(raw)]


def _build_page(raw: Any, index: int) -> OcrPage:
    if not isinstance(raw, dict):
        raise OcrContractError(f"Page at index {index} must be an object")
    dimension = raw.get("dimension")
    if isinstance(dimension, dict):
        width, height = dimension.get("width"), dimension.get("height")
    else:
        width, height = raw.get("width"), raw.get("height")
    blocks = [
        OcrBlock(
            paragraphs=[
                _build_paragraph(p, index)
                for p in _children(block, "paragraphs", f"page {index} block")
            ],
            bounding_poly=_build_poly(_get(block, "bounding_box", "boundingBox")),
        )
        for block in _children(raw, "blocks", f"page {index}")
    ]
    return OcrPage(width=_number(width), height=_number(height), blocks=blocks)


def _build_paragraph(raw: Any, page_index: int) -> OcrParagraph:
    if not isinstance(raw, dict):
        raise OcrContractError(f"Paragraph on page {page_index} must be an object")
    words = [
        OcrWord(
            symbols=[
                OcrSymbol(text=str(s.get("text") or "")) if isinstance(s, dict) else OcrSymbol()
                for s in _children(word, "symbols", f"page {page_index} word")
            ],
            bounding_poly=_build_poly(_get(word, "bounding_box", "boundingBox")),
        )
        for word in _children(raw, "words", f"page {page_index} paragraph")
    ]
    return OcrParagraph(
        words=words,
        bounding_poly=_build_poly(_get(raw, "bounding_box", "boundingBox")),
    )


def _children(raw: Any, key: str, where: str) -> list[Any]:
    if not isinstance(raw, dict):
        raise OcrContractError(f"Expected an object in {where}")
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise OcrContractError(f"'{key}' in {where} must be a list")
    return value


def _build_poly(raw: Any) -> BoundingPoly | None:
    if not isinstance(raw, dict):
        return None
    return BoundingPoly(
        normalized_vertices=_build_vertices(
            _get(raw, "normalized_vertices", "normalizedVertices")
        ),
        vertices=_build_vertices(raw.get("vertices")),
    )


def _build_vertices(raw: Any) -> list[Vertex]:
    if not isinstance(raw, list):
        return []
    return [
        Vertex(x=_number(v.get("x")), y=_number(v.get("y")))
        for v in raw
        if isinstance(v, dict)
    ]


def _get(raw: Any, snake: str, camel: str) -> Any:
    if not isinstance(raw, dict):
        return None
    value = raw.get(snake)
    return value if value is not None else raw.get(camel)


def _number(value: Any) -> float:
    # Providers omit zero-valued coordinates; bool is not a coordinate.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)
