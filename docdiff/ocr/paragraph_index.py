"""Builds the paragraph index from OCR provider pages.

Each non-empty paragraph becomes one entry with a deterministic id
(``P{page}_{block}_{paragraph}``) and a bounding box expressed in percent of
its page. OCR geometry is best-effort: missing or malformed boxes degrade to
a zero box and never abort the build.
"""

from collections.abc import Sequence

from docdiff.ocr.models import (
    ZERO_BOX,
    BoundingBox,
    BoundingPoly,
    OcrPage,
    OcrParagraph,
    PageDimension,
    Paragraph,
    ParagraphIndex,
    Vertex,
)


def build_paragraph_index(pages: Sequence[OcrPage]) -> ParagraphIndex:
    """Convert OCR pages into an ordered paragraph index.

    Page numbers are 1-based; block and paragraph indices are the 0-based
    positions in the provider output, so ids stay stable across rebuilds of
    the same OCR result.
    """
    paragraphs: list[Paragraph] = []
    page_dimensions: list[PageDimension] = []

    for page_idx, page in enumerate(pages):
        page_number = page_idx + 1
        width = _dimension(page.width)
        height = _dimension(page.height)
        page_dimensions.append(
            PageDimension(page_number=page_number, width=width, height=height)
        )

        for block_idx, block in enumerate(page.blocks):
            for para_idx, paragraph in enumerate(block.paragraphs):
                text = extract_paragraph_text(paragraph).strip()
                if not text:
                    continue
                bbox = paragraph_absolute_bbox(paragraph, width, height)
                paragraphs.append(
                    Paragraph(
                        id=f"P{page_number}_{block_idx}_{para_idx}",
                        page_number=page_number,
                        block_index=block_idx,
                        paragraph_index=para_idx,
                        text=text,
                        bbox_percent=bbox_to_percent(bbox, width, height),
                    )
                )

    return ParagraphIndex(paragraphs=paragraphs, page_dimensions=page_dimensions)


def extract_paragraph_text(paragraph: OcrParagraph) -> str:
    """Join symbols within a word, and words with single spaces."""
    return " ".join(
        "".join(symbol.text for symbol in word.symbols) for word in paragraph.words
    )


def paragraph_absolute_bbox(
    paragraph: OcrParagraph, page_width: float, page_height: float
) -> BoundingBox:
    """Absolute box of a paragraph, falling back to the union of its words."""
    vertices = _poly_vertices(paragraph.bounding_poly)
    if not vertices:
        vertices = [
            vertex
            for word in paragraph.words
            for vertex in _poly_vertices(word.bounding_poly)
        ]
    if not vertices:
        return ZERO_BOX

    # Normalized when every coordinate fits in the unit square.
    max_x = max(v.x for v in vertices)
    max_y = max(v.y for v in vertices)
    if max_x <= 1 and max_y <= 1:
        return vertices_to_bbox(vertices, page_width, page_height)
    return vertices_to_bbox(vertices)


def vertices_to_bbox(
    vertices: Sequence[Vertex], scale_x: float = 1.0, scale_y: float = 1.0
) -> BoundingBox:
    if not vertices:
        return ZERO_BOX
    xs = [v.x * scale_x for v in vertices]
    ys = [v.y * scale_y for v in vertices]
    return BoundingBox(x1=min(xs), y1=min(ys), x2=max(xs), y2=max(ys))


def bbox_to_percent(bbox: BoundingBox, page_width: float, page_height: float) -> BoundingBox:
    return BoundingBox(
        x1=bbox.x1 / page_width * 100,
        y1=bbox.y1 / page_height * 100,
        x2=bbox.x2 / page_width * 100,
        y2=bbox.y2 / page_height * 100,
    )


def _poly_vertices(poly: BoundingPoly | None) -> list[Vertex]:
    if poly is None:
        return []
    if poly.normalized_vertices:
        return list(poly.normalized_vertices)
    return list(poly.vertices)


def _dimension(value: float) -> float:
    # Missing or non-positive sizes would divide by zero.
    return value if value and value > 0 else 1.0
