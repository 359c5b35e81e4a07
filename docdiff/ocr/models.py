from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vertex:
    """Polygon point, either normalized (0-1) or absolute (px/pt)."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class BoundingPoly:
    """Provider bounding polygon. Either list may be empty."""

    normalized_vertices: list[Vertex] = field(default_factory=list)
    vertices: list[Vertex] = field(default_factory=list)


@dataclass(frozen=True)
class OcrSymbol:
    text: str = ""


@dataclass(frozen=True)
class OcrWord:
    symbols: list[OcrSymbol] = field(default_factory=list)
    bounding_poly: BoundingPoly | None = None


@dataclass(frozen=True)
class OcrParagraph:
    words: list[OcrWord] = field(default_factory=list)
    bounding_poly: BoundingPoly | None = None


@dataclass(frozen=True)
class OcrBlock:
    paragraphs: list[OcrParagraph] = field(default_factory=list)
    bounding_poly: BoundingPoly | None = None


@dataclass(frozen=True)
class OcrPage:
    """One page of OCR provider output, dimensions in raw provider units."""

    width: float = 0.0
    height: float = 0.0
    blocks: list[OcrBlock] = field(default_factory=list)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle. Percent boxes lie in [0, 100] on each axis."""

    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0


ZERO_BOX = BoundingBox()


@dataclass(frozen=True)
class Paragraph:
    """Indexed, text-bearing paragraph with a page-relative percent box."""

    id: str
    page_number: int
    block_index: int
    paragraph_index: int
    text: str
    bbox_percent: BoundingBox


@dataclass(frozen=True)
class PageDimension:
    page_number: int
    width: float
    height: float


@dataclass
class ParagraphIndex:
    """Output of the paragraph index builder."""

    paragraphs: list[Paragraph] = field(default_factory=list)
    page_dimensions: list[PageDimension] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Number of distinct pages that carry at least one paragraph."""
        return len({p.page_number for p in self.paragraphs})


def bbox_to_dict(bbox: BoundingBox) -> dict[str, float]:
    return {"x1": bbox.x1, "y1": bbox.y1, "x2": bbox.x2, "y2": bbox.y2}


def bbox_from_dict(raw: dict[str, object] | None) -> BoundingBox:
    if not raw:
        return ZERO_BOX
    return BoundingBox(
        x1=float(raw.get("x1", 0) or 0),  # type: ignore[arg-type]
        y1=float(raw.get("y1", 0) or 0),  # type: ignore[arg-type]
        x2=float(raw.get("x2", 0) or 0),  # type: ignore[arg-type]
        y2=float(raw.get("y2", 0) or 0),  # type: ignore[arg-type]
    )


def paragraph_to_dict(paragraph: Paragraph) -> dict[str, object]:
    """JSONB-ready representation of a paragraph."""
    return {
        "id": paragraph.id,
        "page_number": paragraph.page_number,
        "block_index": paragraph.block_index,
        "paragraph_index": paragraph.paragraph_index,
        "text": paragraph.text,
        "bbox_percent": bbox_to_dict(paragraph.bbox_percent),
    }


def paragraph_from_dict(raw: dict[str, object]) -> Paragraph:
    return Paragraph(
        id=str(raw["id"]),
        page_number=int(raw["page_number"]),  # type: ignore[call-overload]
        block_index=int(raw.get("block_index", 0)),  # type: ignore[call-overload]
        paragraph_index=int(raw.get("paragraph_index", 0)),  # type: ignore[call-overload]
        text=str(raw.get("text", "")),
        bbox_percent=bbox_from_dict(raw.get("bbox_percent")),  # type: ignore[arg-type]
    )
