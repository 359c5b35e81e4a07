from docdiff.comparison.models import (
    Difference,
    Highlight,
    difference_from_dict,
    difference_to_dict,
)
from docdiff.ocr.models import (
    ZERO_BOX,
    BoundingBox,
    Paragraph,
    bbox_from_dict,
    paragraph_from_dict,
    paragraph_to_dict,
)


class TestDifferenceSerialization:
    def test_round_trips(self) -> None:
        difference = Difference(
            category="ADDED",
            description="New clause",
            doc1_text=None,
            doc2_text="Clause 7",
            doc1_highlights=[],
            doc2_highlights=[Highlight(2, BoundingBox(1, 2, 3, 4))],
        )
        assert difference_from_dict(difference_to_dict(difference)) == difference

    def test_dict_shape(self) -> None:
        data = difference_to_dict(
            Difference(
                category="MODIFIED",
                description="d",
                doc1_highlights=[Highlight(1, ZERO_BOX)],
            )
        )
        assert data["doc1_highlights"] == [
            {"page_number": 1, "bbox_percent": {"x1": 0.0, "y1": 0.0, "x2": 0.0, "y2": 0.0}}
        ]
        assert data["doc2_highlights"] == []


class TestParagraphSerialization:
    def test_round_trips(self) -> None:
        paragraph = Paragraph("P3_1_2", 3, 1, 2, "text", BoundingBox(5, 6, 7, 8))
        assert paragraph_from_dict(paragraph_to_dict(paragraph)) == paragraph

    def test_missing_bbox_reads_as_zero_box(self) -> None:
        assert bbox_from_dict(None) == ZERO_BOX
        assert bbox_from_dict({}) == ZERO_BOX
