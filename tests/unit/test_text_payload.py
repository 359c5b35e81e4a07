from docdiff.ocr.models import ZERO_BOX, Paragraph
from docdiff.ocr.text_payload import build_text_payload


def _paragraph(page: int, block: int, index: int, text: str) -> Paragraph:
    return Paragraph(
        id=f"P{page}_{block}_{index}",
        page_number=page,
        block_index=block,
        paragraph_index=index,
        text=text,
        bbox_percent=ZERO_BOX,
    )


class TestBuildTextPayload:
    def test_renders_header_pages_and_tagged_paragraphs(self) -> None:
        paragraphs = [
            _paragraph(1, 0, 0, "Title"),
            _paragraph(1, 0, 1, "Intro"),
            _paragraph(2, 0, 0, "Body"),
        ]

        payload = build_text_payload(paragraphs, "DOCUMENT 1")

        assert payload == (
            "=== DOCUMENT 1 ===\n\n"
            "--- Page 1 ---\n\n"
            "[P1_0_0] Title\n\n"
            "[P1_0_1] Intro\n\n"
            "--- Page 2 ---\n\n"
            "[P2_0_0] Body\n\n"
        )

    def test_empty_list_renders_header_only(self) -> None:
        assert build_text_payload([], "DOCUMENT") == "=== DOCUMENT ===\n\n"

    def test_page_marker_uses_actual_page_number(self) -> None:
        payload = build_text_payload([_paragraph(3, 1, 0, "Late start")], "DOC")
        assert "--- Page 3 ---" in payload
        assert "--- Page 1 ---" not in payload

    def test_preserves_input_order(self) -> None:
        paragraphs = [_paragraph(1, 0, 1, "second"), _paragraph(1, 0, 0, "first")]
        payload = build_text_payload(paragraphs, "DOC")
        assert payload.index("[P1_0_1]") < payload.index("[P1_0_0]")
