import json

from docdiff.comparison.example_client_adapter import ExampleClientAdapter
from docdiff.comparison.validator import validate_and_build
from docdiff.ocr.example_client_adapter import ExampleOcrClientAdapter
from docdiff.ocr.paragraph_index import build_paragraph_index


class TestExampleClientAdapter:
    def test_returns_valid_empty_comparison(self) -> None:
        adapter = ExampleClientAdapter()
        response = adapter.create_chat_completion(
            model="example",
            temperature=0.0,
            system_prompt="system",
            user_prompt="user",
            json_schema={"type": "object"},
        )
        changes, summary = validate_and_build(json.loads(response.content))
        assert changes == []
        assert summary.total_changes == 0
        assert response.total_tokens == 0


class TestExampleOcrClientAdapter:
    def test_returns_single_indexable_page(self) -> None:
        pages = ExampleOcrClientAdapter().process_document(b"%PDF", "application/pdf")
        index = build_paragraph_index(pages)
        assert len(pages) == 1
        assert [p.text for p in index.paragraphs] == ["Example document"]
        assert index.paragraphs[0].id == "P1_0_0"
