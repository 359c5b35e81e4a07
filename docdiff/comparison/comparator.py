"""AI-powered document comparator."""

import json
from collections.abc import Sequence
from pathlib import Path

from docdiff.comparison.client_base import BaseComparisonClient
from docdiff.comparison.exceptions import ComparisonValidationError
from docdiff.comparison.models import ComparisonResult, CompletionResponse
from docdiff.comparison.prompt_loader import (
    load_json_schema,
    load_prompt_template,
    load_system_prompt,
)
from docdiff.comparison.validator import validate_and_build
from docdiff.logging.logger import Log
from docdiff.ocr.models import Paragraph
from docdiff.ocr.text_payload import build_text_payload
from docdiff.retry.policy import RetryPolicy


class Comparator:
    """Compares two paragraph indices using an AI provider.

    Only the provider call is retried; parsing and validation failures are
    contract violations and propagate immediately.
    """

    DOC1_LABEL = "DOCUMENT 1"
    DOC2_LABEL = "DOCUMENT 2"

    def __init__(
        self,
        *,
        client: BaseComparisonClient,
        model: str,
        temperature: float = 0.1,
        retry_policy: RetryPolicy | None = None,
        prompt_template_path: Path | None = None,
        system_prompt_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(2.0, temperature))
        self._retry_policy = retry_policy or RetryPolicy()
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._system_prompt = load_system_prompt(system_prompt_path)
        self._json_schema_dict = json.loads(load_json_schema(json_schema_path))

    def compare(
        self,
        doc1_paragraphs: Sequence[Paragraph],
        doc2_paragraphs: Sequence[Paragraph],
    ) -> ComparisonResult:
        """Ask the provider for the changes between two documents."""
        prompt = self.build_prompt(
            build_text_payload(doc1_paragraphs, self.DOC1_LABEL),
            build_text_payload(doc2_paragraphs, self.DOC2_LABEL),
        )
        Log.debug(f"Comparison prompt:\n{prompt}")

        response = self._retry_policy.call(lambda: self._call_ai(prompt))
        Log.debug(f"AI raw response:\n{response.content}")

        changes, summary = validate_and_build(self._parse_json(response.content))
        Log.info(
            f"Comparison complete: {len(changes)} changes, "
            f"{response.total_tokens} tokens"
        )
        return ComparisonResult(
            changes=changes,
            summary=summary,
            tokens_used=response.total_tokens,
        )

    def build_prompt(self, doc1_payload: str, doc2_payload: str) -> str:
        return self._prompt_template.format(
            doc1_payload=doc1_payload,
            doc2_payload=doc2_payload,
        )

    def _call_ai(self, prompt: str) -> CompletionResponse:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ComparisonValidationError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ComparisonValidationError("JSON response must be an object")
        return parsed
