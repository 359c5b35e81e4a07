"""Example comparison client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseComparisonClient and register the provider in ComparatorFactory.
"""

import json
from typing import ClassVar

from docdiff.comparison.client_base import BaseComparisonClient
from docdiff.comparison.models import CompletionResponse


class ExampleClientAdapter(BaseComparisonClient):
    """Example adapter that reports no differences.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "changes": [],
        "summary": {
            "total_changes": 0,
            "modified_count": 0,
            "added_count": 0,
            "removed_count": 0,
            "structural_count": 0,
        },
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> CompletionResponse:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        return CompletionResponse(content=json.dumps(self.DEFAULT_RESPONSE), total_tokens=0)
