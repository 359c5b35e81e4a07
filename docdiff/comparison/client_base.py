from abc import ABC, abstractmethod

from docdiff.comparison.models import CompletionResponse


class BaseComparisonClient(ABC):
    """Contract for provider-specific comparison AI clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> CompletionResponse:
        """Return provider response text and total token usage."""
