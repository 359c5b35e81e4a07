import httpx
import openai

from docdiff.comparison.client_base import BaseComparisonClient
from docdiff.comparison.exceptions import ComparisonError, ComparisonNetworkError
from docdiff.comparison.models import CompletionResponse


class OpenAIClientAdapter(BaseComparisonClient):
    """Comparison AI client adapter built on OpenAI-compatible chat API.

    Provider errors are wrapped with their original message so the retry
    policy can still classify status codes such as 429 or 503.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> CompletionResponse:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "comparison_result",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ComparisonNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise ComparisonNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise ComparisonError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ComparisonError("AI returned empty response")
        usage = response.usage
        total_tokens = usage.total_tokens if usage is not None else 0
        return CompletionResponse(content=content, total_tokens=total_tokens or 0)
