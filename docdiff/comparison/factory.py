from typing import ClassVar

from docdiff.comparison.comparator import Comparator
from docdiff.comparison.example_client_adapter import ExampleClientAdapter
from docdiff.comparison.openai_client_adapter import OpenAIClientAdapter
from docdiff.config.settings import Settings
from docdiff.retry.policy import RetryPolicy


class ComparatorFactory:
    """Creates the configured comparator with its provider client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> Comparator:
        """Create a configured comparator from application settings."""
        provider = settings.comparison_provider.lower()
        retry_policy = RetryPolicy(
            max_retries=settings.provider_max_retries,
            base_delay_seconds=settings.provider_retry_base_delay_seconds,
        )
        if provider == "example":
            return Comparator(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
                retry_policy=retry_policy,
            )
        client = OpenAIClientAdapter(
            api_key=settings.comparison_api_key,
            timeout_seconds=settings.comparison_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return Comparator(
            client=client,
            model=settings.comparison_model_name,
            temperature=settings.comparison_temperature,
            retry_policy=retry_policy,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        configured = settings.comparison_base_url.strip()
        if provider == "openai":
            return configured or None
        if provider == "openai_compatible":
            if not configured:
                raise ValueError(
                    "comparison_base_url is required for "
                    "comparison_provider=openai_compatible"
                )
            return configured
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return configured or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown comparison provider '{provider}'. Choose from: {supported}"
        )
