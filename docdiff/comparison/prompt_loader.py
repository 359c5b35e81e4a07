from pathlib import Path

from docdiff.comparison.exceptions import ComparisonError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the comparison user prompt template.

    The template carries ``{doc1_payload}`` and ``{doc2_payload}`` placeholders.

    Raises:
        ComparisonError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "comparison_prompt.txt", "prompt template")


def load_system_prompt(path: Path | None = None) -> str:
    """Load the fixed comparison instruction set."""
    return _read(path or _DEFAULT_PROMPT_DIR / "system_prompt.txt", "system prompt")


def load_json_schema(path: Path | None = None) -> str:
    """Load the JSON schema constraining the provider response."""
    return _read(path or _DEFAULT_PROMPT_DIR / "comparison_schema.json", "JSON schema")


def _read(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ComparisonError(f"Failed to load {what}: {exc}") from exc
