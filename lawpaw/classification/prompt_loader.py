from pathlib import Path

from lawpaw.classification.exceptions import InferenceError

PROMPTS_DIR = Path(__file__).parent / "prompts"
PROMPT_TEMPLATE_FILE = "classification_prompt.txt"
JSON_SCHEMA_FILE = "classification_schema.json"


def _read_bundled(path: Path | None, default_name: str, label: str) -> str:
    source = path if path is not None else PROMPTS_DIR / default_name
    try:
        return source.read_text(encoding="utf-8")
    except OSError as exc:
        raise InferenceError(f"Failed to load {label}: {exc}") from exc


def load_prompt_template(path: Path | None = None) -> str:
    """Load the classification prompt; it must contain ``{document_text}``.

    Raises:
        InferenceError: if the file cannot be read.
    """
    return _read_bundled(path, PROMPT_TEMPLATE_FILE, "prompt template")


def load_json_schema(path: Path | None = None) -> str:
    """Load the JSON schema of the inference fields as text.

    Raises:
        InferenceError: if the file cannot be read.
    """
    return _read_bundled(path, JSON_SCHEMA_FILE, "JSON schema")
