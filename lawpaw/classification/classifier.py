"""AI-powered legal metadata classifier."""

import json
import re
from collections.abc import Callable
from datetime import date
from pathlib import Path

from lawpaw.classification.base import BaseClassifier
from lawpaw.classification.client_base import BaseClassificationClient
from lawpaw.classification.exceptions import InferenceError
from lawpaw.classification.models import DocumentMetadata
from lawpaw.classification.prompt_loader import load_json_schema, load_prompt_template
from lawpaw.logging.logger import Log

DEFAULT_SYSTEM_PROMPT = (
    "You extract structured metadata from legal filings and reply with JSON only."
)
MAX_TEMPERATURE = 0.2

_CODE_FENCE = re.compile(r"^```[\w-]*\s*(.*?)\s*```$", re.DOTALL)


def parse_response(raw: str) -> dict[str, object]:
    """Decode the service reply, tolerating a surrounding Markdown code fence.

    Raises:
        InferenceError: if the reply is not a JSON object.
    """
    body = raw.strip()
    fenced = _CODE_FENCE.match(body)
    if fenced:
        body = fenced.group(1)
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise InferenceError(f"Invalid JSON response: {exc}") from exc
    if not isinstance(payload, dict):
        raise InferenceError("JSON response must be an object")
    return payload


class Classifier(BaseClassifier):
    """Classifies OCR text into DocumentMetadata with one inference call.

    Never raises from ``classify``: any failure yields the default record
    with ``error`` set.
    """

    def __init__(
        self,
        *,
        client: BaseClassificationClient,
        model: str,
        temperature: float = 0.0,
        max_chars: int = 8000,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = min(max(temperature, 0.0), MAX_TEMPERATURE)
        self._max_chars = max_chars
        self._system_prompt = system_prompt
        self._today = today
        self._template = load_prompt_template(prompt_template_path)
        self._schema_text = load_json_schema(json_schema_path)
        self._schema = json.loads(self._schema_text)

    def classify(self, text: str) -> DocumentMetadata:
        try:
            payload = self._infer(text)
        except Exception as exc:
            # provider SDKs raise more than InferenceError
            reason = str(exc) or exc.__class__.__name__
            Log.warning(f"Classification failed, using default record: {reason}")
            return DocumentMetadata.fallback(reason, today=self._today())

        metadata = DocumentMetadata.from_mapping(payload, today=self._today())
        Log.info(
            f"Classification complete: {metadata.document_type} "
            f"in docket {metadata.docket_number}"
        )
        return metadata

    def _infer(self, text: str) -> dict[str, object]:
        prompt = self._template.format(
            document_text=text[: self._max_chars],
            json_schema=self._schema_text,
        )
        Log.debug(f"Classification prompt:\n{prompt}")
        reply = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._schema,
        )
        Log.debug(f"Inference reply:\n{reply}")
        return parse_response(reply)
