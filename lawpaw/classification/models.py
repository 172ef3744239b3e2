import json
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import date

INFERENCE_FIELDS: tuple[str, ...] = (
    "document_type",
    "filing_date",
    "moving_party",
    "responding_party",
    "court",
    "jurisdiction",
    "judge",
    "docket_number",
    "case_name",
    "cause_of_action",
    "relief_sought",
    "filing_attorney",
    "summary",
    "tags",
)
CANONICAL_FIELDS: tuple[str, ...] = (*INFERENCE_FIELDS, "error")

UNKNOWN = "unknown"
ERROR_SUMMARY = "Error analyzing document"

_IDENTITY_FIELDS = frozenset({
    "document_type",
    "moving_party",
    "responding_party",
    "court",
    "jurisdiction",
    "judge",
    "docket_number",
    "case_name",
    "filing_attorney",
})


def default_fields(today: date | None = None) -> dict[str, str]:
    """Complete template every classification result is built on."""
    filing_date = (today or date.today()).isoformat()
    fields: dict[str, str] = {}
    for name in CANONICAL_FIELDS:
        if name in _IDENTITY_FIELDS:
            fields[name] = UNKNOWN
        elif name == "filing_date":
            fields[name] = filing_date
        else:
            fields[name] = ""
    return fields


def _coerce(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        return ",".join(str(item).strip() for item in value if item is not None)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    return str(value)


@dataclass(frozen=True)
class DocumentMetadata:
    """Legal metadata for one document. Every field is always a string."""

    document_type: str
    filing_date: str
    moving_party: str
    responding_party: str
    court: str
    jurisdiction: str
    judge: str
    docket_number: str
    case_name: str
    cause_of_action: str
    relief_sought: str
    filing_attorney: str
    summary: str
    tags: str
    error: str

    @classmethod
    def from_mapping(
        cls,
        overlay: Mapping[str, object],
        today: date | None = None,
    ) -> "DocumentMetadata":
        """Overlay service output onto the default template.

        Inference fields present and non-null in ``overlay`` win; anything
        missing keeps its default and unknown keys are dropped. ``error`` is
        never taken from the overlay.
        """
        merged = default_fields(today)
        for name in INFERENCE_FIELDS:
            if name in overlay:
                value = _coerce(overlay[name])
                if value is not None:
                    merged[name] = value
        return cls(**merged)

    @classmethod
    def fallback(cls, error: str, today: date | None = None) -> "DocumentMetadata":
        """Default record used when the inference call cannot be used."""
        fields = default_fields(today)
        fields["summary"] = ERROR_SUMMARY
        fields["error"] = error
        return cls(**fields)

    @property
    def is_fallback(self) -> bool:
        return bool(self.error)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
