"""Canonical filenames and folder layout for classified documents.

Everything here is pure: the same metadata (and the same ``today``) always
produces the same DerivedPath.
"""

import re
from collections.abc import Mapping
from datetime import date

from lawpaw.classification.models import DocumentMetadata
from lawpaw.organizer.models import DerivedPath

TYPE_CODES: dict[str, str] = {
    "motion": "MOT",
    "opposition": "OPP",
    "reply": "REP",
}
DEFAULT_TYPE_CODE = "DOC"
DEFAULT_DESCRIPTOR = "GENERAL"
DEFAULT_PARTY = "Unknown"

# keeps filenames and directory segments under the 255-byte name limit
MAX_TOKEN_LENGTH = 40
MAX_SEGMENT_LENGTH = 80

DIRECTORY_PLACEHOLDERS: tuple[tuple[str, str], ...] = (
    ("docket_number", "Unknown_Docket"),
    ("moving_party", "Unknown_Party"),
    ("document_type", "Unknown_Type"),
    ("filing_date", "Unknown_Date"),
)

_UNSAFE = re.compile(r"[^0-9A-Za-z._-]")
_NON_WORD = re.compile(r"\W")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

MetadataLike = DocumentMetadata | Mapping[str, object]


def sanitize(value: str) -> str:
    """Replace every character outside [0-9A-Za-z._-] with an underscore."""
    return _UNSAFE.sub("_", value)


def format_filing_date(raw: str) -> str:
    """YYYY-MM-DD becomes MM-DD-YYYY; anything else gets '/' and '.' turned into '-'."""
    match = _ISO_DATE.match(raw.strip())
    if match:
        year, month, day = match.groups()
        return f"{month}-{day}-{year}"
    return raw.strip().replace("/", "-").replace(".", "-")


def fallback_filename(today: date | None = None) -> str:
    return f"PL_Document_{(today or date.today()).strftime('%m-%d-%Y')}.pdf"


def _field(metadata: MetadataLike, name: str) -> str:
    if isinstance(metadata, Mapping):
        value = metadata.get(name)
    else:
        value = getattr(metadata, name, None)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"metadata field '{name}' must be a string, got {type(value).__name__}")
    return value.strip()


def _party_token(moving_party: str) -> str:
    party = _NON_WORD.sub("", moving_party)[:MAX_TOKEN_LENGTH]
    if not party:
        return DEFAULT_PARTY
    return party[0].upper() + party[1:]


def _descriptor(summary: str) -> str:
    words = summary.split()[:3]
    if not words:
        return DEFAULT_DESCRIPTOR
    return "_".join(word.upper()[:MAX_TOKEN_LENGTH] for word in words)


def derive_filename(metadata: MetadataLike, today: date | None = None) -> str:
    """Build ``PL_<PARTY>_<TYPECODE>_<DESCRIPTOR>_<MM-DD-YYYY>.pdf``.

    Never raises: malformed metadata yields ``PL_Document_<today>.pdf``.
    """
    try:
        party = _party_token(_field(metadata, "moving_party"))
        type_code = TYPE_CODES.get(_field(metadata, "document_type").lower(), DEFAULT_TYPE_CODE)
        descriptor = _descriptor(_field(metadata, "summary"))
        filing_date = format_filing_date(_field(metadata, "filing_date"))[:MAX_TOKEN_LENGTH]
        return sanitize(f"PL_{party}_{type_code}_{descriptor}_{filing_date}.pdf")
    except Exception:
        return fallback_filename(today)


def _directory_segment(value: str, placeholder: str) -> str:
    if not value or value.lower() == "unknown":
        return placeholder
    segment = sanitize(value[:MAX_SEGMENT_LENGTH])
    # "." and ".." would escape the output root
    if set(segment) <= {"."}:
        return placeholder
    return segment


def derive_directory(metadata: MetadataLike) -> tuple[str, str, str, str]:
    """Build ``<docket>/<moving_party>/<document_type>/<filing_date>`` segments."""
    segments: list[str] = []
    for name, placeholder in DIRECTORY_PLACEHOLDERS:
        try:
            value = _field(metadata, name)
        except TypeError:
            value = ""
        segments.append(_directory_segment(value, placeholder))
    docket, party, doc_type, filing_date = segments
    return docket, party, doc_type, filing_date


def derive(metadata: MetadataLike, today: date | None = None) -> DerivedPath:
    """Compute the canonical directory and filename. No deduplication."""
    return DerivedPath(
        directory=derive_directory(metadata),
        filename=derive_filename(metadata, today=today),
    )
