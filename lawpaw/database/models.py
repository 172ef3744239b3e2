from dataclasses import dataclass
from datetime import datetime


@dataclass
class LegalDocumentRecord:
    """Represents a row from the legal_documents table."""

    id: int
    filename: str
    original_path: str
    new_path: str
    document_type: str = ""
    filing_date: str = ""
    moving_party: str = ""
    court: str = ""
    judge: str = ""
    docket_number: str = ""
    summary: str = ""
    processed_at: datetime | None = None
