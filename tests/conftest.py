import io
from datetime import date
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from lawpaw.classification.models import DocumentMetadata

CAPTION_LINES = (
    "SUPERIOR COURT OF THE STATE",
    "Test Plaintiff v. Acme Corp.",
    "Case No. CV-2024-1234",
    "MOTION TO COMPEL DISCOVERY",
)


@pytest.fixture()
def caption_pdf_bytes() -> bytes:
    """Single-page PDF with a legal caption near the top."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    y = 720
    for line in CAPTION_LINES:
        c.drawString(72, y, line)
        y -= 18
    c.drawString(72, 120, "Respectfully submitted, counsel for plaintiff")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def two_page_pdf_bytes() -> bytes:
    """Two pages; the keyword only appears on the second one."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Cover sheet")
    c.showPage()
    c.drawString(72, 720, "Opposition to motion, Case No. CV-2024-9999")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def blank_pdf_bytes() -> bytes:
    """Valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def caption_pdf(tmp_path: Path, caption_pdf_bytes: bytes) -> Path:
    path = tmp_path / "incoming" / "scan_0001.pdf"
    path.parent.mkdir(parents=True)
    path.write_bytes(caption_pdf_bytes)
    return path


@pytest.fixture()
def fixed_today() -> date:
    return date(2024, 5, 6)


@pytest.fixture()
def motion_metadata(fixed_today: date) -> DocumentMetadata:
    return DocumentMetadata.from_mapping(
        {
            "document_type": "motion",
            "filing_date": "2024-04-01",
            "moving_party": "Test Plaintiff",
            "court": "Superior Court",
            "judge": "Hon. Smith",
            "docket_number": "CV-2024-1234",
            "summary": "Motion for summary judgment",
        },
        today=fixed_today,
    )
