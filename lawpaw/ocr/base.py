import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from lawpaw.logging.logger import Log
from lawpaw.ocr.exceptions import OcrError
from lawpaw.ocr.models import ExtractedText


class BaseTextExtractor(ABC):
    """Contract for all first-page OCR adapters.

    Subclasses implement ``_extract_in``; this class owns the temporary
    working directory and turns every failure into a sentinel result.
    """

    engine: str = "base"

    def __init__(
        self,
        *,
        dpi: int = 300,
        crop_ratio: float = 0.5,
        timeout_seconds: float = 120,
        language: str = "eng",
    ) -> None:
        if not 0 < crop_ratio <= 1:
            raise ValueError(f"crop_ratio must be in (0, 1], got {crop_ratio}")
        self._dpi = dpi
        self._crop_ratio = crop_ratio
        self._timeout_seconds = timeout_seconds
        self._language = language

    def extract(self, document_path: Path | str) -> ExtractedText:
        """OCR the top part of page one.

        Never raises for a document: any stage failure (missing binary,
        timeout, unreadable PDF) is returned as ``ExtractedText.failed``.
        """
        path = Path(document_path)
        try:
            if not path.is_file():
                raise OcrError(f"file not found: {path}")
            with tempfile.TemporaryDirectory(prefix="lawpaw-ocr-") as workdir:
                text = self._extract_in(Path(workdir), path)
        except Exception as exc:
            reason = str(exc) or exc.__class__.__name__
            Log.warning(f"OCR failed for {path} ({self.engine}): {reason}")
            return ExtractedText.failed(reason)

        text = text.strip()
        Log.info(f"OCR extracted {len(text)} chars from {path.name}")
        return ExtractedText(text=text)

    def extract_top_half_first_page(self, document_path: Path | str) -> str:
        """Return the recognized text, or the sentinel error string."""
        return self.extract(document_path).text

    @abstractmethod
    def _extract_in(self, workdir: Path, document_path: Path) -> str:
        """Isolate page one, rasterize and crop it, and OCR it inside workdir."""
