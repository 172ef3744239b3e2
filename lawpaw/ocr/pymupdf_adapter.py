from pathlib import Path

import pymupdf
import pytesseract
from PIL import Image

from lawpaw.ocr.base import BaseTextExtractor
from lawpaw.ocr.exceptions import OcrError
from lawpaw.tools.exceptions import ToolInvocationError, ToolTimeoutError


class PyMuPdfTesseractExtractor(BaseTextExtractor):
    """Renders the top-half clip of page one with PyMuPDF and OCRs it with pytesseract."""

    engine = "pymupdf"

    def _extract_in(self, workdir: Path, document_path: Path) -> str:
        page_pdf = workdir / "page-1.pdf"
        with pymupdf.open(str(document_path)) as source:  # type: ignore[no-untyped-call]
            if source.page_count < 1:
                raise OcrError("document has no pages")
            with pymupdf.open() as single:  # type: ignore[no-untyped-call]
                single.insert_pdf(source, from_page=0, to_page=0)
                single.save(str(page_pdf))

        image_path = workdir / "top.png"
        with pymupdf.open(str(page_pdf)) as doc:  # type: ignore[no-untyped-call]
            page = doc[0]
            bounds = page.rect
            clip = pymupdf.Rect(
                bounds.x0,
                bounds.y0,
                bounds.x1,
                bounds.y0 + bounds.height * self._crop_ratio,
            )
            pixmap = page.get_pixmap(dpi=self._dpi, clip=clip)
            pixmap.save(str(image_path))

        return self._recognize(image_path)

    def _recognize(self, image_path: Path) -> str:
        try:
            with Image.open(image_path) as image:
                return pytesseract.image_to_string(
                    image,
                    lang=self._language,
                    timeout=self._timeout_seconds,
                )
        except pytesseract.TesseractNotFoundError as exc:
            raise ToolInvocationError("tesseract", "executable not found") from exc
        except pytesseract.TesseractError as exc:
            raise ToolInvocationError("tesseract", str(exc)) from exc
        except RuntimeError as exc:
            # pytesseract signals a timeout with a bare RuntimeError
            raise ToolTimeoutError("tesseract", str(exc)) from exc
