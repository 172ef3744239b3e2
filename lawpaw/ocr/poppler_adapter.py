from pathlib import Path

from PIL import Image

from lawpaw.ocr.base import BaseTextExtractor
from lawpaw.ocr.exceptions import OcrError
from lawpaw.tools.runner import run_tool


def crop_top(image_path: Path, output_path: Path, ratio: float) -> Path:
    """Save the top ``ratio`` of an image's height to output_path."""
    with Image.open(image_path) as image:
        width, height = image.size
        keep = max(1, round(height * ratio))
        image.crop((0, 0, width, keep)).save(output_path)
    return output_path


class PopplerTesseractExtractor(BaseTextExtractor):
    """pdfseparate -> pdftoppm -> crop -> tesseract, each a separate process."""

    engine = "poppler"

    def __init__(
        self,
        *,
        pdfseparate_path: str = "pdfseparate",
        pdftoppm_path: str = "pdftoppm",
        tesseract_path: str = "tesseract",
        dpi: int = 300,
        crop_ratio: float = 0.5,
        timeout_seconds: float = 120,
        language: str = "eng",
    ) -> None:
        super().__init__(
            dpi=dpi,
            crop_ratio=crop_ratio,
            timeout_seconds=timeout_seconds,
            language=language,
        )
        self._pdfseparate = pdfseparate_path
        self._pdftoppm = pdftoppm_path
        self._tesseract = tesseract_path

    def _extract_in(self, workdir: Path, document_path: Path) -> str:
        page_pdf = self._isolate_first_page(workdir, document_path)
        page_png = self._rasterize(workdir, page_pdf)
        cropped = crop_top(page_png, workdir / "top.png", self._crop_ratio)
        return self._recognize(workdir, cropped)

    def _isolate_first_page(self, workdir: Path, document_path: Path) -> Path:
        page_pdf = workdir / "page-1.pdf"
        run_tool(
            [self._pdfseparate, "-f", "1", "-l", "1", document_path, page_pdf],
            timeout_seconds=self._timeout_seconds,
        )
        if not page_pdf.is_file():
            raise OcrError("pdfseparate produced no page")
        return page_pdf

    def _rasterize(self, workdir: Path, page_pdf: Path) -> Path:
        image_root = workdir / "page"
        run_tool(
            [
                self._pdftoppm,
                "-r", str(self._dpi),
                "-png",
                "-singlefile",
                page_pdf,
                image_root,
            ],
            timeout_seconds=self._timeout_seconds,
        )
        page_png = image_root.with_suffix(".png")
        if not page_png.is_file():
            raise OcrError("pdftoppm produced no image")
        return page_png

    def _recognize(self, workdir: Path, image_path: Path) -> str:
        output_base = workdir / "ocr"
        run_tool(
            [self._tesseract, image_path, output_base, "-l", self._language],
            timeout_seconds=self._timeout_seconds,
        )
        text_path = output_base.with_suffix(".txt")
        if not text_path.is_file():
            raise OcrError("tesseract produced no text file")
        return text_path.read_text(encoding="utf-8", errors="replace")
