from lawpaw.config.settings import Settings
from lawpaw.ocr.base import BaseTextExtractor
from lawpaw.ocr.poppler_adapter import PopplerTesseractExtractor
from lawpaw.ocr.pymupdf_adapter import PyMuPdfTesseractExtractor


class TextExtractorFactory:
    """Creates the correct OCR extractor based on settings."""

    ADAPTERS: dict[str, type[BaseTextExtractor]] = {
        "poppler": PopplerTesseractExtractor,
        "pymupdf": PyMuPdfTesseractExtractor,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.ocr_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        common = {
            "dpi": settings.ocr_dpi,
            "crop_ratio": settings.ocr_crop_ratio,
            "timeout_seconds": settings.ocr_timeout_seconds,
            "language": settings.ocr_language,
        }
        if adapter_cls is PopplerTesseractExtractor:
            return PopplerTesseractExtractor(
                pdfseparate_path=settings.pdfseparate_path,
                pdftoppm_path=settings.pdftoppm_path,
                tesseract_path=settings.tesseract_path,
                **common,
            )
        return adapter_cls(**common)
