from lawpaw.config.settings import Settings
from lawpaw.scanner.base import BaseCorpusScanner
from lawpaw.scanner.bulk_extractor_adapter import BulkExtractorScanner
from lawpaw.scanner.pdfplumber_adapter import PdfPlumberScanner


class CorpusScannerFactory:
    """Creates the corpus scanner selected in settings."""

    ENGINES = ("bulk_extractor", "pdfplumber")

    @classmethod
    def create(cls, settings: Settings) -> BaseCorpusScanner:
        engine = settings.scanner_engine.lower()
        if engine == "bulk_extractor":
            return BulkExtractorScanner(
                executable=settings.bulk_extractor_path,
                timeout_seconds=settings.scan_timeout_seconds,
                extension=settings.document_extension,
            )
        if engine == "pdfplumber":
            return PdfPlumberScanner(extension=settings.document_extension)
        raise ValueError(
            f"Unknown scanner engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
