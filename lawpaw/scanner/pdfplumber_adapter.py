from pathlib import Path

import pdfplumber

from lawpaw.logging.logger import Log
from lawpaw.scanner.base import BaseCorpusScanner
from lawpaw.scanner.models import ScanResult


class PdfPlumberScanner(BaseCorpusScanner):
    """Searches the text layer of every PDF under a folder using pdfplumber.

    No external binaries; useful where bulk_extractor is not installed.
    Scanned images without a text layer never match.
    """

    engine = "pdfplumber"

    def __init__(self, extension: str = ".pdf") -> None:
        self._extension = extension.lower()

    def scan(self, root_folder: Path, keyword: str) -> ScanResult:
        Log.info(f"Scanning {root_folder} for '{keyword}' with pdfplumber")
        needle = keyword.casefold()
        found: set[str] = set()
        for path in sorted(Path(root_folder).rglob("*")):
            if not path.is_file() or path.suffix.lower() != self._extension:
                continue
            if self._contains(path, needle):
                found.add(str(path.resolve()))
        Log.info(f"Scan matched {len(found)} documents")
        return ScanResult(paths=sorted(found))

    @staticmethod
    def _contains(path: Path, needle: str) -> bool:
        try:
            with pdfplumber.open(path) as pdf:
                for page in pdf.pages:
                    if needle in (page.extract_text() or "").casefold():
                        return True
        except Exception as exc:
            Log.warning(f"Skipping unreadable document {path}: {exc}")
        return False
