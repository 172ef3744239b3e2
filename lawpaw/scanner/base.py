from abc import ABC, abstractmethod
from pathlib import Path

from lawpaw.scanner.models import CandidateDocument, ScanResult


class BaseCorpusScanner(ABC):
    """Contract for all keyword scanning adapters."""

    engine: str = "base"

    @abstractmethod
    def scan(self, root_folder: Path, keyword: str) -> ScanResult:
        """Find documents under root_folder that contain keyword.

        Args:
            root_folder: Existing, readable directory to search recursively.
            keyword: Case-insensitive literal (not a regular expression).

        Returns:
            ScanResult with sorted, de-duplicated absolute paths. A failing
            external tool yields no paths and a ToolInvocationError in
            ``error``; finding nothing is not an error.
        """

    def scan_candidates(
        self, root_folder: Path, keyword: str
    ) -> tuple[list[CandidateDocument], ScanResult]:
        """Scan and wrap every matched path as a CandidateDocument."""
        result = self.scan(root_folder, keyword)
        label = f"{self.engine}:{root_folder}"
        candidates = [CandidateDocument(path=p, source_label=label) for p in result.paths]
        return candidates, result
