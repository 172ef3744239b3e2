"""Keyword scanning on top of the bulk_extractor forensic indexer."""

import os
import re
import tempfile
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import unquote

from lawpaw.logging.logger import Log
from lawpaw.scanner.base import BaseCorpusScanner
from lawpaw.scanner.models import ScanResult
from lawpaw.tools.exceptions import ToolInvocationError
from lawpaw.tools.runner import run_tool

_URI_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def strip_uri_scheme(location: str) -> str:
    """Drop a leading ``scheme://`` and percent-decode what remains."""
    return unquote(_URI_SCHEME.sub("", location.strip(), count=1))


def parse_wordlist(lines: Iterable[str], keyword: str, extension: str) -> list[str]:
    """Extract unique absolute document paths from a tab-delimited listing.

    Each line is ``<keyword>\\t<file-uri>[\\t...]``. Comment lines, lines
    without a location column, locations with another extension, and lines
    whose first column does not contain the keyword are dropped.
    """
    needle = keyword.casefold()
    suffix = extension.lower()
    found: set[str] = set()
    for line in lines:
        line = line.rstrip("\r\n")
        if not line or line.startswith("#"):
            continue
        columns = line.split("\t")
        if len(columns) < 2:
            continue
        if needle and needle not in columns[0].casefold():
            continue
        path = strip_uri_scheme(columns[1])
        if not path.lower().endswith(suffix):
            continue
        found.add(os.path.abspath(path))
    return sorted(found)


class BulkExtractorScanner(BaseCorpusScanner):
    """Runs bulk_extractor with only the wordlist scanner enabled.

    The tool lists every indexed word, so the keyword is applied afterwards
    by ``parse_wordlist``.
    """

    engine = "bulk_extractor"
    WORDLIST_ARTIFACT = "wordlist.txt"

    def __init__(
        self,
        executable: str = "bulk_extractor",
        timeout_seconds: float = 300,
        extension: str = ".pdf",
    ) -> None:
        self._executable = executable
        self._timeout_seconds = timeout_seconds
        self._extension = extension

    def scan(self, root_folder: Path, keyword: str) -> ScanResult:
        Log.info(f"Scanning {root_folder} for '{keyword}' with bulk_extractor")
        try:
            lines = self._run(Path(root_folder))
        except ToolInvocationError as exc:
            Log.warning(f"Corpus scan failed, continuing with no candidates: {exc}")
            return ScanResult(paths=[], error=exc)

        paths = parse_wordlist(lines, keyword, self._extension)
        Log.info(f"Scan matched {len(paths)} documents")
        return ScanResult(paths=paths)

    def _run(self, root_folder: Path) -> list[str]:
        with tempfile.TemporaryDirectory(prefix="lawpaw-scan-") as workdir:
            # bulk_extractor refuses to write into an existing non-empty directory
            output_dir = Path(workdir) / "out"
            run_tool(
                [
                    self._executable,
                    "-E", "wordlist",
                    "-o", output_dir,
                    "-R", root_folder,
                ],
                timeout_seconds=self._timeout_seconds,
            )
            artifact = output_dir / self.WORDLIST_ARTIFACT
            if not artifact.is_file():
                raise ToolInvocationError(
                    self.engine, f"output artifact {self.WORDLIST_ARTIFACT} is missing"
                )
            return artifact.read_text(encoding="utf-8", errors="replace").splitlines()
