import csv
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from lawpaw.logging.logger import Log
from lawpaw.processor.models import ProcessingResult
from lawpaw.reporting.exceptions import ReportExportError

REPORT_COLUMNS: tuple[str, ...] = (
    "filename",
    "original_path",
    "new_path",
    "document_type",
    "filing_date",
    "moving_party",
    "court",
    "judge",
    "docket_number",
    "summary",
)

_METADATA_COLUMNS = REPORT_COLUMNS[3:]


def result_to_row(result: ProcessingResult) -> dict[str, str]:
    """Flatten one result into the fixed report columns.

    Failed documents keep whatever is known; missing values are empty.
    """
    new_path = result.new_path or ""
    row = {
        "filename": Path(new_path or result.original_path).name,
        "original_path": result.original_path,
        "new_path": new_path,
    }
    for column in _METADATA_COLUMNS:
        row[column] = getattr(result.metadata, column, "") if result.metadata else ""
    return row


class CsvReportWriter:
    """Exports batch results to ``results_<timestamp>.csv`` under reports_dir."""

    def __init__(self, reports_dir: Path) -> None:
        self._reports_dir = Path(reports_dir)

    @property
    def reports_dir(self) -> Path:
        return self._reports_dir

    def export(self, results: Sequence[ProcessingResult]) -> Path:
        """Write one row per result, in the given order.

        Raises:
            ReportExportError: if the directory or file cannot be written.
        """
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        path = self._reports_dir / f"results_{stamp}.csv"
        try:
            self._reports_dir.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="") as handle:
                writer = csv.DictWriter(handle, fieldnames=REPORT_COLUMNS)
                writer.writeheader()
                for result in results:
                    writer.writerow(result_to_row(result))
        except OSError as exc:
            raise ReportExportError(f"Cannot write report {path}: {exc}") from exc

        Log.info(f"Wrote report with {len(results)} rows to {path}")
        return path

    def resolve(self, report_name: str) -> Path | None:
        """Map a bare report filename to its path; None if unknown or unsafe."""
        if not report_name or Path(report_name).name != report_name:
            return None
        if not report_name.endswith(".csv"):
            return None
        path = self._reports_dir / report_name
        return path if path.is_file() else None


def read_report(path: Path) -> list[dict[str, str]]:
    """Read an exported report back into ordered row dicts."""
    with Path(path).open(encoding="utf-8", newline="") as handle:
        return list(csv.DictReader(handle))
