import os
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from lawpaw.classification.base import BaseClassifier
from lawpaw.classification.factory import ClassifierFactory
from lawpaw.config.settings import Settings
from lawpaw.database.repositories.legal_documents_repository import LegalDocumentsRepository
from lawpaw.logging.logger import Log
from lawpaw.ocr.factory import TextExtractorFactory
from lawpaw.organizer.archiver import Archiver
from lawpaw.organizer.models import PathClaims
from lawpaw.processor.exceptions import BatchValidationError
from lawpaw.processor.models import (
    BatchReport,
    BatchRequest,
    ProcessingResult,
    ProcessingStatus,
    Stage,
)
from lawpaw.processor.processor import Processor
from lawpaw.processor.steps import (
    ArchiveStep,
    ClassifyStep,
    DerivePathStep,
    ExtractTextStep,
    RecordStep,
)
from lawpaw.reporting.csv_report import CsvReportWriter
from lawpaw.reporting.exceptions import ReportExportError
from lawpaw.reporting.recorder import ResultRecorder
from lawpaw.scanner.base import BaseCorpusScanner
from lawpaw.scanner.factory import CorpusScannerFactory
from lawpaw.scanner.models import CandidateDocument


class BatchProcessor:
    """Validates a batch request, scans for candidates and processes them in parallel.

    Only request validation is fatal. Every document gets exactly one
    ProcessingResult, stored in the slot of its input index, so results
    and report rows keep the scanner's order.
    """

    def __init__(
        self,
        scanner: BaseCorpusScanner,
        processor: Processor,
        report_writer: CsvReportWriter,
        max_workers: int = 4,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._scanner = scanner
        self._processor = processor
        self._report_writer = report_writer
        self._max_workers = max_workers

    @property
    def report_writer(self) -> CsvReportWriter:
        return self._report_writer

    def run(
        self,
        request: BatchRequest,
        cancel_event: threading.Event | None = None,
    ) -> BatchReport:
        """Run one batch end to end.

        Raises:
            BatchValidationError: if the request is invalid.
        """
        input_root, output_root = self.validate(request)
        Log.info(f"Batch started: {input_root} -> {output_root}, keyword '{request.keyword}'")

        candidates, scan = self._scanner.scan_candidates(input_root, request.keyword)
        results = self.process_candidates(candidates, output_root, cancel_event)
        report_path = self._export(results)

        report = BatchReport(
            processed_count=len(results),
            results=results,
            report_path=str(report_path) if report_path else None,
            scan_error=str(scan.error) if scan.error else None,
        )
        Log.info(
            f"Batch finished: {report.processed_count} processed, "
            f"{report.succeeded_count} succeeded, {report.failed_count} failed"
        )
        return report

    def validate(self, request: BatchRequest) -> tuple[Path, Path]:
        """Check required parameters and folders; create the output folder."""
        missing = [
            name
            for name in ("input_folder", "output_folder", "keyword")
            if not str(getattr(request, name) or "").strip()
        ]
        if missing:
            raise BatchValidationError(f"Missing required parameters: {', '.join(missing)}")

        input_root = Path(request.input_folder).expanduser()
        if not input_root.is_dir():
            raise BatchValidationError(f"Input folder does not exist: {input_root}")
        if not os.access(input_root, os.R_OK | os.X_OK):
            raise BatchValidationError(f"Input folder is not readable: {input_root}")

        output_root = Path(request.output_folder).expanduser()
        try:
            output_root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise BatchValidationError(
                f"Output folder cannot be created: {output_root} ({exc})"
            ) from exc
        if not os.access(output_root, os.W_OK | os.X_OK):
            raise BatchValidationError(f"Output folder is not writable: {output_root}")

        return input_root.resolve(), output_root.resolve()

    def process_candidates(
        self,
        candidates: Sequence[CandidateDocument],
        output_root: Path,
        cancel_event: threading.Event | None = None,
    ) -> list[ProcessingResult]:
        if not candidates:
            return []
        claims = PathClaims()
        slots: list[ProcessingResult | None] = [None] * len(candidates)
        workers = min(self._max_workers, len(candidates))

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="lawpaw-doc") as pool:
            futures = {
                pool.submit(
                    self._processor.process, candidate, output_root, claims, cancel_event
                ): index
                for index, candidate in enumerate(candidates)
            }
            for future in as_completed(futures):
                index = futures[future]
                try:
                    slots[index] = future.result()
                except Exception as exc:
                    Log.exception(f"Worker crashed on {candidates[index].path}")
                    slots[index] = ProcessingResult(
                        original_path=candidates[index].path,
                        status=ProcessingStatus.FAILED,
                        stage=Stage.SCANNED,
                        error=str(exc) or exc.__class__.__name__,
                    )

        return [result for result in slots if result is not None]

    def _export(self, results: list[ProcessingResult]) -> Path | None:
        try:
            return self._report_writer.export(results)
        except ReportExportError as exc:
            Log.error(f"Report export failed: {exc}")
            return None


def reports_dir(settings: Settings) -> Path:
    return Path(settings.output_folder).expanduser() / settings.reports_subdir


def build_batch_processor(
    settings: Settings,
    classifier: BaseClassifier | None = None,
) -> BatchProcessor:
    """Build a BatchProcessor with all adapters configured from settings.

    The database pool must already be initialized for records to persist.
    """
    steps = [
        ExtractTextStep(
            TextExtractorFactory.create(settings),
            failure_policy=settings.ocr_failure_policy.lower(),
        ),
        ClassifyStep(classifier or ClassifierFactory.create(settings)),
        DerivePathStep(),
        ArchiveStep(Archiver(collision_policy=settings.collision_policy)),
        RecordStep(ResultRecorder(LegalDocumentsRepository())),
    ]
    return BatchProcessor(
        scanner=CorpusScannerFactory.create(settings),
        processor=Processor(steps),
        report_writer=CsvReportWriter(reports_dir(settings)),
        max_workers=settings.max_workers,
    )
