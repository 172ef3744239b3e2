import threading
from collections.abc import Sequence
from pathlib import Path

from lawpaw.logging.logger import Log
from lawpaw.ocr.exceptions import OcrError
from lawpaw.organizer.exceptions import ArchiveError
from lawpaw.organizer.models import PathClaims
from lawpaw.processor.exceptions import BatchCancelledError, PersistenceError
from lawpaw.processor.models import ProcessingResult, ProcessingStatus
from lawpaw.processor.pipeline import PipelineContext, PipelineStep
from lawpaw.scanner.models import CandidateDocument

_EXPECTED_FAILURES = (OcrError, ArchiveError, PersistenceError, BatchCancelledError)


class Processor:
    """Drives one candidate document through the pipeline steps.

    Pipeline: extract -> classify -> derive path -> archive -> record.
    A failing step finalizes the document as failed at that step's stage;
    ``process`` itself never raises.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def process(
        self,
        candidate: CandidateDocument,
        output_root: Path,
        claims: PathClaims | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ProcessingResult:
        context = PipelineContext(
            candidate=candidate,
            output_root=output_root,
            claims=claims if claims is not None else PathClaims(),
        )
        Log.info(f"Processing {candidate.path}")

        for step in self._steps:
            try:
                if cancel_event is not None and cancel_event.is_set():
                    raise BatchCancelledError("Batch cancelled")
                context = step.run(context)
            except _EXPECTED_FAILURES as exc:
                Log.error(f"{candidate.path} failed at {step.stage.value}: {exc}")
                return self._failed(context, step, exc)
            except Exception as exc:
                Log.exception(f"{candidate.path} failed unexpectedly at {step.stage.value}")
                return self._failed(context, step, exc)
            context.stage = step.stage

        Log.info(f"Finished {candidate.path} -> {context.new_path}")
        return ProcessingResult(
            original_path=candidate.path,
            status=ProcessingStatus.SUCCEEDED,
            stage=context.stage,
            new_path=str(context.new_path) if context.new_path else None,
            metadata=context.metadata,
        )

    @staticmethod
    def _failed(
        context: PipelineContext,
        step: PipelineStep,
        exc: Exception,
    ) -> ProcessingResult:
        return ProcessingResult(
            original_path=context.candidate.path,
            status=ProcessingStatus.FAILED,
            stage=step.stage,
            new_path=str(context.new_path) if context.new_path else None,
            metadata=context.metadata,
            error=str(exc) or exc.__class__.__name__,
        )
