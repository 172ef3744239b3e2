from collections.abc import Callable
from datetime import date

from lawpaw.classification.base import BaseClassifier
from lawpaw.logging.logger import Log
from lawpaw.ocr.base import BaseTextExtractor
from lawpaw.ocr.exceptions import OcrError
from lawpaw.organizer.archiver import Archiver
from lawpaw.organizer.path_deriver import derive
from lawpaw.processor.exceptions import PersistenceError
from lawpaw.processor.models import Stage
from lawpaw.processor.pipeline import PipelineContext, PipelineStep
from lawpaw.reporting.recorder import ResultRecorder

OCR_FAILURE_POLICIES = ("fail", "degrade")


class ExtractTextStep(PipelineStep):
    stage = Stage.EXTRACTED

    def __init__(self, extractor: BaseTextExtractor, failure_policy: str = "fail") -> None:
        if failure_policy not in OCR_FAILURE_POLICIES:
            raise ValueError(
                f"Unknown OCR failure policy '{failure_policy}'. "
                f"Choose from: {list(OCR_FAILURE_POLICIES)}"
            )
        self._extractor = extractor
        self._failure_policy = failure_policy

    def run(self, context: PipelineContext) -> PipelineContext:
        extracted = self._extractor.extract(context.candidate.path)
        context.extracted = extracted
        if not extracted.ok:
            if self._failure_policy == "fail":
                raise OcrError(extracted.error)
            Log.warning(
                f"Continuing {context.candidate.path} with OCR error text: {extracted.error}"
            )
        return context


class ClassifyStep(PipelineStep):
    stage = Stage.CLASSIFIED

    def __init__(self, classifier: BaseClassifier) -> None:
        self._classifier = classifier

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted is None:
            raise ValueError("PipelineContext.extracted must be set before classification")
        context.metadata = self._classifier.classify(context.extracted.text)
        if context.metadata.is_fallback:
            Log.warning(
                f"Default metadata used for {context.candidate.path}: {context.metadata.error}"
            )
        return context


class DerivePathStep(PipelineStep):
    stage = Stage.PATHED

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.metadata is None:
            raise ValueError("PipelineContext.metadata must be set before path derivation")
        context.derived_path = derive(context.metadata, today=self._today())
        Log.debug(f"Derived {context.derived_path.relative_path} for {context.candidate.path}")
        return context


class ArchiveStep(PipelineStep):
    stage = Stage.ARCHIVED

    def __init__(self, archiver: Archiver) -> None:
        self._archiver = archiver

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.derived_path is None:
            raise ValueError("PipelineContext.derived_path must be set before archiving")
        context.new_path = self._archiver.place(
            context.candidate.path,
            context.derived_path,
            context.output_root,
            claims=context.claims,
        )
        return context


class RecordStep(PipelineStep):
    stage = Stage.RECORDED

    def __init__(self, recorder: ResultRecorder) -> None:
        self._recorder = recorder

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.metadata is None or context.new_path is None:
            raise ValueError("PipelineContext.metadata and new_path must be set before recording")
        outcome = self._recorder.persist(
            context.metadata,
            context.candidate.path,
            str(context.new_path),
        )
        if not outcome:
            raise PersistenceError(outcome.error)
        context.record_id = outcome.record_id
        return context
