from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from lawpaw.classification.models import DocumentMetadata
from lawpaw.ocr.models import ExtractedText
from lawpaw.organizer.models import DerivedPath, PathClaims
from lawpaw.processor.models import Stage
from lawpaw.scanner.models import CandidateDocument


@dataclass(slots=True)
class PipelineContext:
    candidate: CandidateDocument
    output_root: Path
    claims: PathClaims = field(default_factory=PathClaims)
    stage: Stage = Stage.SCANNED
    extracted: ExtractedText | None = None
    metadata: DocumentMetadata | None = None
    derived_path: DerivedPath | None = None
    new_path: Path | None = None
    record_id: int | None = None


class PipelineStep(ABC):
    """One transition of the per-document state machine.

    ``stage`` is the state the document reaches when ``run`` returns, and
    the state reported as failed when it raises.
    """

    stage: Stage

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
