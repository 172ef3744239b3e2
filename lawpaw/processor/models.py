from dataclasses import dataclass, field
from enum import Enum

from lawpaw.classification.models import DocumentMetadata


class Stage(str, Enum):
    """Per-document pipeline states, in order."""

    SCANNED = "scanned"
    EXTRACTED = "extracted"
    CLASSIFIED = "classified"
    PATHED = "pathed"
    ARCHIVED = "archived"
    RECORDED = "recorded"


class ProcessingStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class BatchRequest:
    """Parameters of one batch invocation."""

    input_folder: str
    output_folder: str
    keyword: str


@dataclass(frozen=True)
class ProcessingResult:
    """Final outcome for one candidate document.

    ``stage`` is ``recorded`` for successes and the stage that failed otherwise.
    """

    original_path: str
    status: ProcessingStatus
    stage: Stage
    new_path: str | None = None
    metadata: DocumentMetadata | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is ProcessingStatus.SUCCEEDED

    def to_dict(self) -> dict[str, object]:
        return {
            "original_path": self.original_path,
            "new_path": self.new_path,
            "status": self.status.value,
            "stage": self.stage.value,
            "error": self.error,
            "metadata": self.metadata.to_dict() if self.metadata is not None else None,
        }


@dataclass(frozen=True)
class BatchReport:
    """All results of one batch, in input order, plus the exported CSV path."""

    processed_count: int
    results: list[ProcessingResult] = field(default_factory=list)
    report_path: str | None = None
    scan_error: str | None = None

    @property
    def succeeded_count(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed_count(self) -> int:
        return self.processed_count - self.succeeded_count

    def to_dict(self) -> dict[str, object]:
        return {
            "message": f"Processed {self.processed_count} documents",
            "processed_count": self.processed_count,
            "succeeded_count": self.succeeded_count,
            "failed_count": self.failed_count,
            "results": [r.to_dict() for r in self.results],
            "report_path": self.report_path,
            "scan_error": self.scan_error,
        }
