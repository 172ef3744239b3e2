from dataclasses import dataclass, field

from lawpaw.tools.exceptions import ToolInvocationError


@dataclass(frozen=True)
class CandidateDocument:
    """A file matched by the scanner, consumed once by the batch processor."""

    path: str
    source_label: str


@dataclass
class ScanResult:
    """Output of one scan: unique absolute paths plus a non-fatal tool error."""

    paths: list[str] = field(default_factory=list)
    error: ToolInvocationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
