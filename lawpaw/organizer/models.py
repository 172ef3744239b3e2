import threading
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath


@dataclass(frozen=True)
class DerivedPath:
    """Canonical location of a document below an output root."""

    directory: tuple[str, str, str, str]
    filename: str

    @property
    def relative_path(self) -> PurePosixPath:
        return PurePosixPath(*self.directory, self.filename)


@dataclass
class PathClaims:
    """Target paths already taken during one batch. Safe to share across workers."""

    _claimed: set[Path] = field(default_factory=set)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def try_claim(self, target: Path) -> bool:
        with self._lock:
            if target in self._claimed:
                return False
            self._claimed.add(target)
            return True

    def release(self, target: Path) -> None:
        with self._lock:
            self._claimed.discard(target)
