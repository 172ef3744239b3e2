import shutil
from pathlib import Path

from lawpaw.logging.logger import Log
from lawpaw.organizer.exceptions import ArchiveError, PathCollisionError
from lawpaw.organizer.models import DerivedPath, PathClaims


class Archiver:
    """Copies documents to their derived location below an output root.

    Sources are never moved or deleted. Collisions inside one batch are
    detected through the PathClaims the caller passes in and handled per
    ``collision_policy``:

    - ``suffix``: later documents become ``<stem>_2.pdf``, ``<stem>_3.pdf``...
    - ``fail``: raise PathCollisionError.
    - ``overwrite``: copy over the earlier document.
    """

    POLICIES = ("suffix", "fail", "overwrite")

    def __init__(self, collision_policy: str = "suffix") -> None:
        policy = collision_policy.lower()
        if policy not in self.POLICIES:
            raise ValueError(
                f"Unknown collision policy '{collision_policy}'. Choose from: {list(self.POLICIES)}"
            )
        self._policy = policy

    def place(
        self,
        document_path: Path | str,
        derived_path: DerivedPath,
        output_root: Path | str,
        claims: PathClaims | None = None,
    ) -> Path:
        """Copy document_path to output_root/<directory>/<filename>.

        Returns:
            Absolute path of the copy.

        Raises:
            ArchiveError: on any filesystem failure.
            PathCollisionError: if the target is already claimed and the
                policy is ``fail``.
        """
        source = Path(document_path)
        target_dir = Path(output_root).resolve().joinpath(*derived_path.directory)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ArchiveError(f"Cannot create directory {target_dir}: {exc}") from exc

        target = target_dir / derived_path.filename
        if claims is not None:
            target = self._claim(target, claims)

        try:
            shutil.copy2(source, target)
        except OSError as exc:
            if claims is not None:
                claims.release(target)
            raise ArchiveError(f"Cannot copy {source} to {target}: {exc}") from exc

        Log.info(f"Archived {source.name} -> {target}")
        return target

    def _claim(self, target: Path, claims: PathClaims) -> Path:
        if claims.try_claim(target):
            return target
        if self._policy == "fail":
            raise PathCollisionError(f"Target already used in this batch: {target}")
        if self._policy == "overwrite":
            Log.warning(f"Overwriting {target}, already written in this batch")
            return target

        counter = 2
        while True:
            candidate = target.with_name(f"{target.stem}_{counter}{target.suffix}")
            if claims.try_claim(candidate):
                Log.warning(f"Path collision on {target.name}, using {candidate.name}")
                return candidate
            counter += 1
