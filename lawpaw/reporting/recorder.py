from dataclasses import dataclass

from lawpaw.classification.models import DocumentMetadata
from lawpaw.database.repositories.legal_documents_repository import LegalDocumentsRepository
from lawpaw.logging.logger import Log
from lawpaw.processor.exceptions import PersistenceError


@dataclass(frozen=True)
class RecordOutcome:
    """Success or failure of one persist call. Truthy on success."""

    record_id: int | None = None
    error: str | None = None

    def __bool__(self) -> bool:
        return self.error is None


class ResultRecorder:
    """Writes one legal_documents row per processed document without raising."""

    def __init__(self, repository: LegalDocumentsRepository) -> None:
        self._repository = repository

    def persist(
        self,
        metadata: DocumentMetadata,
        original_path: str,
        new_path: str,
    ) -> RecordOutcome:
        try:
            record_id = self._repository.insert(metadata, original_path, new_path)
        except PersistenceError as exc:
            Log.error(f"Failed to record {original_path}: {exc}")
            return RecordOutcome(error=str(exc))
        Log.info(f"Recorded {original_path} as legal_documents #{record_id}")
        return RecordOutcome(record_id=record_id)
