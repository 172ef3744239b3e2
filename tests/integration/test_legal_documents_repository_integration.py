from datetime import date
from typing import Any

import psycopg
import pytest

from lawpaw.classification.models import DocumentMetadata
from lawpaw.database.repositories.legal_documents_repository import LegalDocumentsRepository
from lawpaw.reporting.recorder import ResultRecorder

METADATA = DocumentMetadata.from_mapping(
    {
        "document_type": "motion",
        "filing_date": "2024-04-01",
        "moving_party": "Test Plaintiff",
        "court": "Superior Court",
        "judge": "Hon. Smith",
        "docket_number": "CV-2024-1234",
        "summary": "Motion for summary judgment",
    },
    today=date(2024, 5, 6),
)


@pytest.mark.integration
class TestLegalDocumentsRepositoryInsert:
    def test_insert_persists_row(
        self, db_conn: psycopg.Connection[Any], integration_cleanup: list[int]
    ) -> None:
        repo = LegalDocumentsRepository()
        record_id = repo.insert(
            METADATA,
            "/data/in/scan_0001.pdf",
            "/data/out/CV-2024-1234/Test_Plaintiff/motion/2024-04-01/PL_TestPlaintiff_MOT.pdf",
        )
        integration_cleanup.append(record_id)

        record = repo.find_by_id(record_id)

        assert record is not None
        assert record.filename == "PL_TestPlaintiff_MOT.pdf"
        assert record.original_path == "/data/in/scan_0001.pdf"
        assert record.document_type == "motion"
        assert record.docket_number == "CV-2024-1234"
        assert record.processed_at is not None

    def test_each_insert_gets_new_id(self, integration_cleanup: list[int]) -> None:
        repo = LegalDocumentsRepository()
        first = repo.insert(METADATA, "/in/a.pdf", "/out/a.pdf")
        second = repo.insert(METADATA, "/in/a.pdf", "/out/a.pdf")
        integration_cleanup.extend([first, second])

        assert first != second

    def test_find_by_id_returns_none_when_missing(self, integration_pool: None) -> None:
        assert LegalDocumentsRepository().find_by_id(-1) is None

    def test_delete_removes_row(self, integration_pool: None) -> None:
        repo = LegalDocumentsRepository()
        record_id = repo.insert(METADATA, "/in/a.pdf", "/out/a.pdf")

        repo.delete(record_id)

        assert repo.find_by_id(record_id) is None


@pytest.mark.integration
class TestResultRecorderIntegration:
    def test_persist_returns_record_id(self, integration_cleanup: list[int]) -> None:
        outcome = ResultRecorder(LegalDocumentsRepository()).persist(
            METADATA, "/in/b.pdf", "/out/b.pdf"
        )
        assert outcome
        assert outcome.record_id is not None
        integration_cleanup.append(outcome.record_id)
