import re
from datetime import date

import pytest

from lawpaw.classification.models import DocumentMetadata
from lawpaw.organizer.path_deriver import (
    derive,
    derive_directory,
    derive_filename,
    fallback_filename,
    format_filing_date,
    sanitize,
)

TODAY = date(2024, 5, 6)
SAFE = re.compile(r"^[0-9A-Za-z._-]+$")
LONG_PARTY = ", ".join(f"Plaintiff Number {i} Individually" for i in range(12))


class TestFormatFilingDate:
    def test_iso_date_is_reordered(self) -> None:
        assert format_filing_date("2024-04-01") == "04-01-2024"

    def test_other_separators_become_dashes(self) -> None:
        assert format_filing_date("04/01/2024") == "04-01-2024"
        assert format_filing_date("01.04.2024") == "01-04-2024"


class TestSanitize:
    def test_replaces_unsafe_characters(self) -> None:
        assert sanitize("Smith & Sons, LLC") == "Smith___Sons__LLC"

    def test_keeps_safe_alphabet(self) -> None:
        assert sanitize("CV-2024_1.a") == "CV-2024_1.a"


class TestDeriveFilename:
    def test_motion_example(self, motion_metadata: DocumentMetadata) -> None:
        filename = derive_filename(motion_metadata, today=TODAY)
        assert filename == "PL_TestPlaintiff_MOT_MOTION_FOR_SUMMARY_04-01-2024.pdf"

    def test_accepts_plain_mapping(self) -> None:
        filename = derive_filename(
            {
                "document_type": "Opposition",
                "filing_date": "2024-02-03",
                "moving_party": "acme corp.",
                "summary": "opposes",
            },
            today=TODAY,
        )
        assert filename == "PL_Acmecorp_OPP_OPPOSES_02-03-2024.pdf"

    def test_unmapped_type_uses_doc_code(self) -> None:
        filename = derive_filename({"document_type": "brief", "moving_party": "X"}, today=TODAY)
        assert "_DOC_" in filename

    def test_empty_metadata_uses_defaults(self) -> None:
        assert derive_filename({}, today=TODAY) == "PL_Unknown_DOC_GENERAL_.pdf"

    def test_non_string_field_falls_back(self) -> None:
        assert derive_filename({"summary": 123}, today=TODAY) == fallback_filename(TODAY)
        assert fallback_filename(TODAY) == "PL_Document_05-06-2024.pdf"

    def test_result_uses_safe_alphabet(self) -> None:
        filename = derive_filename(
            {
                "document_type": "motion",
                "moving_party": "Müller / Ø",
                "summary": "a/b c:d e*f g",
                "filing_date": "2024/04/01 ",
            },
            today=TODAY,
        )
        assert SAFE.match(filename)

    def test_is_deterministic(self, motion_metadata: DocumentMetadata) -> None:
        assert derive(motion_metadata, TODAY) == derive(motion_metadata, TODAY)

    def test_long_fields_stay_within_name_limit(self) -> None:
        filename = derive_filename(
            {
                "document_type": "motion",
                "moving_party": LONG_PARTY,
                "summary": " ".join(["Supercalifragilistic" * 5] * 3),
                "filing_date": "filed on the " + "x" * 300,
            },
            today=TODAY,
        )
        assert len(filename.encode()) <= 255
        assert filename.startswith("PL_Plaintiff")
        assert filename.endswith(".pdf")


class TestDeriveDirectory:
    def test_motion_example(self, motion_metadata: DocumentMetadata) -> None:
        derived = derive(motion_metadata, today=TODAY)
        assert "/".join(derived.directory) == "CV-2024-1234/Test_Plaintiff/motion/2024-04-01"
        assert str(derived.relative_path).startswith("CV-2024-1234/Test_Plaintiff/motion/")

    def test_fallback_metadata_uses_placeholders(self) -> None:
        metadata = DocumentMetadata.fallback("API error", today=TODAY)
        assert derive_directory(metadata) == (
            "Unknown_Docket",
            "Unknown_Party",
            "Unknown_Type",
            "2024-05-06",
        )

    def test_empty_mapping_uses_placeholders(self) -> None:
        assert derive_directory({}) == (
            "Unknown_Docket",
            "Unknown_Party",
            "Unknown_Type",
            "Unknown_Date",
        )

    @pytest.mark.parametrize("docket", ["..", ".", "../../etc"])
    def test_segments_cannot_escape_root(self, docket: str) -> None:
        segments = derive_directory({"docket_number": docket})
        assert all(SAFE.match(s) for s in segments)
        assert segments[0] not in {".", ".."}
        assert "/" not in segments[0]

    def test_long_values_are_capped(self) -> None:
        assert len(LONG_PARTY) > 255
        segments = derive_directory(
            {
                "docket_number": "CV-" + "9" * 400,
                "moving_party": LONG_PARTY,
                "document_type": "motion",
                "filing_date": "2024-04-01",
            }
        )
        assert all(len(s.encode()) <= 255 for s in segments)
        assert segments[1].startswith("Plaintiff_Number_0_Individually")
        assert segments[2:] == ("motion", "2024-04-01")
