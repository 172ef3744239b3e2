import os
from pathlib import Path
from unittest.mock import MagicMock, patch

from lawpaw.scanner.bulk_extractor_adapter import (
    BulkExtractorScanner,
    parse_wordlist,
    strip_uri_scheme,
)
from lawpaw.tools.exceptions import ToolInvocationError, ToolTimeoutError


def _writes_wordlist(content: str | None):
    """Fake run_tool that drops a wordlist artifact into the -o directory."""
    seen: dict[str, Path] = {}

    def fake_run_tool(argv, timeout_seconds, cwd=None):
        output_dir = Path(argv[argv.index("-o") + 1])
        seen["output_dir"] = output_dir
        output_dir.mkdir(parents=True)
        if content is not None:
            (output_dir / "wordlist.txt").write_text(content, encoding="utf-8")
        return MagicMock(returncode=0)

    return fake_run_tool, seen


class TestStripUriScheme:
    def test_strips_file_scheme(self) -> None:
        assert strip_uri_scheme("file:///data/in/a.pdf") == "/data/in/a.pdf"

    def test_percent_decodes(self) -> None:
        assert strip_uri_scheme("file:///data/in/my%20doc.pdf") == "/data/in/my doc.pdf"

    def test_plain_path_unchanged(self) -> None:
        assert strip_uri_scheme("/data/in/a.pdf") == "/data/in/a.pdf"


class TestParseWordlist:
    def test_deduplicates_and_sorts(self) -> None:
        lines = [
            "motion\tfile:///data/b.pdf",
            "MOTION\tfile:///data/a.pdf",
            "Motion\tfile:///data/b.pdf",
        ]
        assert parse_wordlist(lines, "motion", ".pdf") == ["/data/a.pdf", "/data/b.pdf"]

    def test_skips_comments_and_malformed_lines(self) -> None:
        lines = [
            "# bulk_extractor wordlist",
            "",
            "motion-without-location",
            "motion\tfile:///data/a.pdf\t123",
        ]
        assert parse_wordlist(lines, "motion", ".pdf") == ["/data/a.pdf"]

    def test_filters_other_extensions(self) -> None:
        lines = [
            "motion\tfile:///data/a.PDF",
            "motion\tfile:///data/notes.txt",
        ]
        assert parse_wordlist(lines, "motion", ".pdf") == ["/data/a.PDF"]

    def test_drops_lines_without_keyword(self) -> None:
        lines = ["reply\tfile:///data/a.pdf"]
        assert parse_wordlist(lines, "motion", ".pdf") == []

    def test_relative_locations_become_absolute(self) -> None:
        result = parse_wordlist(["motion\tin/a.pdf"], "motion", ".pdf")
        assert result == [os.path.abspath("in/a.pdf")]


class TestBulkExtractorScanner:
    def test_scan_returns_paths_from_artifact(self, tmp_path: Path) -> None:
        fake, _seen = _writes_wordlist(
            "Motion\tfile:///data/in/a.pdf\nmotion\tfile:///data/in/a.pdf\n"
        )
        scanner = BulkExtractorScanner(executable="/opt/be/bulk_extractor")
        with patch("lawpaw.scanner.bulk_extractor_adapter.run_tool", side_effect=fake) as mock:
            result = scanner.scan(tmp_path, "motion")

        assert result.ok
        assert result.paths == ["/data/in/a.pdf"]
        argv = mock.call_args[0][0]
        assert argv[0] == "/opt/be/bulk_extractor"
        assert argv[argv.index("-E") + 1] == "wordlist"
        assert argv[argv.index("-R") + 1] == tmp_path
        assert "-f" not in argv

    def test_scratch_directory_is_removed(self, tmp_path: Path) -> None:
        fake, seen = _writes_wordlist("motion\tfile:///data/a.pdf\n")
        with patch("lawpaw.scanner.bulk_extractor_adapter.run_tool", side_effect=fake):
            BulkExtractorScanner().scan(tmp_path, "motion")

        assert not seen["output_dir"].parent.exists()

    def test_empty_artifact_is_not_an_error(self, tmp_path: Path) -> None:
        fake, _seen = _writes_wordlist("")
        with patch("lawpaw.scanner.bulk_extractor_adapter.run_tool", side_effect=fake):
            result = BulkExtractorScanner().scan(tmp_path, "motion")

        assert result.ok
        assert result.paths == []

    def test_missing_artifact_is_reported(self, tmp_path: Path) -> None:
        fake, seen = _writes_wordlist(None)
        with patch("lawpaw.scanner.bulk_extractor_adapter.run_tool", side_effect=fake):
            result = BulkExtractorScanner().scan(tmp_path, "motion")

        assert not result.ok
        assert result.paths == []
        assert "wordlist.txt" in str(result.error)
        assert not seen["output_dir"].parent.exists()

    def test_tool_failure_yields_empty_result_with_error(self, tmp_path: Path) -> None:
        error = ToolTimeoutError("bulk_extractor", "timed out after 300s")
        with patch("lawpaw.scanner.bulk_extractor_adapter.run_tool", side_effect=error):
            result = BulkExtractorScanner().scan(tmp_path, "motion")

        assert result.paths == []
        assert isinstance(result.error, ToolInvocationError)

    def test_scratch_directory_is_removed_when_tool_fails(self, tmp_path: Path) -> None:
        seen: dict[str, Path] = {}

        def fail_after_output(argv, timeout_seconds, cwd=None):
            output_dir = Path(argv[argv.index("-o") + 1])
            seen["output_dir"] = output_dir
            output_dir.mkdir(parents=True)
            (output_dir / "report.xml").write_text("<partial/>", encoding="utf-8")
            raise ToolInvocationError("bulk_extractor", "exited with status 1")

        with patch(
            "lawpaw.scanner.bulk_extractor_adapter.run_tool", side_effect=fail_after_output
        ):
            result = BulkExtractorScanner().scan(tmp_path, "motion")

        assert not result.ok
        assert "exited with status 1" in str(result.error)
        assert not seen["output_dir"].parent.exists()

    def test_scan_candidates_labels_engine_and_root(self, tmp_path: Path) -> None:
        fake, _seen = _writes_wordlist("motion\tfile:///data/a.pdf\n")
        with patch("lawpaw.scanner.bulk_extractor_adapter.run_tool", side_effect=fake):
            candidates, scan = BulkExtractorScanner().scan_candidates(tmp_path, "motion")

        assert scan.ok
        assert [c.path for c in candidates] == ["/data/a.pdf"]
        assert candidates[0].source_label == f"bulk_extractor:{tmp_path}"
