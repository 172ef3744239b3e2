import pytest
from pydantic import ValidationError

from lawpaw.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_scanner_engine(self) -> None:
        s = Settings()
        assert s.scanner_engine == "bulk_extractor"

    def test_default_ocr_settings(self) -> None:
        s = Settings()
        assert s.ocr_engine == "poppler"
        assert s.ocr_dpi == 300
        assert s.ocr_crop_ratio == 0.5
        assert s.ocr_failure_policy == "fail"

    def test_default_classification_provider(self) -> None:
        s = Settings()
        assert s.classification_provider == "openai"
        assert s.classification_openai_timeout_seconds == 30

    def test_default_collision_policy(self) -> None:
        s = Settings()
        assert s.collision_policy == "suffix"

    def test_default_folders(self) -> None:
        s = Settings()
        assert s.input_folder == "uploads"
        assert s.output_folder == "output"
        assert s.reports_subdir == "reports"


class TestSettingsFromEnv:
    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_max_workers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_WORKERS", "8")
        s = Settings()
        assert s.max_workers == 8

    def test_loads_provider_specific_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLASSIFICATION_GROQ_API_KEY", "gsk-test")
        s = Settings()
        assert s.classification_groq_api_key == "gsk-test"

    def test_loads_crop_ratio(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCR_CROP_RATIO", "0.3")
        s = Settings()
        assert s.ocr_crop_ratio == 0.3


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_max_workers_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_WORKERS", "many")
        with pytest.raises(ValidationError):
            Settings()
