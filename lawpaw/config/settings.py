from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "lawpaw"
    db_username: str = "lawpaw"
    db_password: str = "secret"
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 10.0

    input_folder: str = "uploads"
    output_folder: str = "output"
    reports_subdir: str = "reports"
    document_extension: str = ".pdf"

    scanner_engine: str = "bulk_extractor"
    bulk_extractor_path: str = "bulk_extractor"
    scan_timeout_seconds: int = 300

    ocr_engine: str = "poppler"
    ocr_dpi: int = 300
    ocr_crop_ratio: float = 0.5
    ocr_language: str = "eng"
    ocr_timeout_seconds: int = 120
    pdfseparate_path: str = "pdfseparate"
    pdftoppm_path: str = "pdftoppm"
    tesseract_path: str = "tesseract"
    ocr_failure_policy: str = "fail"

    classification_provider: str = "openai"
    classification_max_chars: int = 8000

    classification_openai_api_key: str = ""
    classification_openai_model_name: str = "gpt-4o-mini"
    classification_openai_timeout_seconds: int = 30
    classification_openai_temperature: float = 0.0

    classification_openai_compatible_base_url: str = ""
    classification_openai_compatible_api_key: str = ""
    classification_openai_compatible_model_name: str = ""
    classification_openai_compatible_timeout_seconds: int = 30

    classification_openrouter_api_key: str = ""
    classification_openrouter_model_name: str = ""
    classification_openrouter_timeout_seconds: int = 30

    classification_groq_api_key: str = ""
    classification_groq_model_name: str = ""
    classification_groq_timeout_seconds: int = 30

    classification_together_api_key: str = ""
    classification_together_model_name: str = ""
    classification_together_timeout_seconds: int = 30

    classification_deepseek_api_key: str = ""
    classification_deepseek_model_name: str = ""
    classification_deepseek_timeout_seconds: int = 30

    classification_ollama_api_key: str = "ollama"
    classification_ollama_model_name: str = ""
    classification_ollama_timeout_seconds: int = 120

    max_workers: int = 4
    collision_policy: str = "suffix"

    api_host: str = "0.0.0.0"
    api_port: int = 8000
