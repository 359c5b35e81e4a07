from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docdiff"
    db_username: str = "docdiff"
    db_password: str = "secret"

    max_job_attempts: int = 3
    job_poll_interval_seconds: int = 5
    max_concurrent_jobs: int = 4

    blob_store_root: str = "/app/blobs"
    max_upload_mb: int = 50

    ocr_provider: str = "vision"
    ocr_timeout_seconds: int = 120

    comparison_provider: str = "openai"
    comparison_api_key: str = ""
    comparison_model_name: str = ""
    comparison_base_url: str = ""
    comparison_timeout_seconds: int = 300
    comparison_temperature: float = 0.1

    provider_max_retries: int = 3
    provider_retry_base_delay_seconds: float = 2.0
