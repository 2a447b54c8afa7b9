from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    cors_origin: str = "*"

    storage_account_url: str = ""
    storage_container: str = "uploads"

    servicebus_fqdn: str = ""
    servicebus_queue: str = "jobs"

    cosmos_account_url: str = ""
    cosmos_db_name: str = "docpipe"
    cosmos_container_name: str = "results"

    processed_base_url: str = "http://localhost:8001/api/status"

    inference_provider: str = "azure_openai"
    azure_openai_endpoint: str = ""
    azure_openai_api_key: str = ""
    azure_openai_deployment_name: str = ""
    azure_openai_api_version: str = "2024-10-21"
    inference_timeout_seconds: int = 30
    inference_temperature: float = 0.2

    pdf_engine: str = "pdfplumber"
    pdf_max_tokens: int = 6000

    batch_size: int = 5
    batch_max_wait_time: float = 10.0
    lock_renewal_seconds: int = 120
    poll_idle_seconds: float = 1.0
    max_delivery_attempts: int = 5

    retry_after_seconds: int = 5
    max_upload_bytes: int = 20 * 1024 * 1024
