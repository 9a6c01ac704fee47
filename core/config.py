"""
Core configuration using Pydantic Settings.
Loads from environment variables.
"""

from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = Field(default="hrms-recruitment", alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", alias="APP_ENV"
    )
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    # API
    api_v1_prefix: str = "/api/v1"
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        alias="ALLOWED_ORIGINS",
    )

    # Storage
    data_file: str = Field(default="data/db.json", alias="DATA_FILE")
    upload_dir: str = Field(default="uploads/resumes", alias="UPLOAD_DIR")
    max_resume_size_bytes: int = Field(
        default=5 * 1024 * 1024, alias="MAX_RESUME_SIZE_BYTES"
    )

    # Logging
    log_request_body: bool = Field(default=False, alias="LOG_REQUEST_BODY")
    log_response_body: bool = Field(default=False, alias="LOG_RESPONSE_BODY")
    log_max_body_size: int = Field(default=1024, alias="LOG_MAX_BODY_SIZE")
    json_logs: bool = Field(default=True, alias="JSON_LOGS")

    # Email
    email_backend: Literal["smtp", "console"] = Field(default="smtp", alias="EMAIL_BACKEND")
    smtp_host: str = Field(default="smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: str | None = Field(default=None, alias="SMTP_USER")
    smtp_password: str | None = Field(default=None, alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(default=True, alias="SMTP_USE_TLS")
    smtp_timeout: float = Field(default=30.0, alias="SMTP_TIMEOUT")
    from_email: str = Field(default="noreply@hrms.com", alias="FROM_EMAIL")

    # Company
    company_name: str = Field(default="HRMS Company", alias="COMPANY_NAME")
    company_website: str = Field(
        default="http://localhost:3000", alias="COMPANY_WEBSITE"
    )


# Global settings instance
settings = Settings()
