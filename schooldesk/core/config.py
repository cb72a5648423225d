import json
from typing import Optional, List
from datetime import timedelta

from pydantic import Field, EmailStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application Settings
    APP_NAME: str = "SchoolDesk"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database Settings
    DATABASE_URL: str = Field(...)
    SQL_ECHO: bool = False

    # Authentication Settings
    SECRET_KEY: str = Field(...)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000"
        ]
    )

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Admin bootstrap
    SUPER_ADMIN_EMAIL: Optional[EmailStr] = None
    SUPER_ADMIN_PASSWORD: Optional[str] = None

    # Student CSV import
    CSV_IMPORT_LAST_NAME_PLACEHOLDER: str = "-"
    CSV_IMPORT_GENERATE_EMAIL: bool = False
    CSV_IMPORT_EMAIL_DOMAIN: str = "student.edu"
    MAX_UPLOAD_BYTES: int = 2 * 1024 * 1024

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def parse_allowed_origins(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )


# Initialize settings
settings = Settings()


# Helper Functions
def get_token_expires_delta(minutes: Optional[int] = None) -> timedelta:
    if minutes is None:
        minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    return timedelta(minutes=minutes)


def get_csv_import_settings() -> dict:
    return {
        "last_name_placeholder": settings.CSV_IMPORT_LAST_NAME_PLACEHOLDER,
        "generate_email": settings.CSV_IMPORT_GENERATE_EMAIL,
        "email_domain": settings.CSV_IMPORT_EMAIL_DOMAIN,
    }
