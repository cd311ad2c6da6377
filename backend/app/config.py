"""
Catalog Manager Configuration Module
Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Catalog Manager"
    debug: bool = False

    # Authentication
    secret_key: str = Field(..., min_length=32)  # Required, no default
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "catalog-manager"
    jwt_audience: str = "catalog-manager-users"
    access_token_expire_days: int = 7
    confirmation_token_expire_hours: int = 24

    # Password policy
    password_min_length: int = 8
    password_require_digit: bool = True
    password_require_lowercase: bool = True
    password_require_uppercase: bool = True
    password_require_non_alphanumeric: bool = True

    # Database
    database_url: str = Field(..., alias="DATABASE_URL")

    # Outbound email (confirmation links are logged when smtp_host is empty)
    smtp_host: str = ""
    smtp_port: int = 465
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_from: str = "no-reply@catalog-manager.local"
    smtp_use_ssl: bool = True
    smtp_timeout_seconds: int = 30

    # Links in outgoing emails point here
    public_base_url: str = "http://localhost:8000"

    # Uploads
    upload_dir: str = "/data/uploads"
    max_upload_bytes: int = 5 * 1024 * 1024  # 5 MB

    # Logging
    log_dir: str = "/var/log/catalog-manager"
    log_level: str = "INFO"

    # CORS
    allowed_origins: str = "http://localhost:5237,https://localhost:5237"

    # Initial administrator (created on startup when both are set)
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None
    admin_full_name: str = "Administrator"

    # API Settings
    api_prefix: str = "/api"

    @field_validator('secret_key')
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Validate that the secret key is secure."""
        if not v or len(v) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters long")

        # Check for common insecure values
        insecure_values = [
            "change-me-in-production",
            "yoursecretkey",
            "secret",
            "password",
            "changeme",
        ]
        if any(bad in v.lower() for bad in insecure_values):
            raise ValueError(
                "SECRET_KEY appears to be insecure. Generate a secure key with: "
                "python -c 'import secrets; print(secrets.token_hex(32))'"
            )

        return v

    @field_validator('password_min_length')
    @classmethod
    def validate_password_min_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError("PASSWORD_MIN_LENGTH must be positive")
        return v

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    try:
        return Settings()
    except Exception as e:
        print(f"❌ Configuration Error: {e}")
        raise


# Convenience alias
settings = get_settings()
