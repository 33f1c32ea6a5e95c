from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Billing API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True  # Set to False in production
    host: str = "0.0.0.0"
    port: int = 3000

    # Security
    log_user_emails: bool = False  # Set to False in production for GDPR compliance
    # CSP for production (no unsafe-inline, no external CDN) - set to empty string to use default
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = 7
    refresh_token_expire_days: int = 30
    bcrypt_rounds: int = 10
    integration_token_header: str = "X-API-Token"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("DATABASE_URL must not be empty")
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        # bcrypt accepts cost factors 4..31
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
