"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Taskboard API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5005)

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/taskboard",
        description="PostgreSQL connection URL with asyncpg driver",
    )
    database_connect_timeout: int = Field(
        default=5,
        description="Seconds to wait for a database connection before failing",
    )

    # JWT Authentication
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Secret key for JWT signing",
    )
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(default=60 * 24 * 7)
    auth_token_header: str = Field(
        default="Authorization",
        description="Header carrying the bearer token (a 'Bearer ' prefix is optional)",
    )
    allow_admin_self_registration: bool = Field(
        default=False,
        description="Allow POST /users to create accounts with the admin role",
    )

    # Invitations
    invitation_expiry_days: int = Field(default=7)
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Base URL used for links in outgoing emails",
    )

    # Email (SMTP)
    smtp_host: str = Field(default="", description="SMTP host; empty disables email delivery")
    smtp_port: int = Field(default=587)
    smtp_user: str = Field(default="")
    smtp_password: str = Field(default="")
    smtp_from: str = Field(default="no-reply@taskboard.local")
    smtp_use_tls: bool = Field(default=True)
    smtp_timeout: float = Field(default=10.0)

    # Attachments
    upload_dir: str = Field(default="uploads")
    upload_url_prefix: str = Field(default="/uploads")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Hosting providers usually supply a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
