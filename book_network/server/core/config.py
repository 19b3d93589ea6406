"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class SecurityConfig(BaseModel):
    """Session token (JWT) configuration."""

    secret_key: str = Field(
        default="change-me-in-production-0123456789abcdef",
        alias="JWT_SECRET_KEY",
        description="Secret used to sign session tokens",
    )
    algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM", description="JWT signing algorithm")
    expiration_minutes: int = Field(
        default=1440, alias="JWT_EXPIRATION_MINUTES", description="Session token lifetime in minutes"
    )

    model_config = {"populate_by_name": True}


class VerificationTokenConfig(BaseModel):
    """Verification code (activation / reset / set-password) configuration."""

    expiration_minutes: int = Field(
        default=15, alias="TOKEN_EXPIRATION_MINUTES", description="Lifetime of an emailed verification code"
    )
    code_length: int = Field(default=6, alias="TOKEN_CODE_LENGTH", description="Number of digits in a code")

    model_config = {"populate_by_name": True}


class MailConfig(BaseModel):
    """Brevo transactional email API configuration."""

    api_key: Optional[str] = Field(default=None, alias="BREVO_API_KEY", description="Brevo API key")
    api_url: str = Field(
        default="https://api.brevo.com/v3/smtp/email",
        alias="BREVO_API_URL",
        description="Brevo transactional email endpoint",
    )
    sender_email: str = Field(
        default="no-reply@book-network.local", alias="BREVO_SENDER_EMAIL", description="Sender email address"
    )
    sender_name: str = Field(default="Book Network", alias="BREVO_SENDER_NAME", description="Sender display name")
    timeout: float = Field(default=10.0, alias="MAIL_TIMEOUT", description="HTTP timeout in seconds")

    model_config = {"populate_by_name": True}


class FrontendConfig(BaseModel):
    """Links embedded into emails, pointing at the web UI."""

    activation_url: str = Field(
        default="http://localhost:4200/activate-account",
        alias="FRONTEND_ACTIVATION_URL",
        description="Account activation page",
    )
    reset_url: str = Field(
        default="http://localhost:4200/reset-password",
        alias="FRONTEND_RESET_URL",
        description="Password reset page",
    )
    add_url: str = Field(
        default="http://localhost:4200/set-password",
        alias="FRONTEND_ADD_URL",
        description="Set-password page for admin-created accounts",
    )

    model_config = {"populate_by_name": True}


class StorageConfig(BaseModel):
    """Local file storage configuration."""

    file_upload_path: str = Field(
        default="./uploads", alias="FILE_UPLOAD_PATH", description="Root directory for uploaded book covers"
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


class MonitoringConfig(BaseModel):
    """Logfire tracing configuration. Tracing stays off unless explicitly enabled."""

    enabled: bool = Field(default=False, alias="LOGFIRE_ENABLED", description="Send traces and request logs to Logfire")
    token: Optional[str] = Field(default=None, alias="LOGFIRE_TOKEN", description="Logfire write token")
    environment: str = Field(default="development", alias="LOGFIRE_ENVIRONMENT", description="Deployment environment")
    service_name: str = Field(
        default="book-network-server", alias="LOGFIRE_SERVICE_NAME", description="Service name reported to Logfire"
    )
    service_version: str = Field(
        default="1.0.0", alias="LOGFIRE_SERVICE_VERSION", description="Service version reported to Logfire"
    )
    sample_rate: float = Field(default=1.0, alias="LOGFIRE_SAMPLE_RATE", description="Head sampling rate (0.0 - 1.0)")
    trace_sqlalchemy: bool = Field(default=True, alias="LOGFIRE_TRACE_SQLALCHEMY", description="Trace database queries")
    trace_httpx: bool = Field(default=True, alias="LOGFIRE_TRACE_HTTPX", description="Trace outgoing HTTP calls")
    trace_fastapi: bool = Field(default=True, alias="LOGFIRE_TRACE_FASTAPI", description="Trace API endpoints")

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Book Network Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Book Network server host address to bind to",
        alias="BOOK_NETWORK_SERVER_HOST",
    )
    server_port: int = Field(
        default=8088,
        description="Book Network server port number",
        alias="BOOK_NETWORK_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Book Network logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="BOOK_NETWORK_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Log line format (simple, detailed, json)",
        alias="BOOK_NETWORK_LOG_FORMAT",
    )
    log_file_dir: str = Field(
        default="logs",
        description="Directory for the rotating application log file",
        alias="BOOK_NETWORK_LOG_FILE_DIR",
    )
    enable_file_logging: bool = Field(
        default=False,
        description="Write logs to <log_file_dir>/book_network.log as well as the console",
        alias="BOOK_NETWORK_ENABLE_FILE_LOGGING",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./book_network.db",
        description="Async SQLAlchemy connection URL for application database",
        alias="DATABASE_URL",
    )

    # =====================================================================
    # Flat aliases consumed by the grouped configurations below
    # =====================================================================
    jwt_secret_key: str = Field(default="change-me-in-production-0123456789abcdef", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expiration_minutes: int = Field(default=1440, alias="JWT_EXPIRATION_MINUTES")
    token_expiration_minutes: int = Field(default=15, alias="TOKEN_EXPIRATION_MINUTES")
    token_code_length: int = Field(default=6, alias="TOKEN_CODE_LENGTH")
    brevo_api_key: Optional[str] = Field(default=None, alias="BREVO_API_KEY")
    brevo_api_url: str = Field(default="https://api.brevo.com/v3/smtp/email", alias="BREVO_API_URL")
    brevo_sender_email: str = Field(default="no-reply@book-network.local", alias="BREVO_SENDER_EMAIL")
    brevo_sender_name: str = Field(default="Book Network", alias="BREVO_SENDER_NAME")
    mail_timeout: float = Field(default=10.0, alias="MAIL_TIMEOUT")
    frontend_activation_url: str = Field(
        default="http://localhost:4200/activate-account", alias="FRONTEND_ACTIVATION_URL"
    )
    frontend_reset_url: str = Field(default="http://localhost:4200/reset-password", alias="FRONTEND_RESET_URL")
    frontend_add_url: str = Field(default="http://localhost:4200/set-password", alias="FRONTEND_ADD_URL")
    file_upload_path: str = Field(default="./uploads", alias="FILE_UPLOAD_PATH")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    logfire_enabled: bool = Field(default=False, alias="LOGFIRE_ENABLED")
    logfire_token: Optional[str] = Field(default=None, alias="LOGFIRE_TOKEN")
    logfire_environment: str = Field(default="development", alias="LOGFIRE_ENVIRONMENT")
    logfire_service_name: str = Field(default="book-network-server", alias="LOGFIRE_SERVICE_NAME")
    logfire_service_version: str = Field(default="1.0.0", alias="LOGFIRE_SERVICE_VERSION")
    logfire_sample_rate: float = Field(default=1.0, alias="LOGFIRE_SAMPLE_RATE")
    logfire_trace_sqlalchemy: bool = Field(default=True, alias="LOGFIRE_TRACE_SQLALCHEMY")
    logfire_trace_httpx: bool = Field(default=True, alias="LOGFIRE_TRACE_HTTPX")
    logfire_trace_fastapi: bool = Field(default=True, alias="LOGFIRE_TRACE_FASTAPI")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def security(self) -> SecurityConfig:
        """Get session token configuration from environment variables."""
        return SecurityConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def verification_token(self) -> VerificationTokenConfig:
        """Get verification code configuration from environment variables."""
        return VerificationTokenConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def mail(self) -> MailConfig:
        """Get Brevo mail configuration from environment variables."""
        return MailConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def frontend(self) -> FrontendConfig:
        """Get frontend link configuration from environment variables."""
        return FrontendConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def storage(self) -> StorageConfig:
        """Get file storage configuration from environment variables."""
        return StorageConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


    @property
    def monitoring(self) -> MonitoringConfig:
        """Get Logfire monitoring configuration from environment variables."""
        return MonitoringConfig.model_validate(self.model_dump(by_alias=True))

settings = Settings()
