"""Application configuration."""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class IssuerConfig(BaseModel):
    """Issuer identity reported in introspection responses."""

    model_config = ConfigDict(frozen=True)

    issuer: str


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(env_prefix="INTROSPECTION_", extra="ignore")

    APP_ROOT_PATH: str = ""
    APP_TITLE: str = "OIDC Token Introspection API"
    APP_VERSION: str = "0.1.0"
    OPENAPI_URL: str = ""

    OIDC_ISSUER: str = "http://localhost:8080/oidc"
    OIDC_BASE_PATH: str = "/oidc"

    # Answer missing/garbled client credentials with 401 instead of {"active": false}
    STRICT_CLIENT_AUTH: bool = False

    DB_DRIVER_ASYNC: str = "postgresql+asyncpg"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "auth_server"
    DB_SCHEMA: str = "auth"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"

    # CORS settings
    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    CORS_ALLOW_METHODS: list[str] = ["GET", "POST", "OPTIONS"]
    CORS_ALLOW_HEADERS: list[str] = ["Authorization", "Content-Type"]
    CORS_ALLOW_CREDENTIALS: bool = False

    @property
    def DB_URL(self) -> str:
        """Async DB connection string."""
        return (
            f"{self.DB_DRIVER_ASYNC}://"
            f"{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}"
            f"/{self.DB_NAME}"
        )

    @property
    def issuer_config(self) -> IssuerConfig:
        """Immutable issuer value handed to the introspection service."""
        return IssuerConfig(issuer=self.OIDC_ISSUER)


settings = Settings()
