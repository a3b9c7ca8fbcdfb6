from functools import lru_cache
import os
from typing import Literal
import warnings

from pydantic import (
    ValidationInfo,
    computed_field,
    field_validator,
)
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Localization Workbench"
    DEBUG: bool = False

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "changethis"
    POSTGRES_DB: str = "workbench"

    @field_validator("POSTGRES_PASSWORD", mode="after")
    @classmethod
    def validate_postgres_password(cls, v: str, info: ValidationInfo) -> str:
        """Validate that POSTGRES_PASSWORD is changed in production."""
        env = (
            info.data.get("ENVIRONMENT")
            if info.data
            else os.getenv("ENVIRONMENT", "local")
        )
        if v == "changethis" and env == "production":
            raise ValueError(
                "POSTGRES_PASSWORD must be changed from default value in production. "
                "Set a strong, unique password via the POSTGRES_PASSWORD environment variable."
            )
        if v == "changethis" and env != "local":
            warnings.warn(
                "POSTGRES_PASSWORD is set to default value 'changethis'. "
                "Consider using a strong, unique password.",
                UserWarning,
                stacklevel=2,
            )
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> MultiHostUrl:
        """Build PostgreSQL connection URI for SQLAlchemy."""
        return MultiHostUrl.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    # OpenSearch holds the full-text translations index used for fuzzy matching
    OPENSEARCH_URL: str | None = None
    OPENSEARCH_VERIFY_CERTS: bool = False
    TRANSLATIONS_INDEX: str = "translations"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def opensearch_enabled(self) -> bool:
        """Check if OpenSearch is configured."""
        return bool(self.OPENSEARCH_URL)

    # Locale hierarchy. Keys are RFC 5646 codes, values the ordered parents
    # tried after them, e.g. LOCALE_FALLBACKS='{"es-MX": ["es-419", "es"]}'.
    # Codes missing from the table fall back by dropping their last subtag.
    ROOT_LOCALE: str = "en"
    LOCALE_FALLBACKS: dict[str, list[str]] = {}

    @field_validator("LOCALE_FALLBACKS", mode="after")
    @classmethod
    def validate_locale_fallbacks(
        cls, v: dict[str, list[str]]
    ) -> dict[str, list[str]]:
        """Reject entries that list a locale as its own fallback."""
        for code, parents in v.items():
            if code in parents:
                raise ValueError(f"Locale {code!r} cannot fall back to itself")
        return v

    # Fuzzy matching: raw candidates requested from the index, and the
    # minimum similarity percentage a suggestion must reach.
    FUZZY_MATCH_LIMIT: int = 5
    FUZZY_MATCH_THRESHOLD: int = 70


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
