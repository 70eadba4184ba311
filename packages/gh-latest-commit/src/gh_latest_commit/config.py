from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class Settings(BaseSettings):
    """Run settings loaded from environment variables.

    Fields read ``LATEST_COMMIT_<NAME>``; the username and the GitHub endpoints
    use the variables a GitHub Actions runner already provides.
    """

    model_config = SettingsConfigDict(
        env_prefix="LATEST_COMMIT_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    username: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_GH_USERNAME", "GH_USERNAME"),
    )
    document: str = "README.md"

    api_url: str = Field(
        default="https://api.github.com",
        validation_alias=AliasChoices("GITHUB_API_URL"),
    )
    host: str = Field(
        default="github.com",
        validation_alias=AliasChoices("GITHUB_SERVER_URL"),
    )
    per_page: int = Field(default=100, ge=1, le=100)
    timeout: float = Field(default=30.0, gt=0)

    # Preview image enrichment; when fallback is off a failed preview aborts the run.
    preview: bool = False
    preview_fallback: bool = False
    preview_url: str = "https://api.microlink.io"

    push: bool = True
    git_name: str | None = None
    git_email: str | None = None

    @field_validator("host", mode="before")
    @classmethod
    def _strip_scheme(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        host = value.strip().rstrip("/")
        for prefix in ("https://", "http://"):
            if host.startswith(prefix):
                host = host[len(prefix):]
        return host or "github.com"

    def require_username(self) -> str:
        username = self.username.strip()
        if not username:
            raise ConfigurationError(
                "A GitHub username is required. Pass --username or set GH_USERNAME."
            )
        return username


def load_settings(**overrides: Any) -> Settings:
    """Build settings from the environment; non-None overrides win."""
    try:
        return Settings(**{key: value for key, value in overrides.items() if value is not None})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
