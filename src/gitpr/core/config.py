"""Environment-driven configuration using Pydantic Settings."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitpr.core.exceptions import AuthenticationError, ConfigurationError
from gitpr.core.models import ReviewDecision

DefaultReview = Literal["approve", "comment-only", "reject", "explicit"]

_DEFAULT_REVIEW_DECISIONS: dict[str, ReviewDecision | None] = {
    "approve": ReviewDecision.APPROVE,
    "comment-only": ReviewDecision.COMMENT_ONLY,
    "reject": ReviewDecision.REQUEST_CHANGES,
    "explicit": None,
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class Settings(BaseSettings):
    """Process-wide settings, built once per invocation.

    Env vars are prefixed with ``GIT_PR_``.  The token and debug flag also
    accept the bare ``GITHUB_TOKEN`` / ``DEBUG`` names the tool has always read.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GIT_PR_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- GitHub ---
    github_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("github_token", "GIT_PR_GITHUB_TOKEN", "GITHUB_TOKEN"),
    )
    github_api_base: str = "https://api.github.com"
    per_page: int = Field(default=50, ge=1, le=100)
    request_timeout_seconds: float = 30.0

    # --- Local tooling ---
    pager: str = "delta"
    default_review: DefaultReview = "approve"

    # --- Diagnostics ---
    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("debug", "GIT_PR_DEBUG", "DEBUG"),
    )
    log_level: str = "WARNING"

    @field_validator("debug", mode="before")
    @classmethod
    def _lenient_debug(cls, value: object) -> bool:
        """``DEBUG`` is shared with other tools (``DEBUG=*``); only a truthy word turns it on."""
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in _TRUTHY

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()

    @property
    def default_decision(self) -> ReviewDecision | None:
        """Decision used when submit-review gets no flag; ``None`` means one is required."""
        return _DEFAULT_REVIEW_DECISIONS[self.default_review]

    def require_token(self) -> str:
        """Return the raw token or fail before any request is attempted."""
        if self.github_token is None or not self.github_token.get_secret_value().strip():
            raise AuthenticationError(
                "GITHUB_TOKEN is not set",
                detail="Export GITHUB_TOKEN (or GIT_PR_GITHUB_TOKEN) with a token that can read the repository.",
            )
        return self.github_token.get_secret_value().strip()


def get_settings() -> Settings:
    """Build settings from the environment, mapping validation failures to ConfigurationError."""
    try:
        return Settings()
    except PydanticValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise ConfigurationError(f"Invalid configuration: {fields or e}", detail=str(e)) from e
