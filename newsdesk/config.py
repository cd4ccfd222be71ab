"""
Centralized Configuration Management for The Insight Times.

Single source of truth for model names, image settings, newsroom copy
and API key lookup. Values come from environment variables or a local
.env file.

Usage:
    from newsdesk.config import config
    model = config.models.TEXT_MODEL
"""

from pathlib import Path
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from newsdesk import __version__


def _get_project_root() -> Path:
    """Get project root directory (works cross-platform)."""
    # This file is at newsdesk/config.py, so parent.parent is project root
    return Path(__file__).resolve().parent.parent


class APIConfig(BaseSettings):
    """API keys. Any one of the three names is accepted."""

    GEMINI_API_KEY: Optional[str] = None
    GOOGLE_API_KEY: Optional[str] = None
    API_KEY: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def resolved_key(self) -> Optional[str]:
        """First non-blank key in priority order, or None."""
        for key in (self.GEMINI_API_KEY, self.GOOGLE_API_KEY, self.API_KEY):
            if key and key.strip():
                return key.strip()
        return None


class ModelConfig(BaseSettings):
    """Model selection configuration."""

    # Text model must support the google_search tool
    TEXT_MODEL: str = "gemini-2.5-flash"

    # Nano Banana Pro
    IMAGE_MODEL: str = "gemini-3-pro-image-preview"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NEWSDESK_",
        extra="ignore",
    )


class ImageConfig(BaseModel):
    """Illustration request and fallback settings."""

    ASPECT_RATIO: str = "16:9"
    IMAGE_SIZE: str = "2K"
    DEFAULT_MIME_TYPE: str = "image/png"
    FALLBACK_IMAGE_URL: str = "https://picsum.photos/1600/900?grayscale&blur=2"


class NewsroomConfig(BaseModel):
    """Publication copy and user-facing messages."""

    PUBLICATION_NAME: str = "The Insight Times"
    TAGLINE: str = "All the Intelligence That's Fit to Print"
    EDITION: str = "Global Edition"
    RESEARCH_WINDOW_MONTHS: int = 12
    BILLING_DOCS_URL: str = "https://ai.google.dev/gemini-api/docs/billing"

    GENERATION_FAILED_MESSAGE: str = "Failed to investigate the story."
    UNEXPECTED_ERROR_MESSAGE: str = "An unexpected error occurred while gathering the news."

    # Loading captions keyed by AppState value
    STATUS_CAPTIONS: Dict[str, str] = Field(default={
        "searching_text": "Conducting Research & Analysis...",
        "generating_image": "Developing Photography...",
    })


class NewsdeskConfig(BaseSettings):
    """Main configuration class combining all config sections."""

    api: APIConfig = Field(default_factory=APIConfig)
    models: ModelConfig = Field(default_factory=ModelConfig)
    image: ImageConfig = Field(default_factory=ImageConfig)
    newsroom: NewsroomConfig = Field(default_factory=NewsroomConfig)

    PROJECT_ROOT: Path = Field(default_factory=_get_project_root)

    # Application metadata
    APP_NAME: str = "The Insight Times"
    VERSION: str = __version__
    ENVIRONMENT: str = Field(default="development", alias="NEWSDESK_ENV")
    LOG_LEVEL: str = Field(default="INFO", alias="NEWSDESK_LOG_LEVEL")
    LOG_DIR: str = Field(default="logs", alias="NEWSDESK_LOG_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def ENV_FILE(self) -> Path:
        """The .env file the credential screen writes to."""
        return self.PROJECT_ROOT / ".env"

    def validate(self) -> Dict[str, Any]:
        """Validate configuration and return status."""
        issues = []
        warnings = []

        if not self.models.TEXT_MODEL:
            issues.append("CRITICAL: NEWSDESK_TEXT_MODEL is empty")
        if not self.models.IMAGE_MODEL:
            issues.append("CRITICAL: NEWSDESK_IMAGE_MODEL is empty")

        # Key is checked fresh so a key added after import is seen
        if not APIConfig().resolved_key():
            warnings.append(
                "No API key configured - set GEMINI_API_KEY, GOOGLE_API_KEY or API_KEY, "
                "or enter one on the credential screen"
            )

        return {
            "valid": len(issues) == 0,
            "issues": issues,
            "warnings": warnings,
            "environment": self.ENVIRONMENT,
        }


# Singleton instance
config = NewsdeskConfig()