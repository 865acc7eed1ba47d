"""
Configuration settings for the Perspective News generator.
"""

from pathlib import Path
from functools import lru_cache
from typing import Optional, Literal
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LLMProvider = Literal["gemini"]


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # API Keys
    gemini_api_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY", "gemini_api_key"),
    )

    # LLM Provider Selection
    llm_provider: LLMProvider = Field("gemini")

    # Model Configuration - Gemini
    gemini_search_model: str = Field("gemini-2.5-flash")
    gemini_rewrite_model: str = Field("gemini-2.5-flash")
    max_output_tokens: int = Field(5000, gt=0)

    # Edition shape
    story_count: int = Field(6, gt=0)

    # Rate Limiting / Retry
    retry_attempts: int = Field(3, ge=0)
    retry_initial_delay: float = Field(4.0, gt=0)  # seconds, doubled per retry
    style_delay: float = Field(2.0, ge=0)  # pause between style rewrites
    strict_styles: bool = Field(True)

    # Paths
    # Site root: the working directory the generator runs from
    base_dir: Path = Field(default_factory=Path.cwd)
    output_path: Optional[Path] = Field(default=None)

    # Logging
    log_level: str = Field("INFO")
    log_file: Optional[str] = Field(None)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Default output lives where the static front end serves from
        if self.output_path is None:
            self.output_path = self.base_dir / "public" / "news-data.json"

    def get_model(self, tier: str = "rewrite") -> str:
        """Get the model name for a pipeline stage ("search" or "rewrite")."""
        model_map = {
            "search": self.gemini_search_model,
            "rewrite": self.gemini_rewrite_model,
        }
        return model_map.get(tier, self.gemini_rewrite_model)

    def validate_provider_config(self) -> bool:
        """Validate that the selected provider has required configuration."""
        if self.llm_provider == "gemini" and not self.gemini_api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY (or API_KEY) not found. "
                "Set it in the environment, .env or .env.local."
            )
        return True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
