from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Gemini
    gemini_api_key: str = ""
    gemini_api_base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    gemini_model: str = "gemini-2.0-flash"
    gemini_timeout: float | None = None  # seconds; None uses the httpx default

    # Logging
    log_level: str = "INFO"

    @property
    def gemini_generate_url(self) -> str:
        """Full generateContent endpoint for the configured model."""
        return f"{self.gemini_api_base_url.rstrip('/')}/{self.gemini_model}:generateContent"


@lru_cache
def get_settings() -> Settings:
    return Settings()
