from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # API Configuration
    debug: bool = False
    environment: str = "development"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"
    app_version: str = "2.0.0"

    # Which hosted model backs the prompt-backed operations: "gemini" or "openai"
    ai_provider: str = "gemini"

    # Gemini Configuration (secrets come from environment)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"

    # OpenAI Configuration (optional alternative provider)
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    openai_model: str = "gpt-4o-mini"

    # Sampling temperatures per operation
    recommendation_temperature: float = 0.4
    comparison_temperature: float = 0.3
    details_temperature: float = 0.3
    analysis_temperature: float = 0.4
    # Effort estimation is arithmetic; keep it near-deterministic
    effort_temperature: float = 0.1
    chat_temperature: float = 0.5

    # Per-tool result caching
    analysis_cache_ttl_seconds: float = 600.0
    details_cache_ttl_seconds: float = 600.0

    # UI
    release_notes_version: str = "2.0"
    consent_cookie_name: str = "cookie_consent_preference"
    cookie_max_age_seconds: int = 60 * 60 * 24 * 365

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def release_notes_cookie_name(self) -> str:
        return f"release_notes_acknowledged_v{self.release_notes_version}"

    @property
    def ai_provider_configured(self) -> bool:
        if self.ai_provider.lower() == "openai":
            return bool(self.openai_api_key)
        return bool(self.gemini_api_key)


# Global settings instance
settings = Settings()
