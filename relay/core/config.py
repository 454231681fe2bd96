from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_name: str = "Blueprint Relay"
    version: str = "0.1.0"
    environment: str = Field(default="development")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Gemini upstream
    gemini_key: Optional[str] = Field(default=None)
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
    )
    gemini_model: str = Field(default="gemini-2.5-flash")
    gemini_temperature: float = Field(default=0.7)
    gemini_max_output_tokens: int = Field(default=2048)
    upstream_timeout: float = Field(default=60.0)

    # Guardrails
    max_prompt_chars: int = Field(default=10000)

    # CORS
    cors_allow_origin: str = Field(default="*")

    # Observability
    otel_service_name: str = Field(default="blueprint-relay")
    otel_exporter_otlp_endpoint: Optional[str] = Field(default=None)
    prometheus_metrics_enabled: bool = Field(default=True)
    prometheus_metrics_port: int = Field(default=9090)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # json or text

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    def has_credential(self) -> bool:
        """Check whether an upstream API key is configured."""
        return bool(self.gemini_key and self.gemini_key.strip())

    def get_generate_url(self) -> str:
        """Full generateContent endpoint for the configured model."""
        return f"{self.gemini_base_url.rstrip('/')}/models/{self.gemini_model}:generateContent"

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() == "testing"


# Global settings instance
settings = Settings()
