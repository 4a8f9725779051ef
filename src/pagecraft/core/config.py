"""Configuration Management."""

import os
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="PAGECRAFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
        protected_namespaces=(),
    )

    # Server
    host: str = Field(default="127.0.0.1", description="HTTP bind address")
    port: int = Field(default=5000, gt=0, lt=65536, description="HTTP port")

    # Generative model
    groq_api_key: str = Field(
        default_factory=lambda: os.getenv("GROQ_API_KEY", ""), description="Groq API key"
    )
    model_name: str = Field(default="llama-3.3-70b-versatile", description="Model identifier")
    model_endpoint: str = Field(
        default="https://api.groq.com/openai/v1/chat/completions",
        description="Chat completion endpoint",
    )
    max_tokens: int = Field(default=4000, gt=0, description="Max output tokens")

    # Activity tracking
    activity_url: str | None = Field(default=None, description="Activity log service URL")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Validation
    max_layout_depth: int = Field(default=32, gt=0, description="Max component nesting depth")
    max_layout_bytes: int = Field(default=512 * 1024, gt=0, description="Max serialized layout size")

    def to_model_config(self):
        """Build the explicit model configuration handed to the AI client."""
        from ..models.config import ModelConfig

        return ModelConfig(
            api_key=self.groq_api_key,
            model=self.model_name,
            endpoint=self.model_endpoint,
            max_tokens=self.max_tokens,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
