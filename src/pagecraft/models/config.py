"""
Model configuration with strong typing.
Explicit settings for the chat-completion collaborator.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class GroqModel(str, Enum):
    """Known model variants on the default endpoint."""

    LLAMA_70B = "llama-3.3-70b-versatile"  # Default for code and layout work
    LLAMA_8B = "llama-3.1-8b-instant"  # Fast, lower quality


DEFAULT_ENDPOINT = "https://api.groq.com/openai/v1/chat/completions"


class ModelConfig(BaseModel):
    """Type-safe generative model configuration.

    Passed explicitly to ``ChatCompletionClient``; nothing below the
    composition root reads the environment.
    """

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr = Field(..., description="Bearer token for the endpoint")
    model: str = Field(default=GroqModel.LLAMA_70B.value)
    endpoint: str = Field(default=DEFAULT_ENDPOINT)

    # Generation parameters
    max_tokens: int = Field(default=4000, ge=1, le=32768)
    generate_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    optimize_temperature: float = Field(default=0.2, ge=0.0, le=2.0)

    @property
    def has_api_key(self) -> bool:
        """Whether a non-empty key was configured."""
        return bool(self.api_key.get_secret_value())
