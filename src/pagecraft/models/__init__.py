"""
Models package - generative model configuration and client.
"""

from .config import GroqModel, ModelConfig, DEFAULT_ENDPOINT
from .client import ChatCompletionClient, ModelConfigError, UpstreamError

__all__ = [
    "GroqModel",
    "ModelConfig",
    "DEFAULT_ENDPOINT",
    "ChatCompletionClient",
    "ModelConfigError",
    "UpstreamError",
]
