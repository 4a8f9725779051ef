"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from ..agents.translator import LayoutTranslator
from ..handlers.ai import AIHandler
from ..handlers.projects import ProjectHandler
from ..models.client import ChatCompletionClient
from ..models.config import ModelConfig
from ..storage.projects import InMemoryProjectStore, ProjectStore
from .config import Settings, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide application settings."""
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_model_config(self, settings: Settings) -> ModelConfig:
        """Provide the explicit model configuration."""
        return settings.to_model_config()

    @singleton
    @provider
    def provide_client(self, config: ModelConfig) -> ChatCompletionClient:
        """Provide chat-completion client."""
        return ChatCompletionClient(config)

    @singleton
    @provider
    def provide_translator(self, client: ChatCompletionClient, settings: Settings) -> LayoutTranslator:
        """Provide layout translator with validation limits."""
        return LayoutTranslator(
            client,
            max_layout_depth=settings.max_layout_depth,
            max_layout_size=settings.max_layout_bytes,
        )

    @singleton
    @provider
    def provide_ai_handler(self, translator: LayoutTranslator) -> AIHandler:
        return AIHandler(translator)

    @singleton
    @provider
    def provide_project_store(self) -> ProjectStore:
        """Provide project store."""
        return InMemoryProjectStore()

    @singleton
    @provider
    def provide_project_handler(self, store: ProjectStore) -> ProjectHandler:
        return ProjectHandler(store)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
