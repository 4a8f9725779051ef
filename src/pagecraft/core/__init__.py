"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    extract_json,
    extract_json_candidate,
    strip_code_fences,
    safe_json_dumps,
    JSONParseError,
)
from .validate import (
    ValidationError,
    ValidationResult,
    LayoutRequest,
    CodeRequest,
    LayoutValidator,
    validate_layout,
)
from .id import new_component_id, new_request_id


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "extract_json_candidate",
    "strip_code_fences",
    "safe_json_dumps",
    "JSONParseError",
    # Validation
    "ValidationError",
    "ValidationResult",
    "LayoutRequest",
    "CodeRequest",
    "LayoutValidator",
    "validate_layout",
    # IDs
    "new_component_id",
    "new_request_id",
    # DI
    "create_container",
]
