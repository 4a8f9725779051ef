"""Input validation with strong typing and multiple backends."""

from collections import Counter
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from returns.result import Failure, Result, Success

from ..layout.models import Layout
from ..layout.tree import iter_nodes
from .json import safe_json_dumps


# Validation limits
MAX_LAYOUT_SIZE = 512 * 1024  # 512KB
MAX_LAYOUT_DEPTH = 32
MAX_CODE_LENGTH = 200_000


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class RequestValidator(BaseModel):
    """Base validator for request bodies; unknown keys are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class LayoutRequest(RequestValidator):
    """Body of the generate and optimize-layout calls."""

    layout: Layout


class CodeRequest(RequestValidator):
    """Body of the optimize-code call."""

    code: str = Field(min_length=1, max_length=MAX_CODE_LENGTH)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        """Ensure code is non-empty after stripping."""
        if not v.strip():
            raise ValueError("Code cannot be empty")
        return v


def duplicate_ids(layout: Layout) -> list[str]:
    """Ids that occur more than once anywhere in the forest."""
    counts = Counter(node.id for node, _depth in iter_nodes(layout))
    return sorted(node_id for node_id, count in counts.items() if count > 1)


def layout_depth(layout: Layout) -> int:
    """Deepest nesting level (0 for an empty layout)."""
    return max((depth for _node, depth in iter_nodes(layout)), default=0)


class LayoutValidator:
    """Checks the structural invariants of a Layout that the model layer cannot."""

    @staticmethod
    def validate(
        layout: Layout,
        max_depth: int = MAX_LAYOUT_DEPTH,
        max_size: int = MAX_LAYOUT_SIZE,
    ) -> None:
        """
        Validate id uniqueness, nesting depth and serialized size.

        Kinds and prop value types are already enforced by ``Layout`` itself.

        Args:
            layout: Layout to check
            max_depth: Maximum allowed nesting depth
            max_size: Maximum serialized size in bytes

        Raises:
            ValidationError: If validation fails
        """
        duplicates = duplicate_ids(layout)
        if duplicates:
            raise ValidationError(f"Layout has duplicate component ids: {', '.join(duplicates[:5])}")

        depth = layout_depth(layout)
        if depth > max_depth:
            raise ValidationError(f"Layout nesting depth {depth} exceeds maximum {max_depth}")

        size = len(safe_json_dumps(layout.model_dump(mode="json", by_alias=True)).encode("utf-8"))
        if size > max_size:
            raise ValidationError(f"Layout size {size} bytes exceeds maximum {max_size} bytes")


def validate_layout(
    layout: Layout,
    max_depth: int = MAX_LAYOUT_DEPTH,
    max_size: int = MAX_LAYOUT_SIZE,
) -> Result[None, ValidationResult]:
    """
    Validate a layout (Result pattern version).

    Args:
        layout: Layout to check
        max_depth: Maximum allowed nesting depth
        max_size: Maximum serialized size in bytes

    Returns:
        Result indicating success or validation error
    """
    try:
        LayoutValidator.validate(layout, max_depth, max_size)
        return Success(None)
    except ValidationError as e:
        return Failure(ValidationResult(str(e), field="layout"))
