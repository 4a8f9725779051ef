"""Layout Translator - tree to code, tree to tree, code to code."""

from typing import TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..core.json import JSONParseError, extract_json
from ..core.logging_config import get_logger
from ..core.validate import MAX_LAYOUT_DEPTH, MAX_LAYOUT_SIZE, LayoutValidator, ValidationError
from ..layout.models import Layout
from ..layout.serialization import dumps
from ..models.client import ChatCompletionClient, ModelConfigError, UpstreamError
from .models import CodeOptimization, GenerationResult, LayoutOptimization
from .prompts import (
    GENERATE_SYSTEM,
    OPTIMIZE_CODE_SYSTEM,
    OPTIMIZE_LAYOUT_SYSTEM,
    PromptBuilder,
)


logger = get_logger(__name__)

R = TypeVar("R", bound=BaseModel)


class TranslationError(Exception):
    """A translation call failed after its input was accepted."""

    def __init__(self, message: str, operation: str) -> None:
        super().__init__(message)
        self.operation = operation


def _describe_shape_error(error: PydanticValidationError) -> str:
    """Summarise which fields were missing or invalid, without echoing model output."""
    fields = sorted({".".join(str(part) for part in err["loc"]) or "<root>" for err in error.errors()})
    shown = ", ".join(fields[:5])
    more = f" (+{len(fields) - 5} more)" if len(fields) > 5 else ""
    return f"response missing or invalid field(s): {shown}{more}"


class LayoutTranslator:
    """
    Runs the three one-shot translation contracts against a chat-completion model.

    The model's reply goes through fence stripping and outer-brace extraction
    (``core.json.extract_json``) and is then validated against the expected
    result shape. Nothing is cached: every call does the generative work again.
    """

    def __init__(
        self,
        client: ChatCompletionClient,
        max_layout_depth: int = MAX_LAYOUT_DEPTH,
        max_layout_size: int = MAX_LAYOUT_SIZE,
    ) -> None:
        self.client = client
        self.max_layout_depth = max_layout_depth
        self.max_layout_size = max_layout_size

    async def generate_code(self, layout: Layout | None) -> GenerationResult:
        """Translate a layout into named source files plus a readme."""
        if layout is None:
            raise ValidationError("Layout is required")

        prompt = PromptBuilder.build_generate(dumps(layout, indent=2))
        return await self._run(
            "generate",
            "Failed to generate code",
            GENERATE_SYSTEM,
            prompt,
            self.client.config.generate_temperature,
            GenerationResult,
        )

    async def optimize_layout(self, layout: Layout | None) -> LayoutOptimization:
        """
        Ask the model for a restructured layout.

        The returned tree is validated (unique ids, depth, size) before it is
        handed back, so a caller may swap it in wholesale.
        """
        if layout is None:
            raise ValidationError("Layout is required")

        prompt = PromptBuilder.build_optimize_layout(dumps(layout, indent=2))
        result = await self._run(
            "optimize_layout",
            "Failed to optimize layout",
            OPTIMIZE_LAYOUT_SYSTEM,
            prompt,
            self.client.config.optimize_temperature,
            LayoutOptimization,
        )

        try:
            LayoutValidator.validate(
                result.optimized_layout, self.max_layout_depth, self.max_layout_size
            )
        except ValidationError as e:
            logger.error("optimized_layout_rejected", error=str(e))
            raise TranslationError(f"Failed to optimize layout: {e}", "optimize_layout") from e

        return result

    async def optimize_code(self, code: str | None) -> CodeOptimization:
        """Refine a single source file; the layout is not involved."""
        if not code or not code.strip():
            raise ValidationError("Code is required")

        return await self._run(
            "optimize_code",
            "Failed to optimize code",
            OPTIMIZE_CODE_SYSTEM,
            PromptBuilder.build_optimize_code(code),
            self.client.config.optimize_temperature,
            CodeOptimization,
        )

    async def _run(
        self,
        operation: str,
        failure: str,
        system: str,
        prompt: str,
        temperature: float,
        result_type: type[R],
    ) -> R:
        logger.info("translation_start", operation=operation, prompt_length=len(prompt))

        try:
            content = await self.client.complete(system, prompt, temperature)
        except (UpstreamError, ModelConfigError) as e:
            raise TranslationError(f"{failure}: {e}", operation) from e

        try:
            data = extract_json(content)
            result = result_type.model_validate(data)
        except JSONParseError as e:
            logger.error("response_parse_failed", operation=operation, error=str(e), content_preview=content[:500])
            raise TranslationError(f"{failure}: {e}", operation) from e
        except PydanticValidationError as e:
            logger.error("response_shape_invalid", operation=operation, error=str(e), content_preview=content[:500])
            raise TranslationError(f"{failure}: {_describe_shape_error(e)}", operation) from e

        logger.info("translation_complete", operation=operation)
        return result
