"""AI Handler."""

import time
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..agents.translator import LayoutTranslator, TranslationError
from ..core.logging_config import LogContext, get_logger
from ..core.id import new_request_id
from ..core.validate import CodeRequest, LayoutRequest, ValidationError
from ..monitoring import metrics_collector


logger = get_logger(__name__)


def _parse_layout_request(payload: dict[str, Any]) -> LayoutRequest:
    if payload.get("layout") is None:
        raise ValidationError("Layout is required")
    try:
        return LayoutRequest.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid layout: {e.error_count()} validation error(s)") from e


def _parse_code_request(payload: dict[str, Any]) -> CodeRequest:
    code = payload.get("code")
    if not isinstance(code, str) or not code.strip():
        raise ValidationError("Code is required")
    try:
        return CodeRequest.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid code: {e.errors()[0]['msg']}") from e


class AIHandler:
    """
    Handles the generate, optimize-code and optimize-layout requests.

    Takes raw JSON bodies, rejects missing input before any network call and
    returns the wire dict of the contract. ``ValidationError`` means the
    request was bad; ``TranslationError`` means the model call failed.
    """

    def __init__(self, translator: LayoutTranslator) -> None:
        self.translator = translator

    async def generate(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Generate source files from a layout."""
        return await self._handle("generate", payload, self._generate)

    async def optimize_layout(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Restructure a layout."""
        return await self._handle("optimize_layout", payload, self._optimize_layout)

    async def optimize_code(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Refine one source file."""
        return await self._handle("optimize_code", payload, self._optimize_code)

    async def _generate(self, payload: dict[str, Any]) -> dict[str, Any]:
        request = _parse_layout_request(payload)
        result = await self.translator.generate_code(request.layout)
        logger.info("generated", files=len(result.files))
        return result.to_wire()

    async def _optimize_layout(self, payload: dict[str, Any]) -> dict[str, Any]:
        request = _parse_layout_request(payload)
        result = await self.translator.optimize_layout(request.layout)
        logger.info("layout_optimized", components=len(result.optimized_layout.components))
        return result.to_wire()

    async def _optimize_code(self, payload: dict[str, Any]) -> dict[str, Any]:
        request = _parse_code_request(payload)
        result = await self.translator.optimize_code(request.code)
        return result.to_wire()

    async def _handle(self, operation: str, payload: dict[str, Any], action) -> dict[str, Any]:
        start_time = time.time()

        with LogContext(request_id=new_request_id(), operation=operation):
            try:
                response = await action(payload)
                metrics_collector.record_ai_request(operation, "success", time.time() - start_time)
                return response
            except ValidationError as e:
                metrics_collector.record_ai_request(operation, "validation_error", time.time() - start_time)
                logger.warning("validation", error=str(e))
                raise
            except TranslationError as e:
                metrics_collector.record_ai_request(operation, "error", time.time() - start_time)
                metrics_collector.record_error("translation_error", "ai_handler")
                logger.error("translation", error=str(e))
                raise
