"""AI translation of layouts into code and optimized layouts."""

from .models import CodeOptimization, GeneratedFile, GenerationResult, LayoutOptimization
from .prompts import PromptBuilder
from .translator import LayoutTranslator, TranslationError

__all__ = [
    "CodeOptimization",
    "GeneratedFile",
    "GenerationResult",
    "LayoutOptimization",
    "PromptBuilder",
    "LayoutTranslator",
    "TranslationError",
]
