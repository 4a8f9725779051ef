"""
Translation Prompts
System instructions and user prompts for the three translation contracts.
"""

from ..layout.defaults import recognized_props
from ..layout.models import CONTAINER_KINDS, ComponentKind

# ============================================================================
# System Instructions
# ============================================================================

GENERATE_SYSTEM = (
    "You are a code generation assistant. Always return valid JSON only, no markdown formatting."
)
OPTIMIZE_LAYOUT_SYSTEM = (
    "You are a layout optimization assistant. Always return valid JSON only, no markdown formatting."
)
OPTIMIZE_CODE_SYSTEM = "You are a code optimization assistant. Always return valid JSON only."


# ============================================================================
# Component Documentation
# ============================================================================


def component_reference() -> str:
    """Describe every component kind and the props it understands."""
    lines = []
    for kind in ComponentKind:
        role = "container" if kind in CONTAINER_KINDS else "leaf"
        lines.append(f"- {kind.value} ({role}): {', '.join(recognized_props(kind))}")
    return "\n".join(lines)


GENERATE_FORMAT = """{
  "files": [
    {"name": "App.jsx", "content": "...", "language": "jsx"},
    {"name": "index.css", "content": "...", "language": "css"}
  ],
  "readme": "# Generated Project\\n\\nSetup instructions here",
  "notes": "Brief description of what was generated"
}"""

OPTIMIZE_LAYOUT_FORMAT = """{
  "optimizedLayout": {"components": [{"id": "...", "type": "...", "props": {}, "children": []}]},
  "notes": "Brief bullet points of the structural changes"
}"""

OPTIMIZE_CODE_FORMAT = """{
  "optimizedCode": "... the improved code ...",
  "notes": "Brief bullet points of improvements made"
}"""


class PromptBuilder:
    """Builds the user prompts sent with each translation request."""

    @staticmethod
    def build_generate(layout_json: str) -> str:
        """
        Prompt for turning a layout into React source files.

        Args:
            layout_json: Serialized layout (indented JSON)

        Returns:
            Complete prompt
        """
        return f"""You are an expert React developer. Generate production-ready code from this layout specification.

Layout data:
{layout_json}

Component kinds and the props they use:
{component_reference()}

Generate:
1. A complete React component file (App.jsx) that renders this layout
2. A CSS file (index.css) with Tailwind-based styling
3. Any additional component files if needed

Requirements:
- Use modern React with functional components
- Apply Tailwind CSS classes based on the component props
- Maintain the component hierarchy and nesting
- Use the exact colors and styles from props (backgroundColor, borderRadius, padding, etc.)
- Make it production-ready with proper imports

Return ONLY valid JSON in this exact format:
{GENERATE_FORMAT}"""

    @staticmethod
    def build_optimize_layout(layout_json: str) -> str:
        """
        Prompt for restructuring a layout tree.

        Args:
            layout_json: Serialized layout (indented JSON)

        Returns:
            Complete prompt
        """
        container_kinds = ", ".join(sorted(kind.value for kind in CONTAINER_KINDS))
        return f"""You are an expert UI designer. Improve the structure of this page layout.

Layout data:
{layout_json}

Component kinds and the props they use:
{component_reference()}

Rules:
- Only these kinds may have children: {container_kinds}
- Keep every existing id unchanged; new components need new ids that are unique across the whole layout
- Every "type" must be one of the kinds listed above
- Prop values must be strings, numbers, booleans or null
- Group related components, improve spacing and visual hierarchy

Return ONLY valid JSON in this exact format:
{OPTIMIZE_LAYOUT_FORMAT}"""

    @staticmethod
    def build_optimize_code(code: str) -> str:
        """
        Prompt for refining one generated file.

        Args:
            code: Source text of the file

        Returns:
            Complete prompt
        """
        return f"""You are an expert React developer. Optimize and improve this React code:

{code}

Improvements to make:
- Add accessibility attributes (aria-labels, roles)
- Improve performance (memoization if needed)
- Add hover effects and transitions
- Ensure responsive design
- Follow React best practices

Return ONLY valid JSON in this format:
{OPTIMIZE_CODE_FORMAT}"""
