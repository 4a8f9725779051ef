"""Pytest configuration and fixtures."""

import os

import httpx
import pytest
from hypothesis import strategies as st

from pagecraft.agents import LayoutTranslator
from pagecraft.layout import ComponentKind, ComponentNode, Layout
from pagecraft.layout.models import CONTAINER_KINDS
from pagecraft.models import ChatCompletionClient, ModelConfig
from pagecraft.storage import InMemoryProjectStore


ENDPOINT = "https://llm.test/v1/chat/completions"
ACTIVITY_URL = "http://activity.test"


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["PAGECRAFT_LOG_LEVEL"] = "DEBUG"
    os.environ["GROQ_API_KEY"] = "test-api-key"


# ============================================================================
# Model Fixtures
# ============================================================================

@pytest.fixture
def model_config():
    """Model config pointing at a mocked endpoint."""
    return ModelConfig(api_key="test-api-key", endpoint=ENDPOINT, max_tokens=1024)


@pytest.fixture
def client(model_config):
    """Chat-completion client; requests are intercepted with respx."""
    return ChatCompletionClient(model_config, http_client=httpx.AsyncClient())


@pytest.fixture
def translator(client):
    """Layout translator over the mocked client."""
    return LayoutTranslator(client)


@pytest.fixture
def store():
    """Empty in-memory project store."""
    return InMemoryProjectStore()


def completion(content: str) -> dict:
    """Chat-completion envelope around ``content``."""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def sample_layout():
    """Three-level layout: container > card > (text, button), plus a root image."""
    return Layout.model_validate(
        {
            "components": [
                {
                    "id": "root",
                    "type": "container",
                    "props": {"padding": "p-4"},
                    "children": [
                        {
                            "id": "card",
                            "type": "card",
                            "props": {"shadow": "shadow-md"},
                            "children": [
                                {"id": "title", "type": "text", "props": {"text": "Hello", "bold": True}},
                                {"id": "cta", "type": "button", "props": {"text": "Go", "width": 120}},
                            ],
                        }
                    ],
                },
                {"id": "hero", "type": "image", "props": {"src": "/a.png", "opacity": 0.5, "alt": None}},
            ]
        }
    )


# ============================================================================
# Hypothesis Strategies
# ============================================================================

prop_values = st.one_of(
    st.text(max_size=12),
    st.booleans(),
    st.integers(min_value=-(2**31), max_value=2**31),
    st.floats(allow_nan=False, allow_infinity=False, width=32),
    st.none(),
)
props_strategy = st.dictionaries(st.text(min_size=1, max_size=8), prop_values, max_size=4)

_leaf_kinds = [kind for kind in ComponentKind if kind not in CONTAINER_KINDS]
_container_kinds = sorted(CONTAINER_KINDS, key=lambda kind: kind.value)


@st.composite
def layouts(draw, min_depth: int = 3, max_children: int = 3):
    """
    Random layouts with unique ids and mixed leaf/container kinds.

    At least one branch reaches ``min_depth`` levels.
    """
    counter = iter(range(10_000))

    def new_id() -> str:
        return f"n{next(counter)}"

    def node(depth: int, force_depth: int) -> ComponentNode:
        if force_depth > 1:
            kind = draw(st.sampled_from(_container_kinds))
        elif depth >= 5:
            kind = draw(st.sampled_from(_leaf_kinds))
        else:
            kind = draw(st.sampled_from(list(ComponentKind)))

        children = []
        if kind in CONTAINER_KINDS:
            count = draw(st.integers(min_value=1 if force_depth > 1 else 0, max_value=max_children))
            for index in range(count):
                children.append(node(depth + 1, force_depth - 1 if index == 0 else 0))

        return ComponentNode(id=new_id(), kind=kind, props=draw(props_strategy), children=tuple(children))

    roots = [node(1, min_depth)]
    roots += [node(1, 0) for _ in range(draw(st.integers(min_value=0, max_value=max_children)))]
    order = draw(st.permutations(range(len(roots))))
    return Layout(components=tuple(roots[i] for i in order))
