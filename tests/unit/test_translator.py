"""Tests for the layout translator."""

import json

import httpx
import pytest
import respx

from conftest import ENDPOINT, completion
from pagecraft.agents import GenerationResult, LayoutTranslator, TranslationError
from pagecraft.core import ValidationError
from pagecraft.layout import Layout, find_node, layout_to_dict


def _reply(obj) -> httpx.Response:
    return httpx.Response(200, json=completion(json.dumps(obj)))


GENERATED = {
    "files": [
        {"name": "App.jsx", "content": "export default function App() {}", "language": "jsx"},
        {"name": "index.css", "content": "body {}", "language": "css"},
    ],
    "readme": "# Generated Project",
    "notes": "Two files",
}


# ============================================================================
# generate_code
# ============================================================================

@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_generate_code(translator, sample_layout):
    route = respx.post(ENDPOINT).mock(return_value=_reply(GENERATED))

    result = await translator.generate_code(sample_layout)

    assert isinstance(result, GenerationResult)
    assert [f.name for f in result.files] == ["App.jsx", "index.css"]
    assert result.to_wire() == GENERATED

    body = json.loads(route.calls.last.request.content)
    assert body["temperature"] == 0.3
    assert body["messages"][0]["role"] == "system"
    assert '"id": "cta"' in body["messages"][1]["content"]


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_generate_code_fenced_reply(translator, sample_layout):
    fenced = "```json\n" + json.dumps(GENERATED) + "\n```"
    respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json=completion(fenced)))

    result = await translator.generate_code(sample_layout)

    assert result.readme == "# Generated Project"


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_generate_code_notes_optional(translator, sample_layout):
    reply = {"files": [], "readme": "r"}
    respx.post(ENDPOINT).mock(return_value=_reply(reply))

    result = await translator.generate_code(sample_layout)

    assert result.to_wire() == {"files": [], "readme": "r"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_generate_code_requires_layout(translator):
    with pytest.raises(ValidationError, match="Layout is required"):
        await translator.generate_code(None)


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_generate_code_unparseable_reply_hides_content(translator, sample_layout):
    respx.post(ENDPOINT).mock(
        return_value=httpx.Response(200, json=completion("I cannot help with SECRET-OUTPUT"))
    )

    with pytest.raises(TranslationError) as exc_info:
        await translator.generate_code(sample_layout)

    message = str(exc_info.value)
    assert message.startswith("Failed to generate code")
    assert "SECRET-OUTPUT" not in message
    assert exc_info.value.operation == "generate"


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_generate_code_missing_keys(translator, sample_layout):
    respx.post(ENDPOINT).mock(return_value=_reply({"notes": "no files here"}))

    with pytest.raises(TranslationError, match="files"):
        await translator.generate_code(sample_layout)


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_generate_code_upstream_status(translator, sample_layout):
    respx.post(ENDPOINT).mock(return_value=httpx.Response(503, text="overloaded"))

    with pytest.raises(TranslationError, match="503 - overloaded"):
        await translator.generate_code(sample_layout)


# ============================================================================
# optimize_layout
# ============================================================================

@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_optimize_layout(translator, sample_layout):
    optimized = {
        "components": [
            {
                "id": "section-1",
                "type": "section",
                "props": {"padding": "p-8"},
                "children": layout_to_dict(sample_layout)["components"],
            }
        ]
    }
    route = respx.post(ENDPOINT).mock(
        return_value=_reply({"optimizedLayout": optimized, "notes": "- wrapped in a section"})
    )

    result = await translator.optimize_layout(sample_layout)

    assert find_node(result.optimized_layout, "cta") is not None
    assert result.optimized_layout.components[0].id == "section-1"
    assert result.to_wire()["optimizedLayout"] == optimized
    assert json.loads(route.calls.last.request.content)["temperature"] == 0.2


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_optimize_layout_notes_default(translator, sample_layout):
    respx.post(ENDPOINT).mock(return_value=_reply({"optimizedLayout": {"components": []}}))

    result = await translator.optimize_layout(sample_layout)

    assert result.optimized_layout == Layout()
    assert result.notes == ""


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_optimize_layout_rejects_duplicate_ids(translator, sample_layout):
    duplicated = {
        "components": [
            {"id": "x", "type": "text", "props": {}},
            {"id": "x", "type": "button", "props": {}},
        ]
    }
    respx.post(ENDPOINT).mock(return_value=_reply({"optimizedLayout": duplicated, "notes": ""}))

    with pytest.raises(TranslationError, match="Failed to optimize layout: .*duplicate"):
        await translator.optimize_layout(sample_layout)


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_optimize_layout_rejects_unknown_kind(translator, sample_layout):
    bad = {"components": [{"id": "x", "type": "carousel", "props": {}}]}
    respx.post(ENDPOINT).mock(return_value=_reply({"optimizedLayout": bad}))

    with pytest.raises(TranslationError, match="Failed to optimize layout"):
        await translator.optimize_layout(sample_layout)


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_optimize_layout_rejects_deep_tree(client, sample_layout):
    translator = LayoutTranslator(client, max_layout_depth=2)
    respx.post(ENDPOINT).mock(
        return_value=_reply({"optimizedLayout": layout_to_dict(sample_layout), "notes": ""})
    )

    with pytest.raises(TranslationError, match="depth"):
        await translator.optimize_layout(sample_layout)


# ============================================================================
# optimize_code
# ============================================================================

@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_optimize_code(translator):
    route = respx.post(ENDPOINT).mock(
        return_value=_reply({"optimizedCode": "const A = () => <main />;", "notes": "- semantic tag"})
    )

    result = await translator.optimize_code("const A = () => <div />;")

    assert result.to_wire() == {"optimizedCode": "const A = () => <main />;", "notes": "- semantic tag"}
    prompt = json.loads(route.calls.last.request.content)["messages"][1]["content"]
    assert "const A = () => <div />;" in prompt


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("code", [None, "", "   "])
async def test_optimize_code_requires_code(translator, code):
    with pytest.raises(ValidationError, match="Code is required"):
        await translator.optimize_code(code)


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_optimize_code_missing_key(translator):
    respx.post(ENDPOINT).mock(return_value=_reply({"notes": "forgot the code"}))

    with pytest.raises(TranslationError, match="Failed to optimize code: .*optimizedCode"):
        await translator.optimize_code("let x = 1;")


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_optimize_code_lone_surrogate_in_reply(translator):
    # The envelope escape decodes to an unpaired surrogate inside the content
    envelope = json.dumps(completion('{"optimizedCode": "x\ud800", "notes": ""}'))
    respx.post(ENDPOINT).mock(
        return_value=httpx.Response(
            200, content=envelope.encode("ascii"), headers={"Content-Type": "application/json"}
        )
    )

    with pytest.raises(TranslationError, match="Failed to optimize code"):
        await translator.optimize_code("let x = 1;")
