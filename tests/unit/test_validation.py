"""Validation tests."""

import pytest
from hypothesis import given
from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Success

from conftest import layouts
from pagecraft.core import CodeRequest, LayoutRequest, LayoutValidator, ValidationError, validate_layout
from pagecraft.core.validate import duplicate_ids, layout_depth
from pagecraft.layout import ComponentNode, Layout


def _chain(depth: int) -> Layout:
    node = ComponentNode(id=f"n{depth}", kind="text")
    for level in range(depth - 1, 0, -1):
        node = ComponentNode(id=f"n{level}", kind="container", children=(node,))
    return Layout(components=(node,))


@pytest.mark.unit
def test_layout_request_valid():
    request = LayoutRequest.model_validate({"layout": {"components": []}, "extra": 1})
    assert request.layout == Layout()


@pytest.mark.unit
def test_layout_request_invalid_kind():
    with pytest.raises(PydanticValidationError):
        LayoutRequest.model_validate({"layout": {"components": [{"id": "a", "type": "video", "props": {}}]}})


@pytest.mark.unit
def test_code_request_valid():
    assert CodeRequest(code="export default 1;").code == "export default 1;"


@pytest.mark.unit
@pytest.mark.parametrize("code", ["", "   \n\t"])
def test_code_request_empty(code):
    with pytest.raises(PydanticValidationError):
        CodeRequest(code=code)


@pytest.mark.unit
def test_duplicate_ids():
    layout = Layout(
        components=(
            ComponentNode(id="a", kind="card", children=(ComponentNode(id="b", kind="text"),)),
            ComponentNode(id="b", kind="text"),
        )
    )
    assert duplicate_ids(layout) == ["b"]


@pytest.mark.unit
def test_layout_depth(sample_layout):
    assert layout_depth(Layout()) == 0
    assert layout_depth(sample_layout) == 3


@pytest.mark.unit
def test_validator_accepts_sample(sample_layout):
    LayoutValidator.validate(sample_layout)


@pytest.mark.unit
def test_validator_rejects_duplicates():
    layout = Layout(components=(ComponentNode(id="a", kind="text"), ComponentNode(id="a", kind="image")))
    with pytest.raises(ValidationError, match="duplicate"):
        LayoutValidator.validate(layout)


@pytest.mark.unit
def test_validator_rejects_depth():
    LayoutValidator.validate(_chain(4), max_depth=4)
    with pytest.raises(ValidationError, match="depth"):
        LayoutValidator.validate(_chain(5), max_depth=4)


@pytest.mark.unit
def test_validator_rejects_size(sample_layout):
    with pytest.raises(ValidationError, match="size"):
        LayoutValidator.validate(sample_layout, max_size=50)


@pytest.mark.unit
def test_validate_layout_result(sample_layout):
    assert validate_layout(sample_layout) == Success(None)

    result = validate_layout(sample_layout, max_depth=2)
    assert isinstance(result, Failure)
    assert result.failure().field == "layout"
    assert "depth" in result.failure().message


@pytest.mark.unit
@given(layouts())
def test_generated_layouts_are_valid(layout):
    LayoutValidator.validate(layout)
