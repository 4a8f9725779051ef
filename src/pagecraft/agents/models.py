"""Translation Result Models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from ..layout.models import Layout
from ..layout.serialization import layout_to_dict


class _Result(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class GeneratedFile(_Result):
    """One generated source artifact; content is opaque text."""

    name: StrictStr = Field(..., min_length=1)
    content: StrictStr
    language: StrictStr


class GenerationResult(_Result):
    """Reply of the generate contract."""

    files: list[GeneratedFile]
    readme: StrictStr
    notes: StrictStr | None = None

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "files": [f.model_dump() for f in self.files],
            "readme": self.readme,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data


class LayoutOptimization(_Result):
    """Reply of the optimize-layout contract."""

    optimized_layout: Layout = Field(..., alias="optimizedLayout")
    notes: StrictStr = ""

    def to_wire(self) -> dict[str, Any]:
        return {"optimizedLayout": layout_to_dict(self.optimized_layout), "notes": self.notes}


class CodeOptimization(_Result):
    """Reply of the optimize-code contract."""

    optimized_code: StrictStr = Field(..., alias="optimizedCode")
    notes: StrictStr = ""

    def to_wire(self) -> dict[str, Any]:
        return {"optimizedCode": self.optimized_code, "notes": self.notes}
