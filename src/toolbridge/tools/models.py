"""Tool descriptors and result content items."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``.

    ``inputSchema`` is accepted on input; the model always serializes the
    schema under ``input_schema``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(min_length=1)
    description: str = ""
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        alias="inputSchema",
    )


class TextContent(BaseModel):
    """A text chunk of a tool result."""

    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    """A base64-encoded image of a tool result."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["image"] = "image"
    data: str
    mime_type: str = Field(alias="mimeType")


ContentItem = Annotated[Union[TextContent, ImageContent], Field(discriminator="type")]

content_adapter: TypeAdapter[list[ContentItem]] = TypeAdapter(list[ContentItem])


def dump_content(items: Sequence[TextContent | ImageContent]) -> list[dict[str, Any]]:
    """Serialize content items with their wire field names."""
    return [item.model_dump(by_alias=True) for item in items]


class ToolArguments(Mapping[str, Any]):
    """Read-only argument bundle that passed schema validation.

    Only :func:`toolbridge.tools.schema.validate_arguments` creates these.
    """

    __slots__ = ("_tool", "_values")

    def __init__(self, tool: str, values: Mapping[str, Any]) -> None:
        self._tool = tool
        self._values = dict(values)

    @property
    def tool(self) -> str:
        return self._tool

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ToolArguments(tool={self._tool!r}, values={self._values!r})"


ToolBehavior = Callable[[ToolArguments], Union[Sequence[Union[TextContent, ImageContent]], str]]
