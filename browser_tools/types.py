"""Tool result envelope: content blocks + error flag, in the wire shape both transports emit."""
import base64
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class TextContent(_Wire):
    type: Literal["text"] = "text"
    text: str


class ImageContent(_Wire):
    type: Literal["image"] = "image"
    data: str = Field(..., description="Base64-encoded image bytes")
    mime_type: str = Field(..., alias="mimeType")


class ResourceContents(_Wire):
    uri: str
    mime_type: str = Field(..., alias="mimeType")
    blob: str = Field(..., description="Base64-encoded resource bytes")


class EmbeddedResource(_Wire):
    type: Literal["resource"] = "resource"
    resource: ResourceContents


ContentBlock = Annotated[
    Union[TextContent, ImageContent, EmbeddedResource],
    Field(discriminator="type"),
]


class ToolResult(_Wire):
    content: list[ContentBlock] = Field(default_factory=list)
    is_error: bool = Field(False, alias="isError")

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        """Error envelope: exactly one text block, isError set."""
        return cls(content=[TextContent(text=message)], is_error=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


def image_block(data: bytes, mime_type: str = "image/png") -> ImageContent:
    return ImageContent(data=base64.b64encode(data).decode("ascii"), mime_type=mime_type)


def resource_block(data: bytes, mime_type: str) -> EmbeddedResource:
    """Binary resource addressed by a data: URI carrying the same payload."""
    encoded = base64.b64encode(data).decode("ascii")
    return EmbeddedResource(
        resource=ResourceContents(
            uri=f"data:{mime_type};base64,{encoded}",
            mime_type=mime_type,
            blob=encoded,
        )
    )
