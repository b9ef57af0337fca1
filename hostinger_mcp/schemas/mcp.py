from __future__ import annotations
from typing import List, Optional, Dict, Any, Literal, Union
from pydantic import BaseModel, ConfigDict, Field


JSONRPC_VERSION = "2.0"


class ToolInputSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["object"] = "object"
    properties: Dict[str, Any] = Field(default_factory=dict)
    required: Optional[List[str]] = None


class ToolDef(BaseModel):
    """Immutable tool descriptor as advertised by tools/list."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    inputSchema: ToolInputSchema = Field(description="JSON Schema for input")

    def json_schema(self) -> Dict[str, Any]:
        return self.inputSchema.model_dump(exclude_none=True)

    def to_wire(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.json_schema()}


# ---------------------------------------------------------------------
# Tool results
# ---------------------------------------------------------------------
class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


# Closed set of content variants; text is the only active member.
ContentBlock = TextContent


class ToolResult(BaseModel):
    content: List[ContentBlock]

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, exc: BaseException) -> "ToolResult":
        return cls.text(f"Error: {exc}")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump()


# ---------------------------------------------------------------------
# JSON-RPC 2.0 envelopes
# ---------------------------------------------------------------------
RequestId = Optional[Union[int, float, str]]


class JsonRpcRequest(BaseModel):
    jsonrpc: str
    method: str
    id: RequestId = None
    params: Optional[Any] = None

