"""Conversation model, content blocks and the language-model provider contract."""

from __future__ import annotations

import abc
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union


def _require(data: Mapping[str, Any], key: str, kind: type) -> Any:
    try:
        value = data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None
    if not isinstance(value, kind):
        raise ValueError(f"invalid type for field `{key}`: expected {kind.__name__}")
    return value


@dataclass
class TextBlock:
    """Plain text content."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass
class ToolUseBlock:
    """A request from the model to call a tool."""

    id: str
    name: str
    input: Any

    def to_dict(self) -> dict[str, Any]:
        return {"type": "tool_use", "id": self.id, "name": self.name, "input": self.input}


@dataclass
class ToolResultBlock:
    """The result of a tool call, sent back to the model."""

    tool_use_id: str
    content: str
    is_error: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": "tool_result",
            "tool_use_id": self.tool_use_id,
            "content": self.content,
        }
        if self.is_error is not None:
            data["is_error"] = self.is_error
        return data


ContentBlock = Union[TextBlock, ToolUseBlock, ToolResultBlock]
MessageContent = Union[str, list]


def content_block_from_dict(data: Mapping[str, Any]) -> ContentBlock:
    """Build a content block from its tagged dictionary form."""
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for a content block, got {type(data).__name__}")
    kind = data.get("type")
    if kind == "text":
        return TextBlock(text=_require(data, "text", str))
    if kind == "tool_use":
        if "input" not in data:
            raise ValueError("missing field `input`")
        return ToolUseBlock(
            id=_require(data, "id", str),
            name=_require(data, "name", str),
            input=data["input"],
        )
    if kind == "tool_result":
        is_error = data.get("is_error")
        if is_error is not None and not isinstance(is_error, bool):
            raise ValueError("invalid type for field `is_error`: expected bool")
        return ToolResultBlock(
            tool_use_id=_require(data, "tool_use_id", str),
            content=_require(data, "content", str),
            is_error=is_error,
        )
    raise ValueError(f"unknown content block type {kind!r}")


def message_content_to_json(content: MessageContent) -> Any:
    """Convert message content (a string or a list of blocks) to JSON-ready data."""
    if isinstance(content, str):
        return content
    return [block.to_dict() for block in content]


def message_content_from_json(data: Any) -> MessageContent:
    """Parse message content that is either a string or a list of block objects."""
    if isinstance(data, str):
        return data
    if isinstance(data, list):
        return [content_block_from_dict(item) for item in data]
    raise ValueError(f"message content must be a string or a list, got {type(data).__name__}")


@dataclass(frozen=True)
class StopReason:
    """Why the model stopped generating; any other reason keeps its own text."""

    value: str

    END_TURN: ClassVar[StopReason]
    TOOL_USE: ClassVar[StopReason]
    MAX_TOKENS: ClassVar[StopReason]
    STOP_SEQUENCE: ClassVar[StopReason]


StopReason.END_TURN = StopReason("end_turn")
StopReason.TOOL_USE = StopReason("tool_use")
StopReason.MAX_TOKENS = StopReason("max_tokens")
StopReason.STOP_SEQUENCE = StopReason("stop_sequence")


@dataclass
class LlmResponse:
    """Response from a model invocation."""

    content: list[ContentBlock]
    stop_reason: StopReason
    model: str
    input_tokens: int | None = None
    output_tokens: int | None = None

    def text(self) -> str:
        """All text blocks, concatenated."""
        return "".join(block.text for block in self.content if isinstance(block, TextBlock))

    def has_tool_use(self) -> bool:
        """Whether any block is a tool-use request."""
        return any(isinstance(block, ToolUseBlock) for block in self.content)


class Role(Enum):
    """Conversation role."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """A message in a conversation."""

    role: Role
    content: MessageContent = field(default="")

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role.value, "content": message_content_to_json(self.content)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Message:
        if not isinstance(data, Mapping):
            raise ValueError(f"expected an object for a message, got {type(data).__name__}")
        role = Role(_require(data, "role", str))
        if "content" not in data:
            raise ValueError("missing field `content`")
        return cls(role=role, content=message_content_from_json(data["content"]))


class LmProvider(abc.ABC):
    """A language-model backend."""

    @abc.abstractmethod
    async def invoke(
        self,
        system_prompt: str,
        messages: Sequence[Message],
        max_tokens: int,
        tools: Sequence[Any] | None = None,
    ) -> LlmResponse:
        """Send the conversation and return the model's response."""

    @abc.abstractmethod
    def name(self) -> str:
        """Provider name."""

    def supports_tools(self) -> bool:
        """Whether this provider supports tool use."""
        return False