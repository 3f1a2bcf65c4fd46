"""LLM-callable tools and the errors they raise."""

from __future__ import annotations

import abc
from typing import Any


class ToolError(Exception):
    """Base error raised when a tool fails."""

    prefix = ""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        if self.prefix:
            return f"{self.prefix}: {self.message}"
        return self.message


class ToolNotFoundError(ToolError):
    """The requested resource was not found."""

    prefix = "not found"


class ToolExecutionFailedError(ToolError):
    """Tool execution failed."""

    prefix = "execution failed"


class ToolPermissionDeniedError(ToolError):
    """Access denied."""

    prefix = "permission denied"


class Tool(abc.ABC):
    """A named operation that an LLM may call with JSON input."""

    @abc.abstractmethod
    def name(self) -> str:
        """Tool name, matching what the model calls."""

    @abc.abstractmethod
    def description(self) -> str:
        """Human-readable description for the model."""

    @abc.abstractmethod
    def input_schema(self) -> Any:
        """JSON Schema for the tool's input parameters."""

    @abc.abstractmethod
    async def execute(self, input: Any) -> str:
        """Run the tool; raise ToolError on failure."""