import asyncio

import pytest

from echo_contract.tool import (
    Tool,
    ToolError,
    ToolExecutionFailedError,
    ToolNotFoundError,
    ToolPermissionDeniedError,
)


class _EchoTool(Tool):
    def __init__(self, failure=None):
        self.failure = failure

    def name(self):
        return "echo"

    def description(self):
        return "Repeats its input."

    def input_schema(self):
        return {"type": "object", "properties": {"text": {"type": "string"}}}

    async def execute(self, input):
        if self.failure is not None:
            raise self.failure
        if "text" not in input:
            raise ToolNotFoundError("text")
        return input["text"]


def test_tool_error_display():
    assert str(ToolNotFoundError("missing.txt")) == "not found: missing.txt"
    assert str(ToolExecutionFailedError("boom")) == "execution failed: boom"
    assert str(ToolPermissionDeniedError("/root")) == "permission denied: /root"


@pytest.mark.parametrize(
    "cls", [ToolNotFoundError, ToolExecutionFailedError, ToolPermissionDeniedError]
)
def test_tool_errors_share_base(cls):
    err = cls("why")
    assert isinstance(err, ToolError)
    assert err.message == "why"
    assert str(err).endswith(": why")


def test_tool_execute_returns_output():
    tool = _EchoTool()
    assert asyncio.run(tool.execute({"text": "hello"})) == "hello"
    assert tool.name() == "echo"

    denied = _EchoTool(failure=ToolPermissionDeniedError("/root"))
    with pytest.raises(ToolError) as info:
        asyncio.run(denied.execute({"text": "hello"}))
    assert str(info.value) == "permission denied: /root"


def test_tool_execute_raises_tool_error():
    tool = _EchoTool()
    with pytest.raises(ToolNotFoundError) as info:
        asyncio.run(tool.execute({}))
    assert str(info.value) == "not found: text"

    failing = _EchoTool(failure=ToolExecutionFailedError("disk full"))
    with pytest.raises(ToolExecutionFailedError) as info:
        asyncio.run(failing.execute({"text": "hello"}))
    assert info.value.message == "disk full"
    assert str(info.value) == "execution failed: disk full"


def test_tool_is_abstract():
    with pytest.raises(TypeError):
        Tool()