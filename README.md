# echo-contract

Shared contract types for an LLM orchestrator and the plugins that extend it.
The package holds data types and abstract interfaces. Its only runtime logic is
dictionary serialisation, input checks and a few small helpers. The
orchestrator and every plugin import it, so both sides agree on the same
shapes.

## Installation

```
pip install echo-contract
```

## What is inside

- `echo_contract.core`: plugin identity (`PluginMeta`), health reporting
  (`HealthStatus`, `HealthKind`), setup-wizard prompts (`SetupPrompt`) and
  scheduled tasks (`ScheduledTask`, `OutputRouting`, `TaskCreator`).
- `echo_contract.llm`: conversation types (`Message`, `Role`), content blocks
  (`TextBlock`, `ToolUseBlock`, `ToolResultBlock`, with
  `content_block_from_dict`, `message_content_to_json` and
  `message_content_from_json`), model responses (`LlmResponse`, `StopReason`)
  and the `LmProvider` interface.
- `echo_contract.tool`: the `Tool` interface and its errors (`ToolError`,
  `ToolNotFoundError`, `ToolExecutionFailedError`,
  `ToolPermissionDeniedError`).
- `echo_contract.monitoring`: pipeline thresholds, health and state, cognitive
  health and signal frames, outcome records, calibration reports and
  snapshots. It also holds the `PipelineMonitor`, `CognitiveMonitor` and
  `OutcomeTracker` interfaces.
- `echo_contract.plugin`: `PluginContext`, `PluginRole` and the `Plugin`
  interface.

Most data types have `to_dict()` and a `from_dict()` class method. The result
is plain JSON-ready data. `from_dict()` raises `ValueError` when a field is
missing or has the wrong type.

## Examples

Health status:

```python
from echo_contract.core import HealthStatus

status = HealthStatus.degraded("high latency")
print(status)            # degraded: high latency
print(status.to_dict())  # {'status': 'Degraded', 'message': 'high latency'}
```

Scheduled tasks fill in their defaults when loaded:

```python
from echo_contract.core import ScheduledTask, OutputRouting

task = ScheduledTask.from_dict({
    "id": "morning",
    "name": "Morning check",
    "cron": "0 0 8 * * *",
    "channel": "reflection",
    "prompt": "Good morning.",
})
assert task.output_routing is OutputRouting.SILENT
assert task.enabled
```

Text from a model response:

```python
from echo_contract.llm import LlmResponse, StopReason, TextBlock

response = LlmResponse(
    content=[TextBlock("hello "), TextBlock("world")],
    stop_reason=StopReason.END_TURN,
    model="test",
)
print(response.text())  # hello world
```

Pipeline freeze detection:

```python
from echo_contract.monitoring import DocumentCounts, PipelineState

state = PipelineState()
counts = DocumentCounts(learning=3, thoughts=2)
state.update_counts(counts, "2026-03-05T12:00:00Z")
state.update_counts(counts, "2026-03-05T13:00:00Z")
print(state.sessions_without_movement)  # 1
```

## Writing a plugin

Subclass `echo_contract.plugin.Plugin` and implement `meta`, `role`, `start`,
`stop` and `health`. `start`, `stop` and `health` are coroutines. You can also
override `scheduled_tasks`, `setup_prompts` and `tools`, which return empty
lists by default, to contribute to the host.

Tools subclass `echo_contract.tool.Tool`. `execute` is a coroutine that
returns a string, and it raises a `ToolError` subclass on failure. Model
backends subclass `echo_contract.llm.LmProvider`. `invoke` is a coroutine, and
`supports_tools()` returns `False` unless you override it.

## What this package does not do

The package defines interfaces only. It has no concrete plugin, model
provider, tool, pipeline monitor, cognitive monitor or outcome tracker. It
does not read or write files, schedule tasks, call any model, or provide a
command-line program. Those pieces belong to the host application and to the
plugins that implement these interfaces.

## Running the tests

```
pip install -e ".[test]"
pytest
```