"""Core contract types: plugin health, identity, setup prompts and scheduled tasks."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def _ensure_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for {what}, got {type(data).__name__}")
    return data


def _require(data: Mapping[str, Any], key: str, kind: type) -> Any:
    try:
        value = data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None
    if not isinstance(value, kind):
        raise ValueError(f"invalid type for field `{key}`: expected {kind.__name__}")
    return value


def _optional(data: Mapping[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is not None and not isinstance(value, kind):
        raise ValueError(f"invalid type for field `{key}`: expected {kind.__name__}")
    return value


class HealthKind(enum.Enum):
    """The state part of a plugin's health report."""

    HEALTHY = "Healthy"
    DEGRADED = "Degraded"
    DOWN = "Down"


@dataclass(frozen=True)
class HealthStatus:
    """Plugin health status, as reported by a plugin's ``health()`` method."""

    kind: HealthKind
    message: str | None = None

    def __post_init__(self) -> None:
        if self.kind is HealthKind.HEALTHY:
            if self.message is not None:
                raise ValueError("a healthy status carries no message")
        elif not isinstance(self.message, str):
            raise ValueError(f"a {self.kind.value} status needs a message")

    @classmethod
    def healthy(cls) -> HealthStatus:
        return cls(HealthKind.HEALTHY)

    @classmethod
    def degraded(cls, message: str) -> HealthStatus:
        return cls(HealthKind.DEGRADED, message)

    @classmethod
    def down(cls, message: str) -> HealthStatus:
        return cls(HealthKind.DOWN, message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize as ``{"status": ..., "message": ...}``; healthy has no message."""
        if self.kind is HealthKind.HEALTHY:
            return {"status": self.kind.value}
        return {"status": self.kind.value, "message": self.message}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HealthStatus:
        data = _ensure_mapping(data, "HealthStatus")
        status = _require(data, "status", str)
        try:
            kind = HealthKind(status)
        except ValueError:
            raise ValueError(f"unknown health status {status!r}") from None
        if kind is HealthKind.HEALTHY:
            return cls(kind)
        return cls(kind, _require(data, "message", str))

    def __str__(self) -> str:
        if self.kind is HealthKind.HEALTHY:
            return "healthy"
        return f"{self.kind.value.lower()}: {self.message}"


@dataclass
class PluginMeta:
    """Plugin identity and version."""

    name: str
    version: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version, "description": self.description}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PluginMeta:
        data = _ensure_mapping(data, "PluginMeta")
        return cls(
            name=_require(data, "name", str),
            version=_require(data, "version", str),
            description=_require(data, "description", str),
        )


@dataclass
class SetupPrompt:
    """A configuration question a plugin asks during first-time setup."""

    key: str
    question: str
    default: str | None
    required: bool
    secret: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "question": self.question,
            "default": self.default,
            "required": self.required,
            "secret": self.secret,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SetupPrompt:
        data = _ensure_mapping(data, "SetupPrompt")
        return cls(
            key=_require(data, "key", str),
            question=_require(data, "question", str),
            default=_optional(data, "default", str),
            required=_require(data, "required", bool),
            secret=_require(data, "secret", bool),
        )


class OutputRouting(enum.Enum):
    """Where a scheduled task's output goes."""

    SILENT = "silent"
    SHARE = "share"
    CALL = "call"


class TaskCreator(enum.Enum):
    """Who created a scheduled task."""

    SYSTEM = "system"
    ENTITY = "entity"
    USER = "user"


@dataclass
class ScheduledTask:
    """A scheduled task that a plugin contributes.

    ``cron`` is a six-field expression: sec min hour dom month dow.
    """

    id: str
    name: str
    cron: str
    channel: str
    prompt: str
    output_routing: OutputRouting = OutputRouting.SILENT
    enabled: bool = True
    created_by: TaskCreator = TaskCreator.SYSTEM

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "cron": self.cron,
            "channel": self.channel,
            "prompt": self.prompt,
            "output_routing": self.output_routing.value,
            "enabled": self.enabled,
            "created_by": self.created_by.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ScheduledTask:
        data = _ensure_mapping(data, "ScheduledTask")
        routing = OutputRouting.SILENT
        if "output_routing" in data:
            routing = OutputRouting(_require(data, "output_routing", str))
        creator = TaskCreator.SYSTEM
        if "created_by" in data:
            creator = TaskCreator(_require(data, "created_by", str))
        enabled = _require(data, "enabled", bool) if "enabled" in data else True
        return cls(
            id=_require(data, "id", str),
            name=_require(data, "name", str),
            cron=_require(data, "cron", str),
            channel=_require(data, "channel", str),
            prompt=_require(data, "prompt", str),
            output_routing=routing,
            enabled=enabled,
            created_by=creator,
        )