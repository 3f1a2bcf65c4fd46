"""The plugin contract: context, roles and the plugin interface."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from echo_contract.core import HealthStatus, PluginMeta, ScheduledTask, SetupPrompt
from echo_contract.llm import LmProvider
from echo_contract.tool import Tool


@dataclass
class PluginContext:
    """What a plugin factory receives to build a plugin."""

    entity_root: Path
    entity_name: str
    provider: LmProvider


class PluginRole(Enum):
    """The role a plugin fills; exactly one memory plugin is required."""

    MEMORY = "Memory"
    PIPELINE = "Pipeline"
    COGNITIVE = "Cognitive"
    OUTCOME = "Outcome"
    INTERFACE = "Interface"
    EXTENSION = "Extension"

    def __str__(self) -> str:
        return self.value


class Plugin(abc.ABC):
    """A fully constructed plugin, ready to be started."""

    @abc.abstractmethod
    def meta(self) -> PluginMeta:
        """Plugin identity."""

    @abc.abstractmethod
    def role(self) -> PluginRole:
        """The role this plugin fills."""

    @abc.abstractmethod
    async def start(self) -> None:
        """Start the plugin; called once after construction."""

    @abc.abstractmethod
    async def stop(self) -> None:
        """Stop the plugin gracefully."""

    @abc.abstractmethod
    async def health(self) -> HealthStatus:
        """Report current health."""

    def scheduled_tasks(self) -> list[ScheduledTask]:
        """Scheduled tasks this plugin contributes."""
        return []

    def setup_prompts(self) -> list[SetupPrompt]:
        """Setup wizard prompts for first-time configuration."""
        return []

    def tools(self) -> list[Tool]:
        """Tools this plugin contributes to the registry."""
        return []