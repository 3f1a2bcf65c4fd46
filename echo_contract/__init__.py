"""Shared contract types and interfaces for an LLM orchestrator and its plugins."""

__version__ = "0.4.0"

__all__ = ["core", "llm", "monitoring", "plugin", "tool"]