"""Monitoring contract: pipeline, cognitive and outcome types and monitor interfaces."""

from __future__ import annotations

import abc
import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object for {what}, got {type(data).__name__}")
    return data


def _field(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _check_str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"invalid type for field `{key}`: expected str")
    return value


def _check_uint(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"invalid value for field `{key}`: expected a non-negative integer")
    return value


def _check_float(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"invalid type for field `{key}`: expected a number")
    return float(value)


def _str(data: Mapping[str, Any], key: str) -> str:
    return _check_str(_field(data, key), key)


def _uint(data: Mapping[str, Any], key: str) -> int:
    return _check_uint(_field(data, key), key)


def _float(data: Mapping[str, Any], key: str) -> float:
    return _check_float(_field(data, key), key)


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = _field(data, key)
    if not isinstance(value, bool):
        raise ValueError(f"invalid type for field `{key}`: expected bool")
    return value


def _opt_uint(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    return None if value is None else _check_uint(value, key)


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return None if value is None else _check_str(value, key)


def _enum(enum_type: type[Enum], data: Mapping[str, Any], key: str) -> Any:
    value = _str(data, key)
    try:
        return enum_type(value)
    except ValueError:
        raise ValueError(f"unknown {enum_type.__name__} variant {value!r}") from None


# Pipeline types


@dataclass
class PipelineThresholds:
    """Soft and hard entry limits for each pipeline document."""

    learning_soft: int = 5
    learning_hard: int = 8
    thoughts_soft: int = 5
    thoughts_hard: int = 10
    curiosity_soft: int = 3
    curiosity_hard: int = 7
    reflections_soft: int = 15
    reflections_hard: int = 20
    praxis_soft: int = 5
    praxis_hard: int = 10

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PipelineThresholds:
        data = _mapping(data, "PipelineThresholds")
        return cls(**{f.name: _uint(data, f.name) for f in dataclasses.fields(cls)})


class ThresholdStatus(Enum):
    """Status of a document relative to its thresholds."""

    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"

    def __str__(self) -> str:
        return self.value.lower()


@dataclass
class DocumentHealth:
    """Health report for a single pipeline document."""

    count: int
    soft: int
    hard: int
    status: ThresholdStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "soft": self.soft,
            "hard": self.hard,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DocumentHealth:
        data = _mapping(data, "DocumentHealth")
        return cls(
            count=_uint(data, "count"),
            soft=_uint(data, "soft"),
            hard=_uint(data, "hard"),
            status=_enum(ThresholdStatus, data, "status"),
        )


@dataclass
class PipelineHealth:
    """Pipeline health across all documents."""

    learning: DocumentHealth
    thoughts: DocumentHealth
    curiosity: DocumentHealth
    reflections: DocumentHealth
    praxis: DocumentHealth
    warnings: list[str] = field(default_factory=list)


@dataclass
class DocumentCounts:
    """Entry counts per document, used for freeze detection."""

    learning: int = 0
    thoughts: int = 0
    curiosity: int = 0
    reflections: int = 0
    praxis: int = 0

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DocumentCounts:
        data = _mapping(data, "DocumentCounts")
        return cls(**{f.name: _uint(data, f.name) for f in dataclasses.fields(cls)})


@dataclass
class PipelineState:
    """Pipeline state kept across sessions."""

    last_updated: str | None = None
    session_count: int = 0
    sessions_without_movement: int = 0
    last_counts: DocumentCounts = field(default_factory=DocumentCounts)

    def update_counts(self, new_counts: DocumentCounts, now_iso: str) -> None:
        """Record new counts, tracking how many sessions passed without change."""
        if new_counts == self.last_counts:
            self.sessions_without_movement += 1
        else:
            self.sessions_without_movement = 0
        self.last_counts = dataclasses.replace(new_counts)
        self.session_count += 1
        self.last_updated = now_iso

    def to_dict(self) -> dict[str, Any]:
        return {
            "last_updated": self.last_updated,
            "session_count": self.session_count,
            "sessions_without_movement": self.sessions_without_movement,
            "last_counts": self.last_counts.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PipelineState:
        data = _mapping(data, "PipelineState")
        return cls(
            last_updated=_opt_str(data, "last_updated"),
            session_count=_uint(data, "session_count"),
            sessions_without_movement=_uint(data, "sessions_without_movement"),
            last_counts=DocumentCounts.from_dict(_field(data, "last_counts")),
        )


# Cognitive types


class CognitiveStatus(Enum):
    """Cognitive health status level."""

    HEALTHY = "Healthy"
    WATCH = "Watch"
    CONCERN = "Concern"
    ALERT = "Alert"

    def __str__(self) -> str:
        return self.value.upper()


class Trend(Enum):
    """Direction in which a signal is moving."""

    IMPROVING = "Improving"
    STABLE = "Stable"
    DECLINING = "Declining"

    def __str__(self) -> str:
        return self.value.lower()


@dataclass
class CognitiveHealth:
    """A full cognitive health assessment."""

    status: CognitiveStatus
    vocabulary_trend: Trend
    question_trend: Trend
    evidence_trend: Trend
    progress_trend: Trend
    suggestions: list[str] = field(default_factory=list)
    sufficient_data: bool = False


@dataclass
class SignalFrame:
    """Cognitive signals extracted from one piece of model output."""

    timestamp: str
    task_id: str
    vocabulary_diversity: float
    question_count: int
    evidence_references: int
    thought_progress: bool

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SignalFrame:
        data = _mapping(data, "SignalFrame")
        return cls(
            timestamp=_str(data, "timestamp"),
            task_id=_str(data, "task_id"),
            vocabulary_diversity=_float(data, "vocabulary_diversity"),
            question_count=_uint(data, "question_count"),
            evidence_references=_uint(data, "evidence_references"),
            thought_progress=_bool(data, "thought_progress"),
        )


# Outcome types


@dataclass
class OutcomeRecord:
    """What happened during one task execution."""

    task_id: str
    timestamp: str
    domain: str
    task_type: str
    description: str
    outcome: str
    tokens_used: int
    tool_rounds: int

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OutcomeRecord:
        data = _mapping(data, "OutcomeRecord")
        return cls(
            task_id=_str(data, "task_id"),
            timestamp=_str(data, "timestamp"),
            domain=_str(data, "domain"),
            task_type=_str(data, "task_type"),
            description=_str(data, "description"),
            outcome=_str(data, "outcome"),
            tokens_used=_uint(data, "tokens_used"),
            tool_rounds=_uint(data, "tool_rounds"),
        )


# Calibration types


class Confidence(Enum):
    """Confidence in a threshold recommendation."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass
class ThresholdRecommendation:
    """A recommended change to one document's thresholds."""

    document: str
    current_soft: int
    current_hard: int
    recommended_soft: int | None
    recommended_hard: int | None
    reason: str
    confidence: Confidence
    evidence_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": self.document,
            "current_soft": self.current_soft,
            "current_hard": self.current_hard,
            "recommended_soft": self.recommended_soft,
            "recommended_hard": self.recommended_hard,
            "reason": self.reason,
            "confidence": self.confidence.value,
            "evidence_count": self.evidence_count,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThresholdRecommendation:
        data = _mapping(data, "ThresholdRecommendation")
        return cls(
            document=_str(data, "document"),
            current_soft=_uint(data, "current_soft"),
            current_hard=_uint(data, "current_hard"),
            recommended_soft=_opt_uint(data, "recommended_soft"),
            recommended_hard=_opt_uint(data, "recommended_hard"),
            reason=_str(data, "reason"),
            confidence=_enum(Confidence, data, "confidence"),
            evidence_count=_uint(data, "evidence_count"),
        )


@dataclass
class OutcomeSummary:
    """Outcome data used in calibration; ``domains`` holds (domain, count, success rate)."""

    total: int
    success_rate: float
    domains: list[tuple[str, int, float]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "success_rate": self.success_rate,
            "domains": [[name, count, rate] for name, count, rate in self.domains],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OutcomeSummary:
        data = _mapping(data, "OutcomeSummary")
        raw_domains = _field(data, "domains")
        if not isinstance(raw_domains, list):
            raise ValueError("invalid type for field `domains`: expected a list")
        domains = []
        for entry in raw_domains:
            if not isinstance(entry, (list, tuple)) or len(entry) != 3:
                raise ValueError("each domain entry must be [domain, count, success_rate]")
            name, count, rate = entry
            domains.append(
                (
                    _check_str(name, "domains"),
                    _check_uint(count, "domains"),
                    _check_float(rate, "domains"),
                )
            )
        return cls(
            total=_uint(data, "total"),
            success_rate=_float(data, "success_rate"),
            domains=domains,
        )


@dataclass
class CalibrationReport:
    """Result of a calibration analysis run."""

    generated_at: str
    recommendations: list[ThresholdRecommendation]
    sample_size: int
    outcome_summary: OutcomeSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "recommendations": [r.to_dict() for r in self.recommendations],
            "sample_size": self.sample_size,
            "outcome_summary": self.outcome_summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CalibrationReport:
        data = _mapping(data, "CalibrationReport")
        raw = _field(data, "recommendations")
        if not isinstance(raw, list):
            raise ValueError("invalid type for field `recommendations`: expected a list")
        return cls(
            generated_at=_str(data, "generated_at"),
            recommendations=[ThresholdRecommendation.from_dict(item) for item in raw],
            sample_size=_uint(data, "sample_size"),
            outcome_summary=OutcomeSummary.from_dict(_field(data, "outcome_summary")),
        )


@dataclass
class PipelineSnapshot:
    """Pipeline document counts at a point in time."""

    timestamp: str
    learning: int
    thoughts: int
    curiosity: int
    reflections: int
    praxis: int

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PipelineSnapshot:
        data = _mapping(data, "PipelineSnapshot")
        return cls(
            timestamp=_str(data, "timestamp"),
            learning=_uint(data, "learning"),
            thoughts=_uint(data, "thoughts"),
            curiosity=_uint(data, "curiosity"),
            reflections=_uint(data, "reflections"),
            praxis=_uint(data, "praxis"),
        )


# Monitor interfaces


class PipelineMonitor(abc.ABC):
    """Pipeline document monitoring and archiving."""

    @abc.abstractmethod
    def calculate(self, root_dir: Path, thresholds: PipelineThresholds) -> PipelineHealth:
        """Calculate pipeline health from document files on disk."""

    @abc.abstractmethod
    def render_for_prompt(
        self, health: PipelineHealth, sessions_frozen: int, freeze_threshold: int
    ) -> str:
        """Render pipeline health as text for prompt injection."""

    @abc.abstractmethod
    def counts_from_health(self, health: PipelineHealth) -> DocumentCounts:
        """Extract document counts from a health report."""

    @abc.abstractmethod
    def load_state(self, root_dir: Path) -> PipelineState:
        """Load pipeline state from disk."""

    @abc.abstractmethod
    def save_state(self, root_dir: Path, state: PipelineState) -> None:
        """Save pipeline state to disk; raise on failure."""

    @abc.abstractmethod
    def check_and_archive(
        self, root_dir: Path, thresholds: PipelineThresholds, health: PipelineHealth
    ) -> list[str]:
        """Archive documents over their hard limit; return the names archived."""

    @abc.abstractmethod
    def list_archives(self, root_dir: Path, document: str | None) -> list[str]:
        """List archived files, optionally for one document; raise on failure."""

    @abc.abstractmethod
    def archive_by_name(self, root_dir: Path, document: str) -> str:
        """Archive one document by name; raise on failure."""


class CognitiveMonitor(abc.ABC):
    """Metacognitive signal tracking and health assessment."""

    @abc.abstractmethod
    def assess(self, root_dir: Path, window_size: int, min_samples: int) -> CognitiveHealth:
        """Assess cognitive health from the signal history."""

    @abc.abstractmethod
    def render_for_prompt(self, health: CognitiveHealth) -> str:
        """Render cognitive health as text for prompt injection."""

    @abc.abstractmethod
    def extract(self, content: str, task_id: str) -> SignalFrame:
        """Extract cognitive signals from model output text."""

    @abc.abstractmethod
    def record(self, root_dir: Path, frame: SignalFrame, window_size: int) -> None:
        """Append a signal frame to the rolling window on disk; raise on failure."""


class OutcomeTracker(abc.ABC):
    """Task execution outcome recording."""

    @abc.abstractmethod
    def build_outcome(
        self,
        task_id: str,
        task_name: str,
        response_text: str,
        tool_rounds: int,
        input_tokens: int,
        output_tokens: int,
    ) -> OutcomeRecord:
        """Build an outcome record from task execution results."""

    @abc.abstractmethod
    def record_outcome(self, docs_dir: Path, outcome: OutcomeRecord, max_outcomes: int) -> None:
        """Store an outcome record; raise on failure."""