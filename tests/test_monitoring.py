import json
from pathlib import Path

import pytest

from echo_contract.monitoring import (
    CalibrationReport,
    CognitiveMonitor,
    CognitiveStatus,
    Confidence,
    DocumentCounts,
    DocumentHealth,
    OutcomeRecord,
    OutcomeSummary,
    OutcomeTracker,
    PipelineMonitor,
    PipelineSnapshot,
    PipelineState,
    PipelineThresholds,
    SignalFrame,
    ThresholdRecommendation,
    ThresholdStatus,
    Trend,
)


def _roundtrip(obj):
    return type(obj).from_dict(json.loads(json.dumps(obj.to_dict())))


@pytest.mark.parametrize(
    "variant, text", [("Green", "green"), ("Yellow", "yellow"), ("Red", "red")]
)
def test_threshold_status_display(variant, text):
    health = DocumentHealth.from_dict({"count": 1, "soft": 1, "hard": 2, "status": variant})
    assert str(health.status) == text


@pytest.mark.parametrize(
    "member, text",
    [
        (CognitiveStatus.HEALTHY, "HEALTHY"),
        (CognitiveStatus.WATCH, "WATCH"),
        (CognitiveStatus.CONCERN, "CONCERN"),
        (CognitiveStatus.ALERT, "ALERT"),
    ],
)
def test_cognitive_status_display(member, text):
    assert str(CognitiveStatus(member.value)) == text


@pytest.mark.parametrize(
    "member, text",
    [
        (Trend.IMPROVING, "improving"),
        (Trend.STABLE, "stable"),
        (Trend.DECLINING, "declining"),
    ],
)
def test_trend_display(member, text):
    assert str(Trend(member.value)) == text


def test_pipeline_thresholds_default():
    t = PipelineThresholds()
    assert t.learning_soft == 5
    assert t.learning_hard == 8
    assert t.curiosity_hard == 7


def test_pipeline_thresholds_roundtrip_and_missing_field():
    t = PipelineThresholds(praxis_hard=12)
    assert _roundtrip(t) == t
    data = t.to_dict()
    del data["thoughts_soft"]
    with pytest.raises(ValueError):
        PipelineThresholds.from_dict(data)


def test_pipeline_state_update_counts_detects_freeze():
    state = PipelineState()
    counts = DocumentCounts(learning=3, thoughts=2, curiosity=1, reflections=5, praxis=2)

    state.update_counts(counts, "2026-03-05T12:00:00Z")
    assert state.sessions_without_movement == 0
    assert state.session_count == 1

    state.update_counts(counts, "2026-03-05T13:00:00Z")
    assert state.sessions_without_movement == 1
    assert state.session_count == 2

    new_counts = DocumentCounts(learning=4, thoughts=2, curiosity=1, reflections=5, praxis=2)
    state.update_counts(new_counts, "2026-03-05T14:00:00Z")
    assert state.sessions_without_movement == 0
    assert state.session_count == 3
    assert state.last_updated == "2026-03-05T14:00:00Z"
    assert state.last_counts == new_counts


def test_pipeline_state_keeps_its_own_copy_of_counts():
    state = PipelineState()
    counts = DocumentCounts(learning=1)
    state.update_counts(counts, "t")
    counts.learning = 9
    assert state.last_counts.learning == 1


def test_pipeline_state_roundtrip_and_missing_last_updated():
    state = PipelineState()
    state.update_counts(DocumentCounts(praxis=4), "2026-03-05T12:00:00Z")
    assert _roundtrip(state) == state
    data = state.to_dict()
    del data["last_updated"]
    assert PipelineState.from_dict(data).last_updated is None


def test_document_counts_default():
    counts = DocumentCounts()
    assert counts.learning == 0
    assert counts.thoughts == 0


def test_document_counts_rejects_negative():
    with pytest.raises(ValueError):
        DocumentCounts.from_dict(
            {"learning": -1, "thoughts": 0, "curiosity": 0, "reflections": 0, "praxis": 0}
        )


def test_threshold_status_equality():
    health = DocumentHealth.from_dict({"count": 9, "soft": 5, "hard": 8, "status": "Red"})
    assert health.status == ThresholdStatus.RED
    assert health.status != ThresholdStatus.GREEN


def test_document_health_serializes_status_by_variant_name():
    health = DocumentHealth(count=9, soft=5, hard=8, status=ThresholdStatus.RED)
    assert health.to_dict()["status"] == "Red"
    assert _roundtrip(health) == health


def test_document_health_unknown_status():
    with pytest.raises(ValueError):
        DocumentHealth.from_dict({"count": 1, "soft": 1, "hard": 2, "status": "Purple"})


def test_signal_frame_serializes():
    frame = SignalFrame(
        timestamp="2026-03-05T12:00:00Z",
        task_id="test",
        vocabulary_diversity=0.72,
        question_count=3,
        evidence_references=5,
        thought_progress=True,
    )
    back = _roundtrip(frame)
    assert back.task_id == "test"
    assert back.vocabulary_diversity == pytest.approx(0.72)


def test_outcome_record_serializes():
    record = OutcomeRecord(
        task_id="task-1",
        timestamp="2026-03-05T12:00:00Z",
        domain="research",
        task_type="research",
        description="Deep dive",
        outcome="success",
        tokens_used=1500,
        tool_rounds=3,
    )
    back = _roundtrip(record)
    assert back.task_id == "task-1"
    assert back.tokens_used == 1500


def test_calibration_report_roundtrip():
    rec = ThresholdRecommendation(
        document="learning",
        current_soft=5,
        current_hard=8,
        recommended_soft=6,
        recommended_hard=None,
        reason="steady overflow",
        confidence=Confidence.MEDIUM,
        evidence_count=12,
    )
    report = CalibrationReport(
        generated_at="2026-03-05T12:00:00Z",
        recommendations=[rec],
        sample_size=12,
        outcome_summary=OutcomeSummary(
            total=12, success_rate=0.75, domains=[("research", 8, 0.875)]
        ),
    )
    data = report.to_dict()
    assert data["recommendations"][0]["confidence"] == "Medium"
    assert data["recommendations"][0]["recommended_hard"] is None
    assert data["outcome_summary"]["domains"] == [["research", 8, 0.875]]
    assert _roundtrip(report) == report


def test_outcome_summary_rejects_malformed_domain():
    with pytest.raises(ValueError):
        OutcomeSummary.from_dict({"total": 1, "success_rate": 1.0, "domains": [["x", 1]]})


def test_pipeline_snapshot_roundtrip():
    snap = PipelineSnapshot(
        timestamp="2026-03-05T12:00:00Z",
        learning=1,
        thoughts=2,
        curiosity=3,
        reflections=4,
        praxis=5,
    )
    assert _roundtrip(snap) == snap


@pytest.mark.parametrize("cls", [PipelineMonitor, CognitiveMonitor, OutcomeTracker])
def test_monitor_interfaces_are_abstract(cls):
    with pytest.raises(TypeError):
        cls()


def test_outcome_tracker_subclass():
    class Tracker(OutcomeTracker):
        def __init__(self):
            self.stored = []

        def build_outcome(
            self, task_id, task_name, response_text, tool_rounds, input_tokens, output_tokens
        ):
            return OutcomeRecord(
                task_id=task_id,
                timestamp="2026-03-05T12:00:00Z",
                domain="general",
                task_type=task_name,
                description=response_text,
                outcome="success",
                tokens_used=input_tokens + output_tokens,
                tool_rounds=tool_rounds,
            )

        def record_outcome(self, docs_dir, outcome, max_outcomes):
            self.stored = (self.stored + [outcome])[-max_outcomes:]

    tracker = Tracker()
    record = tracker.build_outcome("t1", "daily", "done", 2, 100, 50)
    tracker.record_outcome(Path("."), record, 1)
    assert tracker.stored == [record]
    stored = OutcomeRecord.from_dict(record.to_dict())
    assert stored.tokens_used == 150
    assert stored.task_type == "daily"
    assert stored.tool_rounds == 2