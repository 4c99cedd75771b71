"""Tests for the replay pipeline."""

import json

import pytest

from engagement_integrity.models.model_policy import FusionWeights
from engagement_integrity.models.model_result import Verdict
from engagement_integrity.pipeline import (
    load_submissions,
    run_evaluation_pipeline,
    save_reports,
)

LEGIT = {
    "user_id": "alice",
    "raid_id": "raid-1",
    "action_type": "comment",
    "text": "comment: bitcoin halving analysis",
    "target_content": "bitcoin halving analysis thread",
    "topics": ["bitcoin"],
    "evidence": "screenshot",
    "submitted_at": "2024-06-01T12:00:00Z",
}

SPAMMER = {
    "user_id": "spammer",
    "raid_id": "raid-1",
    "action_type": "like",
    "text": "CLICK HERE!!! Free giveaway, follow me and buy now!",
    "submitted_at": "2024-06-01T12:00:00Z",
}


class TestLoadSubmissions:
    """Tests for load_submissions."""

    def test_list(self, tmp_path):
        path = tmp_path / "subs.json"
        path.write_text(json.dumps([LEGIT, SPAMMER]))

        submissions = load_submissions(path)

        assert [s.user_id for s in submissions] == ["alice", "spammer"]

    def test_single_object(self, tmp_path):
        path = tmp_path / "one.json"
        path.write_text(json.dumps(LEGIT))

        assert len(load_submissions(path)) == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(ValueError):
            load_submissions(path)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "num.json"
        path.write_text("42")

        with pytest.raises(ValueError, match="Expected a submission"):
            load_submissions(path)

    def test_invalid_submission(self, tmp_path):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps({"action_type": "teleport"}))

        with pytest.raises(ValueError):
            load_submissions(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_submissions(tmp_path / "missing.json")


class TestRunEvaluationPipeline:
    """Tests for run_evaluation_pipeline and save_reports."""

    def test_end_to_end(self, tmp_path):
        source = tmp_path / "subs.json"
        source.write_text(json.dumps([LEGIT, SPAMMER]))

        reports = run_evaluation_pipeline(load_submissions(source), weights=FusionWeights())

        assert reports[0].decision.verdict == Verdict.ADMIT
        assert reports[0].decision.points_awarded == 5
        assert reports[1].decision.verdict == Verdict.FLAG

        output = save_reports(reports, tmp_path / "out" / "reports.json")
        data = json.loads(output.read_text())

        assert [r["user_id"] for r in data] == ["alice", "spammer"]
        assert data[1]["decision"]["verdict"] == "flag"
        assert data[1]["decision"]["reasons"] == ["SPAM_DETECTED"]

    def test_replay_is_reproducible(self, tmp_path):
        source = tmp_path / "subs.json"
        source.write_text(json.dumps([LEGIT, SPAMMER]))

        first = run_evaluation_pipeline(load_submissions(source), weights=FusionWeights())
        second = run_evaluation_pipeline(load_submissions(source), weights=FusionWeights())

        assert [r.model_dump() for r in first] == [r.model_dump() for r in second]

    def test_empty(self):
        assert run_evaluation_pipeline([], weights=FusionWeights()) == []
