"""Unit tests for refstatus.models.status and refstatus.models.deploy."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from refstatus.models.deploy import DeployRecord
from refstatus.models.status import (
    CommitStatusResult,
    RefStatus,
    StatusEntry,
    StatusState,
    most_severe,
    severity_of,
)


@pytest.mark.unit
class TestSeverity:
    """Tests for state severity ordering."""

    @pytest.mark.parametrize(
        ("states", "expected"),
        [
            (["success", "pending"], StatusState.PENDING),
            (["pending", "failure"], StatusState.FAILURE),
            (["failure", "error", "success"], StatusState.ERROR),
            (["success"], StatusState.SUCCESS),
            ([], StatusState.MISSING),
            ([None, "Old Release"], StatusState.MISSING),
            (["missing"], StatusState.MISSING),
        ],
    )
    def test_most_severe(self, states: list, expected: StatusState) -> None:
        """Test error > failure > pending > success, unknown labels ignored."""
        assert most_severe(states) == expected

    def test_severity_of_unranked(self) -> None:
        """Test missing and free-form labels have no severity."""
        assert severity_of("missing") is None
        assert severity_of("Old Release") is None
        assert severity_of("error") == StatusState.ERROR


@pytest.mark.unit
class TestStatusEntry:
    """Tests for StatusEntry."""

    def test_keeps_extra_fields(self) -> None:
        """Test plugin fields survive validation and dumping."""
        entry = StatusEntry.model_validate({"foo": "bar", "state": "success"})
        assert entry.model_dump(exclude_none=True) == {"foo": "bar", "state": "success"}

    def test_parses_updated_at(self) -> None:
        """Test ISO timestamps from providers are parsed."""
        entry = StatusEntry.model_validate({"updated_at": "2024-05-01T12:00:00Z"})
        assert entry.updated_at == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)


@pytest.mark.unit
class TestCommitStatusResult:
    """Tests for CommitStatusResult."""

    def test_missing(self) -> None:
        """Test the not-found result."""
        result = CommitStatusResult.missing()
        assert result.state == StatusState.MISSING
        assert result.statuses == []

    def test_last_updated_at(self) -> None:
        """Test newest timestamp is picked, entries without one are skipped."""
        result = CommitStatusResult.model_validate(
            {
                "state": "success",
                "statuses": [
                    {"updated_at": "2024-05-01T10:00:00Z"},
                    {"context": "no timestamp"},
                    {"updated_at": "2024-05-01T11:00:00Z"},
                ],
            }
        )
        assert result.last_updated_at == datetime(2024, 5, 1, 11, tzinfo=timezone.utc)

    def test_last_updated_at_mixes_naive_and_aware(self) -> None:
        """Test naive timestamps are read as UTC when compared with aware ones."""
        result = CommitStatusResult(
            state=StatusState.SUCCESS,
            statuses=[
                StatusEntry(updated_at=datetime(2024, 5, 1, 11)),
                StatusEntry(
                    updated_at=datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)
                ),
            ],
        )
        assert result.last_updated_at == datetime(2024, 5, 1, 11, tzinfo=timezone.utc)

    def test_json_round_trip_keeps_extras(self) -> None:
        """Test cached payloads restore plugin fields."""
        result = CommitStatusResult(
            state=StatusState.SUCCESS, statuses=[StatusEntry.model_validate({"foo": 1})]
        )
        restored = CommitStatusResult.model_validate_json(result.model_dump_json())
        assert restored.statuses[0].model_extra == {"foo": 1}

    def test_rejects_unknown_state(self) -> None:
        """Test overall state must be a known state."""
        with pytest.raises(ValidationError):
            CommitStatusResult(state="Old Release", statuses=[])


@pytest.mark.unit
class TestRefStatus:
    """Tests for RefStatus."""

    def test_keeps_extra_fields(self) -> None:
        """Test groups keep plugin metadata."""
        group = RefStatus.model_validate(
            {"state": "error", "statuses": [], "plugin": "freeze"}
        )
        assert group.model_extra == {"plugin": "freeze"}

    def test_rejects_unknown_state(self) -> None:
        """Test group state must be a known state."""
        with pytest.raises(ValidationError):
            RefStatus.model_validate({"state": "Frozen", "statuses": []})


@pytest.mark.unit
class TestDeployRecord:
    """Tests for DeployRecord."""

    @pytest.mark.parametrize(
        ("job_status", "succeeded"),
        [("succeeded", True), ("failed", False), ("running", False)],
    )
    def test_succeeded(self, job_status: str, succeeded: bool) -> None:
        """Test only succeeded jobs count as successful deploys."""
        record = DeployRecord(
            id=1,
            reference="v1",
            stage_id=1,
            stage_name="Production",
            job_status=job_status,
        )
        assert record.succeeded is succeeded
