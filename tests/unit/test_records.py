"""Unit tests for assessment records and the in-memory record store."""

from datetime import UTC, datetime, timedelta

import pytest

from armora.core.exceptions import RecordNotFoundError, ResponseFormatError
from armora.questionnaire.assessment_path import AssessmentType
from armora.questionnaire.records import (
    AssessmentRecord,
    InMemoryRecordStore,
    RecordStore,
    build_assessment_record,
)
from armora.risk.thresholds import ProtectionLevel, RiskLevel


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Create an empty record store."""
    return InMemoryRecordStore()


@pytest.fixture
def record(red_responses) -> AssessmentRecord:
    """Build a RED assessment record."""
    return build_assessment_record("client-001", red_responses)


# =============================================================================
# Record Building Tests
# =============================================================================


class TestBuildAssessmentRecord:
    """Tests for building records from responses."""

    def test_red_record(self, record):
        """Test the computed fields of a RED record."""
        assert record.subject_id == "client-001"
        assert record.risk_level == RiskLevel.RED
        assert record.score == 20
        assert record.protection_level == ProtectionLevel.ENHANCED
        assert record.recommended_service == "armora-shadow"
        assert record.assessment_type == AssessmentType.CRITICAL
        assert "threat_analysis" in record.required_modules
        assert record.confidence == 56

    def test_score_before_escalation(self, orange_responses):
        """Test the score is the matrix score, the level the escalated one."""
        record = build_assessment_record("client-002", orange_responses)

        assert record.score == 12
        assert record.risk_level == RiskLevel.ORANGE

    def test_unique_ids(self, red_responses):
        """Test each build gets a new record id."""
        first = build_assessment_record("client-001", red_responses)
        second = build_assessment_record("client-001", red_responses)
        assert first.record_id != second.record_id

    def test_malformed_responses_raise(self):
        """Test building a record does not degrade."""
        with pytest.raises(ResponseFormatError):
            build_assessment_record("client-003", {"step4": 5})

    def test_to_dict(self, record):
        """Test record serialization."""
        data = record.to_dict()

        assert data["risk_level"] == "RED"
        assert data["protection_level"] == "Enhanced"
        assert data["assessment_type"] == "critical"
        assert isinstance(data["required_modules"], list)
        assert datetime.fromisoformat(data["created_at"]) == record.created_at


# =============================================================================
# Record Store Tests
# =============================================================================


class TestInMemoryRecordStore:
    """Tests for InMemoryRecordStore."""

    def test_satisfies_protocol(self, store):
        """Test the store can stand in for a RecordStore."""
        backend: RecordStore = store
        assert len(store) == 0
        assert backend is store

    def test_create_and_get(self, store, record):
        """Test stored records can be read back."""
        store.create(record)

        assert store.get(record.record_id) == record
        assert len(store) == 1

    def test_duplicate_create(self, store, record):
        """Test creating the same record twice fails."""
        store.create(record)
        with pytest.raises(ValueError, match="already exists"):
            store.create(record)

    def test_get_missing(self, store):
        """Test reading an unknown record."""
        with pytest.raises(RecordNotFoundError) as exc_info:
            store.get("missing")
        assert exc_info.value.record_id == "missing"

    def test_update(self, store, record):
        """Test updates replace fields and refresh updated_at."""
        store.create(record)
        updated = store.update(record.record_id, recommended_service="armora-executive")

        assert updated.recommended_service == "armora-executive"
        assert updated.updated_at >= record.updated_at
        assert updated.created_at == record.created_at
        assert store.get(record.record_id) == updated

    @pytest.mark.parametrize("field", ["record_id", "created_at", "colour"])
    def test_update_rejected_fields(self, store, record, field):
        """Test immutable and unknown fields cannot be updated."""
        store.create(record)
        with pytest.raises(ValueError, match="Cannot update"):
            store.update(record.record_id, **{field: "x"})

    def test_record_id_keyword_is_a_change(self, store, record):
        """Test record_id passed as a keyword reaches the immutable field check."""
        store.create(record)

        with pytest.raises(ValueError, match="record_id"):
            store.update(record.record_id, record_id="other")

        assert store.get(record.record_id) == record

    def test_update_missing(self, store):
        """Test updating an unknown record."""
        with pytest.raises(RecordNotFoundError):
            store.update("missing", score=3)

    def test_query(self, store, red_responses, green_responses):
        """Test filtering on field equality, oldest first."""
        now = datetime.now(UTC)
        older = build_assessment_record("client-001", red_responses)
        newer = build_assessment_record("client-001", green_responses)
        other = build_assessment_record("client-002", red_responses)

        store.create(AssessmentRecord(**{**older.__dict__, "created_at": now - timedelta(hours=1)}))
        store.create(AssessmentRecord(**{**newer.__dict__, "created_at": now}))
        store.create(other)

        by_subject = store.query(subject_id="client-001")
        assert [r.record_id for r in by_subject] == [older.record_id, newer.record_id]

        red = store.query(risk_level=RiskLevel.RED, subject_id="client-001")
        assert [r.record_id for r in red] == [older.record_id]

    def test_query_no_filters(self, store, record):
        """Test no filters returns everything."""
        store.create(record)
        assert store.query() == [record]

    def test_query_unknown_field(self, store):
        """Test filters must name record fields."""
        with pytest.raises(ValueError, match="Unknown record fields"):
            store.query(colour="red")
