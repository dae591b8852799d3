"""Assessment records and the record-store protocol.

A completed (or partially completed) questionnaire is persisted as an
AssessmentRecord: a snapshot of the computed results, never the engine's
intermediate state. Building a record is a pure function of the responses;
persisting it is up to whatever RecordStore the caller supplies. The
assessment engine itself never calls a store.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import UTC, datetime
from typing import Any, Protocol
from uuid import uuid4

from armora.common.responses import ResponseMap, ResponseSnapshot
from armora.core.exceptions import RecordNotFoundError
from armora.core.logging import get_logger
from armora.questionnaire.assessment_path import AssessmentType, resolve_assessment_path
from armora.questionnaire.recommendation import SERVICE_TIER_MAPPING
from armora.risk.calculator import create_risk_calculator
from armora.risk.thresholds import ProtectionLevel, RiskLevel

logger = get_logger(__name__)


@dataclass(frozen=True)
class AssessmentRecord:
    """Persisted snapshot of an assessment's computed results.

    Attributes:
        record_id: Record identifier.
        subject_id: The person (or booking) the assessment is about.
        risk_level: Resolved, possibly escalated, risk level.
        score: Risk matrix score (1-25) before escalation.
        protection_level: Protection tier of the resolved path.
        recommended_service: Service id from the service catalog.
        assessment_type: Assessment depth of the resolved path.
        required_modules: Modules the resolved path requires.
        confidence: Questionnaire confidence (30-95).
        created_at: When the record was built.
        updated_at: When the record last changed.
    """

    subject_id: str
    risk_level: RiskLevel
    score: int
    protection_level: ProtectionLevel
    recommended_service: str
    assessment_type: AssessmentType
    required_modules: tuple[str, ...] = ()
    confidence: int = 0
    record_id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "record_id": self.record_id,
            "subject_id": self.subject_id,
            "risk_level": self.risk_level.value,
            "score": self.score,
            "protection_level": self.protection_level.value,
            "recommended_service": self.recommended_service,
            "assessment_type": self.assessment_type.value,
            "required_modules": list(self.required_modules),
            "confidence": self.confidence,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


_RECORD_FIELDS = frozenset(f.name for f in fields(AssessmentRecord))
_IMMUTABLE_FIELDS = frozenset({"record_id", "created_at"})


def build_assessment_record(subject_id: str, responses: ResponseMap) -> AssessmentRecord:
    """Build a record from the current responses.

    Raises:
        ResponseFormatError: If an answer has the wrong shape.
    """
    snapshot = ResponseSnapshot.from_responses(responses)
    assessment = create_risk_calculator().calculate_from_snapshot(snapshot)
    path = resolve_assessment_path(snapshot)

    return AssessmentRecord(
        subject_id=subject_id,
        risk_level=path.risk_level,
        score=assessment.matrix.score,
        protection_level=path.protection_level,
        recommended_service=SERVICE_TIER_MAPPING[path.protection_level],
        assessment_type=path.assessment_type,
        required_modules=path.required_modules,
        confidence=assessment.confidence,
    )


class RecordStore(Protocol):
    """Protocol for assessment record persistence backends."""

    def create(self, record: AssessmentRecord) -> AssessmentRecord:
        """Store a new record."""
        ...

    def get(self, record_id: str) -> AssessmentRecord:
        """Get a record by ID."""
        ...

    def update(self, record_id: str, /, **changes: Any) -> AssessmentRecord:
        """Apply field changes to a record."""
        ...

    def query(self, **filters: Any) -> list[AssessmentRecord]:
        """Get records whose fields equal every filter value."""
        ...


class InMemoryRecordStore:
    """In-memory record store for testing and local use."""

    def __init__(self) -> None:
        self._records: dict[str, AssessmentRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def create(self, record: AssessmentRecord) -> AssessmentRecord:
        """Store a new record.

        Raises:
            ValueError: If a record with the same ID already exists.
        """
        if record.record_id in self._records:
            raise ValueError(f"Assessment record already exists: {record.record_id}")
        self._records[record.record_id] = record
        logger.debug("record_created", record_id=record.record_id, subject_id=record.subject_id)
        return record

    def get(self, record_id: str) -> AssessmentRecord:
        """Get a record by ID.

        Raises:
            RecordNotFoundError: If the record does not exist.
        """
        try:
            return self._records[record_id]
        except KeyError:
            raise RecordNotFoundError(record_id) from None

    def update(self, record_id: str, /, **changes: Any) -> AssessmentRecord:
        """Apply field changes to a record and refresh ``updated_at``.

        Raises:
            RecordNotFoundError: If the record does not exist.
            ValueError: If a change names an unknown or immutable field.
        """
        current = self.get(record_id)

        invalid = set(changes) - (_RECORD_FIELDS - _IMMUTABLE_FIELDS)
        if invalid:
            raise ValueError(f"Cannot update record fields: {sorted(invalid)}")

        changes.setdefault("updated_at", datetime.now(UTC))
        updated = replace(current, **changes)
        self._records[record_id] = updated

        logger.debug("record_updated", record_id=record_id, fields=sorted(changes))
        return updated

    def query(self, **filters: Any) -> list[AssessmentRecord]:
        """Get records matching every filter, oldest first.

        Raises:
            ValueError: If a filter names an unknown field.
        """
        unknown = set(filters) - _RECORD_FIELDS
        if unknown:
            raise ValueError(f"Unknown record fields: {sorted(unknown)}")

        matches = [
            record
            for record in self._records.values()
            if all(getattr(record, name) == value for name, value in filters.items())
        ]
        matches.sort(key=lambda r: r.created_at)
        return matches
