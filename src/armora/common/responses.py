"""Typed views over questionnaire response maps.

The response map handed in by the form layer is a loose ``Mapping[str, Any]``
keyed by step key (``"step2_5"``) or a named alias (``"threatAssessment"``).
This module reads it into typed values:

- ``ResponseSnapshot`` holds the scalar and multi-select answers the risk
  calculator and path resolver need.
- Pydantic models hold the structured answers of the assessment modules
  (threat indicators, Seven Ps, enhanced emergency contacts, medical data).

A missing key, or a ``None`` value, is "not yet answered". A value of the
wrong shape raises ``ResponseFormatError``, or is skipped when the snapshot
is read with ``strict=False``.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from armora.core.exceptions import ResponseFormatError

ResponseMap = Mapping[str, Any]

# Lookup order for each answer: step key first, then the named alias
PROFESSIONAL_PROFILE_KEYS = ("step1", "professionalProfile")
TRAVEL_FREQUENCY_KEYS = ("step2", "travelFrequency")
THREAT_ASSESSMENT_KEYS = ("step2_5", "threatAssessment")
SEVEN_PS_KEYS = ("step2_6", "sevenPsAssessment")
RECORDED_RISK_ASSESSMENT_KEYS = ("step2_5_riskAssessment", "riskAssessment")
SECURITY_REQUIREMENT_KEYS = ("step3", "serviceRequirements")
PRIMARY_COVERAGE_KEYS = ("step4", "primaryAreas")
SECONDARY_COVERAGE_KEYS = ("step5", "secondaryAreas")
EMERGENCY_CONTACT_KEYS = ("step6", "safetyContact")
ENHANCED_EMERGENCY_CONTACT_KEYS = ("step6_5", "enhancedEmergencyContacts")
SPECIAL_REQUIREMENT_KEYS = ("step7", "specialRequirements")
CONTACT_PREFERENCE_KEYS = ("step8", "communicationPreferences")
MEDICAL_DATA_KEYS = ("step8_5", "medicalData")
PROFILE_REVIEW_KEYS = ("step9", "profileReview")


def is_answered(value: Any) -> bool:
    """Check whether a response value counts as an answer."""
    return value is not None and value is not False and value != ""


def first_present(responses: ResponseMap, keys: Sequence[str]) -> tuple[str | None, Any]:
    """Get the first answered value among ``keys``.

    Returns:
        Tuple of (key, value), or (None, None) if no key is answered.
    """
    for key in keys:
        value = responses.get(key)
        if is_answered(value):
            return key, value
    return None, None


# =============================================================================
# Structured Answer Models
# =============================================================================


class ResponseModel(BaseModel):
    """Base for structured answers; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def populated_field_count(self) -> int:
        """Count fields (including extras) holding a non-empty value."""
        return sum(1 for value in self.model_dump().values() if _is_populated(value))


class ThreatIndicatorData(ResponseModel):
    """Answers to the seven yes/no threat assessment questions."""

    has_received_threats: bool = False
    has_public_profile: bool = False
    has_legal_proceedings: bool = False
    has_previous_incidents: bool = False
    requires_international_protection: bool = False
    has_controversial_work: bool = False
    has_high_value_assets: bool = False

    @field_validator("*", mode="before")
    @classmethod
    def _unanswered_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    def has_escalation_indicator(self) -> bool:
        """Check for any indicator that forces a tier escalation."""
        return (
            self.has_received_threats
            or self.has_legal_proceedings
            or self.has_previous_incidents
            or self.has_controversial_work
        )

    def active_indicators(self) -> list[str]:
        """Get the names of indicators answered yes."""
        return [name for name, value in self.model_dump().items() if value]


class SevenPsAssessment(ResponseModel):
    """Seven Ps threat profile: one free-form section per P."""

    model_config = ConfigDict(extra="allow")

    people: Any = None
    places: Any = None
    personality: Any = None
    prejudices: Any = None
    personal_history: Any = None
    political: Any = None
    private_lifestyle: Any = None
    completion_level: Literal["basic", "standard", "comprehensive"] | None = None
    risk_level: Literal["GREEN", "YELLOW", "ORANGE", "RED"] | None = None
    assessment_date: str | None = None


class NextOfKin(ResponseModel):
    """Next-of-kin record of the enhanced emergency contacts."""

    name: str = ""
    relationship: str = ""
    primary_phone: str = ""
    secondary_phone: str = ""
    address: str = ""
    can_make_decisions: bool = False

    def is_reachable(self) -> bool:
        """Check that a name and a primary phone number are present."""
        return bool(self.name.strip()) and bool(self.primary_phone.strip())


class PrimaryPhysician(ResponseModel):
    """Treating physician details."""

    name: str = ""
    phone: str = ""
    hospital: str = ""
    special_notes: str = ""


class MedicalData(ResponseModel):
    """Medical information collected for emergency response."""

    blood_type: str | None = None
    critical_allergies: list[str] = []
    current_medications: list[str] = []
    medical_conditions: list[str] = []
    emergency_procedures: list[str] = []
    primary_physician: PrimaryPhysician | None = None

    @field_validator(
        "critical_allergies",
        "current_medications",
        "medical_conditions",
        "emergency_procedures",
        mode="before",
    )
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    def has_emergency_procedures(self) -> bool:
        """Check that at least one emergency procedure is written down."""
        return any(procedure.strip() for procedure in self.emergency_procedures)


class SecondaryContact(ResponseModel):
    """Backup contact when the next of kin cannot be reached."""

    name: str = ""
    relationship: str = ""
    phone: str = ""
    role: Literal["backup", "business", "family", "legal"] | None = None


class DataConsent(ResponseModel):
    """Consent captured alongside special-category data."""

    medical_data_consent: bool = False
    emergency_contact_consent: bool = False
    data_processing_consent: bool = False
    consent_timestamp: str | None = None


class EnhancedEmergencyInfo(ResponseModel):
    """Enhanced emergency contact module answer."""

    next_of_kin: NextOfKin | None = None
    medical_emergency: MedicalData | None = None
    secondary_contact: SecondaryContact | None = None
    data_consent: DataConsent | None = None
    privacy_level: Literal["minimal", "standard", "comprehensive"] | None = None
    encryption_level: Literal["standard", "enhanced"] | None = None

    def has_reachable_next_of_kin(self) -> bool:
        """Check the next-of-kin record has a name and primary phone."""
        return self.next_of_kin is not None and self.next_of_kin.is_reachable()


ModelT = TypeVar("ModelT", bound=ResponseModel)


def parse_structured(model: type[ModelT], value: Any, field: str, key: str | None = None) -> ModelT:
    """Parse a structured answer into its model.

    Raises:
        ResponseFormatError: If the value is not a mapping or fails validation.
    """
    if isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        raise ResponseFormatError(
            f"Expected a mapping, got {type(value).__name__}", field=field, key=key
        )
    try:
        return model.model_validate(dict(value))
    except ValidationError as e:
        raise ResponseFormatError(str(e), field=field, key=key) from e


def unwrap_threat_data(value: Any) -> Any:
    """Unwrap ``{"threatData": ..., "riskAssessment": ...}`` answers."""
    if isinstance(value, Mapping):
        for wrapper_key in ("threatData", "threat_data"):
            if wrapper_key in value:
                return value[wrapper_key]
    return value


# =============================================================================
# Response Snapshot
# =============================================================================


@dataclass(frozen=True)
class ResponseSnapshot:
    """The answers that drive risk scoring, read from a response map.

    Attributes:
        answered_count: Number of keys in the map whose value is not None.
        professional_profile: Step 1 professional category.
        travel_frequency: Step 2 protection frequency.
        threat_answered: Whether the threat assessment step has any answer.
        threat_indicators: Parsed threat flags, when the answer is a record.
        security_requirements: Step 3 selections.
        coverage_areas: Step 4 primary coverage selections.
    """

    answered_count: int = 0
    professional_profile: str | None = None
    travel_frequency: str | None = None
    threat_answered: bool = False
    threat_indicators: ThreatIndicatorData | None = None
    security_requirements: tuple[str, ...] = ()
    coverage_areas: tuple[str, ...] = ()

    @classmethod
    def from_responses(cls, responses: ResponseMap, strict: bool = True) -> "ResponseSnapshot":
        """Read a response map.

        Args:
            responses: Response map keyed by step key or camelCase name.
            strict: When False, a malformed answer is read as unanswered and
                the remaining answers are still read.

        Raises:
            ResponseFormatError: If ``strict`` and an answer has the wrong shape.
        """
        if not isinstance(responses, Mapping):
            if not strict:
                return cls()
            raise ResponseFormatError(
                f"Responses must be a mapping, got {type(responses).__name__}",
                field="responses",
            )

        def read(parse: Callable[[], Any], default: Any) -> Any:
            try:
                return parse()
            except ResponseFormatError:
                if strict:
                    raise
                return default

        threat_key, threat_value = first_present(responses, THREAT_ASSESSMENT_KEYS)

        return cls(
            answered_count=sum(1 for value in responses.values() if value is not None),
            professional_profile=read(
                lambda: _single_choice(
                    responses, PROFESSIONAL_PROFILE_KEYS, "professional_profile"
                ),
                None,
            ),
            travel_frequency=read(
                lambda: _single_choice(responses, TRAVEL_FREQUENCY_KEYS, "travel_frequency"),
                None,
            ),
            threat_answered=threat_key is not None,
            threat_indicators=read(lambda: _threat_indicators(threat_key, threat_value), None),
            security_requirements=read(
                lambda: _multi_choice(
                    responses, SECURITY_REQUIREMENT_KEYS, "security_requirements"
                ),
                (),
            ),
            coverage_areas=read(
                lambda: _multi_choice(responses, PRIMARY_COVERAGE_KEYS, "coverage_areas"),
                (),
            ),
        )

    def has_escalation_indicator(self) -> bool:
        """Check whether the threat record carries an escalation flag."""
        indicators = self.threat_indicators
        return indicators is not None and indicators.has_escalation_indicator()


def _threat_indicators(key: str | None, value: Any) -> ThreatIndicatorData | None:
    record = unwrap_threat_data(value)
    if isinstance(record, (Mapping, ThreatIndicatorData)):
        return parse_structured(ThreatIndicatorData, record, field="threat_assessment", key=key)
    return None


def _single_choice(responses: ResponseMap, keys: Sequence[str], field: str) -> str | None:
    key, value = first_present(responses, keys)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    # Free-text "other" answers arrive as {"type": "custom", "value": "..."}
    if isinstance(value, Mapping) and value.get("type") == "custom":
        custom = value.get("value")
        if isinstance(custom, str):
            return custom
    raise ResponseFormatError(
        f"Expected a single choice, got {type(value).__name__}", field=field, key=key
    )


def _multi_choice(responses: ResponseMap, keys: Sequence[str], field: str) -> tuple[str, ...]:
    key, value = first_present(responses, keys)
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple, set, frozenset)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ResponseFormatError(
        f"Expected a list of choices, got {type(value).__name__}", field=field, key=key
    )


def _is_populated(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value) > 0
    return True
