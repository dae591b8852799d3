"""Response-dependent step validation.

A step's rules depend on the current responses: a step the composer would
not show is always valid, and the Seven Ps minimum only applies at the
comprehensive level. Structured answers are checked against their typed
response model; every other step uses the static rule on its definition.

Validation failures are returned as ``ValidationResult`` values and never
raised.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from armora.common.responses import (
    EnhancedEmergencyInfo,
    MedicalData,
    ResponseMap,
    ResponseSnapshot,
    SevenPsAssessment,
    ThreatIndicatorData,
    is_answered,
    parse_structured,
    unwrap_threat_data,
)
from armora.core.error_handling import degrade_on_error
from armora.core.exceptions import InvalidStepIdError, ResponseFormatError
from armora.core.logging import LogContext, get_logger
from armora.questionnaire.composer import compose
from armora.questionnaire.steps import COMPREHENSIVE_SEVEN_PS_MIN_FIELDS, get_base_steps
from armora.questionnaire.types import (
    QuestionnaireStep,
    SevenPsLevel,
    StepId,
    StepType,
    ValidationRule,
    step_key,
)

logger = get_logger(__name__)

THREAT_ASSESSMENT_ERROR = "Please complete the security threat assessment"
SEVEN_PS_ERROR = "Comprehensive Seven Ps assessment requires detailed information"
ENHANCED_CONTACTS_ERROR = "Enhanced emergency contacts require next of kin information"
MEDICAL_DATA_ERROR = "Medical information is required for your security level"
DEFAULT_REQUIRED_ERROR = "This question requires an answer"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one step answer."""

    is_valid: bool
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {"is_valid": self.is_valid}
        if self.error_message is not None:
            result["error_message"] = self.error_message
        return result


VALID = ValidationResult(is_valid=True)


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error_message=message)


# =============================================================================
# Step-Type Rules
# =============================================================================


def _validate_threat_assessment(value: Any) -> ValidationResult:
    record = unwrap_threat_data(value)
    if isinstance(record, ThreatIndicatorData):
        return VALID
    if not isinstance(record, Mapping) or not record:
        return _invalid(THREAT_ASSESSMENT_ERROR)
    return VALID


def _validate_seven_ps(value: Any, level: SevenPsLevel, rule: ValidationRule) -> ValidationResult:
    if level != SevenPsLevel.COMPREHENSIVE:
        return VALID
    minimum = rule.min_populated_fields or COMPREHENSIVE_SEVEN_PS_MIN_FIELDS
    try:
        assessment = parse_structured(SevenPsAssessment, value, field="seven_ps_assessment")
    except ResponseFormatError:
        return _invalid(SEVEN_PS_ERROR)
    if assessment.populated_field_count() < minimum:
        return _invalid(SEVEN_PS_ERROR)
    return VALID


def _validate_enhanced_contacts(value: Any) -> ValidationResult:
    try:
        info = parse_structured(
            EnhancedEmergencyInfo, value, field="enhanced_emergency_contacts"
        )
    except ResponseFormatError:
        return _invalid(ENHANCED_CONTACTS_ERROR)
    if not info.has_reachable_next_of_kin():
        return _invalid(ENHANCED_CONTACTS_ERROR)
    return VALID


def _validate_medical_data(value: Any) -> ValidationResult:
    try:
        medical = parse_structured(MedicalData, value, field="medical_data")
    except ResponseFormatError:
        return _invalid(MEDICAL_DATA_ERROR)
    if not medical.has_emergency_procedures():
        return _invalid(MEDICAL_DATA_ERROR)
    return VALID


def _selection_count(value: Any) -> int:
    if not is_answered(value):
        return 0
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value)
    return 1


def validate_static_rule(step: QuestionnaireStep, value: Any) -> ValidationResult:
    """Apply the static required / selection-count rule of a step."""
    rule = step.validation
    message = rule.error_message or DEFAULT_REQUIRED_ERROR
    count = _selection_count(value)

    if rule.required and count == 0:
        return _invalid(message)
    # Selection limits only constrain answers that were given
    if count and rule.min_selections is not None and count < rule.min_selections:
        return _invalid(message)
    if rule.max_selections is not None and count > rule.max_selections:
        return _invalid(message)
    return VALID


def _validate_step(
    step: QuestionnaireStep, value: Any, seven_ps_level: SevenPsLevel
) -> ValidationResult:
    match step.type:
        case StepType.THREAT_ASSESSMENT:
            return _validate_threat_assessment(value)
        case StepType.SEVEN_PS_ASSESSMENT:
            return _validate_seven_ps(value, seven_ps_level, step.validation)
        case StepType.ENHANCED_EMERGENCY_CONTACTS:
            return _validate_enhanced_contacts(value)
        case StepType.MEDICAL_DATA:
            return _validate_medical_data(value)
        case StepType.RISK_MATRIX:
            return VALID
        case _:
            return validate_static_rule(step, value)


# =============================================================================
# Public API
# =============================================================================


def _validate_against_base_steps(
    step_id: StepId, value: Any, responses: ResponseMap
) -> ValidationResult:
    try:
        key = step_key(step_id)
    except InvalidStepIdError:
        return VALID
    for step in get_base_steps():
        if step.key == key:
            return _validate_step(step, value, SevenPsLevel.BASIC)
    return VALID


@degrade_on_error(fallback=_validate_against_base_steps)
def validate_progressive_step_data(
    step_id: StepId,
    value: Any,
    responses: ResponseMap,
) -> ValidationResult:
    """Validate an answer against the step as composed for ``responses``.

    When the responses cannot be composed the answer is checked against the
    base step of the same key, so required base answers stay required.

    Args:
        step_id: Step id or key.
        value: The answer being submitted.
        responses: Current response map.

    Returns:
        ValidationResult; steps the composer would not show are valid.
    """
    key = step_key(step_id)
    with LogContext(step=key):
        composition = compose(ResponseSnapshot.from_responses(responses))

        index = composition.find(key)
        if index is None:
            return VALID

        result = _validate_step(
            composition.steps[index], value, composition.path.seven_ps_level
        )
        if not result.is_valid:
            logger.debug("step_validation_failed", error_message=result.error_message)
        return result


def validate_step_data(
    step_id: StepId,
    value: Any,
    responses: ResponseMap | None = None,
) -> ValidationResult:
    """Validate an answer; without responses every answer is valid."""
    if responses is None:
        return VALID
    return validate_progressive_step_data(step_id, value, responses)
