"""Progressive step composition.

Expands the base step sequence with the conditional steps the resolved
assessment path calls for. Each conditional step is spliced directly after
its anchor step, so the composed list stays in strictly increasing id order:

- Seven Ps (2.6) after the threat assessment (2.5)
- Risk matrix (2.7) after the later of 2.5 / 2.6, once 2.5 is answered
- Enhanced emergency contacts (6.5) after emergency contact (6)
- Medical data (8.5) after contact preferences (8)
"""

from dataclasses import dataclass

from armora.common.responses import ResponseMap, ResponseSnapshot
from armora.core.error_handling import degrade_on_error
from armora.core.logging import get_logger
from armora.questionnaire.assessment_path import AssessmentPath, resolve_assessment_path
from armora.questionnaire.steps import (
    BASE_STEP_COUNT,
    CONDITIONAL_STEP_KEYS,
    CONTACT_PREFERENCES,
    EMERGENCY_CONTACT,
    ENHANCED_EMERGENCY_CONTACTS,
    MEDICAL_DATA,
    RISK_MATRIX,
    SEVEN_PS_ASSESSMENT,
    THREAT_ASSESSMENT,
    create_enhanced_emergency_contacts_step,
    create_medical_data_step,
    create_risk_matrix_step,
    create_seven_ps_assessment_step,
    get_base_steps,
)
from armora.questionnaire.types import QuestionnaireStep, StepId, step_key

logger = get_logger(__name__)


@dataclass(frozen=True)
class Composition:
    """A composed step list with the path that produced it."""

    path: AssessmentPath
    steps: tuple[QuestionnaireStep, ...]
    triggered: frozenset[str]

    def keys(self) -> list[str]:
        return [step.key for step in self.steps]

    def find(self, key: str) -> int | None:
        """Get the index of a step key, or None if it is not composed."""
        for index, step in enumerate(self.steps):
            if step.key == key:
                return index
        return None


def _insert_after(steps: list[QuestionnaireStep], anchor: str, step: QuestionnaireStep) -> None:
    for index, existing in enumerate(steps):
        if existing.key == anchor:
            steps.insert(index + 1, step)
            return
    raise ValueError(f"Anchor step {anchor} is not in the sequence")


def compose(snapshot: ResponseSnapshot) -> Composition:
    """Compose the step list for a snapshot, without degradation.

    Each call starts from a fresh copy of the base sequence, so composing
    the same snapshot twice gives the same keys in the same order.
    """
    path = resolve_assessment_path(snapshot)
    steps = get_base_steps()
    triggered: set[str] = set()

    if path.requires_seven_ps:
        seven_ps = create_seven_ps_assessment_step(path.seven_ps_level)
        _insert_after(steps, THREAT_ASSESSMENT, seven_ps)
        triggered.add(SEVEN_PS_ASSESSMENT)

    if snapshot.threat_answered:
        anchor = SEVEN_PS_ASSESSMENT if SEVEN_PS_ASSESSMENT in triggered else THREAT_ASSESSMENT
        _insert_after(steps, anchor, create_risk_matrix_step())
        triggered.add(RISK_MATRIX)

    if path.requires_enhanced_emergency_contacts:
        _insert_after(steps, EMERGENCY_CONTACT, create_enhanced_emergency_contacts_step())
        triggered.add(ENHANCED_EMERGENCY_CONTACTS)

    if path.requires_medical_data:
        _insert_after(steps, CONTACT_PREFERENCES, create_medical_data_step(required=True))
        triggered.add(MEDICAL_DATA)

    logger.debug(
        "steps_composed",
        risk_level=path.risk_level.value,
        step_count=len(steps),
        triggered=sorted(triggered),
    )

    return Composition(path=path, steps=tuple(steps), triggered=frozenset(triggered))


def compose_responses(responses: ResponseMap) -> Composition:
    """Compose the step list for a response map, without degradation.

    Raises:
        ResponseFormatError: If an answer has the wrong shape.
    """
    return compose(ResponseSnapshot.from_responses(responses))


# =============================================================================
# Public API
# =============================================================================


@degrade_on_error(fallback=lambda responses: get_base_steps())
def calculate_progressive_steps(responses: ResponseMap) -> list[QuestionnaireStep]:
    """Get the ordered steps to present for a response map.

    Falls back to the base sequence if the responses cannot be scored.
    """
    return list(compose_responses(responses).steps)


def get_questions_for_user_type(
    user_type: str,
    responses: ResponseMap | None = None,
) -> list[QuestionnaireStep]:
    """Get the questionnaire steps for a user.

    The user type is accepted for API compatibility; every user type shares
    one sequence. Without responses the base sequence is returned.
    """
    if responses is None:
        return get_base_steps()
    return calculate_progressive_steps(responses)


@degrade_on_error(fallback=BASE_STEP_COUNT)
def _count_total_steps(responses: ResponseMap) -> int:
    return BASE_STEP_COUNT + len(compose_responses(responses).triggered)


def get_total_steps_for_user_type(user_type: str, responses: ResponseMap | None = None) -> int:
    """Get the step total used for progress display.

    The total is the nine base questions plus one per triggered conditional
    module. It is not used for flow control.
    """
    if responses is None:
        return BASE_STEP_COUNT
    return _count_total_steps(responses)


@degrade_on_error(fallback=True)
def should_show_progressive_step(step_id: StepId, responses: ResponseMap) -> bool:
    """Check whether a step is shown for the current responses.

    Conditional steps follow their trigger; every other id is shown.
    """
    key = step_key(step_id)
    composition = compose_responses(responses)
    if key in CONDITIONAL_STEP_KEYS:
        return key in composition.triggered
    return True
