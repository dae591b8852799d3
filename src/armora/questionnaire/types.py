"""Questionnaire step types and step identifiers.

Steps are addressed by stable string keys (``"step2_5"``) that match the
response-map keys the form layer writes. The numeric id shown to the UI
(``2.5``) is derived from the key through ``Decimal``, so conditional steps
can sit between base steps without renumbering and comparisons never depend
on float identity.
"""

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from armora.core.exceptions import InvalidStepIdError
from armora.risk.thresholds import RiskLevel

StepId = int | float | str | Decimal

_STEP_KEY_RE = re.compile(r"^step(\d+)(?:_(\d+))?$")


def to_step_number(step_id: StepId) -> Decimal:
    """Read a step id (``2.5``, ``"2.5"``, ``"step2_5"``) as an exact Decimal.

    Raises:
        InvalidStepIdError: If the id is not a finite number or step key.
    """
    if isinstance(step_id, bool):
        raise InvalidStepIdError(step_id)
    if isinstance(step_id, Decimal):
        number = step_id
    elif isinstance(step_id, int):
        number = Decimal(step_id)
    elif isinstance(step_id, float):
        if not math.isfinite(step_id):
            raise InvalidStepIdError(step_id)
        # repr() gives the shortest round-tripping literal, so 8.5 -> "8.5"
        number = Decimal(repr(step_id))
    elif isinstance(step_id, str):
        match = _STEP_KEY_RE.match(step_id)
        if match:
            whole, fraction = match.groups()
            number = Decimal(f"{whole}.{fraction}" if fraction else whole)
        else:
            try:
                number = Decimal(step_id)
            except InvalidOperation as e:
                raise InvalidStepIdError(step_id) from e
    else:
        raise InvalidStepIdError(step_id)

    if not number.is_finite():
        raise InvalidStepIdError(step_id)
    return number


def step_key(step_id: StepId) -> str:
    """Get the canonical key for a step id (``2.5`` -> ``"step2_5"``)."""
    number = to_step_number(step_id)
    text = format(number.normalize(), "f")
    return "step" + text.replace(".", "_")


def step_id_to_float(step_id: StepId) -> float:
    """Get the numeric id the UI works with."""
    return float(to_step_number(step_id))


class StepType(str, Enum):
    """Input widget / answer shape of a questionnaire step."""

    RADIO = "radio"
    CHECKBOX = "checkbox"
    INPUT = "input"
    TEXTAREA = "textarea"
    SELECT = "select"
    LOCATION = "location"
    THREAT_ASSESSMENT = "threat_assessment"
    SEVEN_PS_ASSESSMENT = "seven_ps_assessment"
    ENHANCED_EMERGENCY_CONTACTS = "enhanced_emergency_contacts"
    MEDICAL_DATA = "medical_data"
    RISK_MATRIX = "risk_matrix"


class SevenPsLevel(str, Enum):
    """Depth of the Seven Ps threat profile module."""

    BASIC = "basic"
    STANDARD = "standard"
    COMPREHENSIVE = "comprehensive"


@dataclass(frozen=True)
class QuestionnaireOption:
    """One selectable answer of a radio or checkbox step."""

    value: str
    label: str
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.value,
            "value": self.value,
            "label": self.label,
            "description": self.description,
        }


@dataclass(frozen=True)
class ValidationRule:
    """Static validation carried on a step definition.

    Attributes:
        required: Whether an answer must be given.
        min_selections: Minimum selections for multi-select steps.
        max_selections: Maximum selections for multi-select steps.
        min_populated_fields: Minimum non-empty keys for structured answers.
        error_message: Message shown when the rule fails.
    """

    required: bool = False
    min_selections: int | None = None
    max_selections: int | None = None
    min_populated_fields: int | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "required": self.required,
            "min_selections": self.min_selections,
            "max_selections": self.max_selections,
            "min_populated_fields": self.min_populated_fields,
            "error_message": self.error_message,
        }


@dataclass(frozen=True)
class TriggerConditions:
    """Signals that make a conditional step appear."""

    risk_levels: tuple[RiskLevel, ...] = ()
    professional_profiles: tuple[str, ...] = ()
    security_requirements: tuple[str, ...] = ()
    special_requirements: tuple[str, ...] = ()
    threat_assessment_answered: bool = False


@dataclass(frozen=True)
class DataProtection:
    """Handling requirements for special-category answers."""

    special_category_data: bool = False
    encryption_level: str = "standard"
    retention_period: str | None = None


@dataclass(frozen=True)
class ProgressiveDisclosure:
    """Trigger block of a conditional step."""

    trigger_conditions: TriggerConditions = field(default_factory=TriggerConditions)
    assessment_level: str | None = None
    data_protection: DataProtection | None = None


@dataclass(frozen=True)
class QuestionnaireStep:
    """A questionnaire step definition.

    Attributes:
        key: Stable step key, also the response-map key of its answer.
        title: Step title.
        question: Question text.
        type: Answer shape of the step.
        subtitle: Optional subtitle.
        options: Selectable answers for radio/checkbox steps.
        validation: Static validation rule.
        help_text: Inline help.
        step_description: Longer explanation of why the step is asked.
        progressive_disclosure: Trigger block for conditional steps.
        is_first_step: Whether the step opens the questionnaire.
        is_last_step: Whether the step closes the questionnaire.
    """

    key: str
    title: str
    question: str
    type: StepType
    subtitle: str | None = None
    options: tuple[QuestionnaireOption, ...] = ()
    validation: ValidationRule = field(default_factory=ValidationRule)
    help_text: str | None = None
    step_description: str | None = None
    progressive_disclosure: ProgressiveDisclosure | None = None
    is_first_step: bool = False
    is_last_step: bool = False

    def __post_init__(self) -> None:
        if step_key(self.key) != self.key:
            raise InvalidStepIdError(self.key)

    @property
    def number(self) -> Decimal:
        """Exact position of the step in the sequence."""
        return to_step_number(self.key)

    @property
    def id(self) -> float:
        """Numeric id as shown to the UI (e.g. 2.5)."""
        return float(self.number)

    @property
    def is_conditional(self) -> bool:
        """Whether the step only appears for some response maps."""
        return self.progressive_disclosure is not None

    def option_values(self) -> list[str]:
        """Get the values of the step's options."""
        return [option.value for option in self.options]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "key": self.key,
            "title": self.title,
            "subtitle": self.subtitle,
            "question": self.question,
            "type": self.type.value,
            "options": [option.to_dict() for option in self.options],
            "validation": self.validation.to_dict(),
            "help_text": self.help_text,
            "step_description": self.step_description,
            "is_conditional": self.is_conditional,
            "is_first_step": self.is_first_step,
            "is_last_step": self.is_last_step,
        }
