"""Assessment path resolution.

Maps a response map to the AssessmentPath that decides which optional
modules the questionnaire shows:

1. The risk calculator scores the responses into a GREEN/YELLOW/ORANGE/RED
   level and the canonical path for that level is looked up.
2. Categorical red flags (high-risk profile, security-focused requirements,
   serious threat indicators) escalate one tier, capped at RED. Escalation
   substitutes the next tier's canonical path wholesale.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from armora.common.responses import ResponseMap, ResponseSnapshot
from armora.core.error_handling import degrade_on_error
from armora.core.exceptions import UnknownRiskLevelError
from armora.core.logging import get_logger
from armora.questionnaire.types import SevenPsLevel
from armora.risk.calculator import RiskCalculator, create_risk_calculator
from armora.risk.catalog import (
    GEOGRAPHIC_RISK_WEIGHTS,
    HIGH_RISK_PROFILES,
    HIGH_SECURITY_REQUIREMENTS,
    PROFESSIONAL_RISK_MAPPING,
    SECURITY_REQUIREMENT_RISK_WEIGHTS,
    THREAT_INDICATOR_WEIGHTS,
)
from armora.risk.thresholds import ProtectionLevel, RiskLevel, get_protection_level

logger = get_logger(__name__)

# Every id an assessment path may list as an additional step
ADDITIONAL_STEP_IDS: frozenset[Decimal] = frozenset(
    Decimal(value) for value in ("2.6", "2.7", "6.5", "7.5", "8.5", "9.5")
)

# The Seven Ps module is also always shown to security professionals
SEVEN_PS_PROFILES: frozenset[str] = HIGH_RISK_PROFILES | {"security"}


class AssessmentType(str, Enum):
    """Assessment depth paired one-to-one with a risk level."""

    STANDARD = "standard"
    ENHANCED = "enhanced"
    SIGNIFICANT = "significant"
    CRITICAL = "critical"


_TYPE_BY_LEVEL: dict[RiskLevel, AssessmentType] = {
    RiskLevel.GREEN: AssessmentType.STANDARD,
    RiskLevel.YELLOW: AssessmentType.ENHANCED,
    RiskLevel.ORANGE: AssessmentType.SIGNIFICANT,
    RiskLevel.RED: AssessmentType.CRITICAL,
}


@dataclass(frozen=True)
class AssessmentPath:
    """Optional modules and question count for a risk tier.

    Attributes:
        risk_level: Tier the path belongs to.
        assessment_type: Assessment depth, always the one paired with risk_level.
        question_count: Nominal number of questions at this tier.
        requires_seven_ps: Whether the Seven Ps module is shown.
        seven_ps_level: Depth of the Seven Ps module.
        requires_enhanced_emergency_contacts: Whether step 6.5 is shown.
        requires_medical_data: Whether step 8.5 is shown.
        required_modules: Module identifiers for downstream consumers.
        additional_steps: Extra step ids attached to the tier.
    """

    risk_level: RiskLevel
    assessment_type: AssessmentType
    question_count: int
    requires_seven_ps: bool
    seven_ps_level: SevenPsLevel
    requires_enhanced_emergency_contacts: bool
    requires_medical_data: bool
    required_modules: tuple[str, ...]
    additional_steps: tuple[Decimal, ...] = ()

    def __post_init__(self) -> None:
        if _TYPE_BY_LEVEL[self.risk_level] != self.assessment_type:
            raise ValueError(
                f"Assessment type {self.assessment_type.value} does not match "
                f"risk level {self.risk_level.value}"
            )
        unknown = set(self.additional_steps) - ADDITIONAL_STEP_IDS
        if unknown:
            raise ValueError(f"Unknown additional step ids: {sorted(unknown)}")

    @property
    def protection_level(self) -> ProtectionLevel:
        """Protection tier recommended for this path."""
        return get_protection_level(self.risk_level)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "risk_level": self.risk_level.value,
            "assessment_type": self.assessment_type.value,
            "question_count": self.question_count,
            "requires_seven_ps": self.requires_seven_ps,
            "seven_ps_level": self.seven_ps_level.value,
            "requires_enhanced_emergency_contacts": self.requires_enhanced_emergency_contacts,
            "requires_medical_data": self.requires_medical_data,
            "required_modules": list(self.required_modules),
            "additional_steps": [float(step) for step in self.additional_steps],
            "protection_level": self.protection_level.value,
        }


def _steps(*ids: str) -> tuple[Decimal, ...]:
    return tuple(Decimal(step_id) for step_id in ids)


ASSESSMENT_PATHS: dict[RiskLevel, AssessmentPath] = {
    RiskLevel.GREEN: AssessmentPath(
        risk_level=RiskLevel.GREEN,
        assessment_type=AssessmentType.STANDARD,
        question_count=7,
        requires_seven_ps=False,
        seven_ps_level=SevenPsLevel.BASIC,
        requires_enhanced_emergency_contacts=False,
        requires_medical_data=False,
        required_modules=("basic_questionnaire", "emergency_contacts"),
    ),
    RiskLevel.YELLOW: AssessmentPath(
        risk_level=RiskLevel.YELLOW,
        assessment_type=AssessmentType.ENHANCED,
        question_count=12,
        requires_seven_ps=True,
        seven_ps_level=SevenPsLevel.BASIC,
        requires_enhanced_emergency_contacts=True,
        requires_medical_data=False,
        required_modules=(
            "enhanced_questionnaire",
            "seven_ps_basic",
            "enhanced_emergency_contacts",
        ),
        additional_steps=_steps("6.5", "7.5"),
    ),
    RiskLevel.ORANGE: AssessmentPath(
        risk_level=RiskLevel.ORANGE,
        assessment_type=AssessmentType.SIGNIFICANT,
        question_count=18,
        requires_seven_ps=True,
        seven_ps_level=SevenPsLevel.STANDARD,
        requires_enhanced_emergency_contacts=True,
        requires_medical_data=True,
        required_modules=(
            "significant_questionnaire",
            "seven_ps_standard",
            "enhanced_emergency_contacts",
            "medical_data",
        ),
        additional_steps=_steps("6.5", "7.5", "8.5"),
    ),
    RiskLevel.RED: AssessmentPath(
        risk_level=RiskLevel.RED,
        assessment_type=AssessmentType.CRITICAL,
        question_count=25,
        requires_seven_ps=True,
        seven_ps_level=SevenPsLevel.COMPREHENSIVE,
        requires_enhanced_emergency_contacts=True,
        requires_medical_data=True,
        required_modules=(
            "comprehensive_questionnaire",
            "seven_ps_comprehensive",
            "enhanced_emergency_contacts",
            "medical_data",
            "threat_analysis",
        ),
        additional_steps=_steps("6.5", "7.5", "8.5", "9.5"),
    ),
}

DEFAULT_ASSESSMENT_PATH = ASSESSMENT_PATHS[RiskLevel.GREEN]

PROTECTION_LEVEL_LABELS: dict[AssessmentType, str] = {
    AssessmentType.STANDARD: "Essential Protection",
    AssessmentType.ENHANCED: "Executive Shield",
    AssessmentType.SIGNIFICANT: "Shadow Protocol",
    AssessmentType.CRITICAL: "Shadow Protocol + Enhanced Response",
}


def _coerce_level(risk_level: RiskLevel | str) -> RiskLevel:
    try:
        return RiskLevel(risk_level)
    except ValueError as e:
        raise UnknownRiskLevelError(str(risk_level)) from e


def get_assessment_path(risk_level: RiskLevel | str) -> AssessmentPath:
    """Get the canonical path for a risk level.

    Raises:
        UnknownRiskLevelError: If the level is not GREEN/YELLOW/ORANGE/RED.
    """
    return ASSESSMENT_PATHS[_coerce_level(risk_level)]


def _find_path(risk_level: RiskLevel | str) -> AssessmentPath | None:
    try:
        return get_assessment_path(risk_level)
    except UnknownRiskLevelError:
        return None


def escalate_assessment_path(path: AssessmentPath) -> AssessmentPath:
    """Get the next tier's canonical path; RED stays RED."""
    return ASSESSMENT_PATHS[path.risk_level.escalated()]


def should_trigger_enhanced_assessment(snapshot: ResponseSnapshot) -> bool:
    """Check the categorical red flags that force a one-tier escalation."""
    if snapshot.professional_profile in HIGH_RISK_PROFILES:
        return True
    if HIGH_SECURITY_REQUIREMENTS.intersection(snapshot.security_requirements):
        return True
    return snapshot.has_escalation_indicator()


class AssessmentPathResolver:
    """Resolves response maps to assessment paths.

    Example:
        ```python
        resolver = AssessmentPathResolver()
        path = resolver.resolve({"step1": "diplomat"})
        assert path.risk_level == RiskLevel.YELLOW
        ```
    """

    def __init__(self, calculator: RiskCalculator | None = None) -> None:
        self.calculator = calculator or create_risk_calculator()

    def resolve(self, responses: ResponseMap) -> AssessmentPath:
        """Resolve a response map.

        Raises:
            ResponseFormatError: If an answer has the wrong shape.
        """
        return self.resolve_snapshot(ResponseSnapshot.from_responses(responses))

    def resolve_snapshot(self, snapshot: ResponseSnapshot) -> AssessmentPath:
        """Resolve answers already read into a ResponseSnapshot."""
        assessment = self.calculator.calculate_from_snapshot(snapshot)
        path = ASSESSMENT_PATHS[assessment.level]

        if should_trigger_enhanced_assessment(snapshot):
            escalated = escalate_assessment_path(path)
            logger.debug(
                "assessment_path_escalated",
                computed_level=path.risk_level.value,
                resolved_level=escalated.risk_level.value,
                professional_profile=snapshot.professional_profile,
            )
            path = escalated

        return path


_default_resolver = AssessmentPathResolver()


def resolve_assessment_path(snapshot: ResponseSnapshot) -> AssessmentPath:
    """Resolve a snapshot with the default resolver, without degradation."""
    return _default_resolver.resolve_snapshot(snapshot)


def _lenient_assessment_path(responses: ResponseMap) -> AssessmentPath:
    path = DEFAULT_ASSESSMENT_PATH
    snapshot = ResponseSnapshot.from_responses(responses, strict=False)
    if should_trigger_enhanced_assessment(snapshot):
        path = escalate_assessment_path(path)
    return path


@degrade_on_error(fallback=_lenient_assessment_path)
def determine_assessment_path(responses: ResponseMap) -> AssessmentPath:
    """Determine the assessment path for a response map.

    If the responses cannot be scored the GREEN path is used, still escalated
    by any categorical red flag that can be read, so a high-risk profile
    never resolves to GREEN.
    """
    return _default_resolver.resolve(responses)


# =============================================================================
# Path Queries
# =============================================================================


def get_required_modules(path: AssessmentPath) -> list[str]:
    """Get the module identifiers required by a path."""
    return list(path.required_modules)


def should_show_seven_ps(risk_level: RiskLevel | str, professional_profile: str | None) -> bool:
    """Check whether the Seven Ps module applies to a level and profile.

    Unknown levels never show the module.
    """
    path = _find_path(risk_level)
    if path is None:
        return False
    if professional_profile in SEVEN_PS_PROFILES:
        return True
    return path.requires_seven_ps


def get_seven_ps_assessment_level(risk_level: RiskLevel | str) -> SevenPsLevel:
    """Get the Seven Ps depth for a level (basic for unknown levels)."""
    path = _find_path(risk_level)
    return path.seven_ps_level if path else SevenPsLevel.BASIC


def should_show_enhanced_emergency_contacts(risk_level: RiskLevel | str) -> bool:
    path = _find_path(risk_level)
    return path.requires_enhanced_emergency_contacts if path else False


def should_show_medical_data(risk_level: RiskLevel | str) -> bool:
    path = _find_path(risk_level)
    return path.requires_medical_data if path else False


def get_protection_level_recommendation(path: AssessmentPath) -> str:
    """Get the customer-facing protection label for a path."""
    return PROTECTION_LEVEL_LABELS[path.assessment_type]


def requires_security_consultation(path: AssessmentPath) -> bool:
    """Check whether a path needs an immediate consultation with a specialist."""
    return path.risk_level == RiskLevel.RED or path.assessment_type == AssessmentType.CRITICAL


def calculate_progressive_risk_score(responses: ResponseMap) -> int:
    """Additive weight score over profile, requirements, coverage and threats.

    An unknown or missing profile counts 1; unknown requirement and coverage
    values count 0.

    Raises:
        ResponseFormatError: If an answer has the wrong shape.
    """
    snapshot = ResponseSnapshot.from_responses(responses)

    score = PROFESSIONAL_RISK_MAPPING.get(snapshot.professional_profile or "", 1)
    score += sum(
        SECURITY_REQUIREMENT_RISK_WEIGHTS.get(req, 0) for req in snapshot.security_requirements
    )
    score += sum(GEOGRAPHIC_RISK_WEIGHTS.get(area, 0) for area in snapshot.coverage_areas)

    if snapshot.threat_indicators is not None:
        active = snapshot.threat_indicators.active_indicators()
        score += sum(THREAT_INDICATOR_WEIGHTS[name] for name in active)

    return score
