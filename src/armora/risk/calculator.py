"""Risk matrix calculator for close-protection assessments.

This module provides the RiskCalculator that:
1. Maps questionnaire responses to probability and impact ratings (1-5)
2. Scores the matrix (probability x impact, 1-25)
3. Bands the score into GREEN / YELLOW / ORANGE / RED
4. Derives the protection level and service recommendations
5. Supports manual assessments from explicitly activated risk factors

Every call recomputes from its inputs; nothing is cached between calls.
"""

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from armora.common.responses import ResponseMap, ResponseSnapshot
from armora.core.logging import get_logger
from armora.risk.catalog import (
    HIGH_RISK_PROFILES,
    PREDICTABLE_FREQUENCIES,
    RiskFactor,
    get_risk_factor,
)
from armora.risk.thresholds import (
    PROTECTION_RECOMMENDATIONS,
    MAX_RATING,
    MIN_RATING,
    ProtectionLevel,
    RiskLevel,
    calculate_risk_score,
    clamp_rating,
    get_protection_level,
    get_risk_level,
)

logger = get_logger(__name__)


class AssessmentSource(str, Enum):
    """Where the probability and impact ratings came from."""

    QUESTIONNAIRE = "questionnaire"
    MANUAL = "manual"
    INTELLIGENCE = "intelligence"


@dataclass
class RiskMatrix:
    """Probability x impact matrix for one assessment.

    Attributes:
        probability: Likelihood rating, 1 (rare) to 5 (almost certain).
        impact: Consequence rating, 1 (negligible) to 5 (severe).
        score: probability x impact (1-25).
        level: Risk level band of the score.
        factors: Risk factors active in this assessment.
        recommendations: Service description followed by its features.
        protection_level: Recommended protection tier.
    """

    probability: int = MIN_RATING
    impact: int = MIN_RATING
    score: int = MIN_RATING
    level: RiskLevel = RiskLevel.GREEN
    factors: list[RiskFactor] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    protection_level: ProtectionLevel = ProtectionLevel.ESSENTIAL

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "probability": self.probability,
            "impact": self.impact,
            "score": self.score,
            "level": self.level.value,
            "factors": [f.to_dict() for f in self.factors],
            "recommendations": list(self.recommendations),
            "protection_level": self.protection_level.value,
        }


@dataclass
class RiskAssessment:
    """A risk matrix with its confidence and provenance.

    Attributes:
        matrix: The computed risk matrix.
        confidence: Confidence in the assessment (0-100).
        last_updated: When the assessment was computed.
        source: Where the ratings came from.
    """

    matrix: RiskMatrix = field(default_factory=RiskMatrix)
    confidence: int = 0
    last_updated: datetime = field(default_factory=lambda: datetime.now(UTC))
    source: AssessmentSource = AssessmentSource.QUESTIONNAIRE

    @property
    def level(self) -> RiskLevel:
        """Risk level of the matrix."""
        return self.matrix.level

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "matrix": self.matrix.to_dict(),
            "confidence": self.confidence,
            "last_updated": self.last_updated.isoformat(),
            "source": self.source.value,
        }


class CalculatorConfig(BaseModel):
    """Configuration for the risk calculator."""

    # Questionnaire confidence
    base_step_count: int = Field(
        default=9, ge=1, description="Canonical step count answers are measured against"
    )
    confidence_floor: int = Field(
        default=30, ge=0, le=100, description="Minimum questionnaire confidence"
    )
    confidence_ceiling: int = Field(
        default=95, ge=0, le=100, description="Maximum confidence for any assessment"
    )

    # Manual assessments
    impact_weight_ratio: float = Field(
        default=0.8, ge=0.0, le=1.0, description="Impact as a fraction of mean factor weight"
    )
    confidence_per_factor: int = Field(
        default=20, ge=0, le=100, description="Manual confidence added per active factor"
    )
    no_factor_confidence: int = Field(
        default=50, ge=0, le=100, description="Manual confidence with no active factors"
    )


class RiskCalculator:
    """Calculates risk matrices from questionnaire responses or risk factors.

    Example:
        ```python
        calculator = RiskCalculator()

        assessment = calculator.calculate_from_responses({
            "step1": "diplomat",
            "step3": ["privacy_discretion"],
        })
        print(f"Score: {assessment.matrix.score}")
        print(f"Level: {assessment.level}")
        ```
    """

    def __init__(self, config: CalculatorConfig | None = None) -> None:
        """Initialize the risk calculator.

        Args:
            config: Calculator configuration.
        """
        self.config = config or CalculatorConfig()

    def calculate_from_responses(self, responses: ResponseMap) -> RiskAssessment:
        """Score a (possibly partial) questionnaire response map.

        Args:
            responses: Response map keyed by step key or alias.

        Returns:
            Questionnaire-sourced risk assessment.

        Raises:
            ResponseFormatError: If an answer has the wrong shape.
        """
        return self.calculate_from_snapshot(ResponseSnapshot.from_responses(responses))

    def calculate_from_snapshot(self, snapshot: ResponseSnapshot) -> RiskAssessment:
        """Score answers already read into a ResponseSnapshot."""
        probability, impact, factors = self._rate_signals(snapshot)

        matrix = self._build_matrix(probability, impact, factors)
        confidence = self._questionnaire_confidence(snapshot.answered_count)

        logger.debug(
            "risk_calculated",
            source=AssessmentSource.QUESTIONNAIRE.value,
            probability=matrix.probability,
            impact=matrix.impact,
            score=matrix.score,
            level=matrix.level.value,
            factor_count=len(factors),
            confidence=confidence,
        )

        return RiskAssessment(
            matrix=matrix,
            confidence=confidence,
            source=AssessmentSource.QUESTIONNAIRE,
        )

    def assess(
        self,
        factors: list[RiskFactor],
        manual_probability: int | None = None,
        manual_impact: int | None = None,
    ) -> RiskAssessment:
        """Assess risk from explicitly activated factors.

        When both manual ratings are given they are used directly. Otherwise
        probability is the rounded mean weight of the active factors and
        impact is the rounded mean weight scaled by ``impact_weight_ratio``.

        Args:
            factors: Candidate factors; only active ones contribute.
            manual_probability: Analyst-set probability rating.
            manual_impact: Analyst-set impact rating.

        Returns:
            Manually sourced risk assessment.
        """
        active = [f for f in factors if f.is_active]

        if manual_probability and manual_impact:
            probability = manual_probability
            impact = manual_impact
        else:
            avg_weight = sum(f.weight for f in active) / max(len(active), 1)
            probability = _round_half_up(avg_weight)
            impact = _round_half_up(avg_weight * self.config.impact_weight_ratio)

        matrix = self._build_matrix(probability, impact, active)

        if active:
            confidence = min(
                len(active) * self.config.confidence_per_factor,
                self.config.confidence_ceiling,
            )
        else:
            confidence = self.config.no_factor_confidence

        logger.debug(
            "risk_calculated",
            source=AssessmentSource.MANUAL.value,
            score=matrix.score,
            level=matrix.level.value,
            factor_count=len(active),
            confidence=confidence,
        )

        return RiskAssessment(matrix=matrix, confidence=confidence, source=AssessmentSource.MANUAL)

    def _rate_signals(self, snapshot: ResponseSnapshot) -> tuple[int, int, list[RiskFactor]]:
        """Turn response signals into raw probability/impact and factors."""
        probability = MIN_RATING
        impact = MIN_RATING
        factors: list[RiskFactor] = []

        if snapshot.professional_profile in HIGH_RISK_PROFILES:
            probability += 1
            impact += 1
            factors.append(get_risk_factor("media_profile").activated())

        if "privacy_discretion" in snapshot.security_requirements:
            probability += 1
            impact += 1
            factors.append(get_risk_factor("controversial_position").activated())

        if "security_awareness" in snapshot.security_requirements:
            probability += 1
            factors.append(get_risk_factor("previous_incidents").activated())

        if "international_specialized" in snapshot.coverage_areas:
            probability += 1
            impact += 1
            factors.append(get_risk_factor("high_risk_locations").activated())

        # Regular travel makes routes predictable
        if snapshot.travel_frequency in PREDICTABLE_FREQUENCIES:
            probability += 1
            factors.append(get_risk_factor("predictable_routes").activated())

        return probability, impact, factors

    def _build_matrix(self, probability: int, impact: int, factors: list[RiskFactor]) -> RiskMatrix:
        """Clamp ratings and derive score, level and recommendations."""
        probability = clamp_rating(probability)
        impact = clamp_rating(impact)
        score = calculate_risk_score(probability, impact)
        level = get_risk_level(score)

        return RiskMatrix(
            probability=probability,
            impact=impact,
            score=score,
            level=level,
            factors=list(factors),
            recommendations=PROTECTION_RECOMMENDATIONS[level].as_lines(),
            protection_level=get_protection_level(level),
        )

    def _questionnaire_confidence(self, answered_count: int) -> int:
        """Linear coverage heuristic clamped to the configured floor and ceiling."""
        raw = answered_count / self.config.base_step_count * 100
        bounded = max(self.config.confidence_floor, min(raw, self.config.confidence_ceiling))
        return _round_half_up(bounded)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


# =============================================================================
# Module-level API
# =============================================================================

_default_calculator = RiskCalculator()


def calculate_risk_from_responses(responses: ResponseMap) -> RiskAssessment:
    """Score a questionnaire response map with the default configuration."""
    return _default_calculator.calculate_from_responses(responses)


def assess_risk(
    factors: list[RiskFactor],
    manual_probability: int | None = None,
    manual_impact: int | None = None,
) -> RiskAssessment:
    """Assess risk from activated factors with the default configuration."""
    return _default_calculator.assess(factors, manual_probability, manual_impact)


def get_risk_position(assessment: RiskAssessment) -> tuple[int, int]:
    """Get the (x, y) grid position of an assessment for matrix display.

    x is the impact column (0-4); y is the probability row counted from the
    top (0 = probability 5).
    """
    return assessment.matrix.impact - 1, MAX_RATING - assessment.matrix.probability


def create_risk_calculator(config: CalculatorConfig | None = None) -> RiskCalculator:
    """Create a risk calculator.

    Args:
        config: Optional calculator configuration.

    Returns:
        Configured RiskCalculator.
    """
    return RiskCalculator(config=config)
