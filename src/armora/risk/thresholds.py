"""Risk level thresholds and protection recommendations.

This module provides:
- The four risk levels of the probability x impact matrix
- Inclusive score bands for each level (GREEN 1-6 ... RED 20-25)
- Protection level and service recommendation per risk level
- The full 5x5 matrix grid for visualisation
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MIN_RATING = 1
MAX_RATING = 5


class RiskLevel(str, Enum):
    """Risk level classification, ordered from least to most severe."""

    GREEN = "GREEN"  # 1-6
    YELLOW = "YELLOW"  # 7-12
    ORANGE = "ORANGE"  # 13-19
    RED = "RED"  # 20-25

    @property
    def rank(self) -> int:
        """Position of the level in escalation order (GREEN=0)."""
        return _LEVEL_ORDER.index(self)

    def escalated(self) -> "RiskLevel":
        """Get the next level up, capped at RED."""
        return _LEVEL_ORDER[min(self.rank + 1, len(_LEVEL_ORDER) - 1)]


_LEVEL_ORDER: tuple[RiskLevel, ...] = (
    RiskLevel.GREEN,
    RiskLevel.YELLOW,
    RiskLevel.ORANGE,
    RiskLevel.RED,
)


class ProtectionLevel(str, Enum):
    """Recommended protection tier emitted by an assessment."""

    ESSENTIAL = "Essential"
    EXECUTIVE = "Executive"
    SHADOW = "Shadow"
    ENHANCED = "Enhanced"


@dataclass(frozen=True)
class RiskBand:
    """Inclusive score band for a risk level."""

    level: RiskLevel
    min_score: int
    max_score: int
    color: str
    label: str

    def contains(self, score: int) -> bool:
        """Check if a score falls inside this band."""
        return self.min_score <= score <= self.max_score

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level.value,
            "min": self.min_score,
            "max": self.max_score,
            "color": self.color,
            "label": self.label,
        }


@dataclass(frozen=True)
class ProtectionRecommendation:
    """Service recommendation attached to a risk level."""

    service: str
    description: str
    features: tuple[str, ...] = field(default_factory=tuple)

    def as_lines(self) -> list[str]:
        """Flatten into the description followed by each feature."""
        return [self.description, *self.features]


RISK_LEVEL_BANDS: dict[RiskLevel, RiskBand] = {
    RiskLevel.GREEN: RiskBand(RiskLevel.GREEN, 1, 6, "#28a745", "Acceptable Risk"),
    RiskLevel.YELLOW: RiskBand(RiskLevel.YELLOW, 7, 12, "#ffc107", "Elevated Risk"),
    RiskLevel.ORANGE: RiskBand(RiskLevel.ORANGE, 13, 19, "#fd7e14", "Significant Risk"),
    RiskLevel.RED: RiskBand(RiskLevel.RED, 20, 25, "#dc3545", "Critical Risk"),
}

PROTECTION_LEVEL_BY_RISK: dict[RiskLevel, ProtectionLevel] = {
    RiskLevel.GREEN: ProtectionLevel.ESSENTIAL,
    RiskLevel.YELLOW: ProtectionLevel.EXECUTIVE,
    RiskLevel.ORANGE: ProtectionLevel.SHADOW,
    RiskLevel.RED: ProtectionLevel.ENHANCED,
}

PROTECTION_RECOMMENDATIONS: dict[RiskLevel, ProtectionRecommendation] = {
    RiskLevel.GREEN: ProtectionRecommendation(
        service="Essential Protection",
        description="Standard professional protection suitable for low-risk scenarios",
        features=(
            "SIA Level 2 Protection Officers",
            "Standard security protocols",
            "Basic threat awareness",
        ),
    ),
    RiskLevel.YELLOW: ProtectionRecommendation(
        service="Executive Shield",
        description="Enhanced protection for elevated risk situations",
        features=(
            "SIA Level 3 Protection Officers",
            "Enhanced security protocols",
            "Route planning",
            "Communication systems",
        ),
    ),
    RiskLevel.ORANGE: ProtectionRecommendation(
        service="Executive Shield / Shadow Protocol",
        description="Advanced protection for significant risk scenarios",
        features=(
            "SIA Close Protection Officers",
            "Advanced security protocols",
            "Counter-surveillance",
            "Secure communications",
        ),
    ),
    RiskLevel.RED: ProtectionRecommendation(
        service="Shadow Protocol + Immediate Response",
        description=(
            "Maximum protection for critical risk situations requiring "
            "immediate intervention"
        ),
        features=(
            "Elite Close Protection Team",
            "Maximum security protocols",
            "Real-time threat monitoring",
            "Emergency response coordination",
        ),
    ),
}


def clamp_rating(value: int) -> int:
    """Clamp a probability or impact rating to the 1-5 scale."""
    return max(MIN_RATING, min(value, MAX_RATING))


def calculate_risk_score(probability: int, impact: int) -> int:
    """Calculate the matrix score (probability x impact)."""
    return probability * impact


def get_risk_level(score: int) -> RiskLevel:
    """Get the risk level for a matrix score.

    Scores above the RED band stay RED; scores below the GREEN band stay GREEN.
    """
    if score >= RISK_LEVEL_BANDS[RiskLevel.RED].min_score:
        return RiskLevel.RED
    elif score >= RISK_LEVEL_BANDS[RiskLevel.ORANGE].min_score:
        return RiskLevel.ORANGE
    elif score >= RISK_LEVEL_BANDS[RiskLevel.YELLOW].min_score:
        return RiskLevel.YELLOW
    else:
        return RiskLevel.GREEN


def get_protection_level(level: RiskLevel) -> ProtectionLevel:
    """Get the protection tier for a risk level."""
    return PROTECTION_LEVEL_BY_RISK[level]


@dataclass(frozen=True)
class MatrixCell:
    """One cell of the 5x5 risk matrix."""

    probability: int
    impact: int
    score: int
    level: RiskLevel

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "probability": self.probability,
            "impact": self.impact,
            "score": self.score,
            "level": self.level.value,
        }


def get_risk_matrix_cells() -> list[list[MatrixCell]]:
    """Build the full matrix grid, one row per probability rating."""
    rows: list[list[MatrixCell]] = []
    for probability in range(MIN_RATING, MAX_RATING + 1):
        row = []
        for impact in range(MIN_RATING, MAX_RATING + 1):
            score = calculate_risk_score(probability, impact)
            row.append(MatrixCell(probability, impact, score, get_risk_level(score)))
        rows.append(row)
    return rows
