"""Risk factor catalog for close-protection assessments.

Static tables: the weighted risk factors that can contribute to a
risk matrix, plus the professional-category, security-requirement and
geographic weights used by the additive progressive risk score.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class RiskFactorCategory(str, Enum):
    """Category a risk factor belongs to."""

    THREAT_HISTORY = "threat_history"
    PUBLIC_EXPOSURE = "public_exposure"
    TRAVEL_PATTERNS = "travel_patterns"
    ASSET_VALUE = "asset_value"
    LEGAL_PROCEEDINGS = "legal_proceedings"
    INDUSTRY_RISK = "industry_risk"
    GEOGRAPHIC_RISK = "geographic_risk"


@dataclass(frozen=True)
class RiskFactor:
    """A weighted contributor to a risk assessment.

    Attributes:
        id: Stable factor identifier.
        category: Factor category.
        name: Human-readable name.
        description: What the factor represents.
        weight: Multiplier from 1 (minor) to 5 (severe).
        is_active: Whether the factor applies to a given assessment.
    """

    id: str
    category: RiskFactorCategory
    name: str
    description: str
    weight: int
    is_active: bool = False

    def __post_init__(self) -> None:
        if not 1 <= self.weight <= 5:
            raise ValueError(f"Risk factor weight must be 1-5, got {self.weight}")

    def activated(self) -> "RiskFactor":
        """Return an active copy of this factor."""
        return replace(self, is_active=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "category": self.category.value,
            "name": self.name,
            "description": self.description,
            "weight": self.weight,
            "is_active": self.is_active,
        }


# =============================================================================
# Risk Factors
# =============================================================================

RISK_FACTORS: tuple[RiskFactor, ...] = (
    # Threat history
    RiskFactor(
        id="previous_incidents",
        category=RiskFactorCategory.THREAT_HISTORY,
        name="Previous Security Incidents",
        description="History of threats, harassment, or security breaches",
        weight=5,
    ),
    RiskFactor(
        id="stalking_harassment",
        category=RiskFactorCategory.THREAT_HISTORY,
        name="Stalking or Harassment",
        description="Ongoing or recent stalking, harassment, or unwanted attention",
        weight=4,
    ),
    RiskFactor(
        id="legal_threats",
        category=RiskFactorCategory.THREAT_HISTORY,
        name="Legal-Related Threats",
        description="Threats related to legal proceedings or business disputes",
        weight=4,
    ),
    # Public exposure
    RiskFactor(
        id="media_profile",
        category=RiskFactorCategory.PUBLIC_EXPOSURE,
        name="High Media Profile",
        description="Regular media coverage, celebrity status, or public recognition",
        weight=3,
    ),
    RiskFactor(
        id="social_media_presence",
        category=RiskFactorCategory.PUBLIC_EXPOSURE,
        name="Significant Social Media Presence",
        description="Large following on social platforms with location sharing",
        weight=2,
    ),
    RiskFactor(
        id="controversial_position",
        category=RiskFactorCategory.PUBLIC_EXPOSURE,
        name="Controversial Public Position",
        description="Involvement in controversial issues or polarizing topics",
        weight=4,
    ),
    # Travel patterns
    RiskFactor(
        id="predictable_routes",
        category=RiskFactorCategory.TRAVEL_PATTERNS,
        name="Predictable Travel Routes",
        description="Regular, predictable travel patterns that could be exploited",
        weight=2,
    ),
    RiskFactor(
        id="high_risk_locations",
        category=RiskFactorCategory.TRAVEL_PATTERNS,
        name="High-Risk Location Travel",
        description="Regular travel to areas with elevated security concerns",
        weight=3,
    ),
    RiskFactor(
        id="international_travel",
        category=RiskFactorCategory.TRAVEL_PATTERNS,
        name="Frequent International Travel",
        description="Regular international travel with varying security standards",
        weight=2,
    ),
    # Asset value
    RiskFactor(
        id="high_net_worth",
        category=RiskFactorCategory.ASSET_VALUE,
        name="High Net Worth Individual",
        description="Significant personal wealth making them attractive targets",
        weight=3,
    ),
    RiskFactor(
        id="valuable_possessions",
        category=RiskFactorCategory.ASSET_VALUE,
        name="Valuable Personal Items",
        description="Regular transport of jewelry, art, or high-value items",
        weight=2,
    ),
    RiskFactor(
        id="financial_information",
        category=RiskFactorCategory.ASSET_VALUE,
        name="Access to Financial Information",
        description="Access to sensitive financial data or systems",
        weight=3,
    ),
    # Legal proceedings
    RiskFactor(
        id="active_litigation",
        category=RiskFactorCategory.LEGAL_PROCEEDINGS,
        name="Active Legal Proceedings",
        description="Currently involved in high-stakes litigation",
        weight=3,
    ),
    RiskFactor(
        id="witness_testimony",
        category=RiskFactorCategory.LEGAL_PROCEEDINGS,
        name="Key Witness Status",
        description="Serving as key witness in important legal cases",
        weight=4,
    ),
    RiskFactor(
        id="regulatory_issues",
        category=RiskFactorCategory.LEGAL_PROCEEDINGS,
        name="Regulatory Investigations",
        description="Subject to regulatory investigations or enforcement",
        weight=3,
    ),
    # Industry risk
    RiskFactor(
        id="high_risk_industry",
        category=RiskFactorCategory.INDUSTRY_RISK,
        name="High-Risk Industry",
        description="Working in industries with elevated threat levels",
        weight=3,
    ),
    RiskFactor(
        id="competitive_intelligence",
        category=RiskFactorCategory.INDUSTRY_RISK,
        name="Competitive Intelligence Target",
        description="Likely target for corporate espionage or intelligence gathering",
        weight=2,
    ),
    RiskFactor(
        id="sensitive_information",
        category=RiskFactorCategory.INDUSTRY_RISK,
        name="Access to Sensitive Information",
        description="Regular access to classified or highly sensitive information",
        weight=4,
    ),
    # Geographic risk
    RiskFactor(
        id="high_crime_areas",
        category=RiskFactorCategory.GEOGRAPHIC_RISK,
        name="High-Crime Area Operations",
        description="Regular operations in areas with elevated crime rates",
        weight=2,
    ),
    RiskFactor(
        id="political_instability",
        category=RiskFactorCategory.GEOGRAPHIC_RISK,
        name="Political Instability Exposure",
        description="Operations in areas with political tensions or unrest",
        weight=3,
    ),
    RiskFactor(
        id="remote_locations",
        category=RiskFactorCategory.GEOGRAPHIC_RISK,
        name="Remote Location Travel",
        description="Regular travel to isolated areas with limited emergency response",
        weight=2,
    ),
)

_FACTORS_BY_ID: dict[str, RiskFactor] = {factor.id: factor for factor in RISK_FACTORS}


def get_risk_factor(factor_id: str) -> RiskFactor:
    """Get a catalog factor by id.

    Raises:
        KeyError: If the factor id is not in the catalog.
    """
    return _FACTORS_BY_ID[factor_id]


def get_factors_by_category(category: RiskFactorCategory) -> list[RiskFactor]:
    """Get all catalog factors in a category."""
    return [f for f in RISK_FACTORS if f.category == category]


# =============================================================================
# Progressive Score Weights
# =============================================================================

PROFESSIONAL_RISK_MAPPING: dict[str, int] = {
    "celebrity": 4,
    "government": 4,
    "diplomat": 5,
    "high_profile": 5,
    "security": 3,
    "legal": 3,
    "finance": 2,
    "executive": 2,
    "entrepreneur": 2,
    "medical": 1,
    "academic": 1,
    "student": 1,
    "general": 1,
    "family": 1,
    "athlete": 3,
    "creative": 1,
    "international_visitor": 2,
    "prefer_not_to_say": 2,
}

SECURITY_REQUIREMENT_RISK_WEIGHTS: dict[str, int] = {
    "privacy_discretion": 3,
    "security_awareness": 4,
    "trained_professionals": 2,
    "real_time_tracking": 2,
    "route_knowledge": 1,
    "flexibility_coverage": 2,
    "specialized_needs": 2,
    "professional_service": 1,
    "premium_comfort": 1,
    "reliability_tracking": 1,
    "communication_skills": 1,
    "payment_flexibility": 1,
    "multi_city_coverage": 2,
}

GEOGRAPHIC_RISK_WEIGHTS: dict[str, int] = {
    "international_specialized": 4,
    "scotland_wales": 2,
    "healthcare_professional": 1,
    "airport_transfers": 2,
    "premium_shopping": 1,
    "government_quarter": 3,
    "financial_district": 2,
    "central_london": 1,
    "west_end": 1,
    "greater_london": 1,
    "tourist_destinations": 1,
    "entertainment_events": 1,
    "university_business_towns": 1,
}

# Threat indicator flags (snake_case field names) and their additive weights
THREAT_INDICATOR_WEIGHTS: dict[str, int] = {
    "has_received_threats": 5,
    "has_legal_proceedings": 4,
    "has_previous_incidents": 4,
    "has_public_profile": 3,
    "requires_international_protection": 3,
    "has_controversial_work": 3,
    "has_high_value_assets": 2,
}

HIGH_RISK_PROFILES: frozenset[str] = frozenset(
    {"celebrity", "government", "diplomat", "high_profile"}
)
HIGH_SECURITY_REQUIREMENTS: frozenset[str] = frozenset(
    {"privacy_discretion", "security_awareness"}
)
PREDICTABLE_FREQUENCIES: frozenset[str] = frozenset({"daily", "weekly"})
