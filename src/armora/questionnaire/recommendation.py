"""Service tier recommendation.

The recommended service follows the resolved assessment path's protection
level through a static mapping:

    Essential -> armora-standard
    Executive -> armora-executive
    Shadow    -> armora-shadow
    Enhanced  -> armora-shadow
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from armora.common.responses import ResponseMap
from armora.core.error_handling import degrade_on_error
from armora.questionnaire.assessment_path import (
    determine_assessment_path,
    get_seven_ps_assessment_level,
    requires_security_consultation,
)
from armora.questionnaire.types import SevenPsLevel
from armora.risk.thresholds import ProtectionLevel, RiskLevel

DEFAULT_SERVICE_ID = "armora-standard"


class ServiceTier(BaseModel):
    """A bookable protection service."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    features: tuple[str, ...] = ()
    hourly_rate: Decimal = Field(ge=0, description="GBP per hour")
    mileage_rate: Decimal = Field(ge=0, description="GBP per mile")
    price: str = Field(description="Price as shown to customers")
    confidence: int = Field(ge=0, le=100, description="Match confidence shown with the offer")
    estimated_monthly: str
    popular: bool = False


SERVICE_CATALOG: dict[str, ServiceTier] = {
    "armora-standard": ServiceTier(
        id="armora-standard",
        name="Essential Protection",
        description="Professional security transport service",
        features=(
            "SIA Level 2 security-certified Protection Officers",
            "Eco-friendly Nissan Leaf EV fleet (discreet)",
            "Professional security protocols",
            "24/7 protection assignment availability",
            "Real-time safety monitoring",
            "Background-checked professionals",
            "Emergency response protocols",
        ),
        hourly_rate=Decimal("50.00"),
        mileage_rate=Decimal("2.50"),
        price="£50/hour + £2.50/mile protection fees",
        confidence=85,
        estimated_monthly="£400-800/month",
    ),
    "armora-executive": ServiceTier(
        id="armora-executive",
        name="Executive Protection",
        description="Premium security transport with enhanced amenities",
        features=(
            "Executive chauffeur service",
            "Premium vehicles (S-Class, 7-Series, A8)",
            "Enhanced security protocols",
            "Business facilities (WiFi, charging, privacy glass)",
            "Preferred Protection Officer assignment",
            "Airport meet & greet",
            "First aid trained Protection Officers",
            "SIA Close Protection Officers",
        ),
        hourly_rate=Decimal("75.00"),
        mileage_rate=Decimal("2.50"),
        price="£75/hour + £2.50/mile security costs",
        confidence=92,
        estimated_monthly="£600-1200/month",
    ),
    "armora-shadow": ServiceTier(
        id="armora-shadow",
        name="Shadow Protocol",
        description="Discrete security escort with trained protection officers",
        features=(
            "SIA Close Protection (CP) officers",
            "Unmarked discrete vehicles",
            "Advanced security protocols",
            "Route security planning",
            "Counter-surveillance awareness",
            "Safety coordination protocols",
            "First aid trained Protection Officers",
        ),
        hourly_rate=Decimal("65.00"),
        mileage_rate=Decimal("2.50"),
        price="£65/hour + £2.50/mile discrete coverage",
        confidence=89,
        estimated_monthly="£520-1040/month",
        popular=True,
    ),
}

SERVICE_TIER_MAPPING: dict[ProtectionLevel, str] = {
    ProtectionLevel.ESSENTIAL: "armora-standard",
    ProtectionLevel.EXECUTIVE: "armora-executive",
    ProtectionLevel.SHADOW: "armora-shadow",
    ProtectionLevel.ENHANCED: "armora-shadow",
}


def get_service_details(service_id: str) -> ServiceTier | None:
    """Get a service from the catalog, or None if the id is unknown."""
    return SERVICE_CATALOG.get(service_id)


@degrade_on_error(fallback=DEFAULT_SERVICE_ID)
def get_service_recommendation(responses: ResponseMap) -> str:
    """Get the recommended service id for a response map.

    Falls back to ``armora-standard`` if the responses cannot be scored.
    """
    path = determine_assessment_path(responses)
    return SERVICE_TIER_MAPPING[path.protection_level]


@degrade_on_error(fallback=RiskLevel.GREEN)
def get_current_risk_level(responses: ResponseMap) -> RiskLevel:
    """Get the resolved (possibly escalated) risk level."""
    return determine_assessment_path(responses).risk_level


def get_seven_ps_level(responses: ResponseMap) -> SevenPsLevel:
    """Get the Seven Ps depth for the current responses."""
    return get_seven_ps_assessment_level(get_current_risk_level(responses))


@degrade_on_error(fallback=False)
def needs_security_consultation(responses: ResponseMap) -> bool:
    """Check whether the responses call for an immediate security consultation."""
    return requires_security_consultation(determine_assessment_path(responses))
