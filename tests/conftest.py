"""Pytest fixtures for Armora tests."""

from collections.abc import Generator
from typing import Any
from unittest.mock import patch

import pytest
import structlog

from armora.config.settings import Settings, get_settings


# =============================================================================
# Structlog Configuration Fixture
# =============================================================================


@pytest.fixture(scope="function", autouse=True)
def reset_structlog_after_test():
    """Reset structlog configuration after each test.

    This ensures tests that modify structlog global state
    don't affect other tests.
    """
    yield
    # Reset structlog to default configuration after each test
    structlog.reset_defaults()
    # Re-apply minimal configuration for consistent behavior
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Drop cached settings so environment changes apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_settings() -> Settings:
    """Create mock settings for testing."""
    return Settings(
        ENVIRONMENT="test",
        log_level="DEBUG",
        degrade_on_error=True,
    )


@pytest.fixture
def patch_settings(mock_settings: Settings) -> Generator[Settings, None, None]:
    """Patch get_settings to return mock settings."""
    with (
        patch("armora.core.logging.get_settings", return_value=mock_settings),
        patch("armora.core.error_handling.get_settings", return_value=mock_settings),
    ):
        yield mock_settings


@pytest.fixture
def strict_settings() -> Generator[Settings, None, None]:
    """Settings with degradation disabled, so failures propagate."""
    settings = Settings(ENVIRONMENT="test", degrade_on_error=False)
    with patch("armora.core.error_handling.get_settings", return_value=settings):
        yield settings


# =============================================================================
# Sample Response Maps
# =============================================================================


@pytest.fixture
def empty_responses() -> dict[str, Any]:
    """No answers yet."""
    return {}


@pytest.fixture
def green_responses() -> dict[str, Any]:
    """Low-risk executive: scores GREEN with no escalation flags."""
    return {
        "step1": "executive",
        "step2": "monthly",
        "step3": ["premium_comfort", "reliability_tracking"],
        "step4": ["central_london"],
    }


@pytest.fixture
def diplomat_responses() -> dict[str, Any]:
    """Diplomat alone: scores GREEN, escalates to YELLOW."""
    return {"step1": "diplomat"}


@pytest.fixture
def orange_responses() -> dict[str, Any]:
    """Celebrity travelling daily abroad: scores YELLOW (4 x 3), escalates to ORANGE."""
    return {
        "step1": "celebrity",
        "step2": "daily",
        "step4": ["international_specialized"],
    }


@pytest.fixture
def red_responses() -> dict[str, Any]:
    """Celebrity with privacy needs, international cover, daily travel and threats."""
    return {
        "step1": "celebrity",
        "step2": "daily",
        "step2_5": {
            "hasReceivedThreats": True,
            "hasPublicProfile": True,
            "hasLegalProceedings": False,
        },
        "step3": ["privacy_discretion"],
        "step4": ["international_specialized"],
    }


@pytest.fixture
def seven_ps_answer() -> dict[str, Any]:
    """A Seven Ps answer covering five of the seven sections."""
    return {
        "people": {"family": "spouse and two children"},
        "places": {"home": "Kensington"},
        "personality": {"profile": "public facing"},
        "prejudices": {"groups": ["online activists"]},
        "personalHistory": {"incidents": "stalker in 2021"},
    }


@pytest.fixture
def enhanced_contacts_answer() -> dict[str, Any]:
    """Enhanced emergency contacts with a reachable next of kin."""
    return {
        "nextOfKin": {
            "name": "Jordan Avery",
            "relationship": "spouse",
            "primaryPhone": "+44 7700 900123",
            "canMakeDecisions": True,
        },
        "secondaryContact": {"name": "Sam Lee", "phone": "+44 7700 900456", "role": "business"},
        "dataConsent": {"emergencyContactConsent": True},
    }


@pytest.fixture
def medical_answer() -> dict[str, Any]:
    """Medical data with an emergency procedure."""
    return {
        "bloodType": "O-",
        "criticalAllergies": ["penicillin"],
        "emergencyProcedures": ["Administer EpiPen for anaphylaxis"],
    }
