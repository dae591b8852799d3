"""Configuration validation for startup checks.

Validates that configuration is consistent before the assessment engine is
put behind a questionnaire flow.

Usage:
    from armora.config.validation import validate_configuration

    errors = validate_configuration()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from armora.config.settings import Settings, get_settings
from armora.utils.exceptions import ConfigurationError


logger = logging.getLogger("armora.config")


class ValidationSeverity(str, Enum):
    """Severity of configuration validation issues."""

    ERROR = "error"  # Must be fixed
    WARNING = "warning"  # Should be fixed, engine still runs


@dataclass
class ConfigValidationResult:
    """Result of a configuration validation check."""

    field: str
    severity: ValidationSeverity
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        prefix = "ERROR" if self.severity == ValidationSeverity.ERROR else "WARNING"
        result = f"[{prefix}] {self.field}: {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


def validate_configuration(settings: Settings | None = None) -> list[ConfigValidationResult]:
    """Validate application configuration.

    Args:
        settings: Settings to validate (default: global settings)

    Returns:
        List of validation results (empty if all checks pass)
    """
    if settings is None:
        settings = get_settings()

    results: list[ConfigValidationResult] = []
    results.extend(_validate_environment(settings))
    results.extend(_validate_degradation(settings))
    return results


def validate_or_raise(settings: Settings | None = None) -> None:
    """Validate configuration and raise if errors found.

    Raises:
        ConfigurationError: If any validation errors are found
    """
    results = validate_configuration(settings)
    errors = [r for r in results if r.severity == ValidationSeverity.ERROR]

    if errors:
        error_messages = "\n".join(str(e) for e in errors)
        raise ConfigurationError(f"Configuration validation failed:\n{error_messages}")

    for warning in results:
        logger.warning(str(warning))


# =============================================================================
# Validators
# =============================================================================


def _validate_environment(settings: Settings) -> list[ConfigValidationResult]:
    """Validate environment-specific settings."""
    results: list[ConfigValidationResult] = []

    if settings.ENVIRONMENT == "production" and settings.DEBUG:
        results.append(
            ConfigValidationResult(
                field="DEBUG",
                severity=ValidationSeverity.ERROR,
                message="Debug mode must be disabled in production",
                suggestion="Set DEBUG=false for production",
            )
        )

    # Questionnaire answers include medical and next-of-kin data
    if settings.ENVIRONMENT == "production" and settings.log_level == "DEBUG":
        results.append(
            ConfigValidationResult(
                field="log_level",
                severity=ValidationSeverity.WARNING,
                message="DEBUG log level in production may expose questionnaire answers",
                suggestion="Use INFO or WARNING for production",
            )
        )

    return results


def _validate_degradation(settings: Settings) -> list[ConfigValidationResult]:
    """Validate the assessment fallback behaviour."""
    results: list[ConfigValidationResult] = []

    if not settings.degrade_on_error:
        severity = (
            ValidationSeverity.ERROR
            if settings.ENVIRONMENT == "production"
            else ValidationSeverity.WARNING
        )
        results.append(
            ConfigValidationResult(
                field="degrade_on_error",
                severity=severity,
                message="Scoring failures will propagate and can dead-end a questionnaire",
                suggestion="Only disable degradation while debugging scoring logic",
            )
        )

    return results


def get_configuration_summary(settings: Settings | None = None) -> dict[str, Any]:
    """Get a summary of current configuration (safe for logging)."""
    if settings is None:
        settings = get_settings()

    return {
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "log_level": settings.log_level,
        "log_json": settings.log_json,
        "degrade_on_error": settings.degrade_on_error,
    }
