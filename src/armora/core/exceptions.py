"""Core exceptions for the Armora assessment engine."""

from armora.utils.exceptions import ArmoraError


class ResponseFormatError(ArmoraError):
    """Raised when a questionnaire answer has a shape the engine cannot read.

    Attributes:
        field: The response field being parsed (e.g., "security_requirements")
        key: The response-map key the value came from, if known
    """

    def __init__(self, message: str, field: str, key: str | None = None):
        super().__init__(message)
        self.field = field
        self.key = key

    def __str__(self) -> str:
        return f"ResponseFormatError({self.field}, key={self.key}): {self.args[0]}"


class UnknownRiskLevelError(ArmoraError):
    """Raised when a risk level has no canonical assessment path."""

    def __init__(self, risk_level: str):
        super().__init__(f"No assessment path for risk level {risk_level!r}")
        self.risk_level = risk_level


class InvalidStepIdError(ArmoraError):
    """Raised when a step identifier cannot be read as a step key or number."""

    def __init__(self, step_id: object):
        super().__init__(f"Invalid questionnaire step id: {step_id!r}")
        self.step_id = step_id


class RecordNotFoundError(ArmoraError):
    """Raised when an assessment record does not exist in a record store."""

    def __init__(self, record_id: str):
        super().__init__(f"Assessment record not found: {record_id}")
        self.record_id = record_id
