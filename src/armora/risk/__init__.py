"""Risk assessment module for scoring questionnaire responses."""

from armora.risk.calculator import (
    AssessmentSource,
    CalculatorConfig,
    RiskAssessment,
    RiskCalculator,
    RiskMatrix,
    assess_risk,
    calculate_risk_from_responses,
    create_risk_calculator,
    get_risk_position,
)
from armora.risk.catalog import (
    GEOGRAPHIC_RISK_WEIGHTS,
    PROFESSIONAL_RISK_MAPPING,
    RISK_FACTORS,
    SECURITY_REQUIREMENT_RISK_WEIGHTS,
    THREAT_INDICATOR_WEIGHTS,
    RiskFactor,
    RiskFactorCategory,
    get_factors_by_category,
    get_risk_factor,
)
from armora.risk.thresholds import (
    PROTECTION_LEVEL_BY_RISK,
    PROTECTION_RECOMMENDATIONS,
    RISK_LEVEL_BANDS,
    MatrixCell,
    ProtectionLevel,
    ProtectionRecommendation,
    RiskBand,
    RiskLevel,
    calculate_risk_score,
    get_protection_level,
    get_risk_level,
    get_risk_matrix_cells,
)

__all__ = [
    # Calculator
    "AssessmentSource",
    "CalculatorConfig",
    "RiskAssessment",
    "RiskCalculator",
    "RiskMatrix",
    "assess_risk",
    "calculate_risk_from_responses",
    "create_risk_calculator",
    "get_risk_position",
    # Catalog
    "GEOGRAPHIC_RISK_WEIGHTS",
    "PROFESSIONAL_RISK_MAPPING",
    "RISK_FACTORS",
    "SECURITY_REQUIREMENT_RISK_WEIGHTS",
    "THREAT_INDICATOR_WEIGHTS",
    "RiskFactor",
    "RiskFactorCategory",
    "get_factors_by_category",
    "get_risk_factor",
    # Thresholds
    "PROTECTION_LEVEL_BY_RISK",
    "PROTECTION_RECOMMENDATIONS",
    "RISK_LEVEL_BANDS",
    "MatrixCell",
    "ProtectionLevel",
    "ProtectionRecommendation",
    "RiskBand",
    "RiskLevel",
    "calculate_risk_score",
    "get_protection_level",
    "get_risk_level",
    "get_risk_matrix_cells",
]
