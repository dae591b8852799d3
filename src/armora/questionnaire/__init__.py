"""Progressive disclosure questionnaire.

Composes, navigates and validates the risk-dependent step sequence.
"""

from armora.questionnaire.assessment_path import (
    ASSESSMENT_PATHS,
    AssessmentPath,
    AssessmentPathResolver,
    AssessmentType,
    calculate_progressive_risk_score,
    determine_assessment_path,
    escalate_assessment_path,
    get_assessment_path,
    get_protection_level_recommendation,
    get_required_modules,
    get_seven_ps_assessment_level,
    requires_security_consultation,
    should_show_enhanced_emergency_contacts,
    should_show_medical_data,
    should_show_seven_ps,
    should_trigger_enhanced_assessment,
)
from armora.questionnaire.composer import (
    Composition,
    calculate_progressive_steps,
    compose,
    compose_responses,
    get_questions_for_user_type,
    get_total_steps_for_user_type,
    should_show_progressive_step,
)
from armora.questionnaire.navigator import (
    calculate_progress,
    get_next_progressive_step,
    get_previous_progressive_step,
    get_progressive_completion_percentage,
)
from armora.questionnaire.recommendation import (
    SERVICE_CATALOG,
    SERVICE_TIER_MAPPING,
    ServiceTier,
    get_current_risk_level,
    get_service_details,
    get_service_recommendation,
    get_seven_ps_level,
    needs_security_consultation,
)
from armora.questionnaire.records import (
    AssessmentRecord,
    InMemoryRecordStore,
    RecordStore,
    build_assessment_record,
)
from armora.questionnaire.steps import (
    BASE_STEPS,
    create_enhanced_emergency_contacts_step,
    create_medical_data_step,
    create_risk_matrix_step,
    create_seven_ps_assessment_step,
    get_base_steps,
)
from armora.questionnaire.types import (
    QuestionnaireOption,
    QuestionnaireStep,
    SevenPsLevel,
    StepType,
    ValidationRule,
    step_key,
    to_step_number,
)
from armora.questionnaire.validator import (
    ValidationResult,
    validate_progressive_step_data,
    validate_step_data,
)

__all__ = [
    # Assessment path
    "ASSESSMENT_PATHS",
    "AssessmentPath",
    "AssessmentPathResolver",
    "AssessmentType",
    "calculate_progressive_risk_score",
    "determine_assessment_path",
    "escalate_assessment_path",
    "get_assessment_path",
    "get_protection_level_recommendation",
    "get_required_modules",
    "get_seven_ps_assessment_level",
    "requires_security_consultation",
    "should_show_enhanced_emergency_contacts",
    "should_show_medical_data",
    "should_show_seven_ps",
    "should_trigger_enhanced_assessment",
    # Composer
    "Composition",
    "calculate_progressive_steps",
    "compose",
    "compose_responses",
    "get_questions_for_user_type",
    "get_total_steps_for_user_type",
    "should_show_progressive_step",
    # Navigator
    "calculate_progress",
    "get_next_progressive_step",
    "get_previous_progressive_step",
    "get_progressive_completion_percentage",
    # Recommendation
    "SERVICE_CATALOG",
    "SERVICE_TIER_MAPPING",
    "ServiceTier",
    "get_current_risk_level",
    "get_service_details",
    "get_service_recommendation",
    "get_seven_ps_level",
    "needs_security_consultation",
    # Records
    "AssessmentRecord",
    "InMemoryRecordStore",
    "RecordStore",
    "build_assessment_record",
    # Steps
    "BASE_STEPS",
    "create_enhanced_emergency_contacts_step",
    "create_medical_data_step",
    "create_risk_matrix_step",
    "create_seven_ps_assessment_step",
    "get_base_steps",
    # Types
    "QuestionnaireOption",
    "QuestionnaireStep",
    "SevenPsLevel",
    "StepType",
    "ValidationRule",
    "step_key",
    "to_step_number",
    # Validator
    "ValidationResult",
    "validate_progressive_step_data",
    "validate_step_data",
]
