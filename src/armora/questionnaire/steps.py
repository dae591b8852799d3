"""Questionnaire step definitions.

The base sequence (ids 1, 2, 2.5, 3-9) is static. Conditional steps
(2.6, 2.7, 6.5, 8.5) are built on demand by the factories below and only
exist in the output of the step composer.
"""

from armora.questionnaire.types import (
    DataProtection,
    ProgressiveDisclosure,
    QuestionnaireOption,
    QuestionnaireStep,
    SevenPsLevel,
    StepType,
    TriggerConditions,
    ValidationRule,
)
from armora.risk.thresholds import RiskLevel

# Step keys
PROFESSIONAL_PROFILE = "step1"
PROTECTION_FREQUENCY = "step2"
THREAT_ASSESSMENT = "step2_5"
SEVEN_PS_ASSESSMENT = "step2_6"
RISK_MATRIX = "step2_7"
SECURITY_REQUIREMENTS = "step3"
COVERAGE_AREAS = "step4"
SPECIALIZED_VENUES = "step5"
EMERGENCY_CONTACT = "step6"
ENHANCED_EMERGENCY_CONTACTS = "step6_5"
PROTECTION_ACCOMMODATIONS = "step7"
CONTACT_PREFERENCES = "step8"
MEDICAL_DATA = "step8_5"
PROFILE_REVIEW = "step9"

CONDITIONAL_STEP_KEYS: frozenset[str] = frozenset(
    {SEVEN_PS_ASSESSMENT, RISK_MATRIX, ENHANCED_EMERGENCY_CONTACTS, MEDICAL_DATA}
)


def _options(*pairs: tuple[str, str]) -> tuple[QuestionnaireOption, ...]:
    return tuple(QuestionnaireOption(value=value, label=label) for value, label in pairs)


_PREFER_NOT_TO_SAY = ("prefer_not_to_say", "Prefer not to say")


BASE_STEPS: tuple[QuestionnaireStep, ...] = (
    QuestionnaireStep(
        key=PROFESSIONAL_PROFILE,
        title="Professional Profile",
        subtitle="Help us understand your security requirements",
        question="Which professional category requires secure transport with protection services?",
        type=StepType.RADIO,
        options=_options(
            ("executive", "Executive or business professional"),
            ("entrepreneur", "Business owner or entrepreneur"),
            ("celebrity", "Entertainment or media"),
            ("athlete", "Sports professional or athlete"),
            ("government", "Government or public sector official"),
            ("diplomat", "International delegation"),
            ("medical", "Senior healthcare professional"),
            ("legal", "Legal professional"),
            ("creative", "Creative professional"),
            ("academic", "Academic or educational professional"),
            ("student", "Student"),
            ("international_visitor", "Visiting the UK"),
            ("finance", "Financial services professional"),
            ("security", "Security or law enforcement"),
            ("family", "Secure family transport"),
            ("general", "General premium transport"),
            ("high_profile", "High-profile individual requiring maximum discretion"),
            _PREFER_NOT_TO_SAY,
        ),
        validation=ValidationRule(
            required=True, error_message="Please select your professional profile"
        ),
        help_text="Your profile helps us match you with officers who understand your world.",
        is_first_step=True,
    ),
    QuestionnaireStep(
        key=PROTECTION_FREQUENCY,
        title="Protection Frequency",
        subtitle="Understanding your security patterns",
        question="How often do you need secure transport with professional protection?",
        type=StepType.RADIO,
        options=_options(
            ("daily", "Daily protection"),
            ("weekly", "Regular business protection"),
            ("monthly", "Monthly protection"),
            ("project_based", "Project-based protection"),
            ("unpredictable", "Unpredictable protection needs"),
            ("special_events", "Special events only"),
            ("seasonal", "Holiday or tourist visits"),
            ("weekly_appointments", "Weekly appointments"),
            ("biweekly", "Every other week"),
            ("quarterly", "Quarterly"),
            ("term_time", "Term-time only"),
            _PREFER_NOT_TO_SAY,
        ),
        validation=ValidationRule(
            required=True, error_message="Please select your travel frequency requirements"
        ),
        help_text="Knowing your rhythm helps us be ready when you need us.",
    ),
    QuestionnaireStep(
        key=THREAT_ASSESSMENT,
        title="Security Risk Assessment",
        subtitle="Professional threat evaluation",
        question=(
            "To provide appropriate protection levels, we need to understand your "
            "security profile. This confidential assessment helps us match you with "
            "the right protection protocols."
        ),
        type=StepType.THREAT_ASSESSMENT,
        validation=ValidationRule(
            required=True, error_message="Please complete the security threat assessment"
        ),
        help_text=(
            "This confidential assessment ensures we provide appropriate protection "
            "levels and security protocols."
        ),
    ),
    QuestionnaireStep(
        key=SECURITY_REQUIREMENTS,
        title="Security Requirements",
        subtitle="What matters most to you",
        question="What secure transport experience with protection officers matters most to you?",
        type=StepType.CHECKBOX,
        options=_options(
            ("privacy_discretion", "Absolute privacy and confidentiality"),
            ("security_awareness", "Security that blends in seamlessly"),
            ("premium_comfort", "Premium protection vehicles"),
            ("professional_service", "Officer presentation matters for my image"),
            ("reliability_tracking", "Punctuality is critical"),
            ("flexibility_coverage", "24/7 protection availability"),
            ("specialized_needs", "Group or family protection"),
            ("communication_skills", "Excellent communication"),
            ("route_knowledge", "Expert security route planning"),
            ("real_time_tracking", "Real-time protection tracking"),
            ("trained_professionals", "Highly trained Protection Officers"),
            ("payment_flexibility", "Flexible payment options"),
            ("multi_city_coverage", "Travel across multiple cities"),
            _PREFER_NOT_TO_SAY,
        ),
        validation=ValidationRule(
            required=True,
            min_selections=1,
            max_selections=5,
            error_message="Please select 1-5 security requirements",
        ),
        help_text="Pick what matters most to you (select 1-5 options).",
    ),
    QuestionnaireStep(
        key=COVERAGE_AREAS,
        title="Protection Coverage Areas",
        subtitle="Where do you need security most",
        question="Where do you need secure transport services with protection coverage?",
        type=StepType.CHECKBOX,
        options=_options(
            ("central_london", "Central London"),
            ("financial_district", "Financial district"),
            ("government_quarter", "Government quarter"),
            ("west_end", "West End"),
            ("greater_london", "Greater London"),
            ("airport_transfers", "Airport transfers"),
            ("tourist_destinations", "Tourist destinations"),
            ("entertainment_events", "Entertainment venues and events"),
            ("premium_shopping", "Premium shopping districts"),
            ("healthcare_professional", "Hospitals and clinics"),
            ("university_business_towns", "University towns and tech centres"),
            ("scotland_wales", "Scotland and Wales"),
            ("international_specialized", "International coordination"),
            _PREFER_NOT_TO_SAY,
        ),
        validation=ValidationRule(
            required=True,
            min_selections=1,
            max_selections=8,
            error_message="Please select 1-8 coverage areas",
        ),
        help_text="Choose your regular security zones.",
    ),
    QuestionnaireStep(
        key=SPECIALIZED_VENUES,
        title="Specialized Venues",
        subtitle="Additional protection areas",
        question="Do you require protection services at these specialized venues?",
        type=StepType.CHECKBOX,
        options=_options(
            ("london_suburbs", "London suburbs"),
            ("business_parks", "Business parks"),
            ("event_venues", "Event venues"),
            ("private_aviation", "Private aviation terminals"),
            ("healthcare_medical", "Healthcare and medical facilities"),
            ("educational_training", "Educational and training venues"),
            ("leisure_recreation", "Leisure and recreation"),
            ("none_required", "None of the above"),
            _PREFER_NOT_TO_SAY,
        ),
        validation=ValidationRule(required=False),
        help_text="These are optional extras.",
    ),
    QuestionnaireStep(
        key=EMERGENCY_CONTACT,
        title="Emergency Contact Information",
        subtitle="Who we contact if something happens",
        question=(
            "Please provide emergency contact information to ensure your safety and "
            "appropriate care during protection services."
        ),
        type=StepType.INPUT,
        validation=ValidationRule(
            required=False,
            error_message="Please provide at least basic emergency contact information",
        ),
        help_text="These details help us take better care of you.",
    ),
    QuestionnaireStep(
        key=PROTECTION_ACCOMMODATIONS,
        title="Protection Accommodations",
        subtitle="Any additional security needs",
        question="Are there any specific requirements for your protection service?",
        type=StepType.CHECKBOX,
        options=_options(
            ("accessibility_needs", "Accessibility needs"),
            ("visual_hearing_support", "Visual and hearing support"),
            ("medical_considerations", "Medical considerations"),
            ("language_preferences", "Language preferences"),
            ("group_family_transport", "Group and family transport"),
            ("luggage_equipment", "Luggage and equipment"),
            ("pet_transport", "Pet transport"),
            ("security_preferences", "Security preferences"),
            ("business_facilities", "Business facilities"),
            ("environment_comfort", "Environment and comfort"),
            ("technology_requirements", "Technology requirements"),
            ("no_special_requirements", "No special requirements"),
            _PREFER_NOT_TO_SAY,
        ),
        validation=ValidationRule(
            required=False,
            min_selections=0,
            max_selections=12,
            error_message="Please select your special requirements",
        ),
        help_text="Tell us about anything that would make your protection more effective.",
    ),
    QuestionnaireStep(
        key=CONTACT_PREFERENCES,
        title="Contact Preferences",
        subtitle="How you'd like to hear from us",
        question="How should we stay in touch with you?",
        type=StepType.CHECKBOX,
        options=_options(
            ("sms_updates", "SMS updates"),
            ("email_communication", "Email communications"),
            ("app_notifications", "App notifications"),
            ("phone_calls", "Phone calls"),
            ("through_assistant", "Through a personal assistant"),
            ("business_contact", "Business or corporate contact"),
            ("secure_messaging", "Secure messaging platform"),
            ("communication_timing", "Communication timing preferences"),
            ("priority_alerts", "Priority alerts only"),
            ("privacy_minimal", "Minimal contact"),
            ("no_communications", "No non-essential communications"),
            _PREFER_NOT_TO_SAY,
        ),
        validation=ValidationRule(
            required=True,
            min_selections=1,
            max_selections=8,
            error_message="Please select 1-8 communication preferences",
        ),
        help_text="We'll only contact you when we need to.",
    ),
    QuestionnaireStep(
        key=PROFILE_REVIEW,
        title="Protection Profile Review",
        subtitle="Complete your security assessment",
        question="Please confirm your protection profile to unlock your security benefits.",
        type=StepType.RADIO,
        options=_options(
            ("confirm_profile", "Confirm profile"),
            ("need_modifications", "Need modifications"),
            ("privacy_completion", "Complete with maximum privacy"),
        ),
        validation=ValidationRule(
            required=True, error_message="Please confirm your profile to complete assessment"
        ),
        help_text="Take a quick look to make sure everything is right.",
        is_last_step=True,
    ),
)

BASE_STEP_KEYS: tuple[str, ...] = tuple(step.key for step in BASE_STEPS)

# Canonical number of base questions used for progress and confidence
BASE_STEP_COUNT = 9


def get_base_steps() -> list[QuestionnaireStep]:
    """Get a fresh list of the base step sequence."""
    return list(BASE_STEPS)


# =============================================================================
# Conditional Step Factories
# =============================================================================

_SEVEN_PS_COPY: dict[SevenPsLevel, dict[str, str]] = {
    SevenPsLevel.BASIC: {
        "title": "Basic Security Assessment (Seven Ps)",
        "subtitle": "Essential security planning framework",
        "question": (
            "Complete the basic Seven Ps security assessment for enhanced protection planning."
        ),
        "help_text": (
            "Basic Seven Ps framework covering essential protection elements: People, "
            "Places, Personality, and key security considerations."
        ),
    },
    SevenPsLevel.STANDARD: {
        "title": "Standard Security Assessment (Seven Ps)",
        "subtitle": "Comprehensive security planning framework",
        "question": (
            "Complete the standard Seven Ps security assessment for comprehensive "
            "protection protocols."
        ),
        "help_text": (
            "Standard Seven Ps framework covering People, Places, Personality, Prejudices, "
            "Personal History, Political considerations, and Private Lifestyle."
        ),
    },
    SevenPsLevel.COMPREHENSIVE: {
        "title": "Comprehensive Security Assessment (Seven Ps)",
        "subtitle": "Complete security planning framework",
        "question": (
            "Complete the comprehensive Seven Ps security assessment for maximum "
            "protection protocols."
        ),
        "help_text": (
            "Comprehensive Seven Ps framework with detailed assessment of all security "
            "dimensions for critical protection requirements."
        ),
    },
}

# Comprehensive profiles must cover at least five of the seven Ps
COMPREHENSIVE_SEVEN_PS_MIN_FIELDS = 5


def create_seven_ps_assessment_step(level: SevenPsLevel) -> QuestionnaireStep:
    """Build the Seven Ps step for a depth level."""
    copy = _SEVEN_PS_COPY[level]
    comprehensive = level == SevenPsLevel.COMPREHENSIVE

    return QuestionnaireStep(
        key=SEVEN_PS_ASSESSMENT,
        title=copy["title"],
        subtitle=copy["subtitle"],
        question=copy["question"],
        type=StepType.SEVEN_PS_ASSESSMENT,
        validation=ValidationRule(
            required=comprehensive,
            min_populated_fields=COMPREHENSIVE_SEVEN_PS_MIN_FIELDS if comprehensive else None,
            error_message=(
                "Comprehensive Seven Ps assessment requires detailed information"
                if comprehensive
                else "Seven Ps security assessment is recommended for your protection level"
            ),
        ),
        help_text=copy["help_text"],
        step_description=(
            "The Seven Ps framework (People, Places, Personality, Prejudices, Personal "
            "History, Political, Private Lifestyle) provides comprehensive security "
            "assessment for professional close protection services."
        ),
        progressive_disclosure=ProgressiveDisclosure(
            trigger_conditions=TriggerConditions(
                risk_levels=(RiskLevel.YELLOW, RiskLevel.ORANGE, RiskLevel.RED),
                professional_profiles=("celebrity", "government", "diplomat", "high_profile"),
                security_requirements=("privacy_discretion", "security_awareness"),
            ),
            assessment_level=level.value,
        ),
    )


def create_risk_matrix_step() -> QuestionnaireStep:
    """Build the risk matrix visualisation step."""
    return QuestionnaireStep(
        key=RISK_MATRIX,
        title="Risk Assessment Matrix",
        subtitle="Professional security risk visualization",
        question=(
            "Review your personalized risk assessment matrix and recommended protection "
            "protocols."
        ),
        type=StepType.RISK_MATRIX,
        validation=ValidationRule(required=False),
        help_text=(
            "Your risk assessment has been calculated based on threat indicators, "
            "professional profile, and security requirements."
        ),
        progressive_disclosure=ProgressiveDisclosure(
            trigger_conditions=TriggerConditions(threat_assessment_answered=True),
        ),
    )


def create_enhanced_emergency_contacts_step() -> QuestionnaireStep:
    """Build the enhanced emergency contacts step."""
    return QuestionnaireStep(
        key=ENHANCED_EMERGENCY_CONTACTS,
        title="Enhanced Emergency Contacts",
        subtitle="Comprehensive emergency contact and medical information",
        question=(
            "Please provide detailed emergency contact information including next of kin, "
            "medical contacts, and secondary contacts for enhanced security protocols."
        ),
        type=StepType.ENHANCED_EMERGENCY_CONTACTS,
        validation=ValidationRule(
            required=True,
            error_message="Enhanced emergency contacts require next of kin information",
        ),
        help_text=(
            "Enhanced security protocols require next of kin, secondary and medical "
            "contacts with full contact details and authorization levels."
        ),
        progressive_disclosure=ProgressiveDisclosure(
            trigger_conditions=TriggerConditions(
                risk_levels=(RiskLevel.YELLOW, RiskLevel.ORANGE, RiskLevel.RED),
            ),
            data_protection=DataProtection(
                special_category_data=True,
                encryption_level="enhanced",
                retention_period="assignment_duration_plus_7_years",
            ),
        ),
    )


def create_medical_data_step(required: bool = True) -> QuestionnaireStep:
    """Build the medical information step."""
    return QuestionnaireStep(
        key=MEDICAL_DATA,
        title="Medical Information",
        subtitle="Critical medical information for emergency response",
        question=(
            "Please provide medical information necessary for emergency response "
            "protocols during protection services."
        ),
        type=StepType.MEDICAL_DATA,
        validation=ValidationRule(
            required=required,
            error_message="Medical information is required for your security level",
        ),
        help_text=(
            "This includes allergies, medications, conditions, and emergency procedures."
        ),
        progressive_disclosure=ProgressiveDisclosure(
            trigger_conditions=TriggerConditions(
                risk_levels=(RiskLevel.ORANGE, RiskLevel.RED),
            ),
            data_protection=DataProtection(
                special_category_data=True,
                encryption_level="enhanced",
                retention_period="assignment_duration_plus_7_years",
            ),
        ),
    )
