"""Unit tests for RiskCalculator."""

import pytest

from armora.core.exceptions import ResponseFormatError
from armora.risk.calculator import (
    AssessmentSource,
    CalculatorConfig,
    RiskCalculator,
    assess_risk,
    calculate_risk_from_responses,
    create_risk_calculator,
    get_risk_position,
)
from armora.risk.catalog import get_risk_factor
from armora.risk.thresholds import ProtectionLevel, RiskLevel, get_risk_level


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def calculator() -> RiskCalculator:
    """Create default calculator."""
    return RiskCalculator()


@pytest.fixture
def all_signals() -> dict:
    """Response map that triggers every calculator signal."""
    return {
        "step1": "celebrity",
        "step2": "daily",
        "step3": ["privacy_discretion"],
        "step4": ["international_specialized"],
    }


# =============================================================================
# Questionnaire Scoring Tests
# =============================================================================


class TestCalculateFromResponses:
    """Tests for scoring questionnaire responses."""

    def test_empty_responses_baseline(self, calculator):
        """Test the empty map yields the floor state."""
        assessment = calculator.calculate_from_responses({})

        assert assessment.matrix.probability == 1
        assert assessment.matrix.impact == 1
        assert assessment.matrix.score == 1
        assert assessment.level == RiskLevel.GREEN
        assert assessment.confidence == 30
        assert assessment.matrix.factors == []
        assert assessment.source == AssessmentSource.QUESTIONNAIRE

    def test_all_signals(self, calculator, all_signals):
        """Test four probability and three impact increments."""
        assessment = calculator.calculate_from_responses(all_signals)

        assert assessment.matrix.probability == 5
        assert assessment.matrix.impact == 4
        assert assessment.matrix.score == 20
        assert assessment.level == RiskLevel.RED
        assert assessment.matrix.protection_level == ProtectionLevel.ENHANCED
        assert [f.id for f in assessment.matrix.factors] == [
            "media_profile",
            "controversial_position",
            "high_risk_locations",
            "predictable_routes",
        ]
        assert all(f.is_active for f in assessment.matrix.factors)

    def test_probability_clamped(self, calculator, all_signals):
        """Test a fifth probability increment stays at 5."""
        responses = {**all_signals, "step3": ["privacy_discretion", "security_awareness"]}
        assessment = calculator.calculate_from_responses(responses)

        assert assessment.matrix.probability == 5
        assert assessment.matrix.impact == 4
        assert len(assessment.matrix.factors) == 5

    def test_high_risk_profile(self, calculator):
        """Test a high-risk profile raises both ratings."""
        assessment = calculator.calculate_from_responses({"step1": "diplomat"})

        assert (assessment.matrix.probability, assessment.matrix.impact) == (2, 2)
        assert assessment.level == RiskLevel.GREEN

    def test_security_awareness_probability_only(self, calculator):
        """Test security awareness only raises probability."""
        assessment = calculator.calculate_from_responses({"step3": ["security_awareness"]})

        assert (assessment.matrix.probability, assessment.matrix.impact) == (2, 1)
        assert assessment.matrix.factors[0].id == "previous_incidents"

    @pytest.mark.parametrize("frequency", ["daily", "weekly"])
    def test_predictable_frequency(self, calculator, frequency):
        """Test regular travel raises probability."""
        assessment = calculator.calculate_from_responses({"step2": frequency})
        assert assessment.matrix.probability == 2

    def test_irregular_frequency_ignored(self, calculator):
        """Test irregular travel adds nothing."""
        assessment = calculator.calculate_from_responses({"step2": "monthly"})
        assert assessment.matrix.score == 1

    def test_recommendations_follow_level(self, calculator, all_signals):
        """Test recommendations are the level's description and features."""
        assessment = calculator.calculate_from_responses(all_signals)

        assert assessment.matrix.recommendations[0].startswith("Maximum protection")
        assert "Elite Close Protection Team" in assessment.matrix.recommendations

    def test_idempotent(self, calculator, all_signals):
        """Test repeated calls produce identical matrices."""
        first = calculator.calculate_from_responses(all_signals)
        second = calculator.calculate_from_responses(all_signals)

        assert first.matrix == second.matrix
        assert first.confidence == second.confidence

    def test_monotonic(self, calculator):
        """Test adding a weighted response never lowers the score."""
        base = {"step1": "executive", "step4": ["international_specialized"]}
        before = calculator.calculate_from_responses(base)
        after = calculator.calculate_from_responses({**base, "step2": "daily"})

        assert after.matrix.score >= before.matrix.score

    def test_level_is_function_of_score(self, calculator, all_signals):
        """Test level matches the banding of the score."""
        for responses in ({}, {"step1": "diplomat"}, all_signals):
            matrix = calculator.calculate_from_responses(responses).matrix
            assert 1 <= matrix.probability <= 5
            assert 1 <= matrix.impact <= 5
            assert matrix.level == get_risk_level(matrix.score)


class TestResponseShapes:
    """Tests for aliases and answer shapes."""

    def test_alias_keys(self, calculator):
        """Test named aliases are read."""
        assessment = calculator.calculate_from_responses(
            {"professionalProfile": "government", "serviceRequirements": ["privacy_discretion"]}
        )
        assert (assessment.matrix.probability, assessment.matrix.impact) == (3, 3)

    def test_step_key_wins_over_alias(self, calculator):
        """Test the step key takes precedence."""
        assessment = calculator.calculate_from_responses(
            {"step1": "executive", "professionalProfile": "diplomat"}
        )
        assert assessment.matrix.score == 1

    def test_single_string_multi_select(self, calculator):
        """Test a single string is read as a one-item list."""
        assessment = calculator.calculate_from_responses({"step3": "privacy_discretion"})
        assert (assessment.matrix.probability, assessment.matrix.impact) == (2, 2)

    def test_custom_single_choice(self, calculator):
        """Test free-text answers are read by value."""
        assessment = calculator.calculate_from_responses(
            {"step1": {"type": "custom", "value": "celebrity"}}
        )
        assert assessment.matrix.probability == 2

    def test_malformed_multi_select(self, calculator):
        """Test a number where a list is expected raises."""
        with pytest.raises(ResponseFormatError) as exc_info:
            calculator.calculate_from_responses({"step3": 42})

        assert exc_info.value.field == "security_requirements"
        assert exc_info.value.key == "step3"

    def test_non_mapping_responses(self, calculator):
        """Test responses must be a mapping."""
        with pytest.raises(ResponseFormatError):
            calculator.calculate_from_responses(["step1"])  # type: ignore[arg-type]


# =============================================================================
# Confidence Tests
# =============================================================================


class TestConfidence:
    """Tests for questionnaire confidence."""

    @pytest.mark.parametrize(
        ("answered", "expected"),
        [(0, 30), (2, 30), (3, 33), (5, 56), (8, 89), (9, 95), (14, 95)],
    )
    def test_confidence_by_answer_count(self, calculator, answered, expected):
        """Test confidence is linear in answers, clamped to 30-95."""
        responses = {f"custom_{i}": "answer" for i in range(answered)}
        assert calculator.calculate_from_responses(responses).confidence == expected

    def test_only_none_is_unanswered(self, calculator):
        """Test False and empty strings count as present answers."""
        responses = {
            "step1": "executive",
            "step2": None,
            "step5": "",
            "consent": False,
            "step4": ["central_london"],
            "step7": ["no_special_requirements"],
        }
        assert calculator.calculate_from_responses(responses).confidence == 56

    def test_blank_and_false_values_counted(self, calculator):
        """Test a blank contact and a declined consent raise confidence."""
        responses = {
            "step1": "executive",
            "step2": "monthly",
            "step6": "",
            "step6_consent": False,
        }
        assert calculator.calculate_from_responses(responses).confidence == 44

    def test_custom_confidence_bounds(self):
        """Test confidence bounds come from config."""
        calculator = create_risk_calculator(CalculatorConfig(confidence_floor=10))
        assert calculator.calculate_from_responses({}).confidence == 10


# =============================================================================
# Manual Assessment Tests
# =============================================================================


class TestAssess:
    """Tests for manual assessments."""

    def test_manual_ratings_used(self, calculator):
        """Test manual probability and impact override factors."""
        factors = [get_risk_factor("previous_incidents").activated()]
        assessment = calculator.assess(factors, manual_probability=3, manual_impact=4)

        assert assessment.matrix.score == 12
        assert assessment.level == RiskLevel.YELLOW
        assert assessment.source == AssessmentSource.MANUAL

    def test_manual_ratings_clamped(self, calculator):
        """Test manual ratings clamp to 1-5."""
        assessment = calculator.assess([], manual_probability=7, manual_impact=2)

        assert assessment.matrix.probability == 5
        assert assessment.matrix.score == 10

    def test_one_manual_rating_ignored(self, calculator):
        """Test a single manual rating falls back to factor weights."""
        factors = [get_risk_factor("media_profile").activated()]
        assessment = calculator.assess(factors, manual_probability=5)

        assert assessment.matrix.probability == 3
        assert assessment.matrix.impact == 2

    def test_mean_weight_rounds_half_up(self, calculator):
        """Test mean weight 3.5 rounds to 4 and impact 2.8 to 3."""
        factors = [
            get_risk_factor("media_profile").activated(),
            get_risk_factor("controversial_position").activated(),
        ]
        assessment = calculator.assess(factors)

        assert assessment.matrix.probability == 4
        assert assessment.matrix.impact == 3
        assert assessment.confidence == 40

    def test_inactive_factors_ignored(self, calculator):
        """Test only active factors contribute."""
        factors = [get_risk_factor("previous_incidents"), get_risk_factor("media_profile")]
        assessment = calculator.assess(factors)

        assert assessment.matrix.factors == []
        assert assessment.matrix.score == 1
        assert assessment.confidence == 50

    def test_confidence_capped(self, calculator):
        """Test factor confidence caps at 95."""
        factor_ids = [
            "previous_incidents",
            "stalking_harassment",
            "legal_threats",
            "media_profile",
            "controversial_position",
        ]
        factors = [get_risk_factor(f).activated() for f in factor_ids]

        assert calculator.assess(factors).confidence == 95

    def test_module_level_assess(self):
        """Test the module-level entry point."""
        assessment = assess_risk([], manual_probability=4, manual_impact=5)
        assert assessment.level == RiskLevel.RED


# =============================================================================
# Module API Tests
# =============================================================================


class TestModuleApi:
    """Tests for module-level helpers."""

    def test_calculate_risk_from_responses(self, all_signals):
        """Test the default-config entry point."""
        assert calculate_risk_from_responses(all_signals).level == RiskLevel.RED

    def test_risk_position(self, all_signals):
        """Test grid coordinates of an assessment."""
        assessment = calculate_risk_from_responses(all_signals)
        assert get_risk_position(assessment) == (3, 0)

    def test_risk_position_baseline(self):
        """Test the baseline sits bottom-left."""
        assert get_risk_position(calculate_risk_from_responses({})) == (0, 4)

    def test_to_dict(self, all_signals):
        """Test assessment serialization."""
        data = calculate_risk_from_responses(all_signals).to_dict()

        assert data["matrix"]["level"] == "RED"
        assert data["matrix"]["protection_level"] == "Enhanced"
        assert data["source"] == "questionnaire"
        assert data["confidence"] == 44
        assert "last_updated" in data
