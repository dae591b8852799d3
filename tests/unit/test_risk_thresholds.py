"""Tests for risk level thresholds and the risk matrix grid.

Tests cover:
- Score banding at every boundary
- Risk level ordering and escalation
- Protection levels and recommendations
- Matrix grid construction
"""

import pytest

from armora.risk.thresholds import (
    MAX_RATING,
    MIN_RATING,
    PROTECTION_RECOMMENDATIONS,
    RISK_LEVEL_BANDS,
    ProtectionLevel,
    RiskLevel,
    calculate_risk_score,
    clamp_rating,
    get_protection_level,
    get_risk_level,
    get_risk_matrix_cells,
)


# =============================================================================
# Risk Level Tests
# =============================================================================


class TestRiskLevel:
    """Tests for RiskLevel enum."""

    def test_rank_order(self):
        """Test levels rank from GREEN to RED."""
        assert [level.rank for level in RiskLevel] == [0, 1, 2, 3]

    def test_escalated(self):
        """Test escalation moves one tier up."""
        assert RiskLevel.GREEN.escalated() == RiskLevel.YELLOW
        assert RiskLevel.YELLOW.escalated() == RiskLevel.ORANGE
        assert RiskLevel.ORANGE.escalated() == RiskLevel.RED

    def test_escalated_capped_at_red(self):
        """Test RED cannot escalate further."""
        assert RiskLevel.RED.escalated() == RiskLevel.RED

    def test_string_value(self):
        """Test levels compare equal to their names."""
        assert RiskLevel.ORANGE == "ORANGE"


# =============================================================================
# Banding Tests
# =============================================================================


class TestGetRiskLevel:
    """Tests for score banding."""

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (1, RiskLevel.GREEN),
            (6, RiskLevel.GREEN),
            (7, RiskLevel.YELLOW),
            (12, RiskLevel.YELLOW),
            (13, RiskLevel.ORANGE),
            (19, RiskLevel.ORANGE),
            (20, RiskLevel.RED),
            (25, RiskLevel.RED),
        ],
    )
    def test_band_boundaries(self, score, expected):
        """Test inclusive band boundaries."""
        assert get_risk_level(score) == expected

    def test_bands_cover_every_score(self):
        """Test each score 1-25 falls in exactly one band."""
        for score in range(1, 26):
            containing = [band for band in RISK_LEVEL_BANDS.values() if band.contains(score)]
            assert len(containing) == 1
            assert containing[0].level == get_risk_level(score)

    def test_band_to_dict(self):
        """Test band serialization."""
        data = RISK_LEVEL_BANDS[RiskLevel.ORANGE].to_dict()
        assert data == {
            "level": "ORANGE",
            "min": 13,
            "max": 19,
            "color": "#fd7e14",
            "label": "Significant Risk",
        }


class TestRatings:
    """Tests for rating helpers."""

    @pytest.mark.parametrize(("raw", "expected"), [(-3, 1), (0, 1), (1, 1), (3, 3), (5, 5), (9, 5)])
    def test_clamp_rating(self, raw, expected):
        """Test ratings clamp to 1-5."""
        assert clamp_rating(raw) == expected

    def test_score_is_product(self):
        """Test score is probability x impact."""
        assert calculate_risk_score(4, 3) == 12


# =============================================================================
# Protection Tests
# =============================================================================


class TestProtection:
    """Tests for protection levels and recommendations."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (RiskLevel.GREEN, ProtectionLevel.ESSENTIAL),
            (RiskLevel.YELLOW, ProtectionLevel.EXECUTIVE),
            (RiskLevel.ORANGE, ProtectionLevel.SHADOW),
            (RiskLevel.RED, ProtectionLevel.ENHANCED),
        ],
    )
    def test_protection_level(self, level, expected):
        """Test protection tier per level."""
        assert get_protection_level(level) == expected

    def test_recommendation_lines(self):
        """Test recommendation flattens to description then features."""
        recommendation = PROTECTION_RECOMMENDATIONS[RiskLevel.RED]
        lines = recommendation.as_lines()

        assert lines[0] == recommendation.description
        assert lines[1:] == list(recommendation.features)
        assert "Real-time threat monitoring" in lines

    def test_every_level_has_recommendation(self):
        """Test recommendations exist for all levels."""
        assert set(PROTECTION_RECOMMENDATIONS) == set(RiskLevel)


# =============================================================================
# Matrix Grid Tests
# =============================================================================


class TestRiskMatrixCells:
    """Tests for the 5x5 grid."""

    def test_grid_shape(self):
        """Test grid has 5 rows of 5 cells."""
        rows = get_risk_matrix_cells()
        assert len(rows) == MAX_RATING - MIN_RATING + 1
        assert all(len(row) == 5 for row in rows)

    def test_cell_values(self):
        """Test each cell scores its own coordinates."""
        for row in get_risk_matrix_cells():
            for cell in row:
                assert cell.score == cell.probability * cell.impact
                assert cell.level == get_risk_level(cell.score)

    def test_corners(self):
        """Test grid corners."""
        rows = get_risk_matrix_cells()
        assert rows[0][0].to_dict() == {"probability": 1, "impact": 1, "score": 1, "level": "GREEN"}
        assert rows[4][4].level == RiskLevel.RED
