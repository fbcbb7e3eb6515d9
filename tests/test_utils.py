# tests/test_utils.py

"""
Scoring Utility Tests - normalization, currency formatting, tier metadata
"""

from decimal import Decimal

import pytest

from legal_value_score.core.exceptions import UnknownTierError
from legal_value_score.scoring.tiers import TIER_METADATA, get_tier_metadata
from legal_value_score.scoring.utils import format_currency, normalize_to_scale, round_half_up
from legal_value_score.scoring.variants import LEGACY_VARIANT, OPPORTUNITY_VARIANT


class TestRoundHalfUp:

    @pytest.mark.parametrize("value,expected", [
        ("12.5", 13),
        ("12.49", 12),
        ("0.5", 1),
        ("2.5", 3),      # not banker's rounding
        ("6.25", 6),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(Decimal(value)) == expected


class TestNormalizeToScale:

    @pytest.mark.parametrize("raw,maximum,expected", [
        (8, 8, 25),
        (4, 8, 13),
        (6, 8, 19),
        (2, 8, 6),
        (0, 8, 0),
        (8, 12, 17),
        (4, 12, 8),
        (8, 10, 20),
        (1, 12, 2),
    ])
    def test_normalize(self, raw, maximum, expected):
        assert normalize_to_scale(raw, maximum) == expected

    @pytest.mark.parametrize("maximum", [0, -1, None])
    def test_missing_or_non_positive_max(self, maximum):
        assert normalize_to_scale(5, maximum) == 0

    def test_not_clamped(self):
        assert normalize_to_scale(12, 8) == 38

    def test_custom_scale(self):
        assert normalize_to_scale(1, 2, scale=100) == 50


class TestFormatCurrency:

    @pytest.mark.parametrize("amount,expected", [
        (225000, "€225K"),
        (152500, "€153K"),
        (37500, "€38K"),
        (17500, "€18K"),
        (725000, "€725K"),
        (499, "€0K"),
        (500, "€1K"),
        (0, "€0K"),
    ])
    def test_euro(self, amount, expected):
        assert format_currency(amount) == expected

    def test_custom_symbol(self):
        assert format_currency(30000, "$") == "$30K"


class TestTierMetadata:

    def test_every_tier_label_has_metadata(self):
        for variant in (LEGACY_VARIANT, OPPORTUNITY_VARIANT):
            for label in variant.tier_labels:
                assert label in TIER_METADATA

    @pytest.mark.parametrize("tier,title,color", [
        ("maximized", "VALUE MAXIMIZED", "green"),
        ("strong-foundation", "STRONG FOUNDATION", "yellow"),
        ("significant-opportunity", "SIGNIFICANT OPPORTUNITY", "orange"),
        ("transformational", "TRANSFORMATIONAL OPPORTUNITY", "red"),
        ("optimized", "OPTIMIZED", "green"),
        ("capable", "CAPABLE WITH GAPS", "yellow"),
        ("at-risk", "AT RISK", "orange"),
        ("exposed", "EXPOSED", "red"),
    ])
    def test_titles_and_colors(self, tier, title, color):
        meta = get_tier_metadata(tier)
        assert meta.title == title
        assert meta.color == color
        assert meta.message

    def test_unknown_tier(self):
        with pytest.raises(UnknownTierError) as exc:
            get_tier_metadata("legendary")
        assert exc.value.tier == "legendary"

    def test_unknown_tier_is_lookup_error(self):
        with pytest.raises(LookupError):
            get_tier_metadata("")

    def test_as_dict(self):
        assert set(get_tier_metadata("exposed").as_dict()) == {"title", "color", "message"}
