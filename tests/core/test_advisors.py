"""Tests for flour, water and tip advisors"""
import pytest

from core.advisors import FlourAnalysisAdvisor, TipAdvisor, WaterAnalysisAdvisor
from core.models import FlourMixParameters, FormulationRequest, PrefermentRequest


def request(**overrides):
    params = dict(style="neapolitan", ball_count=4, hydration=65.0,
                  fermentation_method="cold", total_fermentation_hours=24)
    params.update(overrides)
    return FormulationRequest(**params)


class TestFlourAnalysisAdvisor:
    """Test suite for FlourAnalysisAdvisor class"""

    @pytest.mark.parametrize("strength,hours", [
        (180, 12), (219, 12), (220, 24), (259, 24), (260, 48), (299, 48),
        (300, 72), (349, 72), (350, 96), (420, 96),
    ])
    def test_max_fermentation_hours(self, strength, hours):
        """Test the fermentation ceiling for each strength band"""
        assert FlourAnalysisAdvisor.max_fermentation_hours(strength) == hours

    def test_max_hydration(self):
        """Test max hydration rule and its 90% cap"""
        assert FlourAnalysisAdvisor.max_hydration(150) == pytest.approx(80.0)
        assert FlourAnalysisAdvisor.max_hydration(300) == 90.0

    def test_no_flour_data(self):
        """Test analysis without strength or protein"""
        analysis = FlourAnalysisAdvisor.analyze(request())

        assert analysis.strength is None
        assert analysis.warnings == []
        assert analysis.suggested_hydration_min is None

    def test_weak_flour_long_fermentation(self):
        """Test weak flour is flagged for a 24 h fermentation"""
        analysis = FlourAnalysisAdvisor.analyze(request(flour_strength=180))

        assert any("Weak flour" in w for w in analysis.warnings)
        assert any("too long" in w for w in analysis.warnings)
        assert any("stronger flour" in r for r in analysis.recommendations)

    def test_very_strong_flour_short_fermentation(self):
        """Test very strong flour suggests a longer fermentation"""
        analysis = FlourAnalysisAdvisor.analyze(
            request(flour_strength=380, total_fermentation_hours=12)
        )

        assert any("Very strong flour" in r for r in analysis.recommendations)
        assert any("at least 24 hours" in r for r in analysis.recommendations)
        assert any("W250-320" in r for r in analysis.recommendations)

    def test_hydration_band(self):
        """Test suggested band and a too-wet dough"""
        analysis = FlourAnalysisAdvisor.analyze(
            request(style="custom", flour_strength=220, hydration=80.0,
                    total_fermentation_hours=12)
        )

        assert analysis.suggested_hydration_min == 56.0
        assert analysis.suggested_hydration_max == pytest.approx(66.6)
        assert any("is high for W220" in w for w in analysis.warnings)

    def test_low_protein_high_hydration(self):
        """Test low protein with a wet dough"""
        analysis = FlourAnalysisAdvisor.analyze(request(flour_protein=10.0, hydration=70.0))

        assert any("Low protein" in w for w in analysis.warnings)

    def test_high_protein_neapolitan_autolyse(self):
        """Test autolyse advice for strong Neapolitan flour"""
        analysis = FlourAnalysisAdvisor.analyze(request(flour_protein=14.5))

        assert any("autolyse" in r for r in analysis.recommendations)

    def test_blend_parameters_take_precedence(self):
        """Test blend values replace the single-flour values"""
        mix = FlourMixParameters(protein=12.9, strength=292.0)

        analysis = FlourAnalysisAdvisor.analyze(request(flour_strength=150), mix)

        assert analysis.strength == 292.0
        assert analysis.protein == 12.9
        assert not any("Weak flour" in w for w in analysis.warnings)

    def test_style_flour_requirements(self):
        """Test protein far from the New York target is reported"""
        analysis = FlourAnalysisAdvisor.analyze(
            request(style="new_york", hydration=62.0, flour_protein=11.0)
        )

        assert any("12%+ protein" in r for r in analysis.recommendations)
        assert any("Target protein" in r for r in analysis.recommendations)
        assert any("High-gluten" in r for r in analysis.recommendations)


class TestWaterAnalysisAdvisor:
    """Test suite for WaterAnalysisAdvisor class"""

    def test_no_data_is_neutral(self):
        """Test missing water data leaves modifiers at 1"""
        analysis = WaterAnalysisAdvisor.analyze()

        assert analysis.fermentation_modifier == 1.0
        assert analysis.gluten_modifier == 1.0
        assert analysis.effects == []

    def test_soft_water(self):
        """Test soft water speeds fermentation and weakens gluten"""
        analysis = WaterAnalysisAdvisor.analyze(hardness=30)

        assert analysis.fermentation_modifier == 1.1
        assert analysis.gluten_modifier == 0.95
        assert len(analysis.recommendations) == 1

    def test_moderate_water(self):
        """Test moderately hard water is optimal"""
        analysis = WaterAnalysisAdvisor.analyze(hardness=120)

        assert analysis.fermentation_modifier == 1.0
        assert "optimal" in analysis.effects[0]

    def test_hard_water(self):
        """Test hard water slows fermentation"""
        analysis = WaterAnalysisAdvisor.analyze(hardness=250)

        assert analysis.fermentation_modifier == 0.9
        assert analysis.gluten_modifier == 1.05
        assert analysis.recommendations == []

    def test_very_hard_water_filtering(self):
        """Test very hard water suggests filtering"""
        analysis = WaterAnalysisAdvisor.analyze(hardness=400)

        assert any("filtering" in r for r in analysis.recommendations)

    def test_ph_effects(self):
        """Test acidic and alkaline water"""
        assert WaterAnalysisAdvisor.analyze(ph=6.0).fermentation_modifier == 1.05
        alkaline = WaterAnalysisAdvisor.analyze(ph=8.5)
        assert alkaline.fermentation_modifier == 0.95
        assert len(alkaline.recommendations) == 1


class TestTipAdvisor:
    """Test suite for TipAdvisor class"""

    def test_cold_neapolitan_tips(self):
        """Test tips for the classic cold Neapolitan dough"""
        tips = TipAdvisor.generate(request())

        assert any("fridge" in t for t in tips.tips)
        assert any("cornicione" in t for t in tips.tips)
        assert tips.warnings == []

    def test_high_hydration_tips_and_warnings(self):
        """Test wet Neapolitan dough"""
        tips = TipAdvisor.generate(request(hydration=72.0))

        assert any("stretch-and-folds" in t for t in tips.tips)
        assert any("above 70% hydration" in w for w in tips.warnings)
        assert any("outside the usual 60-70%" in w for w in tips.warnings)
        assert not any("24+ hours" in r for r in tips.recommendations)

    def test_home_oven_tips(self):
        """Test home oven styles get stone and preheat tips"""
        tips = TipAdvisor.generate(request(style="pan", total_fermentation_hours=8))

        assert any("stone" in t for t in tips.tips)
        assert any("45 minutes" in t for t in tips.tips)

    def test_over_fermentation_warning(self):
        """Test long warm room-temperature fermentation"""
        tips = TipAdvisor.generate(request(
            fermentation_method="room_temperature", total_fermentation_hours=30,
            room_temperature=26.0,
        ))

        assert any("over-fermentation" in w for w in tips.warnings)
        assert any("use the fridge" in r for r in tips.recommendations)

    def test_short_cold_fermentation_warning(self):
        """Test cold fermentation under 12 hours"""
        tips = TipAdvisor.generate(request(total_fermentation_hours=10))

        assert any("shorter than 12 hours" in w for w in tips.warnings)

    def test_fermentation_outside_style_range(self):
        """Test fermentation hours outside the style window"""
        tips = TipAdvisor.generate(request(total_fermentation_hours=100))

        assert any("outside the recommended 8-72" in w for w in tips.warnings)

    def test_preferment_tips(self):
        """Test a tip per preferment type"""
        poolish = TipAdvisor.generate(request(preferment=PrefermentRequest(type="poolish")))
        biga = TipAdvisor.generate(request(preferment=PrefermentRequest(type="biga")))

        assert any("poolish" in t for t in poolish.tips)
        assert any("biga" in t for t in biga.tips)
