"""Tests for DoughFormulationEngine"""
import pytest
from decimal import Decimal

from core.exceptions import FormulationError
from core.formulation_engine import DoughFormulationEngine, calculate_formulation
from core.models import (
    BonusIngredient,
    FlourBlendEntry,
    FormulationRequest,
    PrefermentRequest,
    StepKind,
)


def with_changes(request, **changes):
    return FormulationRequest.model_validate({**request.model_dump(), **changes})


class TestScenarios:
    """End-to-end reference scenarios"""

    def test_cold_neapolitan_masses(self, neapolitan_request):
        """Test 4 x 250 g Neapolitan dough with a 24 h cold fermentation"""
        result = calculate_formulation(neapolitan_request)

        assert result.ingredients.total_dough == Decimal("1000.00")
        assert float(result.ingredients.flour) == pytest.approx(590.0, abs=6.0)
        assert float(result.ingredients.water) == pytest.approx(384.0, abs=4.0)
        assert float(result.ingredients.salt) == pytest.approx(16.5, abs=0.3)
        assert result.leavening.room_hours == 2.0
        assert result.leavening.fridge_hours == 22.0
        assert result.leavening.agent_percentage == pytest.approx(0.2067, abs=0.001)

    def test_same_day_uses_more_yeast(self, neapolitan_request):
        """Test switching to a 6 h same-day dough raises the yeast percentage"""
        cold = calculate_formulation(neapolitan_request)
        same_day = calculate_formulation(with_changes(
            neapolitan_request, fermentation_method="same_day", total_fermentation_hours=6
        ))

        assert same_day.leavening.agent_percentage > cold.leavening.agent_percentage
        assert same_day.ingredients.leavening > cold.ingredients.leavening

    def test_poolish_water_equals_flour(self, neapolitan_request):
        """Test a 30% poolish fermented for 12 h"""
        result = calculate_formulation(with_changes(
            neapolitan_request,
            preferment=PrefermentRequest(type="poolish", percentage=30, hours=12),
        ))

        assert result.preferment.water == result.preferment.flour
        assert result.main_dough.flour + result.preferment.flour == result.ingredients.flour
        assert result.main_dough.water + result.preferment.water == result.ingredients.water
        assert result.schedule[0].kind == StepKind.MIX_PREFERMENT


class TestStyleDefaults:
    """Style profile values for fields the caller leaves unset"""

    def test_unset_fields_come_from_style(self):
        """Test a bare New York request picks up the style's dough values"""
        result = calculate_formulation(FormulationRequest(style="new_york", ball_count=2))

        assert result.ball_weight == 280.0
        assert result.ingredients.total_dough == Decimal("560.00")
        assert result.bakers_percentages.water == pytest.approx(60.0, abs=0.05)
        assert result.bakers_percentages.oil == pytest.approx(2.0, abs=0.05)
        assert result.bakers_percentages.sugar == pytest.approx(1.0, abs=0.05)

    def test_explicit_fields_win(self):
        """Test values set by the caller are kept over the style defaults"""
        result = calculate_formulation(FormulationRequest(
            style="new_york", ball_count=2, ball_weight=300.0, hydration=63.0, oil=0.0
        ))

        assert result.ball_weight == 300.0
        assert result.bakers_percentages.water == pytest.approx(63.0, abs=0.05)
        assert result.bakers_percentages.oil == 0.0
        assert result.bakers_percentages.sugar == pytest.approx(1.0, abs=0.05)


class TestMassInvariants:
    """Closure and round-trip across a variety of requests"""

    @pytest.mark.parametrize("changes", [
        {},
        {"hydration": 80.0, "style": "pinsa_romana", "oil": 2.0},
        {"ball_count": 12, "ball_weight": 280.0, "style": "new_york", "oil": 2.0, "sugar": 1.0},
        {"leavening_agent": "instant_dry"},
        {"leavening_agent": "sourdough", "leavening_percentage": 15.0},
        {"bonus_ingredients": [BonusIngredient(name="semolina", percentage=5.0)]},
    ])
    def test_closure_and_round_trip(self, neapolitan_request, changes):
        """Test masses add up and percentages round-trip"""
        request = with_changes(neapolitan_request, **changes)
        result = calculate_formulation(request)
        total = request.ball_count * request.ball_weight

        assert float(result.ingredients.total()) == pytest.approx(total, abs=0.1 * total / 1000)
        pcts = result.bakers_percentages
        assert pcts.water == pytest.approx(request.hydration, abs=0.05)
        assert pcts.salt == pytest.approx(request.salt, abs=0.05)
        assert pcts.oil == pytest.approx(request.oil, abs=0.05)
        assert pcts.sugar == pytest.approx(request.sugar, abs=0.05)
        assert pcts.leavening == pytest.approx(result.leavening.agent_percentage, abs=0.05)


class TestLeavening:
    """Leavening agent handling"""

    def test_instant_dry_conversion(self, neapolitan_request):
        """Test instant dry yeast is a third of fresh"""
        result = calculate_formulation(with_changes(neapolitan_request, leavening_agent="instant_dry"))

        assert result.leavening.agent_percentage == pytest.approx(
            result.leavening.fresh_percentage * 0.33, abs=1e-4
        )

    def test_explicit_percentage_is_fresh_equivalent(self, neapolitan_request):
        """Test an explicit percentage overrides the model"""
        result = calculate_formulation(with_changes(
            neapolitan_request, leavening_agent="active_dry", leavening_percentage=1.0
        ))

        assert result.leavening.fresh_percentage == 1.0
        assert result.leavening.agent_percentage == pytest.approx(0.4)
        assert any("Explicit leavening" in a for a in result.leavening.adjustments)

    def test_sourdough_default_starter(self, neapolitan_request):
        """Test sourdough without a percentage uses the default starter amount"""
        result = calculate_formulation(with_changes(neapolitan_request, leavening_agent="sourdough"))

        assert result.leavening.agent_percentage == 20.0
        assert any("starter percentage" in w for w in result.warnings)

    def test_sourdough_explicit_percentage(self, neapolitan_request):
        """Test sourdough percentage is applied directly to the flour"""
        result = calculate_formulation(with_changes(
            neapolitan_request, leavening_agent="sourdough", leavening_percentage=15.0
        ))

        assert result.leavening.agent_percentage == 15.0
        assert float(result.ingredients.leavening) == pytest.approx(
            float(result.ingredients.flour) * 0.15, abs=0.01
        )


class TestFlourBlend:
    """Flour blend resolution through the catalog"""

    def test_blend_uses_single_batch_lookup(self, neapolitan_request, flour_catalog, mocker):
        """Test the catalog is queried once for the whole blend"""
        spy = mocker.spy(flour_catalog, "batch_fetch")
        request = with_changes(neapolitan_request, flour_blend=[
            FlourBlendEntry(flour_id="caputo-pizzeria", percentage=70),
            FlourBlendEntry(flour_id="caputo-nuvola", percentage=30),
        ])

        result = DoughFormulationEngine(flour_catalog).calculate(request)

        assert spy.call_count == 1
        assert result.flour_mix.strength == pytest.approx(284.0)
        assert sum(p.grams for p in result.flour_mix.portions) == result.ingredients.flour
        assert result.flour_analysis.strength == pytest.approx(284.0)

    def test_blend_strength_drives_leavening(self, neapolitan_request, flour_catalog):
        """Test the blend W enters the fermentation model"""
        plain = calculate_formulation(neapolitan_request)
        strong = DoughFormulationEngine(flour_catalog).calculate(with_changes(
            neapolitan_request,
            flour_blend=[FlourBlendEntry(flour_id="manitoba", percentage=100)],
        ))

        assert strong.leavening.breakdown["strength_factor"] == pytest.approx(1.08)
        assert strong.leavening.agent_percentage > plain.leavening.agent_percentage
        assert any("W380 is strong" in a for a in strong.leavening.adjustments)

    def test_blend_strength_overrides_request_strength(self, neapolitan_request, flour_catalog):
        """Test a resolved blend W takes precedence over the request's flour_strength"""
        result = DoughFormulationEngine(flour_catalog).calculate(with_changes(
            neapolitan_request,
            flour_strength=200.0,
            flour_blend=[FlourBlendEntry(flour_id="manitoba", percentage=100)],
        ))

        assert result.leavening.breakdown["strength_factor"] == pytest.approx(1.08)

    def test_missing_flour_is_a_warning(self, neapolitan_request, flour_catalog):
        """Test unresolved ids are reported, not fatal"""
        request = with_changes(neapolitan_request, flour_blend=[
            FlourBlendEntry(flour_id="caputo-pizzeria", percentage=70),
            FlourBlendEntry(flour_id="mystery", percentage=30),
        ])

        result = DoughFormulationEngine(flour_catalog).calculate(request)

        assert result.flour_mix.missing_ids == ["mystery"]
        assert any("mystery" in w for w in result.warnings)
        assert result.flour_mix.portions[0].grams == result.ingredients.flour

    def test_no_catalog_skips_blend(self, neapolitan_request):
        """Test a blend without a catalog is reported and skipped"""
        request = with_changes(neapolitan_request, flour_blend=[
            FlourBlendEntry(flour_id="caputo-pizzeria", percentage=100),
        ])

        result = DoughFormulationEngine().calculate(request)

        assert result.flour_mix is None
        assert any("no flour catalog" in w for w in result.warnings)

    def test_catalog_not_called_without_blend(self, neapolitan_request, flour_catalog, mocker):
        """Test the catalog is untouched when no blend is requested"""
        spy = mocker.spy(flour_catalog, "batch_fetch")

        DoughFormulationEngine(flour_catalog).calculate(neapolitan_request)

        assert spy.call_count == 0


class TestResultContents:
    """Schedule, advice and rejection"""

    def test_schedule_ends_at_bake_time(self, neapolitan_request, bake_time):
        """Test the schedule is built backward from the bake time"""
        result = calculate_formulation(neapolitan_request)

        assert result.schedule[-1].kind == StepKind.BAKE
        assert result.schedule[-1].scheduled_at == bake_time
        assert result.schedule[-1].temperature == 450
        assert any(step.kind == StepKind.COLD_PROOF for step in result.schedule)

    def test_no_schedule_without_bake_time(self, neapolitan_request):
        """Test schedule is empty when no bake time is given"""
        result = calculate_formulation(with_changes(neapolitan_request, bake_time=None))

        assert result.schedule == []

    def test_schedule_can_be_disabled(self, neapolitan_request):
        """Test generate_schedule=False"""
        result = calculate_formulation(with_changes(neapolitan_request, generate_schedule=False))

        assert result.schedule == []

    def test_style_oven_settings(self, neapolitan_request):
        """Test oven temperature and bake time come from the style"""
        result = calculate_formulation(with_changes(neapolitan_request, style="detroit"))

        assert result.oven_temperature == 250
        assert result.baking_time_seconds == 900

    def test_advice_is_attached(self, neapolitan_request):
        """Test water temperature, environment and tips are present"""
        result = calculate_formulation(with_changes(
            neapolitan_request, water_hardness=400, altitude=1500.0
        ))

        assert result.water_temperature.water_temperature == pytest.approx(24.4)
        assert result.environment.yeast_correction == pytest.approx(-5.0)
        assert result.water_analysis.fermentation_modifier == 0.9
        assert any("filtering" in r for r in result.recommendations)
        assert any("cornicione" in t for t in result.tips)

    def test_preferment_uses_four_factor_water_temperature(self, neapolitan_request):
        """Test the preferment temperature enters the DDT formula"""
        result = calculate_formulation(with_changes(
            neapolitan_request, preferment=PrefermentRequest(type="biga", percentage=40)
        ))

        assert result.water_temperature.preferment_temperature == 22.0
        assert result.water_temperature.water_temperature == pytest.approx(26.4)

    def test_missing_style_is_rejected(self, neapolitan_request):
        """Test no result is produced without a style"""
        with pytest.raises(FormulationError) as exc_info:
            calculate_formulation(with_changes(neapolitan_request, style=None))

        assert exc_info.value.as_dict()["field"] == "style"

    def test_zero_balls_rejected(self, neapolitan_request):
        """Test a zero ball count is rejected"""
        with pytest.raises(FormulationError, match="positive integer"):
            calculate_formulation(with_changes(neapolitan_request, ball_count=0))

    def test_full_preferment_rejected(self, neapolitan_request):
        """Test a 100% preferment is rejected before any computation"""
        request = with_changes(
            neapolitan_request, preferment=PrefermentRequest(type="poolish", percentage=100)
        )

        with pytest.raises(FormulationError) as exc_info:
            calculate_formulation(request)

        assert exc_info.value.code == "INVALID_PREFERMENT_PERCENTAGE"

    def test_schedule_warnings_are_reported(self, neapolitan_request):
        """Test a shortened cold proof shows up in the result warnings"""
        result = calculate_formulation(neapolitan_request)

        kinds = [step.kind for step in result.schedule]
        assert kinds.index(StepKind.MIX_DOUGH) < kinds.index(StepKind.COLD_PROOF)
        assert any("Cold proof shortened" in w for w in result.warnings)


class TestFlourSuggestion:
    """Flour suggestions through the engine"""

    def test_suggest_for_style(self, flour_catalog, mocker):
        """Test a New York suggestion resolves the flours in one lookup"""
        spy = mocker.spy(flour_catalog, "batch_fetch")

        suggestion = DoughFormulationEngine(flour_catalog).suggest_flour_mix(
            "new_york", ["caputo-pizzeria", "caputo-nuvola", "manitoba"]
        )

        assert spy.call_count == 1
        assert suggestion.success
        assert not suggestion.is_mix
        assert suggestion.blend[0].flour_id == "caputo-nuvola"

    def test_suggest_without_catalog(self):
        """Test no suggestion can be made without a catalog"""
        suggestion = DoughFormulationEngine().suggest_flour_mix("neapolitan", ["caputo-pizzeria"])

        assert not suggestion.success

    def test_optimize_flour_mix(self, flour_catalog):
        """Test the best pair proportion for a New York target"""
        suggestion = DoughFormulationEngine(flour_catalog).optimize_flour_mix(
            ["caputo-pizzeria", "manitoba"], style="new_york"
        )

        assert suggestion.success
        assert suggestion.is_mix
        assert [entry.percentage for entry in suggestion.blend] == [50.0, 50.0]
        assert suggestion.protein == 13.5
        assert suggestion.strength == 320
