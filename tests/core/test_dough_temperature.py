"""Tests for WaterTemperatureCalculator"""
import pytest

from core.dough_temperature import WaterTemperatureCalculator


class TestWaterTemperatureCalculator:
    """Test suite for WaterTemperatureCalculator class"""

    def test_target_dough_temperature(self):
        """Test DDT lookup with default"""
        assert WaterTemperatureCalculator.target_dough_temperature("neapolitan") == 24.0
        assert WaterTemperatureCalculator.target_dough_temperature("pan") == 26.0
        assert WaterTemperatureCalculator.target_dough_temperature("tavern_style") == 24.0

    def test_mixing_minutes(self):
        """Test mixing time per mixer and hydration"""
        assert WaterTemperatureCalculator.mixing_minutes("stand_mixer_home", 65.0) == 8
        assert WaterTemperatureCalculator.mixing_minutes("spiral_mixer", 65.0) == 5
        assert WaterTemperatureCalculator.mixing_minutes("hand_kneading", 65.0) == 12
        assert WaterTemperatureCalculator.mixing_minutes("hand_kneading", 75.0) == 9

    def test_friction_heat(self):
        """Test friction for hand kneading and a spiral mixer"""
        assert WaterTemperatureCalculator.friction_heat("hand_kneading", 65.0) == pytest.approx(3.6)
        assert WaterTemperatureCalculator.friction_heat("spiral_mixer", 65.0) == pytest.approx(4.5)

    def test_friction_hydration_factor_is_clamped(self):
        """Test very wet dough uses the 0.8 floor"""
        # 0.3 * 9 min * 0.8
        assert WaterTemperatureCalculator.friction_heat("hand_kneading", 95.0) == pytest.approx(2.2)

    def test_three_factor_formula(self):
        """Test water temperature without preferment"""
        result = WaterTemperatureCalculator.calculate(
            style="neapolitan", room_temperature=22.0, hydration=65.0
        )

        # 24 * 3 - 22 - 22 - 3.6
        assert result.water_temperature == pytest.approx(24.4)
        assert result.flour_temperature == 22.0
        assert result.preferment_temperature is None
        assert result.warnings == []
        assert "x 3" in result.formula

    def test_four_factor_formula_with_preferment(self):
        """Test water temperature with a preferment"""
        result = WaterTemperatureCalculator.calculate(
            style="neapolitan", room_temperature=22.0, hydration=65.0,
            preferment_temperature=22.0,
        )

        # 24 * 4 - 22 - 22 - 22 - 3.6
        assert result.water_temperature == pytest.approx(26.4)
        assert "x 4" in result.formula

    def test_hot_kitchen_is_clamped_low(self):
        """Test a result below 2 °C is clamped and reported"""
        result = WaterTemperatureCalculator.calculate(
            style="neapolitan", room_temperature=35.0, hydration=65.0
        )

        assert result.water_temperature == 2.0
        assert len(result.warnings) == 1
        assert "ice water" in result.warnings[0]
        assert any("ice cubes" in r for r in result.recommendations)
        assert any("room is warm" in r for r in result.recommendations)

    def test_cold_kitchen_is_clamped_high(self):
        """Test a result above 40 °C is clamped and reported"""
        result = WaterTemperatureCalculator.calculate(
            style="neapolitan", room_temperature=10.0, hydration=65.0,
            flour_temperature=10.0,
        )

        assert result.water_temperature == 40.0
        assert "damages yeast" in result.warnings[0]
