"""
Dough Temperature Service
Calculates the water temperature needed to reach the desired dough
temperature (DDT) after mixing
"""

import logging
from typing import Optional, Union

from config.dough_config import (
    DEFAULT_FRICTION_FACTOR,
    DEFAULT_TARGET_DOUGH_TEMPERATURE,
    MIXER_FRICTION_FACTORS,
    MIXING_TIME_MULTIPLIERS,
    STYLE_TARGET_DOUGH_TEMPERATURES,
)
from core.constants import (
    BASE_MIXING_MINUTES,
    COLD_WATER_TEMPERATURE,
    FRICTION_HYDRATION_COEFFICIENT,
    HIGH_HYDRATION_MIXING_FACTOR,
    HIGH_HYDRATION_MIXING_THRESHOLD,
    HOT_ROOM_TEMPERATURE,
    MAX_FRICTION_HYDRATION_FACTOR,
    MAX_WATER_TEMPERATURE,
    MIN_FRICTION_HYDRATION_FACTOR,
    MIN_WATER_TEMPERATURE,
    REFERENCE_FRICTION_HYDRATION,
)
from core.models import MixerType, PizzaStyle, WaterTemperatureResult

logger = logging.getLogger(__name__)


def _key(value: Union[PizzaStyle, MixerType, str]) -> str:
    return value.value if hasattr(value, "value") else str(value)


class WaterTemperatureCalculator:
    """Service for desired-dough-temperature water calculations"""

    @staticmethod
    def target_dough_temperature(style: Union[PizzaStyle, str]) -> float:
        """
        Desired dough temperature for a style.

        Examples:
            >>> WaterTemperatureCalculator.target_dough_temperature("roman")
            23.0
            >>> WaterTemperatureCalculator.target_dough_temperature("custom")
            24.0
        """
        return STYLE_TARGET_DOUGH_TEMPERATURES.get(_key(style), DEFAULT_TARGET_DOUGH_TEMPERATURE)

    @staticmethod
    def mixing_minutes(mixer: Union[MixerType, str], hydration: float) -> int:
        """
        Estimated mixing time for a mixer and hydration.

        Examples:
            >>> WaterTemperatureCalculator.mixing_minutes("spiral_mixer", 65.0)
            5
            >>> WaterTemperatureCalculator.mixing_minutes("hand_kneading", 72.0)
            9
        """
        minutes = int(BASE_MIXING_MINUTES * MIXING_TIME_MULTIPLIERS.get(_key(mixer), 1.0))
        if hydration > HIGH_HYDRATION_MIXING_THRESHOLD:
            minutes = int(minutes * HIGH_HYDRATION_MIXING_FACTOR)
        return minutes

    @staticmethod
    def friction_heat(mixer: Union[MixerType, str], hydration: float) -> float:
        """
        Temperature rise (°C) caused by mixing.

        Wetter doughs heat up less; the hydration factor is clamped to 0.8-1.3.
        """
        factor = MIXER_FRICTION_FACTORS.get(_key(mixer), DEFAULT_FRICTION_FACTOR)
        minutes = WaterTemperatureCalculator.mixing_minutes(mixer, hydration)
        hydration_factor = 1 + (REFERENCE_FRICTION_HYDRATION - hydration) * FRICTION_HYDRATION_COEFFICIENT
        hydration_factor = max(MIN_FRICTION_HYDRATION_FACTOR,
                               min(MAX_FRICTION_HYDRATION_FACTOR, hydration_factor))
        return round(factor * minutes * hydration_factor, 1)

    @staticmethod
    def calculate(
        style: Union[PizzaStyle, str],
        room_temperature: float,
        hydration: float,
        mixer: Union[MixerType, str] = MixerType.HAND_KNEADING,
        flour_temperature: Optional[float] = None,
        preferment_temperature: Optional[float] = None
    ) -> WaterTemperatureResult:
        """
        Calculate the water temperature for the desired dough temperature.

        Formula (no preferment):   Tw = DDT*3 - Troom - Tflour - friction
        Formula (with preferment): Tw = DDT*4 - Troom - Tflour - Tpref - friction

        Results outside 2-40 °C are clamped and reported as warnings.

        Args:
            style: Pizza style (selects the DDT)
            room_temperature: Room temperature (°C)
            hydration: Dough hydration (%)
            mixer: Mixing method
            flour_temperature: Flour temperature (°C), defaults to room temperature
            preferment_temperature: Preferment temperature (°C), if one is used

        Returns:
            WaterTemperatureResult
        """
        ddt = WaterTemperatureCalculator.target_dough_temperature(style)
        flour_temperature = room_temperature if flour_temperature is None else flour_temperature
        friction = WaterTemperatureCalculator.friction_heat(mixer, hydration)
        minutes = WaterTemperatureCalculator.mixing_minutes(mixer, hydration)

        if preferment_temperature is None:
            water = ddt * 3 - room_temperature - flour_temperature - friction
            formula = (
                f"({ddt:g} x 3) - {room_temperature:g} - {flour_temperature:g} "
                f"- {friction:g} = {water:.1f}°C"
            )
        else:
            water = ddt * 4 - room_temperature - flour_temperature - preferment_temperature - friction
            formula = (
                f"({ddt:g} x 4) - {room_temperature:g} - {flour_temperature:g} "
                f"- {preferment_temperature:g} - {friction:g} = {water:.1f}°C"
            )

        warnings = []
        recommendations = []

        if water < MIN_WATER_TEMPERATURE:
            warnings.append(
                f"Required water temperature ({water:.1f}°C) is below "
                f"{MIN_WATER_TEMPERATURE:g}°C; use ice water and refrigerate the flour"
            )
            logger.info(f"[DDT] Water temperature {water:.1f}°C clamped to {MIN_WATER_TEMPERATURE}")
            water = MIN_WATER_TEMPERATURE
        elif water > MAX_WATER_TEMPERATURE:
            warnings.append(
                f"Required water temperature ({water:.1f}°C) is above "
                f"{MAX_WATER_TEMPERATURE:g}°C; warm water damages yeast, use a warm "
                "spot for fermentation instead"
            )
            logger.info(f"[DDT] Water temperature {water:.1f}°C clamped to {MAX_WATER_TEMPERATURE}")
            water = MAX_WATER_TEMPERATURE

        if water < COLD_WATER_TEMPERATURE:
            recommendations.append("Use very cold water, adding ice cubes if needed")
        if room_temperature > HOT_ROOM_TEMPERATURE:
            recommendations.append(
                "The room is warm: mix quickly and keep the dough covered in a cool place"
            )

        return WaterTemperatureResult(
            target_dough_temperature=ddt,
            room_temperature=room_temperature,
            flour_temperature=flour_temperature,
            preferment_temperature=preferment_temperature,
            friction_factor=friction,
            mixing_minutes=minutes,
            water_temperature=round(water, 1),
            formula=formula,
            warnings=warnings,
            recommendations=recommendations,
        )
