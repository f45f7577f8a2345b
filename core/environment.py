"""
Environmental Correction Service
Advisory adjustments for humidity, altitude and room temperature
"""

import math
from typing import List, Optional

from core.constants import (
    ALTITUDE_THRESHOLD,
    ALTITUDE_TIME_REDUCTION,
    ALTITUDE_YEAST_REDUCTION,
    BASE_HUMIDITY,
    BASE_ROOM_TEMPERATURE,
    COLD_ROOM_TEMPERATURE,
    HIGH_ALTITUDE,
    HIGH_HUMIDITY,
    HOT_ROOM_TEMPERATURE,
    HUMIDITY_HYDRATION_COEFFICIENT,
    LOW_HUMIDITY,
    MAX_ALTITUDE_YEAST_REDUCTION,
    MAX_FERMENTATION_TIME_CORRECTION,
    MAX_HYDRATION_CORRECTION,
    MIN_FERMENTATION_TIME_CORRECTION,
    PRESSURE_SCALE_HEIGHT,
    SEA_LEVEL_PRESSURE_HPA,
    TEMPERATURE_TIME_COEFFICIENT,
)
from core.models import EnvironmentalCorrections


class EnvironmentalCorrector:
    """Computes suggested corrections; the request itself is never modified"""

    @staticmethod
    def hydration_correction(humidity: float) -> float:
        """
        Hydration points to add (negative = remove) for the ambient humidity.

        Examples:
            >>> EnvironmentalCorrector.hydration_correction(70.0)
            -1.0
            >>> EnvironmentalCorrector.hydration_correction(50.0)
            0.0
        """
        correction = -(humidity - BASE_HUMIDITY) * HUMIDITY_HYDRATION_COEFFICIENT
        correction = max(-MAX_HYDRATION_CORRECTION, min(MAX_HYDRATION_CORRECTION, correction))
        return round(correction, 2) + 0.0

    @staticmethod
    def yeast_correction(altitude: float) -> float:
        """
        Percentage change of leavening for the altitude (always <= 0).

        Examples:
            >>> EnvironmentalCorrector.yeast_correction(1500.0)
            -5.0
        """
        if altitude <= ALTITUDE_THRESHOLD:
            return 0.0
        reduction = (altitude - ALTITUDE_THRESHOLD) / 1000.0 * ALTITUDE_YEAST_REDUCTION
        return round(-min(reduction, MAX_ALTITUDE_YEAST_REDUCTION), 2)

    @staticmethod
    def fermentation_time_correction(altitude: float, room_temperature: float) -> float:
        """
        Percentage change of fermentation time.

        Altitude above 500 m shortens fermentation; every °C above 22 °C shortens
        it by 5% and every °C below lengthens it by the same amount.

        Examples:
            >>> EnvironmentalCorrector.fermentation_time_correction(0.0, 24.0)
            -10.0
            >>> EnvironmentalCorrector.fermentation_time_correction(0.0, 18.0)
            20.0
        """
        correction = 0.0
        if altitude > ALTITUDE_THRESHOLD:
            correction -= (altitude - ALTITUDE_THRESHOLD) / 1000.0 * ALTITUDE_TIME_REDUCTION
        correction -= (room_temperature - BASE_ROOM_TEMPERATURE) * TEMPERATURE_TIME_COEFFICIENT
        correction = max(MIN_FERMENTATION_TIME_CORRECTION,
                         min(MAX_FERMENTATION_TIME_CORRECTION, correction))
        return round(correction, 2) + 0.0

    @staticmethod
    def pressure(altitude: float) -> float:
        """Barometric pressure (hPa) at the given altitude"""
        return round(SEA_LEVEL_PRESSURE_HPA * math.exp(-altitude / PRESSURE_SCALE_HEIGHT), 2)

    @staticmethod
    def recommendations(humidity: float, altitude: float, room_temperature: float) -> List[str]:
        """Human-readable advice for the current conditions"""
        notes = []

        if humidity > HIGH_HUMIDITY:
            notes.append(
                f"High humidity ({humidity:.0f}%): reduce hydration slightly and dust "
                "the bench with more flour."
            )
        elif humidity < LOW_HUMIDITY:
            notes.append(
                f"Low humidity ({humidity:.0f}%): keep the dough covered so it does not "
                "form a skin; a little extra water helps."
            )

        if altitude > HIGH_ALTITUDE:
            notes.append(
                f"High altitude ({altitude:.0f} m): dough rises faster, use less yeast "
                "and watch the fermentation closely."
            )
        elif altitude > ALTITUDE_THRESHOLD:
            notes.append(
                f"Moderate altitude ({altitude:.0f} m): fermentation may be slightly faster."
            )

        if room_temperature > HOT_ROOM_TEMPERATURE:
            notes.append(
                f"Warm room ({room_temperature:.0f}°C): use cold water and shorten the "
                "room-temperature phase."
            )
        elif room_temperature < COLD_ROOM_TEMPERATURE:
            notes.append(
                f"Cool room ({room_temperature:.0f}°C): use lukewarm water and allow "
                "extra fermentation time."
            )

        if not notes:
            notes.append("Environmental conditions are optimal, no adjustment needed.")
        return notes

    @staticmethod
    def calculate(
        room_temperature: float,
        humidity: Optional[float] = None,
        altitude: Optional[float] = None
    ) -> EnvironmentalCorrections:
        """
        Calculate every environmental correction.

        Args:
            room_temperature: Room temperature (°C)
            humidity: Relative humidity (%), defaults to 50
            altitude: Altitude (m), defaults to sea level

        Returns:
            EnvironmentalCorrections
        """
        humidity = BASE_HUMIDITY if humidity is None else humidity
        altitude = 0.0 if altitude is None else altitude

        return EnvironmentalCorrections(
            hydration_correction=EnvironmentalCorrector.hydration_correction(humidity),
            yeast_correction=EnvironmentalCorrector.yeast_correction(altitude),
            fermentation_time_correction=EnvironmentalCorrector.fermentation_time_correction(
                altitude, room_temperature
            ),
            pressure_hpa=EnvironmentalCorrector.pressure(altitude),
            recommendations=EnvironmentalCorrector.recommendations(
                humidity, altitude, room_temperature
            ),
        )
