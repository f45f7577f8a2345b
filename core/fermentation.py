"""
Fermentation Kinetics Service
Splits fermentation time by method and derives the leavening percentage
from a Q10 temperature model
"""

import logging
import math
from typing import Callable, Dict, List, Optional, Tuple, Union

from config.dough_config import FERMENTATION_METHODS
from core.constants import (
    COLD_MAX_ROOM_HOURS,
    COLD_ROOM_FRACTION,
    FLOUR_STRENGTH_COEFFICIENT,
    LONG_FERMENTATION_HOURS,
    MAX_TIME_EXPONENT,
    MIN_EFFECTIVE_HOURS,
    MIN_TIME_EXPONENT,
    MIXED_ROOM_FRACTION,
    Q10,
    REFERENCE_HOURS,
    REFERENCE_TEMPERATURE,
    REFERENCE_YEAST_PERCENTAGE,
    SALT_COEFFICIENT,
    SALT_THRESHOLD,
    SHORT_FERMENTATION_HOURS,
    STRONG_FLOUR_THRESHOLD,
    SUGAR_COEFFICIENT,
    WEAK_FLOUR_THRESHOLD,
)
from core.exceptions import FormulationError
from core.models import FermentationMethod, LeaveningCalculation, LeaveningAgent

logger = logging.getLogger(__name__)


# ============================================================================
# FERMENTATION STRATEGIES
# ============================================================================

def _split_room_temperature(total_hours: float) -> Tuple[float, float]:
    return total_hours, 0.0


def _split_cold(total_hours: float) -> Tuple[float, float]:
    room_hours = min(COLD_MAX_ROOM_HOURS, total_hours * COLD_ROOM_FRACTION)
    return room_hours, total_hours - room_hours


def _split_mixed(total_hours: float) -> Tuple[float, float]:
    room_hours = total_hours * MIXED_ROOM_FRACTION
    return room_hours, total_hours - room_hours


FERMENTATION_STRATEGIES: Dict[str, Callable[[float], Tuple[float, float]]] = {
    FermentationMethod.ROOM_TEMPERATURE.value: _split_room_temperature,
    FermentationMethod.COLD.value: _split_cold,
    FermentationMethod.MIXED.value: _split_mixed,
    FermentationMethod.SAME_DAY.value: _split_room_temperature,
}


def _method_key(method: Union[FermentationMethod, str]) -> str:
    key = method.value if isinstance(method, FermentationMethod) else str(method)
    if key not in FERMENTATION_STRATEGIES:
        raise FormulationError(
            "UNKNOWN_FERMENTATION_METHOD", field="fermentation_method", value=key
        )
    return key


def split_hours(
    method: Union[FermentationMethod, str],
    total_hours: float
) -> Tuple[float, float]:
    """
    Split total fermentation time into (room_hours, fridge_hours).

    Examples:
        >>> split_hours("cold", 24)
        (2.0, 22.0)
        >>> split_hours("mixed", 10)
        (3.0, 7.0)
    """
    room_hours, fridge_hours = FERMENTATION_STRATEGIES[_method_key(method)](total_hours)
    return float(room_hours), float(fridge_hours)


def base_percentage(method: Union[FermentationMethod, str]) -> float:
    """Reference fresh-yeast dose (%) for the method"""
    return FERMENTATION_METHODS[_method_key(method)].get(
        "base_percentage", REFERENCE_YEAST_PERCENTAGE
    )


def uses_fridge(method: Union[FermentationMethod, str]) -> bool:
    """Whether the method has a refrigerated phase"""
    return FERMENTATION_METHODS[_method_key(method)]["uses_fridge"]


# ============================================================================
# KINETICS MODEL
# ============================================================================

class FermentationKineticsModel:
    """Q10 model of yeast activity versus temperature and time"""

    @staticmethod
    def temperature_factor(temperature: float) -> float:
        """
        Relative fermentation rate at a temperature (1.0 at 20 °C).

        Formula: Q10 ** ((T - 20) / 10)

        Examples:
            >>> FermentationKineticsModel.temperature_factor(20.0)
            1.0
            >>> FermentationKineticsModel.temperature_factor(30.0)
            2.5
        """
        return Q10 ** ((temperature - REFERENCE_TEMPERATURE) / 10.0)

    @staticmethod
    def effective_hours(
        room_hours: float,
        room_temperature: float,
        fridge_hours: float,
        fridge_temperature: float
    ) -> float:
        """Fermentation time expressed as hours at 20 °C, floored at 1 hour"""
        effective = (
            room_hours * FermentationKineticsModel.temperature_factor(room_temperature)
            + fridge_hours * FermentationKineticsModel.temperature_factor(fridge_temperature)
        )
        return max(MIN_EFFECTIVE_HOURS, effective)

    @staticmethod
    def time_exponent(effective_hours: float) -> float:
        """
        Exponent applied to the reference dose for the effective time.

        Formula: log(8) / log(E), capped at 2.0 below 4 h and floored at 0.15
        above 96 h.

        Examples:
            >>> FermentationKineticsModel.time_exponent(8.0)
            1.0
            >>> FermentationKineticsModel.time_exponent(1.0)
            2.0
        """
        log_hours = math.log(effective_hours)
        if log_hours <= 0:
            return MAX_TIME_EXPONENT

        exponent = math.log(REFERENCE_HOURS) / log_hours
        if effective_hours < SHORT_FERMENTATION_HOURS:
            exponent = min(exponent, MAX_TIME_EXPONENT)
        if effective_hours > LONG_FERMENTATION_HOURS:
            exponent = max(exponent, MIN_TIME_EXPONENT)
        return exponent

    @staticmethod
    def strength_factor(flour_strength: Optional[float]) -> float:
        """Correction for flour strength W (strong flour needs more leavening)"""
        if flour_strength is None:
            return 1.0
        if flour_strength > STRONG_FLOUR_THRESHOLD:
            return 1 + (flour_strength - STRONG_FLOUR_THRESHOLD) * FLOUR_STRENGTH_COEFFICIENT
        if flour_strength < WEAK_FLOUR_THRESHOLD:
            return 1 - (WEAK_FLOUR_THRESHOLD - flour_strength) * FLOUR_STRENGTH_COEFFICIENT
        return 1.0

    @staticmethod
    def salt_factor(salt: float) -> float:
        """Correction for salt above 3% (salt inhibits yeast)"""
        if salt > SALT_THRESHOLD:
            return 1 + (salt - SALT_THRESHOLD) * SALT_COEFFICIENT
        return 1.0

    @staticmethod
    def sugar_factor(sugar: float) -> float:
        """Correction for sugar (extra food for the yeast)"""
        if sugar > 0:
            return 1 - sugar * SUGAR_COEFFICIENT
        return 1.0

    @staticmethod
    def calculate(
        total_hours: float,
        method: Union[FermentationMethod, str],
        room_temperature: float,
        fridge_temperature: float,
        flour_strength: Optional[float] = None,
        salt: float = 0.0,
        sugar: float = 0.0,
        agent: LeaveningAgent = LeaveningAgent.FRESH
    ) -> LeaveningCalculation:
        """
        Calculate the fresh-yeast percentage for a fermentation plan.

        Args:
            total_hours: Total fermentation time (h)
            method: Fermentation method
            room_temperature: Room temperature (°C)
            fridge_temperature: Fridge temperature (°C)
            flour_strength: Flour W, optional
            salt: Salt (% of flour)
            sugar: Sugar (% of flour)
            agent: Leavening agent the caller will convert to

        Returns:
            LeaveningCalculation with fresh_percentage set and agent_percentage
            equal to it (conversion happens upstream)

        Examples:
            >>> calc = FermentationKineticsModel.calculate(8, "room_temperature", 20.0, 4.0)
            >>> round(calc.fresh_percentage, 3)
            0.2
        """
        room_hours, fridge_hours = split_hours(method, total_hours)
        effective = FermentationKineticsModel.effective_hours(
            room_hours, room_temperature, fridge_hours, fridge_temperature
        )
        exponent = FermentationKineticsModel.time_exponent(effective)
        reference = base_percentage(method)
        base = reference * exponent

        adjustments: List[str] = []
        percentage = base

        strength = FermentationKineticsModel.strength_factor(flour_strength)
        if strength != 1.0:
            percentage *= strength
            direction = "strong" if strength > 1.0 else "weak"
            adjustments.append(
                f"Flour W{flour_strength:.0f} is {direction}: leavening x{strength:.3f}"
            )

        salt_adjust = FermentationKineticsModel.salt_factor(salt)
        if salt_adjust != 1.0:
            percentage *= salt_adjust
            adjustments.append(f"Salt {salt}% slows yeast: leavening x{salt_adjust:.3f}")

        sugar_adjust = FermentationKineticsModel.sugar_factor(sugar)
        if sugar_adjust != 1.0:
            percentage *= sugar_adjust
            adjustments.append(f"Sugar {sugar}% feeds yeast: leavening x{sugar_adjust:.3f}")

        logger.debug(
            f"[KINETICS] method={_method_key(method)} E={effective:.2f}h "
            f"exponent={exponent:.4f} base={base:.4f}% adjusted={percentage:.4f}%"
        )

        return LeaveningCalculation(
            agent=agent,
            fresh_percentage=percentage,
            agent_percentage=percentage,
            room_hours=room_hours,
            fridge_hours=fridge_hours,
            effective_hours=round(effective, 3),
            breakdown={
                "room_hours": room_hours,
                "fridge_hours": fridge_hours,
                "effective_hours": round(effective, 3),
                "time_exponent": round(exponent, 4),
                "reference_percentage": reference,
                "base_percentage": round(base, 4),
                "strength_factor": round(strength, 4),
                "salt_factor": round(salt_adjust, 4),
                "sugar_factor": round(sugar_adjust, 4),
                "adjusted_percentage": round(percentage, 4),
            },
            adjustments=adjustments,
        )
