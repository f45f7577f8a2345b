"""
Preferment Splitting Service
Carves a poolish, biga or mature starter out of the total dough and
reports what is left for the main dough
"""

import logging
from decimal import Decimal
from typing import List, Tuple

from config.dough_config import BIGA_HYDRATION_RANGE, PREFERMENT_TYPES
from core.bakers_percentage import to_grams
from core.constants import FLOUR_PERCENTAGE
from core.exceptions import FormulationError
from core.leavening_converter import LeaveningConverter
from core.models import (
    IngredientMasses,
    LeaveningAgent,
    MainDoughResult,
    PrefermentRequest,
    PrefermentResult,
    PrefermentType,
)

logger = logging.getLogger(__name__)


class PrefermentSplitter:
    """Splits total ingredient masses into preferment and main dough"""

    @staticmethod
    def hydration_for(preferment: PrefermentRequest) -> float:
        """
        Hydration (%) of the preferment, honouring an explicit override.

        Examples:
            >>> PrefermentSplitter.hydration_for(PrefermentRequest(type="poolish"))
            100.0
            >>> PrefermentSplitter.hydration_for(PrefermentRequest(type="biga"))
            55.0
        """
        if preferment.hydration is not None:
            return preferment.hydration
        return PREFERMENT_TYPES[preferment.type.value]["hydration"]

    @staticmethod
    def split(
        total: IngredientMasses,
        preferment: PrefermentRequest,
        agent: LeaveningAgent = LeaveningAgent.FRESH
    ) -> Tuple[PrefermentResult, MainDoughResult, List[str]]:
        """
        Split the total masses into a preferment and the main dough.

        Main dough = total - preferment for flour, water and leavening, computed
        on 0.01 g decimals so the two parts add back up to the total exactly.
        Water and leavening carved out for the preferment are capped at the
        totals so the main dough never goes negative.

        Args:
            total: Total ingredient masses
            preferment: Preferment type, share of flour and maturation hours
            agent: Leavening agent used for the whole dough

        Returns:
            Tuple of (preferment, main dough, warnings)

        Raises:
            FormulationError: If the preferment percentage is not in (0, 100)
        """
        if not (0.0 < preferment.percentage < FLOUR_PERCENTAGE):
            raise FormulationError(
                "INVALID_PREFERMENT_PERCENTAGE",
                field="preferment.percentage",
                value=preferment.percentage,
            )

        warnings = []
        profile = PREFERMENT_TYPES[preferment.type.value]
        hydration = PrefermentSplitter.hydration_for(preferment)

        if preferment.type == PrefermentType.BIGA and preferment.hydration is not None:
            low, high = BIGA_HYDRATION_RANGE
            if not (low <= hydration <= high):
                warnings.append(
                    f"Biga hydration {hydration:.0f}% is outside the usual "
                    f"{low:.0f}-{high:.0f}% range"
                )

        hundred = Decimal(str(FLOUR_PERCENTAGE))
        pref_flour = to_grams(total.flour * Decimal(str(preferment.percentage)) / hundred)
        pref_water = to_grams(pref_flour * Decimal(str(hydration)) / hundred)

        if pref_water > total.water:
            warnings.append(
                f"{profile['display_name']} needs {pref_water:.1f}g water but the dough "
                f"only has {total.water:.1f}g; all dough water goes into the preferment"
            )
            logger.warning(
                f"[PREFERMENT] Water capped at {total.water}g (requested {pref_water}g)"
            )
            pref_water = total.water

        pref_leavening = Decimal("0.00")
        if LeaveningConverter.is_mass_convertible(agent):
            fresh = float(pref_flour) * profile["yeast_fraction"]
            pref_leavening = to_grams(
                LeaveningConverter.convert(fresh, LeaveningAgent.FRESH, agent)
            )
        if pref_leavening > total.leavening:
            warnings.append(
                f"{profile['display_name']} would use more leavening than the dough "
                f"contains; capped at {total.leavening:.2f}g"
            )
            pref_leavening = total.leavening

        instructions = profile["instructions"].format(
            flour=f"{pref_flour:.0f}",
            water=f"{pref_water:.0f}",
            yeast=f"{pref_leavening:.2f}",
            hours=f"{preferment.hours:g}",
        )

        preferment_result = PrefermentResult(
            type=preferment.type,
            flour=pref_flour,
            water=pref_water,
            leavening=pref_leavening,
            hours=preferment.hours,
            hydration=hydration,
            instructions=instructions,
        )

        main_dough = MainDoughResult(
            flour=total.flour - pref_flour,
            water=total.water - pref_water,
            salt=total.salt,
            leavening=total.leavening - pref_leavening,
            oil=total.oil,
            sugar=total.sugar,
        )

        logger.debug(
            f"[PREFERMENT] {preferment.type.value}: flour={pref_flour}g water={pref_water}g "
            f"leavening={pref_leavening}g"
        )
        return preferment_result, main_dough, warnings
