"""
Baker's Percentage Service
Handles ingredient mass calculations where every ingredient is a
percentage of the flour weight
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence, Union

import numpy as np

from core.constants import (
    FLOUR_PERCENTAGE,
    MASS_QUANTUM,
    PERCENTAGE_DECIMALS,
    PROVISIONAL_LEAVENING_PERCENTAGE,
)
from core.models import (
    BakersPercentages,
    BonusIngredient,
    BonusIngredientMass,
    FlourBlendEntry,
    FlourMixParameters,
    FlourPortion,
    FlourSpec,
    IngredientMasses,
)

logger = logging.getLogger(__name__)

BLEND_SUM_TOLERANCE = 0.1


def to_grams(value: Union[float, Decimal]) -> Decimal:
    """
    Quantize a mass to the reported 0.01 g resolution.

    Examples:
        >>> to_grams(16.6656)
        Decimal('16.67')
    """
    return Decimal(str(value)).quantize(MASS_QUANTUM, rounding=ROUND_HALF_UP)


class BakersPercentageCalculator:
    """Service for converting baker's percentages into grams and back"""

    @staticmethod
    def flour_mass(
        total_dough: float,
        hydration: float,
        salt: float,
        oil: float = 0.0,
        sugar: float = 0.0,
        bonus_total: float = 0.0,
        leavening: float = PROVISIONAL_LEAVENING_PERCENTAGE
    ) -> float:
        """
        Solve the flour mass from the total dough weight.

        Formula: F = T / (100 + H + S + O + U + B + Y) * 100

        Args:
            total_dough: Total dough weight (g)
            hydration: Water (% of flour)
            salt: Salt (% of flour)
            oil: Oil (% of flour)
            sugar: Sugar (% of flour)
            bonus_total: Sum of additional ingredient percentages
            leavening: Leavening (% of flour); a provisional 0.5% when unknown

        Returns:
            Flour mass (g), unrounded

        Examples:
            >>> round(BakersPercentageCalculator.flour_mass(1000.0, 65.0, 2.8), 1)
            594.2
        """
        total_percentage = (FLOUR_PERCENTAGE + hydration + salt + oil + sugar
                            + bonus_total + leavening)
        return total_dough / total_percentage * FLOUR_PERCENTAGE

    @staticmethod
    def ingredient_mass(flour: float, percentage: float) -> float:
        """
        Mass of an ingredient given as a percentage of flour.

        Examples:
            >>> BakersPercentageCalculator.ingredient_mass(600.0, 65.0)
            390.0
        """
        return flour * percentage / FLOUR_PERCENTAGE

    @staticmethod
    def calculate_masses(
        total_dough: float,
        hydration: float,
        salt: float,
        leavening: float,
        oil: float = 0.0,
        sugar: float = 0.0,
        bonus_ingredients: Optional[Sequence[BonusIngredient]] = None
    ) -> IngredientMasses:
        """
        Calculate every ingredient mass for a total dough weight.

        The flour is solved with the actual leavening percentage so that the
        reported masses add back up to the total dough weight.

        Args:
            total_dough: Total dough weight (g)
            hydration: Water (% of flour)
            salt: Salt (% of flour)
            leavening: Leavening in its final form (% of flour)
            oil: Oil (% of flour)
            sugar: Sugar (% of flour)
            bonus_ingredients: Additional ingredients with their percentages

        Returns:
            IngredientMasses quantized to 0.01 g
        """
        bonus_ingredients = list(bonus_ingredients or [])
        bonus_total = sum(item.percentage for item in bonus_ingredients)

        flour = BakersPercentageCalculator.flour_mass(
            total_dough, hydration, salt, oil, sugar, bonus_total, leavening
        )

        def grams(percentage: float) -> Decimal:
            return to_grams(BakersPercentageCalculator.ingredient_mass(flour, percentage))

        bonus = [
            BonusIngredientMass(
                name=item.name, percentage=item.percentage, grams=grams(item.percentage)
            )
            for item in bonus_ingredients
        ]

        return IngredientMasses(
            total_dough=to_grams(total_dough),
            flour=to_grams(flour),
            water=grams(hydration),
            salt=grams(salt),
            leavening=grams(leavening),
            oil=grams(oil),
            sugar=grams(sugar),
            bonus=bonus,
        )

    @staticmethod
    def recompute_percentages(masses: IngredientMasses) -> BakersPercentages:
        """
        Recompute baker's percentages from reported masses.

        Examples:
            >>> masses = IngredientMasses(total_dough=165.0, flour=100.0, water=62.0,
            ...                           salt=2.5, leavening=0.5)
            >>> BakersPercentageCalculator.recompute_percentages(masses).water
            62.0
        """
        if masses.flour <= 0:
            raise ValueError("Flour mass must be positive to compute percentages")

        flour = float(masses.flour)

        def percent(grams: Decimal) -> float:
            return round(float(grams) / flour * FLOUR_PERCENTAGE, PERCENTAGE_DECIMALS)

        return BakersPercentages(
            flour=FLOUR_PERCENTAGE,
            water=percent(masses.water),
            salt=percent(masses.salt),
            leavening=percent(masses.leavening),
            oil=percent(masses.oil),
            sugar=percent(masses.sugar),
            bonus={item.name: percent(item.grams) for item in masses.bonus},
        )


class FlourBlendCalculator:
    """Weighted flour-blend parameters and per-flour portions"""

    @staticmethod
    def _weighted(values: List[Optional[float]], weights: List[float]) -> Optional[float]:
        """Weighted mean over the entries that define the value"""
        pairs = [(v, w) for v, w in zip(values, weights) if v is not None]
        if not pairs:
            return None
        vals, wts = zip(*pairs)
        return round(float(np.average(np.array(vals), weights=np.array(wts))), 2)

    @staticmethod
    def mix_parameters(
        entries: Sequence[FlourBlendEntry],
        flours: Dict[str, FlourSpec],
        total_flour: Optional[float] = None
    ) -> FlourMixParameters:
        """
        Calculate blended flour parameters.

        Entries whose id is not in ``flours`` are dropped and the blend is
        recomputed over the remaining ones.

        Args:
            entries: Requested blend (flour id and percentage)
            flours: Flour specifications found by the catalog, keyed by id
            total_flour: Total flour mass (g); when given, portions are included

        Returns:
            FlourMixParameters with weighted protein, W, extensibility and
            hydration band
        """
        warnings = []
        found = [entry for entry in entries if entry.flour_id in flours]
        missing = [entry.flour_id for entry in entries if entry.flour_id not in flours]

        for flour_id in missing:
            logger.warning(f"[BLEND] Flour '{flour_id}' not found, dropped from blend")
            warnings.append(f"Flour '{flour_id}' was not found and was left out of the blend")

        requested_sum = sum(entry.percentage for entry in entries)
        if entries and abs(requested_sum - FLOUR_PERCENTAGE) > BLEND_SUM_TOLERANCE:
            warnings.append(
                f"Flour blend percentages add up to {requested_sum:.1f}%, "
                "portions were normalised to 100%"
            )

        if not found:
            return FlourMixParameters(missing_ids=missing, warnings=warnings)

        specs = [flours[entry.flour_id] for entry in found]
        weights = [entry.percentage for entry in found]

        portions = []
        if total_flour is not None:
            portions = FlourBlendCalculator.flour_portions(found, flours, total_flour)

        return FlourMixParameters(
            portions=portions,
            protein=FlourBlendCalculator._weighted([s.protein for s in specs], weights),
            strength=FlourBlendCalculator._weighted([s.strength for s in specs], weights),
            extensibility=FlourBlendCalculator._weighted(
                [s.extensibility for s in specs], weights
            ),
            hydration_min=FlourBlendCalculator._weighted(
                [s.hydration_min for s in specs], weights
            ),
            hydration_max=FlourBlendCalculator._weighted(
                [s.hydration_max for s in specs], weights
            ),
            missing_ids=missing,
            warnings=warnings,
        )

    @staticmethod
    def flour_portions(
        entries: Sequence[FlourBlendEntry],
        flours: Dict[str, FlourSpec],
        total_flour: Union[float, Decimal]
    ) -> List[FlourPortion]:
        """
        Split the total flour mass across the blend.

        Percentages are normalised over the entries found in ``flours``. The
        last portion takes the rounding remainder so the grams add up to
        ``total_flour`` exactly.

        Examples:
            >>> specs = {"a": FlourSpec(flour_id="a", name="A", protein=12.0),
            ...          "b": FlourSpec(flour_id="b", name="B", protein=14.0)}
            >>> entries = [FlourBlendEntry(flour_id="a", percentage=70),
            ...            FlourBlendEntry(flour_id="b", percentage=30)]
            >>> [str(p.grams) for p in FlourBlendCalculator.flour_portions(entries, specs, 500.0)]
            ['350.00', '150.00']
        """
        found = [entry for entry in entries if entry.flour_id in flours]
        if not found:
            return []

        shares = np.array([entry.percentage for entry in found], dtype=float)
        shares = shares / shares.sum()

        total = to_grams(total_flour)
        grams = [to_grams(float(share) * float(total)) for share in shares[:-1]]
        grams.append(total - sum(grams, Decimal("0")))

        return [
            FlourPortion(
                flour_id=entry.flour_id,
                name=flours[entry.flour_id].name,
                percentage=round(float(share) * FLOUR_PERCENTAGE, 2),
                grams=portion,
            )
            for entry, share, portion in zip(found, shares, grams)
        ]
