"""
Dough Advisory Services
Flour analysis, water analysis and general tips for a formulation request
"""

from typing import List, Optional, Tuple

from config.dough_config import (
    DEFAULT_FLOUR_REQUIREMENT,
    STYLE_FERMENTATION_RANGES,
    STYLE_FLOUR_REQUIREMENTS,
    STYLE_PROFILES,
)
from core.constants import (
    ACIDIC_WATER_PH,
    ALKALINE_WATER_PH,
    HARD_WATER_HARDNESS,
    HIGH_PROTEIN,
    HOT_ROOM_TEMPERATURE,
    LOW_PROTEIN,
    MAX_FLOUR_HYDRATION,
    SOFT_WATER_HARDNESS,
    VERY_HARD_WATER_HARDNESS,
    VERY_STRONG_FLOUR_W,
    WEAK_FLOUR_W,
)
from core.models import (
    FermentationMethod,
    FlourAnalysis,
    FlourMixParameters,
    FormulationRequest,
    PizzaStyle,
    PrefermentType,
    TipCollection,
    WaterAnalysis,
)


class FlourAnalysisAdvisor:
    """Checks flour strength and protein against hydration, time and style"""

    @staticmethod
    def suggested_hydration_band(strength: float) -> Tuple[float, float]:
        """
        Hydration band (%) a flour of strength W handles comfortably.

        Examples:
            >>> FlourAnalysisAdvisor.suggested_hydration_band(300)
            (60.0, 73.0)
        """
        low = 55 + (strength - 200) * 0.05
        high = 65 + (strength - 200) * 0.08
        return round(low, 1), round(high, 1)

    @staticmethod
    def max_hydration(strength: float) -> float:
        """
        Highest hydration (%) the flour can absorb.

        Examples:
            >>> FlourAnalysisAdvisor.max_hydration(250)
            90.0
            >>> FlourAnalysisAdvisor.max_hydration(150)
            80.0
        """
        return min(MAX_FLOUR_HYDRATION, 50 + strength / 5)

    @staticmethod
    def max_fermentation_hours(strength: float) -> int:
        """
        Longest fermentation (h) the flour tolerates.

        Examples:
            >>> FlourAnalysisAdvisor.max_fermentation_hours(210)
            12
            >>> FlourAnalysisAdvisor.max_fermentation_hours(360)
            96
        """
        if strength < 220:
            return 12
        if strength < 260:
            return 24
        if strength < 300:
            return 48
        if strength < 350:
            return 72
        return 96

    @staticmethod
    def analyze(
        request: FormulationRequest,
        flour_mix: Optional[FlourMixParameters] = None
    ) -> FlourAnalysis:
        """
        Analyze the flour of a request.

        Blend parameters take precedence over the single-flour values of the
        request when both are present.
        """
        strength = request.flour_strength
        protein = request.flour_protein
        if flour_mix is not None:
            strength = flour_mix.strength if flour_mix.strength is not None else strength
            protein = flour_mix.protein if flour_mix.protein is not None else protein

        hydration = request.hydration
        hours = request.total_fermentation_hours
        style = request.style
        warnings = []
        recommendations = []
        band = (None, None)
        max_hydration = None
        max_hours = None

        if strength is not None:
            if strength < WEAK_FLOUR_W:
                warnings.append(
                    f"Weak flour (W{strength:.0f}): it will not hold long fermentations well"
                )
                if hours > 12:
                    recommendations.append(
                        "Use a stronger flour (W250+) or keep fermentation under 12 hours"
                    )
            elif strength > VERY_STRONG_FLOUR_W:
                recommendations.append(
                    f"Very strong flour (W{strength:.0f}): ideal for long fermentations "
                    "and high hydration"
                )
                if hours < 24:
                    recommendations.append(
                        "Extend fermentation to at least 24 hours to make the most of this flour"
                    )

            band = FlourAnalysisAdvisor.suggested_hydration_band(strength)
            if hydration < band[0] - 5:
                recommendations.append(
                    f"Hydration {hydration:g}% is low for W{strength:.0f}; "
                    f"try {band[0]:g}-{band[1]:g}%"
                )
            elif hydration > band[1] + 5:
                warnings.append(
                    f"Hydration {hydration:g}% is high for W{strength:.0f}; the dough may "
                    "be hard to handle"
                )

            max_hydration = FlourAnalysisAdvisor.max_hydration(strength)
            if hydration > max_hydration:
                warnings.append(
                    f"Hydration {hydration:g}% exceeds what this flour can absorb "
                    f"({max_hydration:g}%)"
                )

            max_hours = FlourAnalysisAdvisor.max_fermentation_hours(strength)
            if hours > max_hours:
                warnings.append(
                    f"{hours:g} hours of fermentation is too long for W{strength:.0f}; "
                    f"stay under {max_hours} hours"
                )

        if protein is not None:
            if protein < LOW_PROTEIN and hydration > 65:
                warnings.append(
                    f"Low protein ({protein:g}%) with {hydration:g}% hydration may give a "
                    "slack, sticky dough"
                )
            if protein > HIGH_PROTEIN and style == PizzaStyle.NEAPOLITAN:
                recommendations.append(
                    "High-protein flour for Neapolitan: an autolyse will improve extensibility"
                )

        if style == PizzaStyle.NEAPOLITAN:
            if not (58 <= hydration <= 70):
                recommendations.append("Neapolitan dough usually sits between 58% and 70% hydration")
            if strength is not None and not (250 <= strength <= 320):
                recommendations.append("Neapolitan dough works best with W250-320 flour")
        elif style == PizzaStyle.ROMAN and hydration < 70:
            recommendations.append("Roman teglia benefits from 70%+ hydration for an open crumb")
        elif style == PizzaStyle.NEW_YORK and protein is not None and protein < 12:
            recommendations.append("New York style needs 12%+ protein for its characteristic chew")

        if style is not None and (strength is not None or protein is not None):
            requirement = STYLE_FLOUR_REQUIREMENTS.get(style.value, DEFAULT_FLOUR_REQUIREMENT)
            if protein is not None and abs(protein - requirement["protein"]) > requirement["protein_tolerance"]:
                recommendations.append(
                    f"Target protein for this style is about {requirement['protein']:g}% "
                    f"(current {protein:g}%)"
                )
            if strength is not None and abs(strength - requirement["strength"]) > requirement["strength_tolerance"]:
                recommendations.append(
                    f"Target strength for this style is about W{requirement['strength']} "
                    f"(current W{strength:.0f})"
                )
            if requirement["note"]:
                recommendations.append(requirement["note"])

        return FlourAnalysis(
            strength=strength,
            protein=protein,
            suggested_hydration_min=band[0],
            suggested_hydration_max=band[1],
            max_hydration=max_hydration,
            max_fermentation_hours=max_hours,
            warnings=warnings,
            recommendations=recommendations,
        )


class WaterAnalysisAdvisor:
    """Effect of water hardness and pH on fermentation and gluten"""

    @staticmethod
    def analyze(hardness: Optional[float] = None, ph: Optional[float] = None) -> WaterAnalysis:
        """
        Analyze water hardness (mg/l CaCO3) and pH.

        Examples:
            >>> WaterAnalysisAdvisor.analyze(hardness=30).fermentation_modifier
            1.1
            >>> WaterAnalysisAdvisor.analyze(hardness=250).gluten_modifier
            1.05
        """
        fermentation = 1.0
        gluten = 1.0
        effects = []
        recommendations = []

        if hardness is not None:
            if hardness < SOFT_WATER_HARDNESS:
                fermentation *= 1.1
                gluten *= 0.95
                effects.append("Soft water: faster fermentation, slightly weaker gluten")
                recommendations.append("With soft water a little extra salt tightens the dough")
            elif hardness > HARD_WATER_HARDNESS:
                fermentation *= 0.9
                gluten *= 1.05
                effects.append("Hard water: slower fermentation, tighter gluten")
                if hardness > VERY_HARD_WATER_HARDNESS:
                    recommendations.append("Very hard water: consider filtering it")
            else:
                effects.append("Moderately hard water: optimal for dough")

        if ph is not None:
            if ph < ACIDIC_WATER_PH:
                fermentation *= 1.05
                effects.append("Slightly acidic water: yeast activity is a little higher")
            elif ph > ALKALINE_WATER_PH:
                fermentation *= 0.95
                effects.append("Alkaline water: yeast activity is reduced")
                recommendations.append(
                    "Alkaline water slows fermentation; allow a little more time or yeast"
                )

        return WaterAnalysis(
            hardness=hardness,
            ph=ph,
            fermentation_modifier=round(fermentation, 2),
            gluten_modifier=round(gluten, 2),
            effects=effects,
            recommendations=recommendations,
        )


class TipAdvisor:
    """General tips, warnings and recommendations for a request"""

    @staticmethod
    def _hydration_tips(request: FormulationRequest, tips: List[str]) -> None:
        if request.hydration >= 70:
            tips.append("High hydration: use stretch-and-folds instead of heavy kneading")
            tips.append("Wet your hands to handle the dough without sticking")
        elif request.hydration < 55:
            tips.append("Low hydration gives a stiff dough; knead a little longer")

    @staticmethod
    def _method_tips(request: FormulationRequest, tips: List[str]) -> None:
        if request.fermentation_method == FermentationMethod.COLD:
            tips.append("Keep the dough in a sealed container in the coldest part of the fridge")
            tips.append("Take the dough out about 2 hours before shaping")
        elif request.fermentation_method == FermentationMethod.MIXED:
            tips.append("Let the dough start at room temperature before it goes into the fridge")
        elif request.fermentation_method == FermentationMethod.SAME_DAY:
            tips.append("Same-day dough: keep it somewhere warm and watch the volume, not the clock")

    @staticmethod
    def _style_tips(request: FormulationRequest, tips: List[str]) -> None:
        profile = STYLE_PROFILES.get(request.style.value, STYLE_PROFILES["custom"])
        if profile["oven"] == "home_oven":
            tips.append("Use a baking stone or steel on the top shelf")
            tips.append("Preheat the oven for at least 45 minutes")
        if request.style == PizzaStyle.NEAPOLITAN:
            tips.append("Bake hot and fast for leopard spotting on the cornicione")
            tips.append("Never use a rolling pin; push the air into the rim by hand")
        if request.preferment is not None:
            if request.preferment.type == PrefermentType.POOLISH:
                tips.append("The poolish is ready when the surface is full of bubbles")
            elif request.preferment.type == PrefermentType.BIGA:
                tips.append("Break the biga into small pieces before adding it to the dough")
            else:
                tips.append("Use the starter at its peak, when it has doubled")

    @staticmethod
    def generate(request: FormulationRequest) -> TipCollection:
        """
        Generate tips, warnings and recommendations for a request.

        Args:
            request: Validated formulation request

        Returns:
            TipCollection
        """
        tips: List[str] = []
        warnings: List[str] = []
        recommendations: List[str] = []

        TipAdvisor._hydration_tips(request, tips)
        TipAdvisor._method_tips(request, tips)
        TipAdvisor._style_tips(request, tips)

        hydration = request.hydration
        hours = request.total_fermentation_hours
        room = request.room_temperature
        method = request.fermentation_method
        style = request.style

        if room > 26:
            tips.append("Warm room: fermentation will be faster than usual")

        profile = STYLE_PROFILES.get(style.value)
        if profile is not None:
            low, high = profile["hydration_range"]
            if not (low <= hydration <= high):
                warnings.append(
                    f"Hydration {hydration:g}% is outside the usual {low:g}-{high:g}% for "
                    f"{profile['display_name']}"
                )

        if style == PizzaStyle.NEAPOLITAN and hydration > 70:
            warnings.append("Neapolitan dough above 70% hydration is hard to shape and launch")
        if style == PizzaStyle.NEW_YORK and hydration > 68:
            warnings.append("New York dough above 68% hydration loses its crisp, foldable slice")
        if hydration > 75 and request.flour_strength is not None and request.flour_strength < 280:
            warnings.append("Hydration above 75% needs a strong flour (W280+)")

        if method == FermentationMethod.ROOM_TEMPERATURE and hours > 12 and room > 24:
            warnings.append(
                f"{hours:g} hours at {room:g}°C risks over-fermentation; reduce the time "
                "or move the dough to the fridge"
            )
        if method == FermentationMethod.COLD and hours < 12:
            warnings.append("Cold fermentation shorter than 12 hours develops little flavour")
        if room > HOT_ROOM_TEMPERATURE and hours > 6:
            warnings.append(f"Room temperature of {room:g}°C is high for a {hours:g}-hour fermentation")

        fermentation_range = STYLE_FERMENTATION_RANGES.get(style.value)
        if fermentation_range is not None:
            low_hours, high_hours = fermentation_range
            if not (low_hours <= hours <= high_hours):
                warnings.append(
                    f"{hours:g} hours is outside the recommended {low_hours}-{high_hours} "
                    f"hours for this style"
                )

        if hydration > 70 and hours < 24:
            recommendations.append("High-hydration doughs develop better with 24+ hours of fermentation")
        if hours > 24 and method == FermentationMethod.ROOM_TEMPERATURE:
            recommendations.append("For fermentations over 24 hours, use the fridge for better control")

        return TipCollection(tips=tips, warnings=warnings, recommendations=recommendations)
