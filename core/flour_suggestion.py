"""
Flour Mix Suggestion Service
Proposes a single flour or a two-flour blend that meets a style's protein
and strength targets
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from config.dough_config import (
    DEFAULT_FLOUR_REQUIREMENT,
    DEFAULT_TARGET_FLOUR_REQUIREMENT,
    STYLE_FLOUR_REQUIREMENTS,
    STYLE_PROFILES,
)
from core.constants import (
    FLOUR_PERCENTAGE,
    HIGH_GLUTEN_PROTEIN,
    MAX_MIX_SHARE,
    MAX_PAIR_CANDIDATES,
    MIN_MIX_SHARE,
    MIN_PROTEIN_SPREAD,
    MIX_SHARE_STEP,
    STRENGTH_DISTANCE_SCALE,
)
from core.models import (
    FlourBlendEntry,
    FlourMixSuggestion,
    FlourSpec,
    PizzaStyle,
    SuggestedFlour,
)

logger = logging.getLogger(__name__)

TYPE_00 = "00"


def _label(style: Optional[PizzaStyle]) -> str:
    if style is None:
        return "your targets"
    return STYLE_PROFILES[style.value]["display_name"]


class FlourMixSuggester:
    """Chooses flours from a batch of catalog flours for a protein/W target"""

    @staticmethod
    def requirement_for(style: Optional[PizzaStyle]) -> Dict[str, Any]:
        """Flour requirement for a style, or the generic one"""
        if style is None:
            return DEFAULT_TARGET_FLOUR_REQUIREMENT
        return STYLE_FLOUR_REQUIREMENTS.get(style.value, DEFAULT_FLOUR_REQUIREMENT)

    @staticmethod
    def distance(protein: float, strength: Optional[float], requirement: Dict[str, Any]) -> float:
        """
        Distance of flour parameters from a requirement.

        Ten W points weigh as much as one protein point; a missing W does not
        count against the flour.

        Examples:
            >>> req = {"protein": 12.5, "strength": 280}
            >>> FlourMixSuggester.distance(13.0, 300.0, req)
            2.5
            >>> FlourMixSuggester.distance(12.0, None, req)
            0.5
        """
        protein_gap = abs(protein - requirement["protein"])
        strength_gap = 0.0
        if strength is not None:
            strength_gap = abs(strength - requirement["strength"]) / STRENGTH_DISTANCE_SCALE
        return protein_gap + strength_gap

    @staticmethod
    def matches(flour: FlourSpec, requirement: Dict[str, Any]) -> bool:
        """Whether a single flour meets the requirement on its own"""
        if abs(flour.protein - requirement["protein"]) > requirement["protein_tolerance"]:
            return False
        if (flour.strength is not None
                and abs(flour.strength - requirement["strength"]) > requirement["strength_tolerance"]):
            return False
        if requirement.get("prefer_type_00") and flour.flour_type != TYPE_00:
            return False
        if requirement.get("prefer_high_gluten") and flour.protein < HIGH_GLUTEN_PROTEIN:
            return False
        return True

    @staticmethod
    def single(
        flour: FlourSpec,
        requirement: Dict[str, Any],
        style: Optional[PizzaStyle] = None,
        exact: bool = True
    ) -> FlourMixSuggestion:
        """Suggestion that uses one flour for the whole dough"""
        brand = f" ({flour.brand})" if flour.brand else ""
        if exact:
            message = f"{flour.name}{brand} fits {_label(style)} on its own"
        else:
            message = f"{flour.name}{brand} is the closest available flour for {_label(style)}"
        strength_text = f"{flour.strength:.0f}" if flour.strength is not None else "unknown"

        return FlourMixSuggestion(
            success=True,
            is_mix=False,
            blend=[FlourBlendEntry(flour_id=flour.flour_id, percentage=FLOUR_PERCENTAGE)],
            flours=[SuggestedFlour(
                flour_id=flour.flour_id,
                name=flour.name,
                brand=flour.brand,
                percentage=FLOUR_PERCENTAGE,
                protein=flour.protein,
                strength=flour.strength,
            )],
            protein=flour.protein,
            strength=flour.strength,
            distance=round(FlourMixSuggester.distance(flour.protein, flour.strength, requirement), 3),
            message=message,
            explanation=(
                f"This flour has {flour.protein:.1f}% protein and strength W {strength_text}."
            ),
        )

    @staticmethod
    def blend_pair(
        first: FlourSpec,
        second: FlourSpec,
        requirement: Dict[str, Any],
        style: Optional[PizzaStyle] = None
    ) -> Optional[FlourMixSuggestion]:
        """
        Best proportion of two flours for the requirement.

        The pair is only considered when the target protein lies between the
        two flours at a share of 20-80%. Shares are then searched in 5% steps
        and scored on protein and W together.

        Returns:
            FlourMixSuggestion, or None when the pair cannot reach the target
        """
        if abs(first.protein - second.protein) < MIN_PROTEIN_SPREAD:
            return None

        exact_share = (requirement["protein"] - second.protein) / (first.protein - second.protein)
        if not (MIN_MIX_SHARE <= exact_share <= MAX_MIX_SHARE):
            return None

        steps = int(round((MAX_MIX_SHARE - MIN_MIX_SHARE) / MIX_SHARE_STEP)) + 1
        shares = np.linspace(MIN_MIX_SHARE, MAX_MIX_SHARE, steps)
        proteins = shares * first.protein + (1 - shares) * second.protein
        scores = np.abs(proteins - requirement["protein"])

        strengths = None
        if first.strength is not None and second.strength is not None:
            strengths = shares * first.strength + (1 - shares) * second.strength
            scores = scores + np.abs(strengths - requirement["strength"]) / STRENGTH_DISTANCE_SCALE

        best = int(np.argmin(scores))
        first_pct = round(float(shares[best]) * FLOUR_PERCENTAGE, 1)
        second_pct = round(FLOUR_PERCENTAGE - first_pct, 1)
        protein = round(float(proteins[best]), 1)
        strength = round(float(strengths[best])) if strengths is not None else None

        stronger, softer = (first, second) if first.protein > second.protein else (second, first)
        strength_text = f"{strength}" if strength is not None else "unknown"

        return FlourMixSuggestion(
            success=True,
            is_mix=True,
            blend=[
                FlourBlendEntry(flour_id=first.flour_id, percentage=first_pct),
                FlourBlendEntry(flour_id=second.flour_id, percentage=second_pct),
            ],
            flours=[
                SuggestedFlour(flour_id=flour.flour_id, name=flour.name, brand=flour.brand,
                               percentage=pct, protein=flour.protein, strength=flour.strength)
                for flour, pct in ((first, first_pct), (second, second_pct))
            ],
            protein=protein,
            strength=strength,
            distance=round(float(scores[best]), 3),
            message=(
                f"Blend {first_pct:.0f}% {first.name} + {second_pct:.0f}% {second.name} "
                f"for {_label(style)}"
            ),
            explanation=(
                f"The blend gives {protein:.1f}% protein and strength W ~{strength_text}. "
                f"{stronger.name} adds structure, {softer.name} keeps the dough extensible."
            ),
        )

    @staticmethod
    def suggest(
        flours: Sequence[FlourSpec],
        requirement: Dict[str, Any],
        style: Optional[PizzaStyle] = None
    ) -> FlourMixSuggestion:
        """
        Suggest flours for a requirement.

        A single flour that meets the requirement wins. Otherwise pairs of the
        flours closest to the target are tried in order of distance, and the
        closest single flour is the fallback.
        """
        if not flours:
            logger.warning("[SUGGEST] No flours available")
            return FlourMixSuggestion(
                success=False,
                message="No flours available; add flours to the catalog first",
            )

        for flour in flours:
            if FlourMixSuggester.matches(flour, requirement):
                logger.debug(f"[SUGGEST] Single flour match: {flour.flour_id}")
                return FlourMixSuggester.single(flour, requirement, style)

        ranked = sorted(
            flours,
            key=lambda flour: FlourMixSuggester.distance(flour.protein, flour.strength, requirement),
        )
        candidates = ranked[:MAX_PAIR_CANDIDATES]
        for i, first in enumerate(candidates):
            for second in candidates[i + 1:]:
                suggestion = FlourMixSuggester.blend_pair(first, second, requirement, style)
                if suggestion is not None:
                    logger.debug(f"[SUGGEST] Blend: {suggestion.message}")
                    return suggestion

        logger.debug(f"[SUGGEST] Falling back to closest flour {ranked[0].flour_id}")
        return FlourMixSuggester.single(ranked[0], requirement, style, exact=False)

    @staticmethod
    def suggest_for_style(style: PizzaStyle, flours: Sequence[FlourSpec]) -> FlourMixSuggestion:
        """Suggest flours for a pizza style"""
        logger.info(f"[SUGGEST] style={style.value}, flours={len(flours)}")
        return FlourMixSuggester.suggest(
            flours, FlourMixSuggester.requirement_for(style), style
        )

    @staticmethod
    def suggest_for_targets(
        flours: Sequence[FlourSpec],
        protein: Optional[float] = None,
        strength: Optional[float] = None
    ) -> FlourMixSuggestion:
        """Suggest flours for explicit protein (%) and strength (W) targets"""
        requirement = dict(DEFAULT_TARGET_FLOUR_REQUIREMENT)
        if protein is not None:
            requirement["protein"] = protein
        if strength is not None:
            requirement["strength"] = strength
        logger.info(
            f"[SUGGEST] targets protein={requirement['protein']}%, "
            f"W={requirement['strength']}, flours={len(flours)}"
        )
        return FlourMixSuggester.suggest(flours, requirement)

    @staticmethod
    def optimize_mix(
        flours: Sequence[FlourSpec],
        style: Optional[PizzaStyle] = None
    ) -> FlourMixSuggestion:
        """
        Best two-flour proportion among the given flours.

        Every pair is tried and the blend closest to the target wins.
        """
        if len(flours) < 2:
            return FlourMixSuggestion(
                success=False,
                message="At least two flours are needed to optimize a blend",
            )

        requirement = FlourMixSuggester.requirement_for(style)
        options: List[FlourMixSuggestion] = []
        for i, first in enumerate(flours):
            for second in flours[i + 1:]:
                suggestion = FlourMixSuggester.blend_pair(first, second, requirement, style)
                if suggestion is not None:
                    options.append(suggestion)

        if not options:
            return FlourMixSuggestion(
                success=False,
                message=(
                    f"No proportion of these flours reaches {requirement['protein']:g}% protein"
                ),
            )
        return min(options, key=lambda suggestion: suggestion.distance)
