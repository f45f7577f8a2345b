"""
Dough Formulation Engine
Turns a formulation request into ingredient masses, a leavening amount,
an optional preferment split, a preparation schedule and advice
"""

import logging
from typing import Dict, List, Optional, Sequence

from config.dough_config import (
    DEFAULT_STARTER_PERCENTAGE,
    STYLE_DEFAULT_FIELDS,
    STYLE_PROFILES,
)
from core.advisors import FlourAnalysisAdvisor, TipAdvisor, WaterAnalysisAdvisor
from core.bakers_percentage import BakersPercentageCalculator, FlourBlendCalculator
from core.dough_temperature import WaterTemperatureCalculator
from core.environment import EnvironmentalCorrector
from core.fermentation import FermentationKineticsModel
from core.flour_catalog import FlourCatalog
from core.flour_suggestion import FlourMixSuggester
from core.leavening_converter import LeaveningConverter
from core.models import (
    FlourMixSuggestion,
    FlourSpec,
    FormulationRequest,
    FormulationResult,
    LeaveningAgent,
    LeaveningCalculation,
    PizzaStyle,
)
from core.preferment import PrefermentSplitter
from core.request_validator import RequestValidator
from core.schedule_builder import BackwardScheduleBuilder

logger = logging.getLogger(__name__)


class DoughFormulationEngine:
    """
    Stateless formulation engine.

    The optional flour catalog is only consulted when the request carries a
    flour blend or a flour suggestion is asked for, with a single batch
    lookup per call.
    """

    def __init__(self, flour_catalog: Optional[FlourCatalog] = None):
        self.flour_catalog = flour_catalog

    def _apply_style_defaults(self, request: FormulationRequest) -> FormulationRequest:
        """Fill the fields the caller left unset from the style profile"""
        profile = STYLE_PROFILES[request.style.value]
        defaults = {
            field: profile[field]
            for field in STYLE_DEFAULT_FIELDS
            if field not in request.model_fields_set
        }
        if not defaults:
            return request
        logger.debug(f"[FORMULATE] {request.style.value} defaults applied: {defaults}")
        return FormulationRequest.model_validate({**request.model_dump(), **defaults})

    def _fetch_flours(
        self,
        flour_ids: Sequence[str],
        warnings: Optional[List[str]] = None
    ) -> Optional[Dict[str, FlourSpec]]:
        """Resolve flours with a single batch lookup"""
        if self.flour_catalog is None:
            logger.warning("[FORMULATE] Flour lookup requested without a flour catalog")
            if warnings is not None:
                warnings.append("A flour blend was requested but no flour catalog is available")
            return None
        return self.flour_catalog.batch_fetch(list(flour_ids))

    def _leavening(
        self,
        request: FormulationRequest,
        flour_strength: Optional[float],
        warnings: List[str]
    ) -> LeaveningCalculation:
        """Leavening percentage in the requested agent form"""
        agent = request.leavening_agent
        calc = FermentationKineticsModel.calculate(
            total_hours=request.total_fermentation_hours,
            method=request.fermentation_method,
            room_temperature=request.room_temperature,
            fridge_temperature=request.fridge_temperature,
            flour_strength=flour_strength,
            salt=request.salt,
            sugar=request.sugar,
            agent=agent,
        )
        adjustments = list(calc.adjustments)
        fresh_percentage = calc.fresh_percentage

        if not LeaveningConverter.is_mass_convertible(agent):
            if request.leavening_percentage is not None:
                agent_percentage = request.leavening_percentage
            else:
                agent_percentage = DEFAULT_STARTER_PERCENTAGE
                warnings.append(
                    f"No starter percentage given; using {DEFAULT_STARTER_PERCENTAGE:g}% "
                    "of flour, adjust to your starter's strength"
                )
            adjustments.append(f"Sourdough starter used directly at {agent_percentage:g}% of flour")
        else:
            if request.leavening_percentage is not None:
                fresh_percentage = request.leavening_percentage
                adjustments.append(
                    f"Explicit leavening of {fresh_percentage:g}% (fresh equivalent) "
                    "replaces the fermentation model"
                )
            agent_percentage = LeaveningConverter.convert(
                fresh_percentage, LeaveningAgent.FRESH, agent
            )

        return calc.model_copy(update={
            "fresh_percentage": round(fresh_percentage, 4),
            "agent_percentage": round(agent_percentage, 4),
            "adjustments": adjustments,
        })

    def calculate(self, request: FormulationRequest) -> FormulationResult:
        """
        Formulate a dough.

        Args:
            request: Formulation request

        Returns:
            Complete FormulationResult

        Raises:
            FormulationError: If the request cannot be formulated
        """
        logger.info(
            f"[FORMULATE] style={getattr(request.style, 'value', None)}, "
            f"balls={request.ball_count}x{request.ball_weight:g}g, "
            f"hydration={request.hydration:g}%, method={request.fermentation_method.value}, "
            f"hours={request.total_fermentation_hours:g}"
        )
        RequestValidator.validate_request(request)
        request = self._apply_style_defaults(request)

        profile = STYLE_PROFILES[request.style.value]
        warnings: List[str] = []
        recommendations: List[str] = []

        flours = None
        flour_mix = None
        if request.flour_blend:
            flours = self._fetch_flours(
                [entry.flour_id for entry in request.flour_blend], warnings
            )
        if flours is not None:
            flour_mix = FlourBlendCalculator.mix_parameters(request.flour_blend, flours)
            warnings.extend(flour_mix.warnings)

        # Blend W takes precedence, as in the flour analysis
        flour_strength = request.flour_strength
        if flour_mix is not None and flour_mix.strength is not None:
            flour_strength = flour_mix.strength

        leavening = self._leavening(request, flour_strength, warnings)

        total_dough = request.ball_count * request.ball_weight
        masses = BakersPercentageCalculator.calculate_masses(
            total_dough=total_dough,
            hydration=request.hydration,
            salt=request.salt,
            leavening=leavening.agent_percentage,
            oil=request.oil,
            sugar=request.sugar,
            bonus_ingredients=request.bonus_ingredients,
        )
        percentages = BakersPercentageCalculator.recompute_percentages(masses)

        if flour_mix is not None:
            flour_mix = flour_mix.model_copy(update={
                "portions": FlourBlendCalculator.flour_portions(
                    request.flour_blend, flours, masses.flour
                ),
            })

        preferment = None
        main_dough = None
        if request.preferment is not None:
            preferment, main_dough, preferment_warnings = PrefermentSplitter.split(
                masses, request.preferment, request.leavening_agent
            )
            warnings.extend(preferment_warnings)

        water_temperature = WaterTemperatureCalculator.calculate(
            style=request.style,
            room_temperature=request.room_temperature,
            hydration=request.hydration,
            mixer=request.mixer_type,
            flour_temperature=request.flour_temperature,
            preferment_temperature=(
                request.room_temperature if request.preferment is not None else None
            ),
        )
        warnings.extend(water_temperature.warnings)
        recommendations.extend(water_temperature.recommendations)

        environment = EnvironmentalCorrector.calculate(
            room_temperature=request.room_temperature,
            humidity=request.ambient_humidity,
            altitude=request.altitude,
        )

        schedule = []
        if request.generate_schedule and request.bake_time is not None:
            schedule, schedule_warnings = BackwardScheduleBuilder.build(
                bake_time=request.bake_time,
                total_hours=request.total_fermentation_hours,
                method=request.fermentation_method,
                fridge_hours=leavening.fridge_hours,
                hydration=request.hydration,
                room_temperature=request.room_temperature,
                fridge_temperature=request.fridge_temperature,
                oven_temperature=profile["oven_temperature"],
                baking_time_seconds=profile["baking_time_seconds"],
                preferment=request.preferment,
            )
            warnings.extend(schedule_warnings)

        flour_analysis = FlourAnalysisAdvisor.analyze(request, flour_mix)
        water_analysis = WaterAnalysisAdvisor.analyze(request.water_hardness, request.water_ph)
        tips = TipAdvisor.generate(request)

        warnings.extend(flour_analysis.warnings)
        warnings.extend(tips.warnings)
        recommendations.extend(flour_analysis.recommendations)
        recommendations.extend(water_analysis.recommendations)
        recommendations.extend(tips.recommendations)

        logger.info(
            f"[FORMULATE] flour={masses.flour}g water={masses.water}g "
            f"leavening={masses.leavening}g ({leavening.agent_percentage}% "
            f"{request.leavening_agent.value}), steps={len(schedule)}, warnings={len(warnings)}"
        )

        return FormulationResult(
            style=request.style,
            ball_count=request.ball_count,
            ball_weight=request.ball_weight,
            leavening_agent=request.leavening_agent,
            ingredients=masses,
            bakers_percentages=percentages,
            leavening=leavening,
            preferment=preferment,
            main_dough=main_dough,
            flour_mix=flour_mix,
            water_temperature=water_temperature,
            environment=environment,
            oven_temperature=profile["oven_temperature"],
            baking_time_seconds=profile["baking_time_seconds"],
            schedule=schedule,
            flour_analysis=flour_analysis,
            water_analysis=water_analysis,
            tips=tips.tips,
            warnings=warnings,
            recommendations=recommendations,
        )

    def suggest_flour_mix(
        self,
        style: PizzaStyle,
        flour_ids: Sequence[str]
    ) -> FlourMixSuggestion:
        """
        Suggest a flour or two-flour blend for a style from the given flours.

        Args:
            style: Pizza style whose protein/W targets apply
            flour_ids: Flours the baker has available

        Returns:
            FlourMixSuggestion; unsuccessful when no flour could be resolved
        """
        flours = self._fetch_flours(flour_ids) or {}
        return FlourMixSuggester.suggest_for_style(PizzaStyle(style), list(flours.values()))

    def optimize_flour_mix(
        self,
        flour_ids: Sequence[str],
        style: Optional[PizzaStyle] = None
    ) -> FlourMixSuggestion:
        """Best two-flour proportion among the given flours"""
        flours = self._fetch_flours(flour_ids) or {}
        if style is not None:
            style = PizzaStyle(style)
        return FlourMixSuggester.optimize_mix(list(flours.values()), style)


def calculate_formulation(
    request: FormulationRequest,
    flour_catalog: Optional[FlourCatalog] = None
) -> FormulationResult:
    """Formulate a dough with a one-off engine"""
    return DoughFormulationEngine(flour_catalog).calculate(request)
