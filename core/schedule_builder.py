"""
Preparation Schedule Service
Builds a time-stamped preparation plan by walking backward from the bake time
"""

import logging
import math
from datetime import datetime, timedelta
from typing import List, Optional, Tuple, Union

from core.constants import (
    DIVIDE_DURATION_MINUTES,
    FOLD_DURATION_MINUTES,
    FOLD_HYDRATION_THRESHOLD,
    FRIDGE_REMOVAL_DURATION_MINUTES,
    FRIDGE_REMOVAL_OFFSET_MINUTES,
    KNEAD_DURATION_MINUTES,
    KNEAD_GAP_MINUTES,
    MAX_FOLDS,
    MIN_DIVIDE_OFFSET_HOURS,
    MIN_STEP_MINUTES,
    MIX_DURATION_MINUTES,
    MIX_GAP_MINUTES,
    PREHEAT_DURATION_MINUTES,
    PREHEAT_OFFSET_MINUTES,
    SHAPE_DURATION_MINUTES,
    SHAPE_OFFSET_MINUTES,
)
from core.fermentation import uses_fridge
from core.models import FermentationMethod, PrefermentRequest, ScheduleStep, StepKind

logger = logging.getLogger(__name__)


def _minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


class BackwardScheduleBuilder:
    """Builds preparation steps ending exactly at the bake time"""

    @staticmethod
    def fold_count(hydration: float, bulk_minutes: int) -> int:
        """
        Number of stretch-and-folds during bulk fermentation.

        Examples:
            >>> BackwardScheduleBuilder.fold_count(70.0, 240)
            4
            >>> BackwardScheduleBuilder.fold_count(67.0, 240)
            0
            >>> BackwardScheduleBuilder.fold_count(75.0, 150)
            2
        """
        if hydration < FOLD_HYDRATION_THRESHOLD:
            return 0
        return min(MAX_FOLDS, bulk_minutes // 60)

    @staticmethod
    def build(
        bake_time: datetime,
        total_hours: float,
        method: Union[FermentationMethod, str],
        fridge_hours: float,
        hydration: float,
        room_temperature: float,
        fridge_temperature: float,
        oven_temperature: float,
        baking_time_seconds: int,
        preferment: Optional[PrefermentRequest] = None
    ) -> Tuple[List[ScheduleStep], List[str]]:
        """
        Build the preparation schedule.

        Steps are collected while walking backward from the bake time, reversed
        once, ordered by time and finally renumbered 1..N.

        The cold proof never starts before the balls are divided. When the
        fridge window does not fit after dividing it is shortened, and when
        nothing is left of it the balls get a final rest at room temperature
        instead. Both cases are reported as warnings.

        Args:
            bake_time: When the first pizza goes into the oven
            total_hours: Total fermentation time (h)
            method: Fermentation method
            fridge_hours: Hours spent in the fridge (0 without a fridge phase)
            hydration: Dough hydration (%), decides stretch-and-folds
            room_temperature: Room temperature (°C)
            fridge_temperature: Fridge temperature (°C)
            oven_temperature: Oven temperature (°C)
            baking_time_seconds: Bake time per pizza (s)
            preferment: Preferment, if one is used

        Returns:
            Tuple of (chronologically ordered steps, the last one being the
            bake; warnings)
        """
        collected: List[ScheduleStep] = []
        warnings: List[str] = []

        def add(kind: StepKind, title: str, at: datetime, minutes: float,
                description: str = "", temperature: Optional[float] = None) -> None:
            collected.append(ScheduleStep(
                kind=kind,
                title=title,
                description=description,
                scheduled_at=at,
                duration_minutes=max(MIN_STEP_MINUTES, int(round(minutes))),
                temperature=temperature,
            ))

        add(StepKind.BAKE, "Bake", bake_time,
            math.ceil(baking_time_seconds / 60),
            f"Bake each pizza for about {baking_time_seconds} seconds",
            oven_temperature)

        add(StepKind.SHAPE, "Shape",
            bake_time - timedelta(minutes=SHAPE_OFFSET_MINUTES), SHAPE_DURATION_MINUTES,
            "Open the balls into discs, keeping the rim untouched")

        add(StepKind.PREHEAT, "Preheat oven",
            bake_time - timedelta(minutes=PREHEAT_OFFSET_MINUTES), PREHEAT_DURATION_MINUTES,
            f"Preheat the oven and baking surface to {oven_temperature:g}°C",
            oven_temperature)

        bulk_start = bake_time - timedelta(hours=total_hours)
        divide_at = bake_time - timedelta(hours=max(MIN_DIVIDE_OFFSET_HOURS, total_hours / 3))
        if divide_at <= bulk_start:
            divide_at = bulk_start + timedelta(minutes=MIN_STEP_MINUTES)

        balls_ready = divide_at + timedelta(minutes=DIVIDE_DURATION_MINUTES)
        removal_at = bake_time - timedelta(minutes=FRIDGE_REMOVAL_OFFSET_MINUTES)
        fridge_phase = uses_fridge(method) and fridge_hours > 0
        if fridge_phase and balls_ready >= removal_at:
            warnings.append(
                "Fermentation is too short for a fridge phase after dividing; "
                "the balls rest at room temperature instead"
            )
            fridge_phase = False

        if fridge_phase:
            add(StepKind.REMOVE_FROM_FRIDGE, "Remove from fridge", removal_at,
                FRIDGE_REMOVAL_DURATION_MINUTES,
                "Take the dough out of the fridge and let it come up to room temperature",
                room_temperature)
            cold_at = removal_at - timedelta(hours=fridge_hours)
            if cold_at < balls_ready:
                cold_at = balls_ready
                cold_minutes = _minutes_between(cold_at, removal_at)
                warnings.append(
                    f"Cold proof shortened to {cold_minutes / 60:.1f} of {fridge_hours:g} hours: "
                    "the balls go into the fridge once they are divided"
                )
            add(StepKind.COLD_PROOF, "Cold proof", cold_at,
                _minutes_between(cold_at, removal_at),
                "Keep the covered dough in the fridge", fridge_temperature)
        else:
            shape_at = bake_time - timedelta(minutes=SHAPE_OFFSET_MINUTES)
            add(StepKind.FINAL_REST, "Final rest", balls_ready,
                _minutes_between(balls_ready, shape_at),
                "Let the covered balls relax until they are soft and airy",
                room_temperature)

        add(StepKind.DIVIDE_AND_BALL, "Divide and ball", divide_at, DIVIDE_DURATION_MINUTES,
            "Divide the dough into equal pieces and form tight balls")

        bulk_minutes = max(MIN_STEP_MINUTES, _minutes_between(bulk_start, divide_at))
        folds = BackwardScheduleBuilder.fold_count(hydration, bulk_minutes)
        interval = bulk_minutes / (folds + 1)
        for i in range(folds, 0, -1):
            add(StepKind.FOLD, f"Stretch and fold {i}",
                bulk_start + timedelta(minutes=i * interval), FOLD_DURATION_MINUTES,
                "Stretch the dough up and fold it over itself on all four sides")

        add(StepKind.BULK_FERMENT, "Bulk fermentation", bulk_start, bulk_minutes,
            "Cover the dough and let it rise", room_temperature)

        knead_at = bulk_start - timedelta(minutes=KNEAD_GAP_MINUTES + KNEAD_DURATION_MINUTES)
        add(StepKind.KNEAD, "Knead", knead_at, KNEAD_DURATION_MINUTES,
            "Knead until the dough is smooth and elastic")

        mix_at = knead_at - timedelta(minutes=MIX_GAP_MINUTES + MIX_DURATION_MINUTES)
        add(StepKind.MIX_DOUGH, "Mix dough", mix_at, MIX_DURATION_MINUTES,
            "Dissolve the leavening in the water, add the flour, then the salt")

        if preferment is not None:
            add(StepKind.MIX_PREFERMENT, f"Prepare {preferment.type.value.replace('_', ' ')}",
                mix_at - timedelta(hours=preferment.hours), preferment.hours * 60,
                "Mix the preferment and leave it to mature", room_temperature)

        collected.reverse()
        ordered = sorted(collected, key=lambda step: step.scheduled_at)
        steps = [
            step.model_copy(update={"sequence": index})
            for index, step in enumerate(ordered, start=1)
        ]

        logger.debug(
            f"[SCHEDULE] {len(steps)} steps from {steps[0].scheduled_at.isoformat()} "
            f"to {bake_time.isoformat()} ({folds} folds, {len(warnings)} warnings)"
        )
        return steps, warnings
