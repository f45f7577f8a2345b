"""
Leavening Conversion Service
Converts leavening masses between yeast forms
"""

import logging
from typing import Union

from config.dough_config import LEAVENING_FACTORS
from core.exceptions import FormulationError
from core.models import LeaveningAgent

logger = logging.getLogger(__name__)


class LeaveningConverter:
    """Service for converting between fresh, instant dry, active dry and sourdough"""

    @staticmethod
    def factor(agent: Union[LeaveningAgent, str]) -> float:
        """
        Get the mass factor of an agent relative to fresh yeast.

        Examples:
            >>> LeaveningConverter.factor("instant_dry")
            0.33
        """
        key = agent.value if isinstance(agent, LeaveningAgent) else str(agent)
        if key not in LEAVENING_FACTORS:
            raise FormulationError(
                "UNKNOWN_LEAVENING_AGENT", field="leavening_agent", value=key
            )
        return LEAVENING_FACTORS[key]

    @staticmethod
    def convert(
        mass: float,
        from_agent: Union[LeaveningAgent, str],
        to_agent: Union[LeaveningAgent, str]
    ) -> float:
        """
        Convert a leavening mass (or percentage) from one agent to another.

        Formula: out = mass / factor(from) * factor(to)

        Sourdough has no mass equivalence with commercial yeast, so any conversion
        involving it returns the input unchanged.

        Args:
            mass: Amount in the source form (g or % of flour)
            from_agent: Source agent
            to_agent: Target agent

        Returns:
            Amount in the target form

        Examples:
            >>> LeaveningConverter.convert(10.0, "fresh", "instant_dry")
            3.3
            >>> LeaveningConverter.convert(3.3, "instant_dry", "instant_dry")
            3.3
        """
        from_factor = LeaveningConverter.factor(from_agent)
        to_factor = LeaveningConverter.factor(to_agent)

        if from_factor == to_factor:
            return mass
        if from_factor == 0 or to_factor == 0:
            logger.debug(
                f"[CONVERT] Sourdough is not mass-converted, keeping {mass} as is"
            )
            return mass

        fresh = mass / from_factor
        return round(fresh * to_factor, 6)

    @staticmethod
    def is_mass_convertible(agent: Union[LeaveningAgent, str]) -> bool:
        """True for commercial yeast, False for sourdough"""
        return LeaveningConverter.factor(agent) > 0
