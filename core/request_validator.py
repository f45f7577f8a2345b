"""
Request Validation Service
Rejects requests that cannot be formulated before any arithmetic happens
"""

from typing import Optional, Tuple

from config.dough_config import ERROR_MESSAGES
from core.exceptions import FormulationError
from core.models import FormulationRequest, PrefermentRequest


class RequestValidator:
    """Validator for formulation request fields"""

    @staticmethod
    def validate_ball_count(ball_count: int) -> Tuple[bool, str]:
        """
        Validate the number of dough balls.

        Args:
            ball_count: Requested number of balls

        Returns:
            Tuple of (is_valid, error_message)

        Examples:
            >>> RequestValidator.validate_ball_count(4)
            (True, '')
            >>> RequestValidator.validate_ball_count(0)
            (False, 'Ball count must be a positive integer, got 0')
        """
        if ball_count is None or ball_count <= 0:
            return False, ERROR_MESSAGES["INVALID_BALL_COUNT"].format(value=ball_count)
        return True, ""

    @staticmethod
    def validate_preferment(preferment: Optional[PrefermentRequest]) -> Tuple[bool, str]:
        """
        Validate the share of flour placed into a preferment.

        A preferment of 100% or more would leave nothing for the main dough.

        Examples:
            >>> RequestValidator.validate_preferment(None)
            (True, '')
        """
        if preferment is None:
            return True, ""
        if not (0.0 < preferment.percentage < 100.0):
            return False, ERROR_MESSAGES["INVALID_PREFERMENT_PERCENTAGE"].format(
                value=preferment.percentage
            )
        return True, ""

    @staticmethod
    def validate_request(request: FormulationRequest) -> None:
        """
        Validate a request, raising on the first fatal problem.

        Args:
            request: Formulation request

        Raises:
            FormulationError: With the code and the offending field
        """
        if request.style is None:
            raise FormulationError("MISSING_STYLE", field="style")

        is_valid, _ = RequestValidator.validate_ball_count(request.ball_count)
        if not is_valid:
            raise FormulationError(
                "INVALID_BALL_COUNT", field="ball_count", value=request.ball_count
            )

        if request.ball_weight <= 0:
            raise FormulationError(
                "INVALID_BALL_WEIGHT", field="ball_weight", value=request.ball_weight
            )

        is_valid, _ = RequestValidator.validate_preferment(request.preferment)
        if not is_valid:
            raise FormulationError(
                "INVALID_PREFERMENT_PERCENTAGE",
                field="preferment.percentage",
                value=request.preferment.percentage,
            )
