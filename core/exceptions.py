"""
Formulation Exceptions
Fatal errors raised for requests that cannot be formulated
"""

from typing import Any, Optional

from config.dough_config import ERROR_MESSAGES


class FormulationError(ValueError):
    """
    Raised when a request is invalid and no result can be produced.

    Usage:
        raise FormulationError('INVALID_BALL_COUNT', field='ball_count', value=0)

    Attributes:
        code: Error code (MISSING_STYLE, INVALID_BALL_COUNT, etc.)
        field: Name of the offending request field, if any
        details: Additional context as keyword arguments
    """

    def __init__(self, code: str, field: Optional[str] = None, **details: Any):
        self.code = code
        self.field = field
        self.details = details
        template = ERROR_MESSAGES.get(code, code)
        try:
            self.message = template.format(**details)
        except KeyError:
            self.message = template
        super().__init__(self.message)

    def as_dict(self) -> dict:
        """Return error as a structured dictionary identifying the field."""
        payload = {"code": self.code, "message": self.message}
        if self.field is not None:
            payload["field"] = self.field
        payload.update(self.details)
        return payload

    def __str__(self) -> str:
        if self.field:
            return f"FormulationError({self.code} on '{self.field}': {self.message})"
        return f"FormulationError({self.code}: {self.message})"
