# dial_backend/app/recipe_engine/errors.py
from __future__ import annotations
from typing import Dict


class InvalidInput(ValueError):
    """
    The only error the engine raises. Carries the offending field and the
    value(s) that violated the check so the caller can render a form message.
    """

    def __init__(self, field: str, message: str, **values: float) -> None:
        super().__init__(message)
        self.field = field
        self.message = message
        self.values: Dict[str, float] = dict(values)

    def to_dict(self) -> Dict[str, object]:
        return {
            "error": "invalid_input",
            "field": self.field,
            "values": dict(self.values),
            "message": self.message,
        }
