# dial_backend/app/recipe_engine/__init__.py
"""
Espresso recipe engine.

Import from here in routers and tests, e.g.:
    from dial_backend.app.recipe_engine import compute, InvalidInput, ReferenceTables
"""

from __future__ import annotations

from .engine import compute  # noqa: F401
from .errors import InvalidInput  # noqa: F401
from .reference import EMPTY_REFERENCE, ReferenceTables  # noqa: F401
from .defaults import RATIO_PRESETS, default_targets, default_weather  # noqa: F401
from .freshness import freshness_status  # noqa: F401
