# dial_backend/app/recipe_engine/freshness.py
from __future__ import annotations

from dial_backend.app.schemas import FreshnessOut

# Same windows as the grind degassing curve: 7-14 days is peak.
def freshness_status(days: int) -> FreshnessOut:
    if days < 5:
        status, label = "too-fresh", "Too fresh"
    elif days <= 6:
        status, label = "fresh", "Fresh"
    elif days <= 14:
        status, label = "peak", "Peak"
    else:
        status, label = "aging", "Aging"
    return FreshnessOut(status=status, label=label, days=int(days))
