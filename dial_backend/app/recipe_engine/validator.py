# dial_backend/app/recipe_engine/validator.py
from __future__ import annotations

import math

from dial_backend.app.schemas import BeanInfo, BrewTargets, EquipmentProfile

from .errors import InvalidInput


def _require_finite(prefix: str, label: str, **values: float) -> None:
    # NaN slips through every ordering check below; inf overflows the rounding
    for name, value in values.items():
        if not math.isfinite(value):
            raise InvalidInput(
                f"{prefix}.{name}",
                f"Invalid {label}: {name} must be a finite number (got {value})",
                **values,
            )


# What it does:
# Reject structurally invalid input before any calculation runs.
# Raises on the first failing check; nothing downstream is evaluated.
def validate_inputs(profile: EquipmentProfile, bean: BeanInfo, targets: BrewTargets) -> None:
    basket = profile.basket
    _require_finite(
        "basket", "basket capacity",
        capacity_min_g=basket.capacity_min_g, capacity_max_g=basket.capacity_max_g,
    )
    if basket.capacity_min_g > basket.capacity_max_g:
        raise InvalidInput(
            "basket.capacity_min_g",
            f"Invalid basket capacity: min ({basket.capacity_min_g:g}g) > max ({basket.capacity_max_g:g}g)",
            capacity_min_g=basket.capacity_min_g,
            capacity_max_g=basket.capacity_max_g,
        )

    grinder = profile.grinder
    _require_finite(
        "grinder", "grinder range",
        espresso_range_min=grinder.espresso_range_min, espresso_range_max=grinder.espresso_range_max,
    )
    if grinder.espresso_range_min >= grinder.espresso_range_max:
        raise InvalidInput(
            "grinder.espresso_range_min",
            f"Invalid grinder range: min ({grinder.espresso_range_min:g}) >= max ({grinder.espresso_range_max:g})",
            espresso_range_min=grinder.espresso_range_min,
            espresso_range_max=grinder.espresso_range_max,
        )
    if not math.isfinite(grinder.range_size):
        raise InvalidInput(
            "grinder.espresso_range_max",
            f"Invalid grinder range: span from {grinder.espresso_range_min:g} to {grinder.espresso_range_max:g} is too large",
            espresso_range_min=grinder.espresso_range_min,
            espresso_range_max=grinder.espresso_range_max,
        )

    if bean.roast_date_days_ago < 0:
        raise InvalidInput(
            "bean.roast_date_days_ago",
            f"Invalid roast date: cannot be in the future ({bean.roast_date_days_ago} days ago)",
            roast_date_days_ago=bean.roast_date_days_ago,
        )

    if not math.isfinite(targets.ratio) or targets.ratio <= 0:
        raise InvalidInput(
            "targets.ratio",
            f"Invalid ratio: must be a positive number (got {targets.ratio})",
            ratio=targets.ratio,
        )

    _require_finite(
        "targets", "brew time range",
        brew_time_min_sec=targets.brew_time_min_sec, brew_time_max_sec=targets.brew_time_max_sec,
    )
    if targets.brew_time_min_sec >= targets.brew_time_max_sec:
        raise InvalidInput(
            "targets.brew_time_min_sec",
            f"Invalid brew time range: min ({targets.brew_time_min_sec:g}s) >= max ({targets.brew_time_max_sec:g}s)",
            brew_time_min_sec=targets.brew_time_min_sec,
            brew_time_max_sec=targets.brew_time_max_sec,
        )
