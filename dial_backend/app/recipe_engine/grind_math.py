# dial_backend/app/recipe_engine/grind_math.py
from __future__ import annotations

import logging
import math
from typing import Union

from dial_backend.app.schemas import (
    Grinder,
    SteplessGrindSetting,
    SteppedGrindSetting,
    SteppedOrStepless,
)

# Purpose:
# Map particle-size changes (microns) onto grinder-specific steps using either:
# - the grinder's declared micron-per-step
# - an estimate from the size of its espresso range
# Also provides half-up rounding, clamping and setting formatting.

log = logging.getLogger("dial.recipe_engine")

# Total microns an espresso range is assumed to traverse when the grinder
# does not declare its step size.
WIDE_RANGE_MICRONS = 400.0
NARROW_RANGE_MICRONS = 300.0
WIDE_RANGE_STEPS = 30

# --------- Rounding & clamping ----------
# Purpose:
# Round halves away from the floor (2.5 -> 3, 18.25 -> 18.5), the way dial
# settings and scale readings are read. Python's round() is banker's rounding.
def round_half_up(x: float, digits: int = 0) -> float:
    factor = 10 ** digits
    scaled = x * factor + 0.5
    if not math.isfinite(scaled):
        # nothing to round at this magnitude; floor() would raise
        return x
    return math.floor(scaled) / factor

def round_to_step(x: float, step: float) -> float:
    if step <= 0:
        return x
    scaled = x / step + 0.5
    if not math.isfinite(scaled):
        return x
    return math.floor(scaled) * step

def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))

# --------- Step-size conversion ----------
# Purpose:
# Estimated microns per step when the grinder has no calibration value.
def estimated_micron_per_step(grinder: Grinder) -> float:
    range_size = grinder.range_size
    if range_size <= 0:
        return 0.0
    total = WIDE_RANGE_MICRONS if range_size > WIDE_RANGE_STEPS else NARROW_RANGE_MICRONS
    return total / range_size

# Purpose:
# Convert a micron shift to grinder steps. Positive = coarser, negative = finer.
# Invalid numbers never propagate: they contribute zero steps.
def microns_to_steps(microns: float, grinder: Grinder) -> float:
    if not math.isfinite(microns):
        log.warning("non-finite micron shift %r for %s %s; ignoring", microns, grinder.brand, grinder.model)
        return 0.0

    if grinder.micron_per_step and grinder.micron_per_step > 0:
        return microns / grinder.micron_per_step

    per_step = estimated_micron_per_step(grinder)
    if per_step <= 0:
        log.warning(
            "invalid espresso range for %s %s (min=%s, max=%s); ignoring shift",
            grinder.brand, grinder.model, grinder.espresso_range_min, grinder.espresso_range_max,
        )
        return 0.0
    return microns / per_step

# --------- Range position ----------
def position_in_range(setting: float, grinder: Grinder) -> float:
    """0.0 at the fine end of the espresso range, 1.0 at the coarse end."""
    size = grinder.range_size
    if size <= 0:
        return 0.0
    return (setting - grinder.espresso_range_min) / size

def setting_at(fraction: float, grinder: Grinder) -> float:
    return grinder.espresso_range_min + grinder.range_size * fraction

# --------- Output formatting ----------
# Purpose:
# Clamp the raw setting to the espresso range and shape it for the grinder:
# a whole number for stepped grinders, a ±0.5 window for stepless ones.
def format_setting(
    setting: float, grinder: Grinder
) -> Union[SteppedGrindSetting, SteplessGrindSetting]:
    lo, hi = grinder.espresso_range_min, grinder.espresso_range_max
    setting = clamp(setting, lo, hi)

    if grinder.stepped_or_stepless == SteppedOrStepless.STEPPED:
        # fractional range ends can round past the edge, so clamp again
        return SteppedGrindSetting(value=clamp(round_half_up(setting), lo, hi))

    return SteplessGrindSetting(
        min=max(lo, round_half_up(setting - 0.5, 1)),
        max=min(hi, round_half_up(setting + 0.5, 1)),
    )
