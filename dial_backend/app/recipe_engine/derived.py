# dial_backend/app/recipe_engine/derived.py
from __future__ import annotations

from typing import Dict, Union

from dial_backend.app.schemas import (
    BasketType,
    BeanInfo,
    BeanType,
    BlendProfile,
    BrewTargets,
    BrewTimeRange,
    Confidence,
    EquipmentProfile,
    Grinder,
    ProcessMethod,
    RoastLevel,
    SteplessGrindSetting,
    SteppedGrindSetting,
)

from .grind_math import position_in_range, round_half_up

# --------- Yield ----------
def calculate_yield(dose_g: float, ratio: float) -> float:
    return round_half_up(dose_g * ratio, 1)

# --------- Brew time ----------
# Finer than 40% of the range slows the shot, coarser than 60% speeds it up.
FINE_POSITION = 0.4
COARSE_POSITION = 0.6
MIN_BREW_TIME_FLOOR_S = 15
MAX_BREW_TIME_FLOOR_S = 20

def estimate_brew_time(
    grinder: Grinder,
    targets: BrewTargets,
    grind: Union[SteppedGrindSetting, SteplessGrindSetting],
) -> BrewTimeRange:
    """
    Shift the user's target window by where the chosen setting sits in the
    espresso range and by the ratio (ristretto runs shorter, lungo longer).
    """
    position = position_in_range(grind.as_number(), grinder)

    shift = 0.0
    if position < FINE_POSITION:
        shift = 3 + (FINE_POSITION - position) * 10
    elif position > COARSE_POSITION:
        shift = -3 - (position - COARSE_POSITION) * 10

    if targets.ratio < 1.8:
        shift -= 3
    elif targets.ratio > 2.5:
        shift += 5

    lo = round_half_up(max(MIN_BREW_TIME_FLOOR_S, targets.brew_time_min_sec + shift))
    hi = round_half_up(max(MAX_BREW_TIME_FLOOR_S, targets.brew_time_max_sec + shift))
    return BrewTimeRange(min=int(min(lo, hi)), max=int(max(lo, hi)))

# --------- Temperature ----------
BREW_TEMP_C: Dict[RoastLevel, float] = {
    RoastLevel.LIGHT: 95,
    RoastLevel.MEDIUM_LIGHT: 94,
    RoastLevel.MEDIUM: 93,
    RoastLevel.MEDIUM_DARK: 91,
    RoastLevel.DARK: 89,
}
DEFAULT_BREW_TEMP_C = 93

def calculate_brew_temp(bean: BeanInfo) -> float:
    temp = BREW_TEMP_C.get(bean.roast_level, DEFAULT_BREW_TEMP_C)
    # fermented beans turn harsh when brewed hot
    if bean.process_method == ProcessMethod.ANAEROBIC:
        temp -= 1
    return temp

# --------- Confidence ----------
# Heuristic score: predictable gear raises it, volatile beans lower it.
def confidence_score(profile: EquipmentProfile, bean: BeanInfo) -> int:
    machine, grinder, basket = profile.machine, profile.grinder, profile.basket
    score = 70
    if machine.has_pid:
        score += 8
    if machine.has_pre_infusion:
        score += 5
    if grinder.burr_size_mm >= 50:
        score += 5
    if grinder.micron_per_step and grinder.micron_per_step <= 15:
        score += 5

    if bean.bean_type == BeanType.BLEND and bean.blend_profile == BlendProfile.UNKNOWN:
        score -= 15
    if bean.roast_date_days_ago < 5:
        score -= 10
    if bean.roast_date_days_ago > 35:
        score -= 8

    if machine.pump_pressure_bars >= 15 and not machine.has_pid:
        score -= 8
    if basket.type == BasketType.PRESSURIZED:
        score -= 5
    return score

def calculate_confidence(profile: EquipmentProfile, bean: BeanInfo) -> Confidence:
    score = confidence_score(profile, bean)
    if score >= 75:
        return Confidence.HIGH
    if score >= 55:
        return Confidence.MEDIUM
    return Confidence.LOW
