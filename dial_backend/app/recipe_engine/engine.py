# dial_backend/app/recipe_engine/engine.py
from __future__ import annotations

import logging
from typing import Optional

from dial_backend.app.schemas import (
    AlgorithmOutput,
    BeanInfo,
    BrewTargets,
    EquipmentProfile,
    Reasoning,
    WeatherData,
)

from .adjustments import AdjustmentLog
from .derived import calculate_brew_temp, calculate_confidence, calculate_yield, estimate_brew_time
from .dose import calculate_dose
from .grind import calculate_grind_setting
from .reference import EMPTY_REFERENCE, ReferenceTables
from .tips import generate_tips
from .validator import validate_inputs

log = logging.getLogger("dial.recipe_engine")


def compute(
    profile: EquipmentProfile,
    bean: BeanInfo,
    targets: BrewTargets,
    weather: WeatherData,
    reference: Optional[ReferenceTables] = None,
) -> AlgorithmOutput:
    """
    Espresso recipe for one equipment profile, bean, target set and weather.

    Pure and synchronous: same inputs give the same output, nothing is read
    or written outside the arguments. Raises InvalidInput before any
    calculation when the inputs are structurally invalid; past validation
    it always returns a complete recipe.
    """
    validate_inputs(profile, bean, targets)
    if reference is None:
        reference = EMPTY_REFERENCE
    adjustments = AdjustmentLog()

    dose_g, dose_reasoning = calculate_dose(profile.basket, bean.roast_level, adjustments)
    grind, grind_reasoning = calculate_grind_setting(
        profile, bean, targets, weather, reference, adjustments,
    )

    out = AlgorithmOutput(
        recommended_dose_g=dose_g,
        recommended_grind_setting=grind,
        expected_yield_g=calculate_yield(dose_g, targets.ratio),
        expected_brew_time_sec=estimate_brew_time(profile.grinder, targets, grind),
        recommended_temp_c=calculate_brew_temp(bean),
        confidence=calculate_confidence(profile, bean),
        tips=generate_tips(profile, bean, weather),
        reasoning=Reasoning(
            dose_reasoning=dose_reasoning,
            grind_reasoning=grind_reasoning,
            adjustments=adjustments.to_list(),
        ),
    )
    log.debug("recipe: dose=%s grind=%s confidence=%s", dose_g, grind.display(), out.confidence.value)
    return out
