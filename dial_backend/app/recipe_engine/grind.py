# dial_backend/app/recipe_engine/grind.py
from __future__ import annotations

import math
from typing import Dict, Tuple, Union

from dial_backend.app.schemas import (
    BasketType,
    BeanInfo,
    BeanType,
    BrewTargets,
    EquipmentProfile,
    Grinder,
    MachineType,
    ProcessMethod,
    RoastLevel,
    SteplessGrindSetting,
    SteppedGrindSetting,
    TastePreference,
    WeatherData,
)

from .adjustments import AdjustmentLog
from .grind_math import format_setting, microns_to_steps, round_half_up, setting_at
from .reference import ReferenceTables

# Purpose:
# Anchor-point grind model.
#
# Espresso ranges printed on grinders are not centred on usable espresso:
# an Encore ESP lists 1-20 but non-pressurized shots land around 3-8, so the
# midpoint is far too coarse. The baseline sits 25% into the range (the fine
# espresso zone) and every modifier is a particle-size shift in microns,
# converted to this grinder's steps. Percent-of-range nudges are too weak on
# short ranges to recover from a wrong anchor.
#
# Positive microns = coarser (higher setting), negative = finer.
# Calibration: Encore ESP + Stilosa + 51mm bottomless, washed medium at
# 14 days, 1:2 -> setting 4.

BASELINE_FRACTION = 0.25

ROAST_MICRONS: Dict[RoastLevel, float] = {
    RoastLevel.LIGHT: -40,
    RoastLevel.MEDIUM_LIGHT: -20,
    RoastLevel.MEDIUM: 0,
    RoastLevel.MEDIUM_DARK: 40,
    RoastLevel.DARK: 80,
}

PROCESS_MICRONS: Dict[ProcessMethod, float] = {
    ProcessMethod.WASHED: 0,
    ProcessMethod.NATURAL: 20,      # less soluble
    ProcessMethod.HONEY: 10,
    ProcessMethod.ANAEROBIC: -10,   # long fermentation, more soluble
    ProcessMethod.OTHER: 0,
}

MICRONS_PER_MODIFIER_POINT = 10.0
DOMINANT_ORIGIN_STRENGTH = 0.5
NATURAL_DEGASSING_FACTOR = 0.8

HIGH_PRESSURE_BARS = 15
SLOW_DEBIT_ML_PER_MIN = 220
HIGH_RPM = 1200


def _direction(microns: float) -> str:
    return "Coarser" if microns > 0 else "Finer"


def _grinder_name(grinder: Grinder) -> str:
    return f"{grinder.brand} {grinder.model}".strip() or "the grinder"


# What it does:
# Degassing curve. Peak window (7-14 days) is neutral; fresher beans carry CO2
# that disrupts flow (coarser), older beans have lost it (finer).
def freshness_shift(days: int, process: ProcessMethod) -> Tuple[float, str]:
    if days <= 4:
        microns, label = 60.0, f"Very fresh ({days}d) — heavy CO2 disrupts extraction"
    elif days <= 6:
        microns, label = 30.0, f"Fresh ({days}d) — still degassing"
    elif days <= 14:
        return 0.0, ""
    elif days <= 35:
        microns, label = -20.0, f"Aging ({days}d) — less CO2, grind finer"
    else:
        microns, label = -40.0, f"Stale ({days}d) — grind finer to extract remaining flavor"

    # naturals degas roughly 20% faster
    if process == ProcessMethod.NATURAL and days <= 6:
        adjusted = round_half_up(microns * NATURAL_DEGASSING_FACTOR)
        if math.isfinite(adjusted):
            microns = adjusted
            label += " (natural process degasses faster)"
    return microns, label


class _GrindWalk:
    """Running setting plus the log it writes every applied shift into."""

    def __init__(self, profile: EquipmentProfile, log: AdjustmentLog) -> None:
        self.grinder = profile.grinder
        self.log = log
        self.setting = setting_at(BASELINE_FRACTION, self.grinder)
        self.applied = 0

    def shift(
        self, microns: float, factor: str, reason: str = "", prefix: str = "", show_microns: bool = False,
    ) -> None:
        if not microns or not math.isfinite(microns):
            return
        steps = microns_to_steps(microns, self.grinder)
        if not math.isfinite(steps) or steps == 0:
            return
        self.setting += steps
        self.applied += 1
        direction = _direction(microns)
        if prefix:
            direction = prefix + direction.lower()
        effect = f"{direction} by ~{abs(steps):.1f} steps"
        if show_microns:
            effect += f" ({'+' if microns > 0 else ''}{microns:g}μm)"
        if reason:
            effect += f" — {reason}"
        self.log.add(factor, effect)


def _bean_identity_shifts(walk: _GrindWalk, bean: BeanInfo, reference: ReferenceTables) -> None:
    if bean.bean_type == BeanType.SINGLE_ORIGIN:
        varietal = reference.varietal(bean.varietal_id)
        if varietal is not None and varietal.extraction_modifier:
            c = varietal.characteristics
            walk.shift(
                varietal.extraction_modifier * MICRONS_PER_MODIFIER_POINT,
                f"{varietal.name} varietal ({c.bean_density} density, {c.solubility} solubility)",
            )
        origin = reference.origin(bean.origin_id)
        if origin is not None and origin.extraction_modifier:
            walk.shift(
                origin.extraction_modifier * MICRONS_PER_MODIFIER_POINT,
                f"{origin.country} origin ({origin.characteristics.altitude_range}, {origin.density_factor} density)",
            )
        return

    blend = reference.blend(bean.blend_profile)
    if blend is not None and blend.extraction_modifier:
        walk.shift(blend.extraction_modifier * MICRONS_PER_MODIFIER_POINT, f"{blend.name} blend profile")
    dominant = reference.origin(bean.dominant_origin_id)
    if dominant is not None and dominant.extraction_modifier:
        walk.shift(
            dominant.extraction_modifier * MICRONS_PER_MODIFIER_POINT * DOMINANT_ORIGIN_STRENGTH,
            f"{dominant.country} dominant origin (50% blend strength)",
        )


def calculate_grind_setting(
    profile: EquipmentProfile,
    bean: BeanInfo,
    targets: BrewTargets,
    weather: WeatherData,
    reference: ReferenceTables,
    log: AdjustmentLog,
) -> Tuple[Union[SteppedGrindSetting, SteplessGrindSetting], str]:
    """
    Walk the ordered micron adjustments from the 25% anchor and format the
    result for the grinder. Returns (grind_setting, reasoning).

    The "Applied N adjustments" count in the reasoning covers grind shifts
    only: the baseline entry and the dose records sharing the log are not
    counted.
    """
    grinder, machine, basket = profile.grinder, profile.machine, profile.basket
    walk = _GrindWalk(profile, log)
    baseline = walk.setting

    log.add(
        "Baseline (fine espresso zone)",
        f"Starting at setting {baseline:.1f} (25% of espresso range)",
    )

    # roast: the biggest single factor after the anchor
    walk.shift(ROAST_MICRONS.get(bean.roast_level, 0), f"{bean.roast_level.value} roast", show_microns=True)

    microns, label = freshness_shift(bean.roast_date_days_ago, bean.process_method)
    walk.shift(microns, label)

    walk.shift(PROCESS_MICRONS.get(bean.process_method, 0), f"{bean.process_method.value} process")

    _bean_identity_shifts(walk, bean, reference)

    # higher pressure pushes water harder through the same puck, so it
    # needs more resistance: finer, not coarser
    if machine.pump_pressure_bars >= HIGH_PRESSURE_BARS:
        walk.shift(
            -40, f"High pressure ({machine.pump_pressure_bars:g} bar)",
            "more pressure needs more puck resistance",
        )
    if machine.machine_type in (MachineType.LEVER_MANUAL, MachineType.LEVER_SPRING):
        walk.shift(30, "Lever machine (variable pressure profile)")

    if 0 < machine.water_debit_ml_per_min < SLOW_DEBIT_ML_PER_MIN:
        walk.shift(
            20, f"Slow water debit ({machine.water_debit_ml_per_min:g} ml/min)",
            "slower flow compensates",
        )

    if basket.type == BasketType.PRESSURIZED:
        walk.shift(160, "Pressurized basket", "basket creates its own resistance", prefix="Much ")
    elif basket.type == BasketType.PRECISION:
        walk.shift(-10, "Precision basket (IMS/VST)", "uniform holes reduce channeling")

    if basket.is_small:
        walk.shift(-20, f"Small {basket.size_mm:g}mm basket", "less puck area needs finer grind")

    if weather.humidity > 70:
        walk.shift(15, f"High humidity ({weather.humidity:g}%)", "grounds absorb moisture")
    elif weather.humidity < 30:
        walk.shift(-15, f"Low humidity ({weather.humidity:g}%)", "dry grounds, less swelling")

    if weather.temperature_c > 30:
        walk.shift(10, f"High ambient temp ({weather.temperature_c:g}°C)")
    elif weather.temperature_c < 15:
        walk.shift(-10, f"Low ambient temp ({weather.temperature_c:g}°C)")

    taste = targets.taste_preference
    if taste == TastePreference.BODY:
        walk.shift(-20, "Preference: more body", "higher extraction")
    elif taste in (TastePreference.BRIGHT, TastePreference.SWEETNESS):
        walk.shift(20, f"Preference: {taste.value}", "avoid over-extraction")

    if targets.ratio > 2.5:
        walk.shift(20, f"Long ratio (1:{targets.ratio:g})", "more water, less resistance needed")
    elif targets.ratio < 1.8:
        walk.shift(-20, f"Short ratio (1:{targets.ratio:g})", "ristretto needs more resistance")

    # fast burrs make more heat and fines, which act finer than the dial
    if grinder.rpm > HIGH_RPM:
        walk.shift(10, f"High RPM grinder (~{grinder.rpm:g} RPM)", "heat/fines compensate")

    # interaction terms
    if (
        bean.roast_date_days_ago < 7
        and bean.roast_level in (RoastLevel.DARK, RoastLevel.MEDIUM_DARK)
        and weather.temperature_c > 28
    ):
        walk.shift(
            20, "⚠ Compound: fresh + dark + warm conditions", "high channeling risk", prefix="Extra ",
        )

    # must see every shift above
    if weather.humidity > 65 and walk.setting < setting_at(0.15, grinder):
        walk.shift(
            10, "⚠ Compound: high humidity + very fine grind", "clumping risk", prefix="Extra ",
        )

    grind = format_setting(walk.setting, grinder)
    reasoning = (
        f"Started at the fine espresso zone (25% of {_grinder_name(grinder)}'s range = "
        f"{baseline:.1f}). Applied {walk.applied} adjustments in microns, converted to grind "
        f"steps. Recommended: {grind.display()}."
    )
    return grind, reasoning
