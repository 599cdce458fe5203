# dial_backend/app/recipe_engine/dose.py
from __future__ import annotations

from typing import Dict, Tuple

from dial_backend.app.schemas import Basket, RoastLevel

from .adjustments import AdjustmentLog
from .grind_math import clamp, round_to_step

# Darker beans are less dense: the same basket volume weighs less.
ROAST_DOSE_SHIFT_G: Dict[RoastLevel, Tuple[float, str]] = {
    RoastLevel.DARK: (-1.0, "Dark roast (significantly less dense)"),
    RoastLevel.MEDIUM_DARK: (-0.5, "Medium-dark roast (less dense)"),
    RoastLevel.LIGHT: (+0.5, "Light roast (denser beans)"),
}

SMALL_BASKET_BUMP_G = 0.5
DOSE_STEP_G = 0.5


def calculate_dose(basket: Basket, roast_level: RoastLevel, log: AdjustmentLog) -> Tuple[float, str]:
    """
    Grams of coffee for the basket and roast.

    Starts from the middle of the basket's rated capacity, shifts for roast
    density, bumps small non-pressurized baskets when there is headroom,
    then rounds to the nearest half gram inside the rated capacity.
    Returns (dose_g, reasoning).
    """
    base = basket.capacity_min_g + (basket.capacity_max_g - basket.capacity_min_g) / 2
    dose = base
    applied = []

    shift = ROAST_DOSE_SHIFT_G.get(roast_level)
    if shift:
        grams, factor = shift
        dose += grams
        log.add(factor, f"Dose {'+' if grams > 0 else '−'}{abs(grams):g}g")
        applied.append("roast density")

    # small baskets pack tighter; the bump is skipped rather than clamped later
    if basket.is_small and dose + SMALL_BASKET_BUMP_G <= basket.capacity_max_g:
        dose += SMALL_BASKET_BUMP_G
        log.add(
            f"Small {basket.size_mm:g}mm basket (non-pressurized)",
            f"Dose +{SMALL_BASKET_BUMP_G:g}g to build puck resistance",
        )
        applied.append("small basket size")

    dose = round_to_step(dose, DOSE_STEP_G)
    dose = clamp(dose, basket.capacity_min_g, basket.capacity_max_g)

    if applied:
        adjusted = f"Adjusted for {' and '.join(applied)}."
    else:
        adjusted = "No density or basket adjustment needed."
    reasoning = f"Basket midpoint: {base:.1f}g. {adjusted} Final: {dose:g}g."
    return dose, reasoning
