# tests/test_dose.py
import pytest

from dial_backend.app.recipe_engine.adjustments import AdjustmentLog
from dial_backend.app.recipe_engine.dose import calculate_dose
from dial_backend.app.schemas import Basket, RoastLevel


def _basket(**kw) -> Basket:
    base = dict(type="non-pressurized", size_mm=58, capacity_min_g=18, capacity_max_g=20)
    base.update(kw)
    return Basket(**base)

@pytest.mark.parametrize("roast,expected", [
    (RoastLevel.LIGHT, 19.5),
    (RoastLevel.MEDIUM_LIGHT, 19.0),
    (RoastLevel.MEDIUM, 19.0),
    (RoastLevel.MEDIUM_DARK, 18.5),
    (RoastLevel.DARK, 18.0),
])
def test_roast_density_shift(roast, expected):
    log = AdjustmentLog()
    dose, _ = calculate_dose(_basket(), roast, log)
    assert dose == expected
    # one record only when the roast actually moved the dose
    assert len(log) == (0 if roast in (RoastLevel.MEDIUM, RoastLevel.MEDIUM_LIGHT) else 1)

def test_small_basket_bump_when_headroom():
    log = AdjustmentLog()
    dose, reasoning = calculate_dose(_basket(size_mm=51, capacity_min_g=16, capacity_max_g=18), RoastLevel.DARK, log)
    assert dose == 16.5
    assert log.factors() == ["Dark roast (significantly less dense)", "Small 51mm basket (non-pressurized)"]
    assert "small basket" in reasoning

def test_small_basket_bump_skipped_without_headroom():
    log = AdjustmentLog()
    dose, _ = calculate_dose(_basket(size_mm=51, capacity_min_g=16, capacity_max_g=17), RoastLevel.LIGHT, log)
    # 16.5 + 0.5 roast = 17.0; another 0.5 would exceed the max, so no bump
    assert dose == 17.0
    assert not any("basket" in f for f in log.factors())

def test_pressurized_small_basket_gets_no_bump():
    log = AdjustmentLog()
    dose, _ = calculate_dose(_basket(type="pressurized", size_mm=51, capacity_min_g=14, capacity_max_g=16), RoastLevel.MEDIUM, log)
    assert dose == 15.0
    assert len(log) == 0

def test_rounds_half_up_to_half_gram():
    # midpoint 18.25 -> 18.5 (banker's rounding would give 18.0)
    dose, _ = calculate_dose(_basket(capacity_min_g=17.5, capacity_max_g=19), RoastLevel.MEDIUM, AdjustmentLog())
    assert dose == 18.5

def test_clamped_into_capacity():
    dose, reasoning = calculate_dose(_basket(capacity_min_g=14, capacity_max_g=14.5), RoastLevel.DARK, AdjustmentLog())
    assert dose == 14
    assert reasoning.startswith("Basket midpoint: 14.2g") or reasoning.startswith("Basket midpoint: 14.3g")
    assert reasoning.endswith("Final: 14g.")
