from __future__ import annotations
import copy

import pytest
from fastapi.testclient import TestClient

from dial_backend.app.main import app
from dial_backend.app.schemas import (
    Basket,
    BeanInfo,
    BrewTargets,
    EquipmentProfile,
    Grinder,
    Machine,
    WeatherData,
)
from dial_backend.app.services.catalog import clear_cache

# --- API client ---
@pytest.fixture(scope="session")
def client():
    return TestClient(app)

# --- Reference dir override must not leak between tests ---
@pytest.fixture(autouse=True)
def fresh_catalog_cache():
    clear_cache()
    yield
    clear_cache()

# --- Calibration setup: Encore ESP + Stilosa + 51mm bottomless ---
ENCORE_ESP = dict(
    brand="Baratza", model="Encore ESP", burr_type="conical", burr_size_mm=40, rpm=550,
    espresso_range_min=1, espresso_range_max=20, total_settings=40,
    stepped_or_stepless="stepped", micron_per_step=20,
)
STILOSA = dict(
    brand="De'Longhi", model="Stilosa", machine_type="other", pump_pressure_bars=15,
    boiler_type="thermocoil", group_head_size_mm=51, has_pre_infusion=False, has_pid=False,
    water_debit_ml_per_min=184,
)
BOTTOMLESS_51 = dict(
    type="non-pressurized", size_mm=51, capacity_min_g=16, capacity_max_g=18, is_bottomless=True,
)

# Neutral rig: 9 bar, no debit, 58mm, stepless 0-40 at 10µm/step, anchor = 10.
NEUTRAL_MACHINE = dict(
    brand="Test", model="Neutral", machine_type="saturated", pump_pressure_bars=9,
    boiler_type="dual", has_pre_infusion=False, has_pid=True, water_debit_ml_per_min=0,
)
LINEAR_GRINDER = dict(
    brand="Test", model="Linear", burr_type="flat", burr_size_mm=64, rpm=0,
    espresso_range_min=0, espresso_range_max=40, stepped_or_stepless="stepless", micron_per_step=10,
)
STANDARD_58 = dict(
    type="non-pressurized", size_mm=58, capacity_min_g=18, capacity_max_g=20, is_bottomless=False,
)


def _profile(base_machine: dict, base_grinder: dict, base_basket: dict, overrides: dict) -> EquipmentProfile:
    # overrides: {"machine": {...}, "grinder": {...}, "basket": {...}}
    return EquipmentProfile(
        machine=Machine(**{**base_machine, **overrides.get("machine", {})}),
        grinder=Grinder(**{**base_grinder, **overrides.get("grinder", {})}),
        basket=Basket(**{**base_basket, **overrides.get("basket", {})}),
    )

@pytest.fixture
def calibration_profile():
    def _make(**overrides) -> EquipmentProfile:
        return _profile(STILOSA, ENCORE_ESP, BOTTOMLESS_51, overrides)
    return _make

@pytest.fixture
def neutral_profile():
    def _make(**overrides) -> EquipmentProfile:
        return _profile(NEUTRAL_MACHINE, LINEAR_GRINDER, STANDARD_58, overrides)
    return _make

@pytest.fixture
def make_bean():
    def _make(**kw) -> BeanInfo:
        base = dict(bean_type="single-origin", roast_level="medium", process_method="washed", roast_date_days_ago=14)
        base.update(kw)
        return BeanInfo(**base)
    return _make

@pytest.fixture
def make_targets():
    def _make(**kw) -> BrewTargets:
        base = dict(ratio=2.0, brew_time_min_sec=25, brew_time_max_sec=30, taste_preference="balanced")
        base.update(kw)
        return BrewTargets(**base)
    return _make

@pytest.fixture
def room_weather():
    return WeatherData(temperature_c=20, humidity=50)

@pytest.fixture
def calibration_payload():
    # tests mutate the payload; keep the module dicts pristine
    return copy.deepcopy({
        "profile": {"machine": STILOSA, "grinder": ENCORE_ESP, "basket": BOTTOMLESS_51},
        "bean": {"bean_type": "single-origin", "roast_level": "medium", "process_method": "washed", "roast_date_days_ago": 14},
        "targets": {"ratio": 2.0, "brew_time_min_sec": 25, "brew_time_max_sec": 30, "taste_preference": "balanced"},
        "weather": {"temperature_c": 20, "humidity": 50},
    })
