# dial_backend/app/recipe_engine/defaults.py
from __future__ import annotations

from typing import List

from dial_backend.app.config import DEFAULT_HUMIDITY, DEFAULT_TEMPERATURE_C
from dial_backend.app.schemas import BrewTargets, RatioPreset, TastePreference, WeatherData

RATIO_PRESETS: List[RatioPreset] = [
    RatioPreset(ratio=1.5, label="Ristretto"),
    RatioPreset(ratio=2.0, label="Standard"),
    RatioPreset(ratio=2.5, label="Lungo-ish"),
    RatioPreset(ratio=3.0, label="Lungo"),
]

def default_targets() -> BrewTargets:
    return BrewTargets(
        ratio=2.0,
        brew_time_min_sec=25,
        brew_time_max_sec=30,
        taste_preference=TastePreference.BALANCED,
    )

def default_weather() -> WeatherData:
    """Neutral room conditions for when no weather was resolved upstream."""
    return WeatherData(temperature_c=DEFAULT_TEMPERATURE_C, humidity=DEFAULT_HUMIDITY)
