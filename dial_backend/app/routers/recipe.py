# app/routers/recipe.py
from __future__ import annotations
import logging
import math

from fastapi import APIRouter, Depends, HTTPException, status

from dial_backend.app.recipe_engine import (
    RATIO_PRESETS,
    InvalidInput,
    ReferenceTables,
    compute,
    default_targets,
    default_weather,
    freshness_status,
)
from dial_backend.app.schemas import (
    BeanInfo,
    BrewTargets,
    EquipmentProfile,
    RecipeByIdsRequest,
    RecipeDefaultsOut,
    RecipeOut,
    RecipeRequest,
    WeatherData,
)
from dial_backend.app.services.catalog import build_profile, load_reference_tables

log = logging.getLogger("dial.api")

router = APIRouter(prefix="/recipe", tags=["recipe"])


def get_reference_tables() -> ReferenceTables:
    return load_reference_tables()


def _json_safe(values: dict) -> dict:
    # NaN / inf are not valid JSON
    return {k: (v if isinstance(v, (int, float)) and math.isfinite(v) else str(v)) for k, v in values.items()}


def _run(
    profile: EquipmentProfile,
    bean: BeanInfo,
    targets: BrewTargets | None,
    weather: WeatherData | None,
    reference: ReferenceTables,
) -> RecipeOut:
    weather = weather or default_weather()
    try:
        recipe = compute(profile, bean, targets or default_targets(), weather, reference)
    except InvalidInput as e:
        log.info("rejected recipe input: %s", e.message)
        detail = e.to_dict()
        detail["values"] = _json_safe(e.values)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    return RecipeOut(
        recipe=recipe,
        freshness=freshness_status(bean.roast_date_days_ago),
        weather_used=weather,
    )


# What it does:
# Compute a recipe from a full equipment profile.
@router.post("/compute", response_model=RecipeOut)
def compute_recipe(
    req: RecipeRequest,
    reference: ReferenceTables = Depends(get_reference_tables),
) -> RecipeOut:
    return _run(req.profile, req.bean, req.targets, req.weather, reference)


# What it does:
# Compute a recipe for catalog equipment referenced by id.
@router.post("/compute/by-ids", response_model=RecipeOut)
def compute_recipe_by_ids(
    req: RecipeByIdsRequest,
    reference: ReferenceTables = Depends(get_reference_tables),
) -> RecipeOut:
    try:
        profile = build_profile(req.machine_id, req.grinder_id, req.basket_id, name=req.profile_name)
    except KeyError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e.args[0]))
    return _run(profile, req.bean, req.targets, req.weather, reference)


@router.get("/defaults", response_model=RecipeDefaultsOut)
def recipe_defaults() -> RecipeDefaultsOut:
    """
    Prefill values for the brew form: target window, ratio presets and the
    neutral weather used when none is supplied.
    """
    return RecipeDefaultsOut(
        targets=default_targets(),
        ratio_presets=RATIO_PRESETS,
        weather=default_weather(),
    )
