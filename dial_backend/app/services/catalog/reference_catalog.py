# dial_backend/app/services/catalog/reference_catalog.py
from __future__ import annotations
from typing import Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from dial_backend.app.recipe_engine import ReferenceTables
from dial_backend.app.schemas import (
    BasketData,
    BlendProfileData,
    EquipmentProfile,
    GrinderData,
    MachineData,
    OriginData,
    VarietalData,
)

from .loader import load_records

M = TypeVar("M", bound=BaseModel)

ORIGINS_FILE = "origins.json"
VARIETALS_FILE = "varietals.json"
BLENDS_FILE = "blends.json"
MACHINES_FILE = "machines.yaml"
GRINDERS_FILE = "grinders.yaml"
BASKETS_FILE = "baskets.yaml"

# kind -> (file, list key, model, required)
KINDS: Dict[str, tuple] = {
    "origins": (ORIGINS_FILE, "origins", OriginData, True),
    "varietals": (VARIETALS_FILE, "varietals", VarietalData, True),
    "blends": (BLENDS_FILE, "blends", BlendProfileData, True),
    "machines": (MACHINES_FILE, "machines", MachineData, False),
    "grinders": (GRINDERS_FILE, "grinders", GrinderData, False),
    "baskets": (BASKETS_FILE, "baskets", BasketData, False),
}


def _norm(s: Optional[str]) -> str:
    return (s or "").strip().lower()

def _parse(filename: str, key: str, model: Type[M], required: bool) -> List[M]:
    out: List[M] = []
    for i, raw in enumerate(load_records(filename, key, required=required)):
        try:
            out.append(model.model_validate(raw))
        except ValidationError as e:
            raise ValueError(f"{filename}: record {i} is invalid: {e}") from e
    return out

# What it does:
# List every record of one catalog kind ("origins", "grinders", ...).
def list_kind(kind: str) -> List[BaseModel]:
    if kind not in KINDS:
        raise KeyError(f"unknown catalog kind: {kind}")
    filename, key, model, required = KINDS[kind]
    return _parse(filename, key, model, required)

def find_in_kind(kind: str, item_id: Optional[str]) -> Optional[BaseModel]:
    if not item_id:
        return None
    wanted = _norm(item_id)
    for rec in list_kind(kind):
        rid = getattr(rec.id, "value", rec.id)
        if _norm(rid) == wanted:
            return rec
    return None

def list_origins() -> List[OriginData]:
    return list_kind("origins")  # type: ignore[return-value]

def list_varietals() -> List[VarietalData]:
    return list_kind("varietals")  # type: ignore[return-value]

def list_blends() -> List[BlendProfileData]:
    return list_kind("blends")  # type: ignore[return-value]

def list_machines() -> List[MachineData]:
    return list_kind("machines")  # type: ignore[return-value]

def list_grinders() -> List[GrinderData]:
    return list_kind("grinders")  # type: ignore[return-value]

def list_baskets() -> List[BasketData]:
    return list_kind("baskets")  # type: ignore[return-value]

# What it does:
# Immutable origin/varietal/blend tables for the engine.
def load_reference_tables() -> ReferenceTables:
    return ReferenceTables.from_records(
        origins=list_origins(),
        varietals=list_varietals(),
        blends=list_blends(),
    )

# What it does:
# Assemble an equipment profile from catalog ids. Unknown ids raise KeyError.
def build_profile(
    machine_id: str,
    grinder_id: str,
    basket_id: str,
    name: Optional[str] = None,
) -> EquipmentProfile:
    machine = find_in_kind("machines", machine_id)
    if machine is None:
        raise KeyError(f"unknown machine: {machine_id}")
    grinder = find_in_kind("grinders", grinder_id)
    if grinder is None:
        raise KeyError(f"unknown grinder: {grinder_id}")
    basket = find_in_kind("baskets", basket_id)
    if basket is None:
        raise KeyError(f"unknown basket: {basket_id}")

    # catalog records carry ids/labels the engine models ignore
    return EquipmentProfile(
        name=name,
        machine=machine.model_dump(exclude={"id"}),
        grinder=grinder.model_dump(exclude={"id"}),
        basket=basket.model_dump(exclude={"id", "label"}),
    )
