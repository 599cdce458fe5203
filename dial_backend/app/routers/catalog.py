# app/routers/catalog.py
from __future__ import annotations
from typing import Any

from fastapi import APIRouter, HTTPException, status

from dial_backend.app.services.catalog import KINDS, find_in_kind, list_kind

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _check_kind(kind: str) -> None:
    if kind not in KINDS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"unknown catalog kind: {kind} (expected one of {', '.join(KINDS)})",
        )

# What it does:
# List one reference table (origins, varietals, blends, machines, grinders, baskets).
@router.get("/{kind}")
def get_kind(kind: str) -> dict[str, Any]:
    _check_kind(kind)
    try:
        items = list_kind(kind)
    except (FileNotFoundError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"load {kind} failed: {e}")
    return {"items": [i.model_dump(mode="json") for i in items]}

# What it does:
# Fetch a single record by id.
@router.get("/{kind}/{item_id}")
def get_item(kind: str, item_id: str) -> dict[str, Any]:
    _check_kind(kind)
    try:
        item = find_in_kind(kind, item_id)
    except (FileNotFoundError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"load {kind} failed: {e}")
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind}: {item_id} not found")
    return item.model_dump(mode="json")
