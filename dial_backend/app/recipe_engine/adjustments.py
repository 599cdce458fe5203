# dial_backend/app/recipe_engine/adjustments.py
from __future__ import annotations

from typing import Iterator, List

from dial_backend.app.schemas import Adjustment


class AdjustmentLog:
    """
    Ordered, append-only record of every factor that moved the dose or grind.
    One log per calculation; the dose and grind stages write to it and the
    tips stage reads it. Exported as plain Adjustment records at the end.
    """
    def __init__(self) -> None:
        self._items: List[Adjustment] = []

    def add(self, factor: str, effect: str) -> None:
        self._items.append(Adjustment(factor=factor, effect=effect))

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Adjustment]:
        return iter(tuple(self._items))

    def factors(self) -> List[str]:
        return [a.factor for a in self._items]

    # -------- export --------
    def to_list(self) -> List[Adjustment]:
        return list(self._items)
