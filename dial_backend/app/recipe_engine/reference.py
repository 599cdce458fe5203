# dial_backend/app/recipe_engine/reference.py
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from dial_backend.app.schemas import BlendProfileData, OriginData, VarietalData


def _key(value) -> str:
    # enum ids (blend profiles) key by their string value
    return str(getattr(value, "value", value))

def _freeze(records: Iterable) -> Mapping:
    return MappingProxyType({_key(r.id): r for r in records})


@dataclass(frozen=True)
class ReferenceTables:
    """
    Read-only origin / varietal / blend tables handed to the engine per call.
    Lookups are exact-id matches and return None on a miss; a miss means
    "no adjustment", never an error.
    """
    origins: Mapping[str, OriginData] = field(default_factory=lambda: MappingProxyType({}))
    varietals: Mapping[str, VarietalData] = field(default_factory=lambda: MappingProxyType({}))
    blends: Mapping[str, BlendProfileData] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_records(
        cls,
        origins: Iterable[OriginData] = (),
        varietals: Iterable[VarietalData] = (),
        blends: Iterable[BlendProfileData] = (),
    ) -> "ReferenceTables":
        return cls(origins=_freeze(origins), varietals=_freeze(varietals), blends=_freeze(blends))

    def origin(self, origin_id: Optional[str]) -> Optional[OriginData]:
        if not origin_id:
            return None
        return self.origins.get(origin_id)

    def varietal(self, varietal_id: Optional[str]) -> Optional[VarietalData]:
        if not varietal_id:
            return None
        return self.varietals.get(varietal_id)

    def blend(self, blend_id) -> Optional[BlendProfileData]:
        if not blend_id:
            return None
        return self.blends.get(_key(blend_id))


EMPTY_REFERENCE = ReferenceTables()
