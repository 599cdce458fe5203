# dial_backend/app/services/catalog/__init__.py
"""
Reference catalog: origins, varietals and blend profiles (engine lookups)
plus the machine / grinder / basket equipment lists.

Import from here in routers and tests, e.g.:
    from dial_backend.app.services.catalog import (
        load_reference_tables, build_profile, list_kind, find_in_kind,
    )
"""

from __future__ import annotations

# ---- Low-level loading ----
from .loader import (  # noqa: F401
    load_reference_file,
    load_records,
    has_reference_file,
    clear_cache,
)

# ---- Typed catalog ----
from .reference_catalog import (  # noqa: F401
    KINDS,
    list_kind,
    find_in_kind,
    list_origins,
    list_varietals,
    list_blends,
    list_machines,
    list_grinders,
    list_baskets,
    load_reference_tables,
    build_profile,
)
