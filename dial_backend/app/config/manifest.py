# dial_backend/app/config/manifest.py
from __future__ import annotations

import os
from typing import Dict, List

from .paths import resolve_reference_file

# ---- environment mode ----
APP_ENV: str = os.getenv("APP_ENV", "development")
DEBUG_MODE: bool = os.getenv("DEBUG", "0") not in ("", "0", "false", "False")

# ---- CORS (comma separated) ----
_DEFAULT_CORS = "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS: List[str] = [
    o.strip() for o in os.getenv("DIAL_CORS_ORIGINS", _DEFAULT_CORS).split(",") if o.strip()
]

# ---- Neutral weather used when the caller has nothing resolved ----
DEFAULT_TEMPERATURE_C: float = float(os.getenv("DIAL_DEFAULT_TEMPERATURE_C", "20"))
DEFAULT_HUMIDITY: float = float(os.getenv("DIAL_DEFAULT_HUMIDITY", "50"))

# ---- Reference table manifest ----
REFERENCE_REQUIRED: List[str] = [
    "origins.json",
    "varietals.json",
    "blends.json",
]

REFERENCE_OPTIONAL: List[str] = [
    "machines.yaml",
    "grinders.yaml",
    "baskets.yaml",
]

def validate_manifest() -> Dict[str, object]:
    missing_required = [n for n in REFERENCE_REQUIRED if not resolve_reference_file(n).exists()]
    missing_optional = [n for n in REFERENCE_OPTIONAL if not resolve_reference_file(n).exists()]

    status = "ok" if not missing_required else "missing_required"
    return {
        "status": status,
        "required": REFERENCE_REQUIRED,
        "optional": REFERENCE_OPTIONAL,
        "missing_required": missing_required,
        "missing_optional": missing_optional,
    }


__all__ = [
    "APP_ENV",
    "DEBUG_MODE",
    "CORS_ORIGINS",
    "DEFAULT_TEMPERATURE_C",
    "DEFAULT_HUMIDITY",
    "REFERENCE_REQUIRED",
    "REFERENCE_OPTIONAL",
    "validate_manifest",
]
