# dial_backend/app/config/__init__.py
from __future__ import annotations

# Re-export config surface expected by callers across the app.

# Env settings and the reference manifest live in manifest.py
from .manifest import (
    APP_ENV,
    DEBUG_MODE,
    CORS_ORIGINS,
    DEFAULT_TEMPERATURE_C,
    DEFAULT_HUMIDITY,
    validate_manifest,
)

# Path helpers live in paths.py
from .paths import (
    REPO_ROOT,
    APP_ROOT,
    REFERENCE_DIR,
    get_reference_dir,
    resolve_reference_file,
)

__all__ = [
    # manifest
    "APP_ENV",
    "DEBUG_MODE",
    "CORS_ORIGINS",
    "DEFAULT_TEMPERATURE_C",
    "DEFAULT_HUMIDITY",
    "validate_manifest",
    # paths
    "REPO_ROOT",
    "APP_ROOT",
    "REFERENCE_DIR",
    "get_reference_dir",
    "resolve_reference_file",
]
