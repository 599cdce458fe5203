# dial_backend/app/config/paths.py
from __future__ import annotations

"""
Central path resolution for Dial.

Env overrides:
    DIAL_REFERENCE_DIR

Defaults:
    <repo_root>/dial_backend/app/reference

Exports:
    - constants: REPO_ROOT, APP_ROOT, REFERENCE_DIR
    - getters: get_reference_dir()
    - resolvers: resolve_reference_file()
"""

import os
from pathlib import Path

# ──────────────────────────────────────────────────────────────────────────────
_THIS_FILE = Path(__file__).resolve()

def _resolve_repo_root() -> Path:
    p = _THIS_FILE
    for _ in range(6):
        if (p.parent / "dial_backend" / "app").exists():
            return p.parent
        p = p.parent
    return _THIS_FILE.parents[3]

REPO_ROOT: Path = _resolve_repo_root()
APP_ROOT: Path = REPO_ROOT / "dial_backend" / "app"

def _clean_env(value: str | None) -> str | None:
    if value is None:
        return None
    v = value.strip().strip('"').strip("'")
    return v or None

def _env_path(name: str) -> Path | None:
    raw = _clean_env(os.getenv(name))
    if not raw:
        return None
    return Path(raw).expanduser().resolve()

_default_reference = APP_ROOT / "reference"

# ── Getters
def get_reference_dir() -> Path:
    # read the env on every call so tests can point at a temp tree
    return (_env_path("DIAL_REFERENCE_DIR") or _default_reference).resolve()

REFERENCE_DIR: Path = get_reference_dir()

# ── Resolvers
def resolve_reference_file(filename: str) -> Path:
    """
    Absolute path of a reference table file (origins.json, grinders.yaml, ...).
    The file may not exist; callers decide whether that is fatal.
    """
    return get_reference_dir() / filename
