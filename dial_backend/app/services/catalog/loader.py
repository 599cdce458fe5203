# dial_backend/app/services/catalog/loader.py
from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import yaml  # PyYAML

from dial_backend.app.config.paths import resolve_reference_file

# -----------------------------------------------------------------------------
# Logger
# -----------------------------------------------------------------------------
log = logging.getLogger("dial.catalog")
if not log.handlers:
    handler = logging.StreamHandler()
    log.addHandler(handler)
    log.setLevel(logging.INFO)

# -----------------------------------------------------------------------------
# Internal IO helpers
# -----------------------------------------------------------------------------
def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")

def _load_json_from(path: Path) -> Any:
    try:
        return json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

def _load_yaml_from(path: Path) -> Any:
    try:
        return yaml.safe_load(_read_text(path))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

# Cached per absolute path so a DIAL_REFERENCE_DIR override gets its own entry.
@lru_cache(maxsize=64)
def _load_cached(path_str: str) -> Any:
    path = Path(path_str)
    if path.suffix in (".yaml", ".yml"):
        obj = _load_yaml_from(path)
    else:
        obj = _load_json_from(path)
    log.info(f"[reference] loaded {path.name} from {path}")
    return obj

# -----------------------------------------------------------------------------
# Public loader API
# -----------------------------------------------------------------------------
def load_reference_file(filename: str, *, required: bool = True, default: Any = None) -> Any:
    """
    Load a reference table (JSON or YAML by extension) from the reference dir.
    Missing + required -> FileNotFoundError; missing + optional -> `default`.
    """
    path = resolve_reference_file(filename)
    if not path.exists():
        if required:
            raise FileNotFoundError(f"Reference file not found: {path}")
        log.info(f"[reference] optional file missing: {filename} (looked at {path}); using default.")
        return default
    return _load_cached(str(path))

def load_records(filename: str, key: str, *, required: bool = True) -> List[Dict[str, Any]]:
    """
    Records from a reference file. Accepts either a top-level list or a
    mapping holding the list under `key` (e.g. {"grinders": [...]}).
    """
    data = load_reference_file(filename, required=required, default=[])
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ValueError(f"Reference file {filename} has unexpected schema: expected a list of {key}")
    return data

def has_reference_file(filename: str) -> bool:
    return resolve_reference_file(filename).exists()

def clear_cache() -> None:
    _load_cached.cache_clear()
