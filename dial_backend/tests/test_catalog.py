# tests/test_catalog.py
# Purpose:
# Reference tables load from the shipped dir or a DIAL_REFERENCE_DIR override,
# malformed files fail loudly, and catalog ids assemble into profiles.
import json
import pytest

from dial_backend.app.config import validate_manifest
from dial_backend.app.recipe_engine import compute
from dial_backend.app.services.catalog import (
    build_profile,
    find_in_kind,
    has_reference_file,
    list_grinders,
    list_kind,
    list_origins,
    load_records,
    load_reference_tables,
)


@pytest.fixture
def ref_dir(tmp_path, monkeypatch):
    d = tmp_path / "reference"
    d.mkdir()
    monkeypatch.setenv("DIAL_REFERENCE_DIR", str(d))
    return d

def _write_required(d, origins=None):
    (d / "origins.json").write_text(json.dumps(origins or [{"id": "x-origin", "country": "X", "extraction_modifier": 1}]))
    (d / "varietals.json").write_text(json.dumps([{"id": "typica", "name": "Typica"}]))
    (d / "blends.json").write_text(json.dumps([{"id": "classic", "name": "Classic", "extraction_modifier": 1}]))

# ---------- shipped tables ----------

def test_shipped_tables_load():
    assert len(list_origins()) == 8
    assert {b.id.value for b in list_kind("blends")} == {"classic", "bright-fruity", "balanced", "dark-bold", "unknown"}
    assert {g.id for g in list_grinders()} >= {"baratza-encore-esp", "niche-zero"}
    report = validate_manifest()
    assert report["status"] == "ok" and report["missing_optional"] == []

def test_find_is_case_insensitive():
    rec = find_in_kind("grinders", "  Baratza-Encore-ESP ")
    assert rec is not None and rec.model == "Encore ESP"
    assert find_in_kind("grinders", "nope") is None
    assert find_in_kind("grinders", None) is None

def test_unknown_kind_is_key_error():
    with pytest.raises(KeyError):
        list_kind("kettles")

def test_reference_tables_feed_origin_shift(calibration_profile, make_bean, make_targets, room_weather):
    tables = load_reference_tables()
    assert tables.origin("brazil-cerrado").extraction_modifier == 1.5
    assert tables.blend("dark-bold").extraction_modifier == 2.0
    out = compute(calibration_profile(), make_bean(origin_id="brazil-cerrado"), make_targets(), room_weather, tables)
    # 3.75 + 0.75 steps = 4.5, rounded half up
    assert out.recommended_grind_setting.value == 5

def test_build_profile_from_ids():
    profile = build_profile("delonghi-stilosa", "baratza-encore-esp", "51mm-bottomless", name="kitchen")
    assert profile.name == "kitchen"
    assert profile.machine.pump_pressure_bars == 15
    assert profile.grinder.micron_per_step == 20
    assert profile.basket.is_small and profile.basket.is_bottomless

@pytest.mark.parametrize("ids,missing", [
    (("nope", "baratza-encore-esp", "51mm-bottomless"), "unknown machine: nope"),
    (("delonghi-stilosa", "nope", "51mm-bottomless"), "unknown grinder: nope"),
    (("delonghi-stilosa", "baratza-encore-esp", "nope"), "unknown basket: nope"),
])
def test_build_profile_unknown_id(ids, missing):
    with pytest.raises(KeyError) as ei:
        build_profile(*ids)
    assert ei.value.args[0] == missing

# ---------- DIAL_REFERENCE_DIR override ----------

def test_override_dir_is_used(ref_dir):
    _write_required(ref_dir)
    assert [o.id for o in list_origins()] == ["x-origin"]
    assert load_reference_tables().origin("x-origin").country == "X"

def test_missing_required_file_raises(ref_dir):
    with pytest.raises(FileNotFoundError):
        list_origins()
    report = validate_manifest()
    assert report["status"] == "missing_required"
    assert "origins.json" in report["missing_required"]

def test_missing_optional_file_is_empty(ref_dir):
    _write_required(ref_dir)
    assert not has_reference_file("machines.yaml")
    assert list_kind("machines") == []

def test_records_may_be_wrapped_under_kind(ref_dir):
    (ref_dir / "grinders.yaml").write_text(
        "grinders:\n"
        "  - id: g1\n"
        "    espresso_range_min: 0\n"
        "    espresso_range_max: 10\n"
    )
    (ref_dir / "varietals.json").write_text(json.dumps({"varietals": [{"id": "v1", "name": "V1"}]}))
    assert [g.id for g in list_grinders()] == ["g1"]
    assert load_records("varietals.json", "varietals") == [{"id": "v1", "name": "V1"}]

def test_invalid_json_is_value_error(ref_dir):
    (ref_dir / "origins.json").write_text("{not json")
    with pytest.raises(ValueError, match="Invalid JSON"):
        list_origins()

def test_invalid_yaml_is_value_error(ref_dir):
    (ref_dir / "baskets.yaml").write_text("baskets: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        list_kind("baskets")

def test_wrong_shape_is_value_error(ref_dir):
    (ref_dir / "blends.json").write_text(json.dumps({"blends": "classic"}))
    with pytest.raises(ValueError, match="unexpected schema"):
        list_kind("blends")

def test_invalid_record_is_value_error(ref_dir):
    _write_required(ref_dir, origins=[{"id": "no-country"}])
    with pytest.raises(ValueError, match="record 0 is invalid"):
        list_origins()
