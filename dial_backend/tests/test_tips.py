# tests/test_tips.py
from dial_backend.app.recipe_engine.tips import MAX_TIPS, generate_tips
from dial_backend.app.schemas import WeatherData


def test_calibration_tips_in_priority_order(calibration_profile, make_bean, room_weather):
    tips = generate_tips(calibration_profile(), make_bean(), room_weather)
    assert len(tips) == 4
    assert tips[0].startswith("Beans are at peak freshness (14 days)")
    assert "cooling flush" in tips[1]
    assert tips[2].startswith("Small conical burrs + bottomless portafilter")
    assert "lacks PID" in tips[3]

def test_channeling_needs_two_risks_and_list_is_capped(calibration_profile, make_bean):
    bean = make_bean(bean_type="blend", blend_profile="unknown", roast_date_days_ago=3)
    tips = generate_tips(calibration_profile(), bean, WeatherData(temperature_c=22, humidity=80))
    assert len(tips) == MAX_TIPS
    assert tips[0].startswith("⚠ High channeling risk: very fresh beans (CO2), high humidity (clumping), small conical burrs (fines).")
    assert tips[1].startswith("Using neutral settings for unknown blend")
    assert tips[2].startswith("Beans are 3 days off roast")
    assert "high pressure without PID" in tips[3]

def test_single_risk_is_not_channeling(neutral_profile, make_bean, room_weather):
    # 64mm flat burrs: very fresh beans are the only risk
    tips = generate_tips(neutral_profile(), make_bean(roast_date_days_ago=3), room_weather)
    assert not any("channeling" in t for t in tips)
    assert tips[0].startswith("Beans are 3 days off roast")

def test_fresh_beans_on_small_conical_is_channeling(calibration_profile, make_bean, room_weather):
    tips = generate_tips(calibration_profile(), make_bean(roast_date_days_ago=3), room_weather)
    assert tips[0].startswith("⚠ High channeling risk: very fresh beans (CO2), small conical burrs (fines).")

def test_e61_warmup(neutral_profile, make_bean, room_weather):
    profile = neutral_profile(machine={"machine_type": "e61", "warmup_minutes": 25})
    tips = generate_tips(profile, make_bean(roast_date_days_ago=10), room_weather)
    assert len(tips) == 2
    assert tips[0].startswith("Beans are at peak freshness (10 days)")
    assert tips[1].startswith("E61 group head needs 25+ minutes")

def test_e61_without_warmup_gets_no_warmup_tip(neutral_profile, make_bean, room_weather):
    tips = generate_tips(neutral_profile(machine={"machine_type": "e61"}), make_bean(), room_weather)
    assert not any("E61" in t for t in tips)

def test_hx_without_pid(neutral_profile, make_bean, room_weather):
    profile = neutral_profile(machine={"machine_type": "hx", "has_pid": False})
    tips = generate_tips(profile, make_bean(), room_weather)
    assert len(tips) == 3
    assert tips[1].startswith("HX machine: flush")
    assert tips[2].startswith("Your machine lacks PID")

def test_roast_humidity_and_basket_tips(neutral_profile, make_bean):
    profile = neutral_profile(basket={"type": "pressurized"})
    tips = generate_tips(profile, make_bean(roast_level="light", roast_date_days_ago=30), WeatherData(temperature_c=20, humidity=25))
    assert tips[0].startswith("Beans are 30 days off roast")
    assert tips[1].startswith("Light roast:")
    assert tips[2].startswith("Humidity is 25%")
    assert tips[3].startswith("Pressurized baskets are forgiving")

def test_quiet_setup_has_no_tips(neutral_profile, make_bean, room_weather):
    # 20 days: past peak but not stale
    assert generate_tips(neutral_profile(), make_bean(roast_date_days_ago=20), room_weather) == []
