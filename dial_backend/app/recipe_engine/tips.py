# dial_backend/app/recipe_engine/tips.py
from __future__ import annotations

from typing import List

from dial_backend.app.schemas import (
    BasketType,
    BeanInfo,
    BeanType,
    BlendProfile,
    BurrType,
    EquipmentProfile,
    MachineType,
    RoastLevel,
    WeatherData,
)

MAX_TIPS = 4


def _small_conical(profile: EquipmentProfile) -> bool:
    g = profile.grinder
    return g.burr_type == BurrType.CONICAL and g.burr_size_mm < 50


# What it does:
# Build the contextual tips in priority order and keep the first four.
def generate_tips(profile: EquipmentProfile, bean: BeanInfo, weather: WeatherData) -> List[str]:
    machine, basket = profile.machine, profile.basket
    days = bean.roast_date_days_ago
    tips: List[str] = []

    # channeling risk needs at least two compounding causes
    risks = []
    if days < 5:
        risks.append("very fresh beans (CO2)")
    if weather.humidity > 65:
        risks.append("high humidity (clumping)")
    if _small_conical(profile):
        risks.append("small conical burrs (fines)")
    if len(risks) >= 2:
        tips.append(
            f"⚠ High channeling risk: {', '.join(risks)}. "
            "Use WDT (stir with a thin needle) and tamp evenly."
        )

    if bean.bean_type == BeanType.BLEND and bean.blend_profile == BlendProfile.UNKNOWN:
        tips.append(
            "Using neutral settings for unknown blend. Check your bag for roast info — "
            "selecting a blend profile will improve accuracy."
        )

    if days <= 4:
        tips.append(
            f"Beans are {days} days off roast — still degassing heavily. "
            "Expect inconsistent shots. Consider waiting until day 7+."
        )
    elif 7 <= days <= 14:
        tips.append(f"Beans are at peak freshness ({days} days). Great timing for espresso!")
    elif days > 28:
        tips.append(
            f"Beans are {days} days off roast — flavors will be muted. "
            "Grinding finer helps extract remaining character."
        )

    if machine.pump_pressure_bars >= 15 and not machine.has_pid:
        tips.append(
            "Your machine runs at high pressure without PID. Do a cooling flush "
            "(run water briefly) before pulling to stabilize temperature."
        )
    if machine.machine_type == MachineType.HX:
        tips.append("HX machine: flush 2-3 seconds before brewing to clear superheated water from the group.")
    if machine.machine_type == MachineType.E61 and machine.warmup_minutes:
        tips.append(
            f"E61 group head needs {machine.warmup_minutes:g}+ minutes to fully heat. "
            "Pull a blank shot through to warm the portafilter."
        )

    if basket.is_bottomless and _small_conical(profile):
        tips.append(
            "Small conical burrs + bottomless portafilter: WDT is essential. "
            "Stir grounds with a thin needle before tamping."
        )

    if bean.roast_level == RoastLevel.LIGHT:
        tips.append(
            "Light roast: if the shot tastes sour/thin, try grinding 1-2 steps finer "
            "or extending the ratio to 1:2.5."
        )
    elif bean.roast_level == RoastLevel.DARK:
        tips.append(
            "Dark roast: if the shot tastes bitter/ashy, try grinding 1-2 steps coarser "
            "or shortening ratio to 1:1.5."
        )

    if weather.humidity > 70:
        tips.append(
            f"Humidity is {weather.humidity:g}% — grounds may clump. "
            "If the shot chokes, try 1 step coarser."
        )
    elif weather.humidity < 30:
        tips.append(
            f"Humidity is {weather.humidity:g}% — static may cause grounds to scatter. "
            "Try RDT: spritz beans lightly with water before grinding."
        )

    if not machine.has_pid:
        tips.append(
            "Your machine lacks PID temperature control. The brew temp recommendation is ideal — "
            "approximate it with warm-up time and cooling flushes."
        )

    if basket.type == BasketType.PRESSURIZED:
        tips.append(
            "Pressurized baskets are forgiving but limit flavor clarity. Consider upgrading to a "
            "non-pressurized basket when you're comfortable with your grind consistency."
        )

    return tips[:MAX_TIPS]
