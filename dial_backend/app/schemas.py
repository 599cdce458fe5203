# schemas.py  (equipment / bean / targets / weather / recipe output)

from __future__ import annotations
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


# ===================== Enums =====================

class RoastLevel(str, Enum):
    LIGHT = "light"
    MEDIUM_LIGHT = "medium-light"
    MEDIUM = "medium"
    MEDIUM_DARK = "medium-dark"
    DARK = "dark"

class ProcessMethod(str, Enum):
    WASHED = "washed"
    NATURAL = "natural"
    HONEY = "honey"
    ANAEROBIC = "anaerobic"
    OTHER = "other"

class BoilerType(str, Enum):
    SINGLE = "single"
    DUAL = "dual"
    THERMOBLOCK = "thermoblock"
    THERMOCOIL = "thermocoil"

class MachineType(str, Enum):
    E61 = "e61"
    HX = "hx"                       # heat exchanger
    SATURATED = "saturated"
    LEVER_SPRING = "lever-spring"
    LEVER_MANUAL = "lever-manual"
    OTHER = "other"

class BurrType(str, Enum):
    FLAT = "flat"
    CONICAL = "conical"

class SteppedOrStepless(str, Enum):
    STEPPED = "stepped"
    STEPLESS = "stepless"

class BasketType(str, Enum):
    PRESSURIZED = "pressurized"
    NON_PRESSURIZED = "non-pressurized"
    PRECISION = "precision"         # IMS / VST

class TastePreference(str, Enum):
    BALANCED = "balanced"
    BODY = "body"
    SWEETNESS = "sweetness"
    BRIGHT = "bright"

class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

class BeanType(str, Enum):
    SINGLE_ORIGIN = "single-origin"
    BLEND = "blend"

class BlendProfile(str, Enum):
    CLASSIC = "classic"
    BRIGHT_FRUITY = "bright-fruity"
    BALANCED = "balanced"
    DARK_BOLD = "dark-bold"
    UNKNOWN = "unknown"


# Inputs are immutable for the duration of one calculation.
_FROZEN = ConfigDict(frozen=True, extra="ignore")


# ===================== Equipment =====================

class Machine(BaseModel):
    model_config = _FROZEN

    brand: str = ""
    model: str = ""
    machine_type: MachineType = MachineType.OTHER
    pump_pressure_bars: float = 9.0
    boiler_type: BoilerType = BoilerType.SINGLE
    group_head_size_mm: float = 58.0
    has_pre_infusion: bool = False
    has_pid: bool = False
    water_debit_ml_per_min: float = 0.0     # 0 = unknown
    warmup_minutes: Optional[float] = None  # mostly E61 groups

class Grinder(BaseModel):
    model_config = _FROZEN

    brand: str = ""
    model: str = ""
    burr_type: BurrType = BurrType.FLAT
    burr_size_mm: float = 0.0
    rpm: float = 0.0
    espresso_range_min: float
    espresso_range_max: float
    total_settings: Optional[int] = None
    stepped_or_stepless: SteppedOrStepless = SteppedOrStepless.STEPPED
    micron_per_step: Optional[float] = None

    @property
    def range_size(self) -> float:
        return self.espresso_range_max - self.espresso_range_min

class Basket(BaseModel):
    model_config = _FROZEN

    type: BasketType = BasketType.NON_PRESSURIZED
    size_mm: float = 58.0
    capacity_min_g: float
    capacity_max_g: float
    is_bottomless: bool = False

    @property
    def is_small(self) -> bool:
        # 51mm and below, where the dose bump and finer grind apply
        return self.size_mm <= 51 and self.type != BasketType.PRESSURIZED

class EquipmentProfile(BaseModel):
    model_config = _FROZEN

    name: Optional[str] = None
    machine: Machine
    grinder: Grinder
    basket: Basket


# ===================== Session inputs =====================

class BeanInfo(BaseModel):
    model_config = _FROZEN

    bean_type: BeanType = BeanType.SINGLE_ORIGIN
    roast_level: RoastLevel = RoastLevel.MEDIUM
    process_method: ProcessMethod = ProcessMethod.WASHED
    roast_date_days_ago: int
    # single origin
    origin_id: Optional[str] = None          # key into origins.json
    varietal_id: Optional[str] = None        # key into varietals.json
    # blend
    blend_profile: Optional[BlendProfile] = None
    dominant_origin_id: Optional[str] = None # applied at half strength

class BrewTargets(BaseModel):
    model_config = _FROZEN

    ratio: float                  # 2.0 means 1:2
    brew_time_min_sec: float
    brew_time_max_sec: float
    taste_preference: TastePreference = TastePreference.BALANCED

class WeatherData(BaseModel):
    model_config = _FROZEN

    temperature_c: float
    humidity: float


# ===================== Reference tables =====================

class VarietalCharacteristics(BaseModel):
    bean_density: str = ""
    bean_size: str = ""
    solubility: str = ""
    sugar_content: str = ""

class VarietalData(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    species: str = "arabica"
    characteristics: VarietalCharacteristics = VarietalCharacteristics()
    extraction_modifier: float = 0.0
    flavor_profile: str = ""
    notes: str = ""

class OriginCharacteristics(BaseModel):
    typical_altitude: str = ""
    altitude_range: str = ""
    soil_type: str = ""
    processing_tradition: str = ""
    climate_type: str = ""

class OriginData(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    country: str
    region: str = ""
    sub_region: Optional[str] = None
    characteristics: OriginCharacteristics = OriginCharacteristics()
    extraction_modifier: float = 0.0
    density_factor: str = ""
    reasoning: str = ""
    common_varietals: List[str] = Field(default_factory=list)
    flavor_profile: str = ""

class BlendProfileData(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: BlendProfile
    name: str
    description: str = ""
    extraction_modifier: float = 0.0
    flavor_notes: str = ""
    common_components: List[str] = Field(default_factory=list)

class MachineData(Machine):
    id: str

class GrinderData(Grinder):
    id: str

class BasketData(Basket):
    id: str
    label: str = ""


# ===================== Output =====================

class Adjustment(BaseModel):
    model_config = ConfigDict(frozen=True)

    factor: str
    effect: str

class SteppedGrindSetting(BaseModel):
    kind: Literal["stepped"] = "stepped"
    value: float

    def as_number(self) -> float:
        return self.value

    def display(self) -> str:
        return f"setting {self.value:g}"

class SteplessGrindSetting(BaseModel):
    kind: Literal["stepless"] = "stepless"
    min: float
    max: float

    def as_number(self) -> float:
        return (self.min + self.max) / 2

    def display(self) -> str:
        return f"range {self.min:.1f}–{self.max:.1f}"

GrindSetting = Annotated[
    Union[SteppedGrindSetting, SteplessGrindSetting],
    Field(discriminator="kind"),
]

class BrewTimeRange(BaseModel):
    min: int
    max: int

class Reasoning(BaseModel):
    dose_reasoning: str
    grind_reasoning: str
    adjustments: List[Adjustment] = Field(default_factory=list)

class AlgorithmOutput(BaseModel):
    recommended_dose_g: float
    recommended_grind_setting: GrindSetting
    expected_yield_g: float
    expected_brew_time_sec: BrewTimeRange
    recommended_temp_c: float
    confidence: Confidence
    tips: List[str] = Field(default_factory=list, max_length=4)
    reasoning: Reasoning


# ===================== API =====================

class RecipeRequest(BaseModel):
    # ignore unknown keys instead of 422 if clients send extras
    model_config = ConfigDict(extra="ignore")

    profile: EquipmentProfile
    bean: BeanInfo
    targets: Optional[BrewTargets] = None    # brew-form defaults when omitted
    weather: Optional[WeatherData] = None    # neutral default when omitted

class RecipeByIdsRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    machine_id: str
    grinder_id: str
    basket_id: str
    profile_name: Optional[str] = None
    bean: BeanInfo
    targets: Optional[BrewTargets] = None
    weather: Optional[WeatherData] = None

class FreshnessOut(BaseModel):
    status: Literal["too-fresh", "fresh", "peak", "aging"]
    label: str
    days: int

class RecipeOut(BaseModel):
    ok: bool = True
    recipe: AlgorithmOutput
    freshness: FreshnessOut
    weather_used: WeatherData

class RatioPreset(BaseModel):
    ratio: float
    label: str

class RecipeDefaultsOut(BaseModel):
    targets: BrewTargets
    ratio_presets: List[RatioPreset]
    weather: WeatherData

class InvalidInputOut(BaseModel):
    error: Literal["invalid_input"] = "invalid_input"
    field: str
    values: Dict[str, float]
    message: str
