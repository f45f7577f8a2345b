"""Request and result models for dough formulation"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from config.dough_config import DEFAULT_PREFERMENT_HOURS, DEFAULT_PREFERMENT_PERCENTAGE


class PizzaStyle(str, Enum):
    NEAPOLITAN = "neapolitan"
    NEW_YORK = "new_york"
    ROMAN = "roman"
    DETROIT = "detroit"
    CHICAGO_DEEP_DISH = "chicago_deep_dish"
    SICILIAN = "sicilian"
    FOCACCIA = "focaccia"
    PIZZA_BIANCA = "pizza_bianca"
    GRANDMA = "grandma"
    PAN = "pan"
    THIN_CRUST = "thin_crust"
    TAVERN_STYLE = "tavern_style"
    PINSA_ROMANA = "pinsa_romana"
    CUSTOM = "custom"


class LeaveningAgent(str, Enum):
    FRESH = "fresh"
    INSTANT_DRY = "instant_dry"
    ACTIVE_DRY = "active_dry"
    SOURDOUGH = "sourdough"


class FermentationMethod(str, Enum):
    ROOM_TEMPERATURE = "room_temperature"
    COLD = "cold"
    MIXED = "mixed"
    SAME_DAY = "same_day"


class PrefermentType(str, Enum):
    POOLISH = "poolish"
    BIGA = "biga"
    MATURE_STARTER = "mature_starter"


class MixerType(str, Enum):
    HAND_KNEADING = "hand_kneading"
    STAND_MIXER_HOME = "stand_mixer_home"
    STAND_MIXER_PRO = "stand_mixer_pro"
    SPIRAL_MIXER = "spiral_mixer"
    FORK_MIXER = "fork_mixer"


class StepKind(str, Enum):
    MIX_PREFERMENT = "mix_preferment"
    MIX_DOUGH = "mix_dough"
    KNEAD = "knead"
    BULK_FERMENT = "bulk_ferment"
    FOLD = "fold"
    DIVIDE_AND_BALL = "divide_and_ball"
    COLD_PROOF = "cold_proof"
    REMOVE_FROM_FRIDGE = "remove_from_fridge"
    FINAL_REST = "final_rest"
    SHAPE = "shape"
    PREHEAT = "preheat"
    BAKE = "bake"


# ============================================================================
# REQUEST
# ============================================================================

class BonusIngredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    percentage: float = Field(ge=0.0)


class FlourBlendEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    flour_id: str
    percentage: float = Field(gt=0.0, le=100.0)


class PrefermentRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: PrefermentType
    percentage: float = DEFAULT_PREFERMENT_PERCENTAGE
    hours: float = Field(default=DEFAULT_PREFERMENT_HOURS, gt=0.0, le=72.0)
    hydration: Optional[float] = Field(default=None, ge=40.0, le=130.0)


class FormulationRequest(BaseModel):
    """Everything needed to formulate one batch of dough balls"""

    model_config = ConfigDict(frozen=True)

    style: Optional[PizzaStyle] = None
    ball_count: int = 1
    ball_weight: float = Field(default=250.0, ge=100.0, le=1000.0)
    hydration: float = Field(default=65.0, ge=45.0, le=95.0)
    salt: float = Field(default=2.8, ge=0.0, le=5.0)
    oil: float = Field(default=0.0, ge=0.0, le=15.0)
    sugar: float = Field(default=0.0, ge=0.0, le=10.0)
    leavening_agent: LeaveningAgent = LeaveningAgent.FRESH
    leavening_percentage: Optional[float] = Field(default=None, ge=0.01, le=50.0)
    fermentation_method: FermentationMethod = FermentationMethod.COLD
    total_fermentation_hours: float = Field(default=24.0, ge=1.0, le=168.0)
    room_temperature: float = Field(default=22.0, ge=10.0, le=40.0)
    fridge_temperature: float = Field(default=4.0, ge=0.0, le=10.0)
    flour_strength: Optional[float] = Field(default=None, ge=100.0, le=450.0)
    flour_protein: Optional[float] = Field(default=None, ge=5.0, le=18.0)
    water_hardness: Optional[float] = Field(default=None, ge=0.0, le=1000.0)
    water_ph: Optional[float] = Field(default=None, ge=5.0, le=9.0)
    preferment: Optional[PrefermentRequest] = None
    bonus_ingredients: List[BonusIngredient] = []
    flour_blend: List[FlourBlendEntry] = []
    ambient_humidity: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    altitude: Optional[float] = Field(default=None, ge=0.0, le=5000.0)
    mixer_type: MixerType = MixerType.HAND_KNEADING
    flour_temperature: Optional[float] = Field(default=None, ge=5.0, le=35.0)
    bake_time: Optional[datetime] = None
    generate_schedule: bool = True


# ============================================================================
# RESULT
# ============================================================================

class BonusIngredientMass(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    percentage: float
    grams: Decimal


class IngredientMasses(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_dough: Decimal
    flour: Decimal
    water: Decimal
    salt: Decimal
    leavening: Decimal
    oil: Decimal = Decimal("0")
    sugar: Decimal = Decimal("0")
    bonus: List[BonusIngredientMass] = []

    def total(self) -> Decimal:
        """Sum of every reported ingredient mass"""
        return (self.flour + self.water + self.salt + self.leavening + self.oil
                + self.sugar + sum((item.grams for item in self.bonus), Decimal("0")))


class BakersPercentages(BaseModel):
    model_config = ConfigDict(frozen=True)

    flour: float = 100.0
    water: float
    salt: float
    leavening: float
    oil: float = 0.0
    sugar: float = 0.0
    bonus: Dict[str, float] = {}


class LeaveningCalculation(BaseModel):
    model_config = ConfigDict(frozen=True)

    agent: LeaveningAgent
    fresh_percentage: float
    agent_percentage: float
    room_hours: float
    fridge_hours: float
    effective_hours: float
    breakdown: Dict[str, float] = {}
    adjustments: List[str] = []


class PrefermentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: PrefermentType
    flour: Decimal
    water: Decimal
    leavening: Decimal
    hours: float
    hydration: float
    instructions: str


class MainDoughResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    flour: Decimal
    water: Decimal
    salt: Decimal
    leavening: Decimal
    oil: Decimal = Decimal("0")
    sugar: Decimal = Decimal("0")


class FlourSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    flour_id: str
    name: str
    brand: Optional[str] = None
    flour_type: Optional[str] = None
    protein: float
    strength: Optional[float] = None
    extensibility: Optional[float] = None
    hydration_min: Optional[float] = None
    hydration_max: Optional[float] = None


class FlourPortion(BaseModel):
    model_config = ConfigDict(frozen=True)

    flour_id: str
    name: str
    percentage: float
    grams: Decimal


class FlourMixParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    portions: List[FlourPortion] = []
    protein: Optional[float] = None
    strength: Optional[float] = None
    extensibility: Optional[float] = None
    hydration_min: Optional[float] = None
    hydration_max: Optional[float] = None
    missing_ids: List[str] = []
    warnings: List[str] = []


class SuggestedFlour(BaseModel):
    model_config = ConfigDict(frozen=True)

    flour_id: str
    name: str
    brand: Optional[str] = None
    percentage: float
    protein: float
    strength: Optional[float] = None


class FlourMixSuggestion(BaseModel):
    """A single flour or a two-flour blend proposed for a target"""

    model_config = ConfigDict(frozen=True)

    success: bool
    is_mix: bool = False
    blend: List[FlourBlendEntry] = []
    flours: List[SuggestedFlour] = []
    protein: Optional[float] = None
    strength: Optional[float] = None
    distance: Optional[float] = None
    message: str = ""
    explanation: str = ""


class ScheduleStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    sequence: int = 0
    kind: StepKind
    title: str
    description: str = ""
    scheduled_at: datetime
    duration_minutes: int
    temperature: Optional[float] = None


class WaterTemperatureResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_dough_temperature: float
    room_temperature: float
    flour_temperature: float
    preferment_temperature: Optional[float] = None
    friction_factor: float
    mixing_minutes: int
    water_temperature: float
    formula: str
    warnings: List[str] = []
    recommendations: List[str] = []


class EnvironmentalCorrections(BaseModel):
    model_config = ConfigDict(frozen=True)

    hydration_correction: float
    yeast_correction: float
    fermentation_time_correction: float
    pressure_hpa: float
    recommendations: List[str] = []


class FlourAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    strength: Optional[float] = None
    protein: Optional[float] = None
    suggested_hydration_min: Optional[float] = None
    suggested_hydration_max: Optional[float] = None
    max_hydration: Optional[float] = None
    max_fermentation_hours: Optional[int] = None
    warnings: List[str] = []
    recommendations: List[str] = []


class WaterAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    hardness: Optional[float] = None
    ph: Optional[float] = None
    fermentation_modifier: float = 1.0
    gluten_modifier: float = 1.0
    effects: List[str] = []
    recommendations: List[str] = []


class TipCollection(BaseModel):
    model_config = ConfigDict(frozen=True)

    tips: List[str] = []
    warnings: List[str] = []
    recommendations: List[str] = []


class FormulationResult(BaseModel):
    """Complete formulation: masses, leavening, preferment split, schedule and advice"""

    model_config = ConfigDict(frozen=True)

    style: PizzaStyle
    ball_count: int
    ball_weight: float
    leavening_agent: LeaveningAgent
    ingredients: IngredientMasses
    bakers_percentages: BakersPercentages
    leavening: LeaveningCalculation
    preferment: Optional[PrefermentResult] = None
    main_dough: Optional[MainDoughResult] = None
    flour_mix: Optional[FlourMixParameters] = None
    water_temperature: WaterTemperatureResult
    environment: EnvironmentalCorrections
    oven_temperature: int
    baking_time_seconds: int
    schedule: List[ScheduleStep] = []
    flour_analysis: FlourAnalysis
    water_analysis: WaterAnalysis
    tips: List[str] = []
    warnings: List[str] = []
    recommendations: List[str] = []
