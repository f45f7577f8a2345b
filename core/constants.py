"""
Core module constants for dough formulation
Extracted magic numbers for better maintainability
"""

from decimal import Decimal

# Baker's Percentage Constants
FLOUR_PERCENTAGE = 100.0  # Flour is always 100% by definition
PROVISIONAL_LEAVENING_PERCENTAGE = 0.5  # Placeholder leavening % when the real one is unknown
MASS_QUANTUM = Decimal("0.01")  # Resolution of reported masses (g)
PERCENTAGE_DECIMALS = 3  # Rounding for reported baker's percentages

# Fermentation Kinetics Constants
Q10 = 2.5  # Rate multiplier per 10 °C
REFERENCE_TEMPERATURE = 20.0  # °C at which the temperature factor is 1
REFERENCE_YEAST_PERCENTAGE = 0.2  # Fresh yeast % for the calibration point
REFERENCE_HOURS = 8.0  # Effective hours for the calibration point
MIN_EFFECTIVE_HOURS = 1.0  # Floor for effective fermentation hours
SHORT_FERMENTATION_HOURS = 4.0  # Below this, the time exponent is capped
MAX_TIME_EXPONENT = 2.0  # Cap for short fermentations
LONG_FERMENTATION_HOURS = 96.0  # Above this, the time exponent is floored
MIN_TIME_EXPONENT = 0.15  # Floor for very long fermentations

# Cold / Mixed Split Constants
COLD_MAX_ROOM_HOURS = 2.0  # Maximum room-temperature phase before the fridge
COLD_ROOM_FRACTION = 0.1  # Share of total time at room temperature (cold method)
MIXED_ROOM_FRACTION = 0.3  # Share of total time at room temperature (mixed method)

# Leavening Correction Constants
STRONG_FLOUR_THRESHOLD = 300  # W above which more leavening is needed
WEAK_FLOUR_THRESHOLD = 220  # W below which less leavening is needed
FLOUR_STRENGTH_COEFFICIENT = 0.001  # Correction per W point
SALT_THRESHOLD = 3.0  # Salt % above which yeast is inhibited
SALT_COEFFICIENT = 0.05  # Correction per salt point above threshold
SUGAR_COEFFICIENT = 0.02  # Reduction per sugar point

# Environmental Correction Constants
BASE_HUMIDITY = 50.0  # % relative humidity with no correction
HUMIDITY_HYDRATION_COEFFICIENT = 0.05  # Hydration points per humidity point
MAX_HYDRATION_CORRECTION = 3.0  # Hydration correction clamp (±points)
ALTITUDE_THRESHOLD = 500.0  # m below which altitude is ignored
ALTITUDE_YEAST_REDUCTION = 5.0  # % yeast reduction per 1000 m
MAX_ALTITUDE_YEAST_REDUCTION = 20.0  # Cap on yeast reduction (%)
ALTITUDE_TIME_REDUCTION = 8.0  # % fermentation time reduction per 1000 m
BASE_ROOM_TEMPERATURE = 22.0  # °C with no fermentation-time correction
TEMPERATURE_TIME_COEFFICIENT = 5.0  # % fermentation time per °C
MIN_FERMENTATION_TIME_CORRECTION = -30.0  # Lower clamp (%)
MAX_FERMENTATION_TIME_CORRECTION = 50.0  # Upper clamp (%)
SEA_LEVEL_PRESSURE_HPA = 1013.25  # Standard atmosphere
PRESSURE_SCALE_HEIGHT = 8500.0  # m, barometric scale height
HIGH_HUMIDITY = 70.0  # % above which the dough feels slack
LOW_HUMIDITY = 30.0  # % below which the dough skins quickly
HIGH_ALTITUDE = 1000.0  # m, strong altitude effect
HOT_ROOM_TEMPERATURE = 28.0  # °C, fermentation runs fast
COLD_ROOM_TEMPERATURE = 18.0  # °C, fermentation runs slow

# Schedule Constants (minutes)
SHAPE_OFFSET_MINUTES = 15  # Shaping starts this long before baking
SHAPE_DURATION_MINUTES = 10
PREHEAT_OFFSET_MINUTES = 45  # Oven preheating starts this long before baking
PREHEAT_DURATION_MINUTES = 30
FRIDGE_REMOVAL_OFFSET_MINUTES = 120  # Balls leave the fridge this long before baking
FRIDGE_REMOVAL_DURATION_MINUTES = 5
MIN_DIVIDE_OFFSET_HOURS = 4.0  # Dividing never happens closer to the bake than this
DIVIDE_DURATION_MINUTES = 15
FOLD_HYDRATION_THRESHOLD = 68.0  # % hydration from which stretch-and-folds are added
MAX_FOLDS = 4
FOLD_DURATION_MINUTES = 5
KNEAD_DURATION_MINUTES = 10
KNEAD_GAP_MINUTES = 15  # Pause between the end of kneading and bulk start
MIX_DURATION_MINUTES = 5
MIX_GAP_MINUTES = 10  # Pause between the end of mixing and kneading
MIN_STEP_MINUTES = 1  # Floor for any computed duration

# Dough Temperature Constants
BASE_MIXING_MINUTES = 8  # Mixing time before mixer adjustment
HIGH_HYDRATION_MIXING_THRESHOLD = 70.0  # % above which mixing is shortened
HIGH_HYDRATION_MIXING_FACTOR = 0.8
REFERENCE_FRICTION_HYDRATION = 65.0  # % hydration with neutral friction
FRICTION_HYDRATION_COEFFICIENT = 0.01
MIN_FRICTION_HYDRATION_FACTOR = 0.8
MAX_FRICTION_HYDRATION_FACTOR = 1.3
MIN_WATER_TEMPERATURE = 2.0  # °C, practical lower limit (ice water)
MAX_WATER_TEMPERATURE = 40.0  # °C, above this yeast is damaged
COLD_WATER_TEMPERATURE = 10.0  # °C, below this ice water is needed

# Flour Analysis Constants
WEAK_FLOUR_W = 200  # W below which flour is weak
VERY_STRONG_FLOUR_W = 350  # W above which flour is very strong
LOW_PROTEIN = 11.0  # %, low gluten potential
HIGH_PROTEIN = 14.0  # %, very high gluten potential
MAX_FLOUR_HYDRATION = 90.0  # Absolute cap for suggested max hydration

# Water Analysis Constants
SOFT_WATER_HARDNESS = 50.0  # mg/l CaCO3
HARD_WATER_HARDNESS = 200.0  # mg/l CaCO3
VERY_HARD_WATER_HARDNESS = 300.0  # mg/l CaCO3
ACIDIC_WATER_PH = 6.5
ALKALINE_WATER_PH = 8.0

# Flour Mix Suggestion Constants
HIGH_GLUTEN_PROTEIN = 13.0  # % protein from which a flour counts as high-gluten
MIN_PROTEIN_SPREAD = 0.5  # Flours closer than this in protein are not worth blending
MIN_MIX_SHARE = 0.2  # Smallest share of either flour in a two-flour blend
MAX_MIX_SHARE = 0.8
MIX_SHARE_STEP = 0.05  # Blend proportions are searched in 5% steps
STRENGTH_DISTANCE_SCALE = 10.0  # W points worth one protein point when scoring
MAX_PAIR_CANDIDATES = 6  # Only the closest flours are paired
