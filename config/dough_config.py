"""
Dough Configuration Constants
Centralized configuration tables for the dough formulation engine
"""

from typing import Dict, Tuple, Any

# ============================================================================
# STYLE PROFILES
# ============================================================================

STYLE_PROFILES: Dict[str, Dict[str, Any]] = {
    "neapolitan": {
        "display_name": "Neapolitan",
        "hydration": 65.0,
        "hydration_range": (60.0, 70.0),
        "ball_weight": 250.0,
        "total_fermentation_hours": 24,
        "salt": 2.8,
        "oil": 0.0,
        "sugar": 0.0,
        "oven": "wood_fired",
        "oven_temperature": 450,
        "baking_time_seconds": 90,
    },
    "new_york": {
        "display_name": "New York",
        "hydration": 60.0,
        "hydration_range": (55.0, 65.0),
        "ball_weight": 280.0,
        "total_fermentation_hours": 24,
        "salt": 2.5,
        "oil": 2.0,
        "sugar": 1.0,
        "oven": "deck_oven",
        "oven_temperature": 290,
        "baking_time_seconds": 420,
    },
    "roman": {
        "display_name": "Roman (Teglia)",
        "hydration": 70.0,
        "hydration_range": (65.0, 80.0),
        "ball_weight": 220.0,
        "total_fermentation_hours": 48,
        "salt": 2.5,
        "oil": 3.0,
        "sugar": 0.0,
        "oven": "electric_pizza_oven",
        "oven_temperature": 350,
        "baking_time_seconds": 180,
    },
    "detroit": {
        "display_name": "Detroit",
        "hydration": 70.0,
        "hydration_range": (65.0, 75.0),
        "ball_weight": 350.0,
        "total_fermentation_hours": 4,
        "salt": 2.5,
        "oil": 4.0,
        "sugar": 2.0,
        "oven": "home_oven",
        "oven_temperature": 250,
        "baking_time_seconds": 900,
    },
    "chicago_deep_dish": {
        "display_name": "Chicago Deep Dish",
        "hydration": 55.0,
        "hydration_range": (50.0, 60.0),
        "ball_weight": 400.0,
        "total_fermentation_hours": 24,
        "salt": 2.0,
        "oil": 5.0,
        "sugar": 1.0,
        "oven": "home_oven",
        "oven_temperature": 220,
        "baking_time_seconds": 1800,
    },
    "sicilian": {
        "display_name": "Sicilian",
        "hydration": 65.0,
        "hydration_range": (60.0, 70.0),
        "ball_weight": 350.0,
        "total_fermentation_hours": 12,
        "salt": 2.5,
        "oil": 3.0,
        "sugar": 0.0,
        "oven": "home_oven",
        "oven_temperature": 250,
        "baking_time_seconds": 1200,
    },
    "focaccia": {
        "display_name": "Focaccia",
        "hydration": 75.0,
        "hydration_range": (70.0, 85.0),
        "ball_weight": 300.0,
        "total_fermentation_hours": 8,
        "salt": 2.5,
        "oil": 6.0,
        "sugar": 0.0,
        "oven": "home_oven",
        "oven_temperature": 220,
        "baking_time_seconds": 1500,
    },
    "pizza_bianca": {
        "display_name": "Pizza Bianca",
        "hydration": 80.0,
        "hydration_range": (75.0, 85.0),
        "ball_weight": 280.0,
        "total_fermentation_hours": 72,
        "salt": 2.8,
        "oil": 4.0,
        "sugar": 0.0,
        "oven": "electric_pizza_oven",
        "oven_temperature": 300,
        "baking_time_seconds": 420,
    },
    "grandma": {
        "display_name": "Grandma",
        "hydration": 60.0,
        "hydration_range": (55.0, 65.0),
        "ball_weight": 300.0,
        "total_fermentation_hours": 6,
        "salt": 2.5,
        "oil": 3.0,
        "sugar": 1.0,
        "oven": "home_oven",
        "oven_temperature": 260,
        "baking_time_seconds": 900,
    },
    "pan": {
        "display_name": "Pan Pizza",
        "hydration": 65.0,
        "hydration_range": (60.0, 70.0),
        "ball_weight": 320.0,
        "total_fermentation_hours": 8,
        "salt": 2.5,
        "oil": 4.0,
        "sugar": 2.0,
        "oven": "home_oven",
        "oven_temperature": 250,
        "baking_time_seconds": 1200,
    },
    "thin_crust": {
        "display_name": "Thin Crust",
        "hydration": 55.0,
        "hydration_range": (50.0, 60.0),
        "ball_weight": 200.0,
        "total_fermentation_hours": 6,
        "salt": 2.5,
        "oil": 2.0,
        "sugar": 1.0,
        "oven": "home_oven",
        "oven_temperature": 280,
        "baking_time_seconds": 480,
    },
    "tavern_style": {
        "display_name": "Tavern Style",
        "hydration": 52.0,
        "hydration_range": (48.0, 56.0),
        "ball_weight": 220.0,
        "total_fermentation_hours": 4,
        "salt": 2.5,
        "oil": 3.0,
        "sugar": 2.0,
        "oven": "home_oven",
        "oven_temperature": 260,
        "baking_time_seconds": 600,
    },
    "pinsa_romana": {
        "display_name": "Pinsa Romana",
        "hydration": 80.0,
        "hydration_range": (75.0, 85.0),
        "ball_weight": 260.0,
        "total_fermentation_hours": 72,
        "salt": 2.5,
        "oil": 2.0,
        "sugar": 0.0,
        "oven": "electric_pizza_oven",
        "oven_temperature": 350,
        "baking_time_seconds": 240,
    },
    "custom": {
        "display_name": "Custom",
        "hydration": 62.0,
        "hydration_range": (45.0, 90.0),
        "ball_weight": 250.0,
        "total_fermentation_hours": 12,
        "salt": 2.5,
        "oil": 0.0,
        "sugar": 0.0,
        "oven": "home_oven",
        "oven_temperature": 250,
        "baking_time_seconds": 600,
    },
}
"""Per-style defaults: request values, hydration band and oven settings"""

STYLE_DEFAULT_FIELDS: Tuple[str, ...] = (
    "ball_weight",
    "hydration",
    "salt",
    "oil",
    "sugar",
    "total_fermentation_hours",
)
"""Request fields taken from the style profile when the caller leaves them unset"""

STYLE_TARGET_DOUGH_TEMPERATURES: Dict[str, float] = {
    "neapolitan": 24.0,
    "roman": 23.0,
    "new_york": 24.0,
    "detroit": 25.0,
    "sicilian": 24.0,
    "focaccia": 25.0,
    "grandma": 24.0,
    "pan": 26.0,
}
"""Desired dough temperature (°C) after mixing, per style"""

DEFAULT_TARGET_DOUGH_TEMPERATURE = 24.0
"""Desired dough temperature (°C) for styles without a dedicated entry"""

STYLE_FERMENTATION_RANGES: Dict[str, Tuple[int, int]] = {
    "neapolitan": (8, 72),
    "roman": (24, 96),
    "new_york": (24, 72),
    "detroit": (4, 48),
    "sicilian": (4, 24),
    "focaccia": (2, 24),
    "grandma": (4, 24),
    "pan": (2, 12),
}
"""Recommended total fermentation window (hours) per style"""

STYLE_FLOUR_REQUIREMENTS: Dict[str, Dict[str, Any]] = {
    "neapolitan": {"protein": 12.5, "strength": 280, "protein_tolerance": 1.0,
                   "strength_tolerance": 40, "prefer_type_00": True,
                   "note": "Italian type 00 flour is preferred"},
    "new_york": {"protein": 13.5, "strength": 320, "protein_tolerance": 1.0,
                 "strength_tolerance": 40, "prefer_high_gluten": True,
                 "note": "High-gluten bread flour is preferred"},
    "roman": {"protein": 13.0, "strength": 300, "protein_tolerance": 1.5,
              "strength_tolerance": 50, "note": ""},
    "detroit": {"protein": 14.0, "strength": 340, "protein_tolerance": 1.0,
                "strength_tolerance": 40, "prefer_high_gluten": True, "note": ""},
    "chicago_deep_dish": {"protein": 11.5, "strength": 240, "protein_tolerance": 1.5,
                          "strength_tolerance": 40, "note": ""},
    "sicilian": {"protein": 13.5, "strength": 320, "protein_tolerance": 1.0,
                 "strength_tolerance": 40, "note": ""},
}
"""Target flour protein (%) and strength (W) per style, with tolerances"""

DEFAULT_FLOUR_REQUIREMENT: Dict[str, Any] = {
    "protein": 12.5, "strength": 280, "protein_tolerance": 1.5,
    "strength_tolerance": 50, "note": "",
}
"""Flour requirement used for styles without a dedicated entry"""

DEFAULT_TARGET_FLOUR_REQUIREMENT: Dict[str, Any] = {
    "protein": 12.0, "strength": 280, "protein_tolerance": 1.0,
    "strength_tolerance": 30, "note": "",
}
"""Flour requirement filled in for targets the caller does not give explicitly"""


# ============================================================================
# LEAVENING AGENTS
# ============================================================================

LEAVENING_FACTORS: Dict[str, float] = {
    "fresh": 1.0,
    "instant_dry": 0.33,
    "active_dry": 0.40,
    "sourdough": 0.0,
}
"""Mass factor of each leavening agent relative to fresh yeast (0 = not mass-convertible)"""

DEFAULT_STARTER_PERCENTAGE = 20.0
"""Sourdough starter (% of flour) used when no explicit percentage is requested"""


# ============================================================================
# PREFERMENTS
# ============================================================================

PREFERMENT_TYPES: Dict[str, Dict[str, Any]] = {
    "poolish": {
        "display_name": "Poolish",
        "hydration": 100.0,
        "yeast_fraction": 0.001,
        "instructions": (
            "Mix {flour}g flour with {water}g water and {yeast}g yeast. "
            "Cover and let ferment for {hours} hours at room temperature "
            "until bubbly and slightly domed."
        ),
    },
    "biga": {
        "display_name": "Biga",
        "hydration": 55.0,
        "yeast_fraction": 0.002,
        "instructions": (
            "Combine {flour}g flour, {water}g water and {yeast}g yeast into a "
            "shaggy, stiff mass without kneading. Cover and ferment for {hours} "
            "hours at 16-18°C."
        ),
    },
    "mature_starter": {
        "display_name": "Mature starter (lievito madre)",
        "hydration": 100.0,
        "yeast_fraction": 0.0,
        "instructions": (
            "Refresh the starter so that {flour}g flour and {water}g water are "
            "fully active. Use it at peak activity, {hours} hours after feeding."
        ),
    },
}
"""Preferment hydration (%), fresh-yeast fraction of preferment flour and instructions"""

BIGA_HYDRATION_RANGE = (50.0, 60.0)
"""Acceptable hydration band (%) for a biga override"""

DEFAULT_PREFERMENT_PERCENTAGE = 30.0
"""Share of total flour placed into the preferment when not specified"""

DEFAULT_PREFERMENT_HOURS = 12.0
"""Preferment maturation time (hours) when not specified"""


# ============================================================================
# FERMENTATION METHODS
# ============================================================================

FERMENTATION_METHODS: Dict[str, Dict[str, Any]] = {
    "room_temperature": {
        "display_name": "Room temperature",
        "base_percentage": 0.2,
        "uses_fridge": False,
    },
    "cold": {
        "display_name": "Cold fermentation",
        "base_percentage": 0.2,
        "uses_fridge": True,
    },
    "mixed": {
        "display_name": "Mixed (room + fridge)",
        "base_percentage": 0.2,
        "uses_fridge": True,
    },
    "same_day": {
        "display_name": "Same day",
        "base_percentage": 0.5,
        "uses_fridge": False,
    },
}
"""Reference fresh-yeast dose (%) and fridge usage per fermentation method"""


# ============================================================================
# MIXERS
# ============================================================================

MIXER_FRICTION_FACTORS: Dict[str, float] = {
    "hand_kneading": 0.3,
    "stand_mixer_home": 0.5,
    "stand_mixer_pro": 0.7,
    "spiral_mixer": 0.9,
    "fork_mixer": 0.4,
}
"""Heat (°C per minute) added by each mixing method"""

DEFAULT_FRICTION_FACTOR = 0.5
"""Friction factor for mixers without a dedicated entry"""

MIXING_TIME_MULTIPLIERS: Dict[str, float] = {
    "spiral_mixer": 0.7,
    "hand_kneading": 1.5,
}
"""Multiplier applied to the base mixing time per mixer"""


# ============================================================================
# ERROR MESSAGES
# ============================================================================

ERROR_MESSAGES: Dict[str, str] = {
    "MISSING_STYLE": "A pizza style is required",
    "INVALID_BALL_COUNT": "Ball count must be a positive integer, got {value}",
    "INVALID_BALL_WEIGHT": "Ball weight must be positive, got {value}",
    "INVALID_PREFERMENT_PERCENTAGE": (
        "Preferment percentage must be greater than 0 and less than 100, got {value}"
    ),
    "UNKNOWN_FERMENTATION_METHOD": "Unknown fermentation method: {value}",
    "UNKNOWN_LEAVENING_AGENT": "Unknown leavening agent: {value}",
}
"""Standardized error message templates keyed by error code"""
