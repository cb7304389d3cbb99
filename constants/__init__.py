"""
Constants Package

Exports lookup tables and enumerations used across the application.
"""

from .units import (
    UNIT_MAPPINGS,
    DEFAULT_UNIT,
    COMMON_FRACTIONS,
    UNICODE_FRACTIONS,
)

from .ingredients import (
    NOTE_KEYWORDS,
    CATEGORY_KEYWORDS,
    ALLERGEN_KEYWORDS,
    PROTEIN_KEYWORDS,
    MEAT_KEYWORDS,
)

from .validation import (
    VALID_DAYS,
    WEEKDAYS,
    WEEKEND_DAYS,
    VALID_ALLERGENS,
    VALID_CUISINES,
    VALID_DIETARY_STYLES,
    VALID_PLANNING_MODES,
    VALID_DIFFICULTIES,
    VALID_SOURCE_TYPES,
    VALID_MEAL_TYPES,
    VALID_MEAL_MODES,
    VALID_FREQUENCY_PREFERENCES,
    VALID_SIDE_CATEGORIES,
    VALID_SIDE_WEIGHTS,
    VALID_GROCERY_CATEGORIES,
    VALID_SEASONS,
    MAX_LENGTHS,
)

from .sides import (
    DEFAULT_SIDES,
    MAIN_CATEGORY_KEYWORDS,
    HEAVY_MAIN_KEYWORDS,
    LIGHT_MAIN_KEYWORDS,
)

from .matching import (
    MATCH_STOP_WORDS,
    FOOD_STOP_WORDS,
    RELATED_TERMS,
    PAYWALL_DOMAINS,
)
