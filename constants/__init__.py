"""
Constants Package

Lexicons, seed data and selector tables used across the application.
"""

from .units import (
    UNIT_PATTERNS, QUANTITY_PATTERN, HOUR_WORDS, MINUTE_WORDS, UNICODE_FRACTIONS
)
from .ingredients import (
    COOKING_INSTRUCTIONS,
    BULLET_CHARS,
    INGREDIENT_BOILERPLATE,
    MIN_PARTIAL_MATCH_LENGTH,
    blank_ingredient,
)
from .validation import (
    DEFAULT_CATEGORIES,
    MAX_LENGTHS,
    DEFAULT_IMPORT_TITLE,
    SOCIAL_DEFAULT_TITLE,
    SOCIAL_DEFAULT_DIRECTIONS,
    SOCIAL_REVIEW_NOTES,
    SOCIAL_PLACEHOLDER,
)
from .selectors import (
    TITLE_SELECTORS,
    PREP_TIME_SELECTORS,
    SERVING_SELECTORS,
    INGREDIENT_SELECTORS,
    DIRECTION_SELECTORS,
    NOTE_SELECTORS,
)
