"""
Unit Constants

Closed unit lexicon used when splitting an ingredient line into
quantity, unit and name.
"""

# Unit tokens recognized at the head of an ingredient remainder.
# Each entry is a regex fragment; plural forms are optional suffixes.
UNIT_PATTERNS = [
    'cups?', 'tablespoons?', 'tbsp', 'teaspoons?', 'tsp',
    'pounds?', 'lbs?', 'ounces?', 'oz',
    'cloves?', 'pieces?', 'cans?', 'jars?', 'packages?',
    'stalks?', 'bunch(?:es)?', 'heads?', 'slices?',
    'large', 'medium', 'small', 'whole',
]

# Leading quantity: mixed number, simple fraction, decimal or integer
QUANTITY_PATTERN = r'\d+\s+\d+/\d+|\d+/\d+|\d+\.\d+|\d+'

# Words that introduce an hours / minutes figure in free-text timings
HOUR_WORDS = r'hours?|hrs?|h'
MINUTE_WORDS = r'minutes?|mins?|m'

# Unicode vulgar fractions rewritten as ASCII before quantity parsing
UNICODE_FRACTIONS = {
    '\u00bd': '1/2',  # ½
    '\u2153': '1/3',  # ⅓
    '\u2154': '2/3',  # ⅔
    '\u00bc': '1/4',  # ¼
    '\u00be': '3/4',  # ¾
    '\u2155': '1/5',  # ⅕
    '\u2159': '1/6',  # ⅙
    '\u215b': '1/8',  # ⅛
    '\u215c': '3/8',  # ⅜
    '\u215d': '5/8',  # ⅝
    '\u215e': '7/8',  # ⅞
}
