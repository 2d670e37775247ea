"""
Ingredient Constants

Lexicons for cleaning free-text ingredient lines and filtering
scraped ingredient lists.
"""

# Cooking-instruction clauses stripped from the end of an ingredient line.
# Longer phrases come first so "roughly chopped" wins over "chopped".
COOKING_INSTRUCTIONS = [
    'finely diced', 'finely ground', 'roughly chopped', 'thinly sliced',
    'chopped', 'sliced', 'minced', 'grated', 'crushed', 'cooked',
    'for serving',
]

# Leading list markers removed before parsing
BULLET_CHARS = '-•*'

# Scraped lines that are UI chrome rather than ingredients
INGREDIENT_BOILERPLATE = ('ingredients', 'deselect', 'select all')

# Pantry entries shorter than this require an exact name match
MIN_PARTIAL_MATCH_LENGTH = 4


def blank_ingredient():
    """Placeholder ingredient row so the review form always has one row."""
    return {'name': '', 'quantity': '', 'unit': '', 'is_alternative': False}
