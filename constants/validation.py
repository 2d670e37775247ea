"""
Validation Constants

Seed data and limits for validating user input and imported recipes.
"""

# Categories inserted at bootstrap if absent: (name, description)
DEFAULT_CATEGORIES = [
    ('breakfast', 'Morning meals'),
    ('appetizer', 'Starters and snacks'),
    ('lunch', 'Midday meals'),
    ('dinner', 'Evening meals'),
    ('dessert', 'Sweet treats'),
    ('before sleep meal', 'Light meals before bedtime'),
]

# Maximum field lengths
MAX_LENGTHS = {
    'ingredient_name': 200,
    'recipe_title': 200,
    'quantity': 50,
    'unit': 50,
    'directions': 50000,
    'notes': 10000,
    'ingredient_text': 500,
}

# Placeholder text for imports that could not be fully extracted
DEFAULT_IMPORT_TITLE = 'Imported Recipe'
SOCIAL_DEFAULT_TITLE = 'Instagram Recipe'
SOCIAL_DEFAULT_DIRECTIONS = 'Please add cooking instructions from the Instagram post.'
SOCIAL_REVIEW_NOTES = 'Content imported from Instagram. Please review and edit the recipe details.'
SOCIAL_PLACEHOLDER = {
    'title': 'Instagram Recipe - Please Edit',
    'directions': 'Please copy the cooking instructions from the Instagram post.',
    'notes': 'This recipe was imported from Instagram. Please review and complete the details.',
}
