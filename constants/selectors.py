"""
HTML Heuristic Selectors

Ordered CSS selector candidates per recipe field, tried first to last
when a page has no JSON-LD recipe. Supporting a new site means adding
selectors here; the evaluator in services.extraction stays unchanged.

Selectors use soupsieve syntax (``:-soup-contains`` replaces jQuery's
``:contains``).
"""

TITLE_SELECTORS = [
    'h1.o-AssetTitle__a-HeadlineText',          # Food Network
    '.o-RecipeInfo__a-Headline',                # Food Network
    'h1[class*="recipe"]',
    '.recipe-title',
    'h1',
    '[data-module="AssetTitle"] h1',            # Food Network variant
    '.m-AssetTitle h1',                         # Food Network variant
]

PREP_TIME_SELECTORS = [
    '.o-RecipeInfo__a-Description.m-RecipeInfo__a-Description--Total',
    '.o-RecipeInfo__a-Description:-soup-contains("min")',
    '.o-RecipeInfo__a-Description:-soup-contains("hr")',
    '.o-RecipeInfo__a-Description',
    '[class*="prep-time"]',
    '.recipe-meta:-soup-contains("Prep")',
    '.prep-time',
    '.cooking-time',
    '[data-testid*="time"]',
]

SERVING_SELECTORS = [
    '.o-RecipeInfo__a-Description:-soup-contains("serving")',
    '.o-RecipeInfo__a-Description:-soup-contains("Serving")',
    '.o-RecipeInfo__a-Description:-soup-contains("serves")',
    '.o-RecipeInfo__a-Description:-soup-contains("Serves")',
    '.o-RecipeInfo__a-Description:-soup-contains("yield")',
    '[class*="serving"]',
    '.recipe-meta:-soup-contains("Serves")',
    '.serving-size',
    '.recipe-yield',
]

INGREDIENT_SELECTORS = [
    '.o-Ingredients__a-Ingredient--CheckboxLabel',  # Food Network checkbox labels
    '.o-RecipeIngredients__a-Ingredient',
    '.o-RecipeIngredients__a-ListItem',
    '.o-RecipeIngredients li',
    '.o-RecipeIngredients p',
    '.o-RecipeIngredients div[class*="Ingredient"]',
    'section[class*="ingredient"] p',
    'section[class*="ingredient"] div',
    '.recipe-ingredients li',
    '[data-module="RecipeIngredients"] li',
    '.m-RecipeIngredients li',
    'section[class*="ingredient"] li',
    '.recipe-ingredient',
    '.ingredients-section li',
    '.ingredient-list li',
    '.recipe-card-ingredient',
]

DIRECTION_SELECTORS = [
    '.o-Method__m-Step',                        # Food Network
    '.o-RecipeDirections__a-ListItem',
    '.o-RecipeDirections li',
    '.o-Method p',
    '.o-Method div[class*="Step"]',
    'section[class*="method"] p',
    'section[class*="method"] div',
    '.recipe-instructions li',
    '.recipe-directions li',
    '.instructions-list li',
    '.method-list li',
    '.recipe-method li',
]

NOTE_SELECTORS = [
    '.recipe-description',
    '.recipe-summary',
    '.recipe-notes',
    '.chef-notes',
    '.cooking-tips',
    '.recipe-intro p',
]
