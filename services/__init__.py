"""
Services Package

Business logic modules for the recipe application.
"""

from .parsing import (
    normalize_fractions,
    normalize_ingredient_name,
    parse_ingredient,
    parse_duration_minutes,
    parse_time_text,
)

from .parsed_recipe import ParsedRecipe

from .matching import (
    is_ingredient_match,
    score_recipes,
    match_recipes,
)

from .extraction import (
    RecipeExtractor,
    StructuredDataExtractor,
    HtmlHeuristicExtractor,
    extract_from_html,
)

from .social import (
    CaptionExtractor,
    extract_from_caption,
)

from .importer import import_from_url

from .recipes import (
    validate_recipe_payload,
    get_or_create_ingredient,
    save_recipe,
    delete_recipe,
    get_recipe_or_404,
    list_recipes,
    recipe_summary,
    recipe_detail,
)

__all__ = [
    # Parsing
    'normalize_fractions',
    'normalize_ingredient_name',
    'parse_ingredient',
    'parse_duration_minutes',
    'parse_time_text',
    'ParsedRecipe',
    # Matching
    'is_ingredient_match',
    'score_recipes',
    'match_recipes',
    # Extraction
    'RecipeExtractor',
    'StructuredDataExtractor',
    'HtmlHeuristicExtractor',
    'extract_from_html',
    'CaptionExtractor',
    'extract_from_caption',
    'import_from_url',
    # Storage
    'validate_recipe_payload',
    'get_or_create_ingredient',
    'save_recipe',
    'delete_recipe',
    'get_recipe_or_404',
    'list_recipes',
    'recipe_summary',
    'recipe_detail',
]
