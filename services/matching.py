"""
Ingredient Matching Service

Ranks recipes by how much of their ingredient list a pantry covers
("what can my fridge make").
"""

from constants import MIN_PARTIAL_MATCH_LENGTH
from models import db, Category, Ingredient, Recipe, RecipeIngredient
from .parsing import normalize_ingredient_name


def normalize_pantry(pantry):
    """Lowercase and trim pantry entries, dropping blanks and non-strings."""
    normalized = set()
    for item in pantry or []:
        if isinstance(item, str):
            name = normalize_ingredient_name(item)
            if name:
                normalized.add(name)
    return normalized


def is_ingredient_match(ingredient_name, pantry_item):
    """
    Partial, case-normalized match between a recipe ingredient and a pantry entry.

    Exact equality always matches. Substring matches in either direction
    need the pantry entry to be at least MIN_PARTIAL_MATCH_LENGTH long, so
    "egg" does not match "eggplant" while "chick" matches "chicken breast".
    The reverse direction ("chicken breast fillets" covers "chicken
    breast") also needs the ingredient name itself to be that long.
    """
    if ingredient_name == pantry_item:
        return True
    if len(pantry_item) < MIN_PARTIAL_MATCH_LENGTH:
        return False
    if pantry_item in ingredient_name:
        return True
    return len(ingredient_name) >= MIN_PARTIAL_MATCH_LENGTH and ingredient_name in pantry_item


def _sort_key(result):
    prep_time = result['prep_time']
    return (
        -result['match_percentage'],
        -result['matching_count'],
        prep_time is None,  # unknown prep time sorts last
        prep_time or 0,
        (result['title'] or '').lower(),
    )


def score_recipes(rows, pantry):
    """
    Score recipes against a pantry.

    Args:
        rows: iterable of (recipe_id, title, prep_time, category, ingredient_name)
        pantry: iterable of ingredient names the user has

    Returns:
        List of result dicts for recipes with at least one matching
        ingredient, best match first.
    """
    pantry = normalize_pantry(pantry)
    if not pantry:
        return []

    recipes = {}
    for recipe_id, title, prep_time, category, ingredient_name in rows:
        entry = recipes.setdefault(recipe_id, {
            'id': recipe_id,
            'title': title,
            'prep_time': prep_time,
            'category': category,
            'names': set(),
        })
        name = normalize_ingredient_name(ingredient_name)
        if name:
            entry['names'].add(name)

    results = []
    for entry in recipes.values():
        names = entry['names']
        total = len(names)
        # Count each recipe ingredient once, however many pantry entries hit it
        matching = sum(1 for name in names if any(is_ingredient_match(name, item) for item in pantry))
        if matching == 0:
            continue
        results.append({
            'id': entry['id'],
            'title': entry['title'],
            'prep_time': entry['prep_time'],
            'category': entry['category'],
            'matching_count': matching,
            'total_ingredients': total,
            'match_percentage': round(matching * 100 / total, 2),
        })

    results.sort(key=_sort_key)
    return results


def match_recipes(pantry):
    """Find recipes that can be (partly) made from pantry, best match first."""
    rows = (
        db.session.query(
            Recipe.id, Recipe.title, Recipe.prep_time, Category.name, Ingredient.name
        )
        .join(RecipeIngredient, RecipeIngredient.recipe_id == Recipe.id)
        .join(Ingredient, Ingredient.id == RecipeIngredient.ingredient_id)
        .outerjoin(Category, Category.id == Recipe.category_id)
        .all()
    )
    return score_recipes(rows, pantry)
