"""
Recipe Storage Service

Validates recipe payloads and writes recipes with their ingredient
associations. A create or update is one transaction: the recipe row,
any new ingredient rows and the replacement association rows are
committed together or not at all.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from constants import MAX_LENGTHS
from models import db, Category, Ingredient, Recipe, RecipeIngredient
from utils.errors import ValidationError, NotFoundError, StorageError
from utils.sanitizer import sanitize_text, sanitize_multiline
from .parsing import normalize_ingredient_name

logger = logging.getLogger(__name__)


def _optional_int(value, field):
    """Accept ints or numeric strings; blanks become None."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a whole number')
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = int(value)
        except ValueError:
            raise ValidationError(f'{field} must be a whole number')
    if not isinstance(value, int) or value < 0:
        raise ValidationError(f'{field} must be a whole number')
    return value


def _clean_ingredients(rows):
    """Keep rows with a non-empty name, first occurrence of each name wins."""
    cleaned = []
    seen = set()
    for row in rows:
        if not isinstance(row, dict):
            continue
        raw_name = row.get('name')
        if not isinstance(raw_name, str):
            continue
        name = normalize_ingredient_name(sanitize_text(raw_name, MAX_LENGTHS['ingredient_name']))
        if not name or name in seen:
            continue
        seen.add(name)
        cleaned.append({
            'name': name,
            'quantity': sanitize_text(row.get('quantity'), MAX_LENGTHS['quantity']),
            'unit': sanitize_text(row.get('unit'), MAX_LENGTHS['unit']),
            'is_alternative': bool(row.get('is_alternative')),
            'alternative_for': _optional_int(row.get('alternative_for'), 'alternative_for'),
        })
    return cleaned


def validate_recipe_payload(payload):
    """
    Validate and clean a create/update request body.

    Category is optional and nameless ingredient rows are dropped rather
    than rejected, so an imported recipe the user only partly filled in
    can still be saved.

    Raises:
        ValidationError: body is not an object, ingredients is not a list,
            no ingredient has a name, a number field is not a whole
            number, or category_id does not exist
    """
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object')

    ingredients = payload.get('ingredients')
    if not isinstance(ingredients, list):
        raise ValidationError('Ingredients must be provided as an array')

    cleaned_ingredients = _clean_ingredients(ingredients)
    if not cleaned_ingredients:
        raise ValidationError('At least one ingredient with a name is required')

    category_id = _optional_int(payload.get('category_id'), 'category_id')
    if category_id is not None and db.session.get(Category, category_id) is None:
        raise ValidationError(f'Unknown category: {category_id}')

    return {
        'title': sanitize_text(payload.get('title'), MAX_LENGTHS['recipe_title']),
        'category_id': category_id,
        'directions': sanitize_multiline(payload.get('directions'), MAX_LENGTHS['directions']),
        'prep_time': _optional_int(payload.get('prep_time'), 'prep_time'),
        'serving_size': _optional_int(payload.get('serving_size'), 'serving_size'),
        'notes': sanitize_multiline(payload.get('notes'), MAX_LENGTHS['notes']),
        'ingredients': cleaned_ingredients,
    }


def find_ingredient(name):
    return Ingredient.query.filter_by(name=name).first()


def get_or_create_ingredient(name):
    """
    Return the ingredient called name, creating it if needed.

    The insert runs in a SAVEPOINT. If a concurrent request created the
    same name first, the unique constraint fires, only the savepoint is
    rolled back, and the existing row is returned.
    """
    name = normalize_ingredient_name(name)
    ingredient = find_ingredient(name)
    if ingredient is not None:
        return ingredient

    try:
        with db.session.begin_nested():
            ingredient = Ingredient(name=name)
            db.session.add(ingredient)
    except IntegrityError:
        logger.info("Ingredient %r created concurrently; reusing existing row", name)
        ingredient = find_ingredient(name)
        if ingredient is None:
            raise
    return ingredient


def save_recipe(data, recipe=None):
    """
    Create (recipe=None) or update a recipe from validated data.

    Existing ingredient associations are replaced. Everything is committed
    in one transaction; on any database error the whole write is rolled
    back and StorageError is raised.
    """
    creating = recipe is None
    try:
        if creating:
            recipe = Recipe()
            db.session.add(recipe)

        recipe.title = data['title']
        recipe.category_id = data['category_id']
        recipe.directions = data['directions']
        recipe.prep_time = data['prep_time']
        recipe.serving_size = data['serving_size']
        recipe.notes = data['notes']

        # Remove old associations before inserting rows with the same keys
        recipe.ingredients = []
        db.session.flush()

        for row in data['ingredients']:
            ingredient = get_or_create_ingredient(row['name'])
            recipe.ingredients.append(RecipeIngredient(
                ingredient=ingredient,
                quantity=row['quantity'],
                unit=row['unit'],
                is_alternative=row['is_alternative'],
                alternative_for=row['alternative_for'],
            ))

        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Saving recipe failed; transaction rolled back")
        raise StorageError(f'Could not save recipe: {e.__class__.__name__}')

    logger.info("%s recipe %s (%d ingredients)", 'Created' if creating else 'Updated',
                recipe.id, len(data['ingredients']))
    return recipe


def delete_recipe(recipe):
    """Delete a recipe and its associations; shared ingredient rows stay."""
    recipe_id = recipe.id
    try:
        db.session.delete(recipe)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Deleting recipe %s failed", recipe_id)
        raise StorageError(f'Could not delete recipe: {e.__class__.__name__}')
    logger.info("Deleted recipe %s", recipe_id)


def get_recipe_or_404(recipe_id):
    recipe = db.session.get(Recipe, recipe_id)
    if recipe is None:
        raise NotFoundError('Recipe not found')
    return recipe


def list_recipes():
    return Recipe.query.order_by(Recipe.title).all()


def recipe_summary(recipe):
    return {
        'id': recipe.id,
        'title': recipe.title,
        'category_id': recipe.category_id,
        'category_name': recipe.category.name if recipe.category else None,
        'directions': recipe.directions,
        'prep_time': recipe.prep_time,
        'serving_size': recipe.serving_size,
        'notes': recipe.notes,
        'created_at': recipe.created_at.isoformat() if recipe.created_at else None,
    }


def recipe_detail(recipe):
    """Summary plus the joined ingredient rows."""
    detail = recipe_summary(recipe)
    detail['ingredients'] = [
        {
            'ingredient_id': ri.ingredient_id,
            'ingredient_name': ri.ingredient.name,
            'quantity': ri.quantity,
            'unit': ri.unit,
            'is_alternative': ri.is_alternative,
            'alternative_for': ri.alternative_for,
        }
        for ri in recipe.ingredients
    ]
    return detail
