"""
Tests for pantry matching and recipe ranking.
"""

from services.matching import is_ingredient_match, score_recipes, match_recipes, normalize_pantry
from services.recipes import validate_recipe_payload, save_recipe


def _rows(recipe_id, title, prep_time, category, *ingredients):
    return [(recipe_id, title, prep_time, category, name) for name in ingredients]


ROWS = (
    _rows(1, 'Omelette', 10, 'breakfast', 'eggs', 'butter')
    + _rows(2, 'Pancakes', 20, 'breakfast', 'flour', 'eggs', 'milk', 'butter')
    + _rows(3, 'Salad', None, 'lunch', 'lettuce', 'tomato')
)


def test_short_pantry_item_needs_exact_match():
    assert not is_ingredient_match('eggplant', 'egg')
    assert is_ingredient_match('egg', 'egg')


def test_partial_match_both_directions():
    assert is_ingredient_match('chicken breast', 'chick')
    assert is_ingredient_match('chicken breast', 'chicken breast fillets')
    assert not is_ingredient_match('rice', 'chicken')


def test_normalize_pantry_drops_blanks():
    assert normalize_pantry(['  Eggs ', '', None, 3, 'eggs']) == {'eggs'}


def test_score_recipes_ranks_by_percentage():
    results = score_recipes(ROWS, ['Eggs', 'butter '])

    assert [r['title'] for r in results] == ['Omelette', 'Pancakes']
    omelette, pancakes = results
    assert omelette['match_percentage'] == 100
    assert omelette['matching_count'] == 2
    assert omelette['total_ingredients'] == 2
    assert omelette['category'] == 'breakfast'
    assert pancakes['match_percentage'] == 50
    assert pancakes['total_ingredients'] == 4


def test_recipes_without_matches_are_excluded():
    assert score_recipes(ROWS, ['lettuce'])[0]['title'] == 'Salad'
    assert score_recipes(ROWS, ['caviar']) == []


def test_empty_pantry_returns_nothing():
    assert score_recipes(ROWS, []) == []
    assert score_recipes(ROWS, ['  ']) == []


def test_ingredient_counted_once_for_several_pantry_hits():
    rows = _rows(1, 'Chicken Rice', 30, None, 'chicken breast', 'rice')
    results = score_recipes(rows, ['chicken', 'chicken breast'])
    assert results[0]['matching_count'] == 1
    assert results[0]['match_percentage'] == 50


def test_percentage_rounded_to_two_places():
    rows = _rows(1, 'Stew', 60, None, 'beef', 'carrot', 'potato')
    assert score_recipes(rows, ['beef'])[0]['match_percentage'] == 33.33


def test_ties_prefer_shorter_prep_time_then_title():
    rows = (
        _rows(1, 'Slow Toast', 30, None, 'bread')
        + _rows(2, 'Mystery Toast', None, None, 'bread')
        + _rows(3, 'Quick Toast', 15, None, 'bread')
        + _rows(4, 'Another Quick Toast', 15, None, 'bread')
    )
    results = score_recipes(rows, ['bread'])
    assert [r['id'] for r in results] == [4, 3, 1, 2]


def test_match_recipes_reads_from_database(app):
    for title, prep_time, names in [
        ('Omelette', 10, ['Eggs', 'Butter']),
        ('Pancakes', 20, ['Flour', 'Eggs', 'Milk', 'Butter']),
    ]:
        data = validate_recipe_payload({
            'title': title,
            'prep_time': prep_time,
            'ingredients': [{'name': name} for name in names],
        })
        save_recipe(data)

    results = match_recipes(['eggs', 'butter'])

    assert [r['title'] for r in results] == ['Omelette', 'Pancakes']
    assert results[0]['category'] is None
    assert results[1]['match_percentage'] == 50
