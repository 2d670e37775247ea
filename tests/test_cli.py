"""
Tests for the flask CLI commands.
"""

from app import init_db
from models import Category
from services.recipes import validate_recipe_payload, save_recipe


def test_init_db_is_idempotent(app):
    init_db()
    init_db()
    assert Category.query.count() == 6


def test_init_db_command(app):
    result = app.test_cli_runner().invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Database initialized' in result.output


def test_list_recipes_command(app):
    save_recipe(validate_recipe_payload({
        'title': 'Toast',
        'prep_time': 5,
        'ingredients': [
            {'name': 'Bread', 'quantity': '2', 'unit': 'slices'},
            {'name': 'Margarine', 'is_alternative': True},
        ],
    }))

    result = app.test_cli_runner().invoke(args=['list-recipes'])

    assert result.exit_code == 0
    assert 'Toast' in result.output
    assert '2 slices bread' in result.output
    assert 'margarine (alternative)' in result.output
