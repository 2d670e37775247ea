import logging

import click
from flask import Flask, Blueprint, current_app, jsonify, request
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import get_config
from constants import DEFAULT_CATEGORIES
from models import db, Category, Ingredient
from services import (
    import_from_url, match_recipes, validate_recipe_payload, save_recipe,
    delete_recipe, get_recipe_or_404, list_recipes, recipe_summary, recipe_detail,
)
from utils.errors import RecipeAppError, ValidationError

logger = logging.getLogger(__name__)

api = Blueprint('api', __name__)


def create_app(env=None):
    app = Flask(__name__)
    app.config.from_object(get_config(env))
    app.json.sort_keys = app.config['JSON_SORT_KEYS']

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    app.logger.setLevel(app.config['LOG_LEVEL'])

    db.init_app(app)
    Migrate(app, db)

    app.register_blueprint(api)
    register_error_handlers(app)
    register_commands(app)

    @app.before_request
    def log_request():
        app.logger.info("%s %s", request.method, request.path)
        if request.method == 'POST' and request.path == '/api/recipes':
            body = request.get_json(silent=True)
            if isinstance(body, dict):
                app.logger.debug("Recipe payload keys: %s", sorted(body))

    return app


def register_error_handlers(app):
    @app.errorhandler(RecipeAppError)
    def handle_app_error(error):
        if error.status_code >= 500:
            app.logger.error("%s: %s", error.__class__.__name__, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code


def _json_body():
    body = request.get_json(silent=True)
    if body is None:
        raise ValidationError('Request body must be JSON')
    return body


# ============================================
# ROUTES
# ============================================

@api.route('/')
def index():
    return 'Recipe Manager API is running'


@api.route('/api/recipes', methods=['GET'])
def get_recipes():
    return jsonify([recipe_summary(recipe) for recipe in list_recipes()])


@api.route('/api/recipes/<int:recipe_id>', methods=['GET'])
def get_recipe(recipe_id):
    return jsonify(recipe_detail(get_recipe_or_404(recipe_id)))


@api.route('/api/recipes', methods=['POST'])
def create_recipe():
    data = validate_recipe_payload(_json_body())
    recipe = save_recipe(data)
    return jsonify(recipe_detail(recipe)), 201


@api.route('/api/recipes/<int:recipe_id>', methods=['PUT'])
def update_recipe(recipe_id):
    recipe = get_recipe_or_404(recipe_id)
    data = validate_recipe_payload(_json_body())
    recipe = save_recipe(data, recipe)
    return jsonify(recipe_detail(recipe))


@api.route('/api/recipes/<int:recipe_id>', methods=['DELETE'])
def remove_recipe(recipe_id):
    delete_recipe(get_recipe_or_404(recipe_id))
    return jsonify({'message': 'Recipe deleted successfully'})


@api.route('/api/categories', methods=['GET'])
def get_categories():
    categories = Category.query.order_by(Category.name).all()
    return jsonify([category.to_dict() for category in categories])


@api.route('/api/ingredients', methods=['GET'])
def get_ingredients():
    ingredients = Ingredient.query.order_by(Ingredient.name).all()
    return jsonify([ingredient.to_dict() for ingredient in ingredients])


@api.route('/api/fridge-search', methods=['POST'])
def fridge_search():
    body = _json_body()
    pantry = body.get('ingredients') if isinstance(body, dict) else None
    if not isinstance(pantry, list) or not pantry:
        raise ValidationError('Ingredients list is required')
    return jsonify(match_recipes(pantry))


@api.route('/api/recipes/import', methods=['POST'])
@api.route('/api/import-recipe', methods=['POST'])
def import_recipe():
    body = _json_body()
    url = body.get('url') if isinstance(body, dict) else None
    if not isinstance(url, str) or not url.strip():
        raise ValidationError('URL is required')
    recipe = import_from_url(url.strip(), current_app.config)
    return jsonify(recipe.to_dict())


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db():
    """Create tables and insert any missing default categories.

    Must run inside an app context. Safe to call on every start.
    """
    db.create_all()

    existing = {name for (name,) in db.session.query(Category.name)}
    added = 0
    for name, description in DEFAULT_CATEGORIES:
        if name not in existing:
            db.session.add(Category(name=name, description=description))
            added += 1
    db.session.commit()
    if added:
        logger.info("Seeded %d default categories", added)


def register_commands(app):
    @app.cli.command('init-db')
    def init_db_command():
        """Create tables and seed default categories."""
        init_db()
        click.echo('Database initialized.')

    @app.cli.command('list-recipes')
    def list_recipes_command():
        """Print every recipe with its ingredients."""
        for recipe in list_recipes():
            category = recipe.category.name if recipe.category else '-'
            click.echo(f"[{recipe.id}] {recipe.title or '(untitled)'} ({category})")
            click.echo(f"    prep: {recipe.prep_time or '?'} min, serves: {recipe.serving_size or '?'}")
            for ri in recipe.ingredients:
                amount = ' '.join(part for part in (ri.quantity, ri.unit) if part)
                alt = ' (alternative)' if ri.is_alternative else ''
                click.echo(f"    - {amount + ' ' if amount else ''}{ri.ingredient.name}{alt}")


app = create_app()


if __name__ == '__main__':
    with app.app_context():
        init_db()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
