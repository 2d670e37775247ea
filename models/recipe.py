"""
Recipe Models

Contains the Recipe and RecipeIngredient models for managing
recipes and their ingredient associations.
"""

from datetime import datetime

from .base import db


class Recipe(db.Model):
    """Recipe with metadata and ingredient associations."""
    __tablename__ = 'recipes'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True, index=True)
    directions = db.Column(db.Text, default='')
    prep_time = db.Column(db.Integer, nullable=True)  # minutes
    serving_size = db.Column(db.Integer, nullable=True)
    notes = db.Column(db.Text, default='')
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    category = db.relationship('Category')
    ingredients = db.relationship(
        'RecipeIngredient', backref='recipe', lazy=True,
        cascade='all, delete-orphan', passive_deletes=True,
    )


class RecipeIngredient(db.Model):
    """Join table linking recipes to ingredients with free-text quantity and unit.

    The composite primary key keeps a recipe from listing the same
    ingredient twice. ``alternative_for`` marks this row as a substitute
    for another ingredient of the same recipe; it is not an ownership link.
    """
    __tablename__ = 'recipe_ingredients'

    recipe_id = db.Column(
        db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'),
        primary_key=True, index=True,
    )
    ingredient_id = db.Column(
        db.Integer, db.ForeignKey('ingredients.id'),
        primary_key=True, index=True,
    )
    quantity = db.Column(db.String(50), default='')
    unit = db.Column(db.String(50), default='')
    is_alternative = db.Column(db.Boolean, default=False, nullable=False)
    alternative_for = db.Column(db.Integer, nullable=True)  # ingredient id, weak reference

    ingredient = db.relationship('Ingredient')
