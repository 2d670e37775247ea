"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .category import Category
from .ingredient import Ingredient
from .recipe import Recipe, RecipeIngredient

__all__ = [
    'db',
    'Category',
    'Ingredient',
    'Recipe',
    'RecipeIngredient',
]
