"""
Ingredient Model

Ingredients are shared across recipes: created on first reference and
never deleted when a recipe goes away.
"""

from .base import db


class Ingredient(db.Model):
    """Ingredient name, stored case-normalized (see normalize_ingredient_name)."""
    __tablename__ = 'ingredients'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False, index=True)

    def to_dict(self):
        return {'id': self.id, 'name': self.name}
