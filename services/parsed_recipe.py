"""
Parsed Recipe

Transient recipe produced by the importers and returned to the client
for review. Nothing here is persisted until the user submits it.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from constants import blank_ingredient


@dataclass
class ParsedRecipe:
    title: str = ''
    prep_time: Optional[int] = None
    serving_size: Optional[int] = None
    directions: str = ''
    notes: str = ''
    ingredients: List[dict] = field(default_factory=list)

    def has_content(self):
        """True when any of title, ingredients or directions was extracted."""
        return bool(self.title or self.ingredients or self.directions)

    def ensure_ingredient_row(self):
        """The review form needs at least one ingredient row to render."""
        if not self.ingredients:
            self.ingredients = [blank_ingredient()]
        return self

    def to_dict(self):
        return {
            'title': self.title,
            'prep_time': self.prep_time,
            'serving_size': self.serving_size,
            'directions': self.directions,
            'notes': self.notes,
            'ingredients': [dict(ing) for ing in self.ingredients],
        }
