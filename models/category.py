"""
Category Model

Recipe categories. A fixed default set is seeded at startup by init_db().
"""

from .base import db


class Category(db.Model):
    """Named recipe category (breakfast, dinner, ...)."""
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.Text, default='')

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'description': self.description}
