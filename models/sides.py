"""
Sides Library Model

Contains the SideLibraryEntry catalog used to pair sides with mains.
"""

from .base import db, JSONList, utcnow, isoformat


class SideLibraryEntry(db.Model):
    """A side dish with the pairing hints used by the side selector."""
    __tablename__ = 'sides_library'
    __table_args__ = (
        db.CheckConstraint(
            "category IN ('veggie', 'salad', 'starch', 'grain', 'bread', 'fruit', 'other')",
            name='ck_side_category'),
        db.CheckConstraint("weight IN ('light', 'medium', 'heavy')", name='ck_side_weight'),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, unique=True)
    category = db.Column(db.String(20), nullable=False, default='other')
    weight = db.Column(db.String(10), nullable=False, default='medium')
    cuisine_affinity = db.Column(JSONList, nullable=False, default=list)  # empty = goes with anything
    avoid_with_main_types = db.Column(JSONList, nullable=False, default=list)  # e.g. ["pasta", "rice"]
    prep_time_minutes = db.Column(db.Integer, nullable=True)
    vegetarian = db.Column(db.Boolean, nullable=False, default=True)
    ingredients = db.Column(JSONList, nullable=False, default=list)  # same shape as recipe ingredients
    recipe_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'weight': self.weight,
            'cuisine_affinity': list(self.cuisine_affinity or []),
            'avoid_with_main_types': list(self.avoid_with_main_types or []),
            'prep_time_minutes': self.prep_time_minutes,
            'vegetarian': bool(self.vegetarian),
            'ingredients': list(self.ingredients or []),
            'recipe_url': self.recipe_url,
            'created_at': isoformat(self.created_at),
        }
