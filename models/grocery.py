"""
Grocery Model

Contains the GroceryItem rows that make up a meal plan's shopping list.
"""

from .base import db


class GroceryItem(db.Model):
    """Shopping list line for a meal plan with checked state and source tracking."""
    __tablename__ = 'grocery_items'

    id = db.Column(db.Integer, primary_key=True)
    meal_plan_id = db.Column(db.Integer, db.ForeignKey('meal_plans.id', ondelete='CASCADE'),
                             nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    quantity = db.Column(db.Float, nullable=True)
    unit = db.Column(db.String(20), default='')
    category = db.Column(db.String(20), default='other')
    checked = db.Column(db.Boolean, nullable=False, default=False)
    # Source tracking: 'manual' (user added) or 'mealplan' (aggregated from the plan)
    source = db.Column(db.String(20), nullable=False, default='manual')

    def to_dict(self):
        from services.parsing import float_to_fraction

        return {
            'id': self.id,
            'meal_plan_id': self.meal_plan_id,
            'name': self.name,
            'total_quantity': self.quantity,
            'display_quantity': float_to_fraction(self.quantity) if self.quantity else '',
            'unit': self.unit or '',
            'category': self.category or 'other',
            'checked': bool(self.checked),
            'source': self.source,
        }
