"""
Meal Plan Models

Contains the weekly MealPlan, its MealPlanItem slots, and the RecipeUsage
history used for frequency caps.
"""

import json

from constants import VALID_DAYS
from .base import db, JSONList, JSONDict, utcnow, isoformat

MEAL_TYPE_ORDER = {'main': 0, 'side': 1, 'lunch': 2}


class MealPlan(db.Model):
    """One family's plan for one week. Variants allow alternate plans."""
    __tablename__ = 'meal_plans'
    __table_args__ = (
        db.UniqueConstraint('family_id', 'week_start', 'variant', name='uq_meal_plan_family_week_variant'),
        db.CheckConstraint('variant >= 0', name='ck_meal_plan_variant'),
    )

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    week_start = db.Column(db.String(10), nullable=False)  # YYYY-MM-DD, always a Monday
    variant = db.Column(db.Integer, nullable=False, default=0)
    settings_snapshot = db.Column(JSONDict, nullable=False, default=dict)
    grocery_generated = db.Column(db.Boolean, nullable=False, default=False)  # reset when the plan changes
    created_at = db.Column(db.DateTime, default=utcnow)

    items = db.relationship('MealPlanItem', backref='meal_plan', lazy=True,
                            cascade='all, delete-orphan', passive_deletes=True,
                            foreign_keys='MealPlanItem.meal_plan_id')
    grocery_items = db.relationship('GroceryItem', backref='meal_plan', lazy=True,
                                    cascade='all, delete-orphan', passive_deletes=True)

    def sorted_items(self):
        return sorted(self.items, key=item_sort_key)

    def to_dict(self, include_items=True):
        data = {
            'id': self.id,
            'family_id': self.family_id,
            'week_start': self.week_start,
            'variant': self.variant,
            'settings_snapshot': dict(self.settings_snapshot or {}),
            'created_at': isoformat(self.created_at),
        }
        if include_items:
            data['items'] = [item.to_dict() for item in self.sorted_items()]
        return data


class MealPlanItem(db.Model):
    """A single dish in a plan: a day's main, a side attached to a main, or a lunch."""
    __tablename__ = 'meal_plan_items'
    __table_args__ = (
        db.CheckConstraint("meal_type IN ('main', 'side', 'lunch')", name='ck_item_meal_type'),
        db.CheckConstraint(
            "day IN ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')",
            name='ck_item_day'),
    )

    id = db.Column(db.Integer, primary_key=True)
    meal_plan_id = db.Column(db.Integer, db.ForeignKey('meal_plans.id', ondelete='CASCADE'),
                             nullable=False, index=True)
    day = db.Column(db.String(10), nullable=False)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='SET NULL'),
                          nullable=True, index=True)  # NULL for custom sides
    locked = db.Column(db.Boolean, nullable=False, default=False)  # kept when regenerating
    meal_type = db.Column(db.String(10), nullable=False, default='main')
    main_number = db.Column(db.Integer, nullable=True)  # which main on customize_mains days
    assigned_member_ids = db.Column(JSONList, nullable=False, default=list)  # empty = everyone
    parent_meal_item_id = db.Column(db.Integer, db.ForeignKey('meal_plan_items.id', ondelete='CASCADE'),
                                    nullable=True, index=True)
    is_custom = db.Column(db.Boolean, nullable=False, default=False)
    notes = db.Column(db.Text, nullable=True)  # side payload JSON or free text
    lunch_leftover_label = db.Column(db.String(300), nullable=True)
    leftover_lunch_recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='SET NULL'),
                                         nullable=True)
    reasons = db.Column(JSONList, nullable=False, default=list)

    recipe = db.relationship('Recipe', foreign_keys=[recipe_id])
    sides = db.relationship('MealPlanItem', lazy=True, cascade='all, delete-orphan',
                            passive_deletes=True,
                            backref=db.backref('parent', remote_side=[id]))

    @property
    def side_info(self):
        """Decoded side payload ({side_library_id, side_name} or {custom_side, side_name})."""
        if self.meal_type != 'side' or not self.notes:
            return None
        try:
            payload = json.loads(self.notes)
        except (ValueError, TypeError):
            return None
        return payload if isinstance(payload, dict) else None

    def display_name(self):
        if self.recipe is not None:
            return self.recipe.name
        info = self.side_info
        if info:
            return info.get('side_name')
        return None

    def to_dict(self):
        notes = self.side_info if self.meal_type == 'side' else None
        return {
            'id': self.id,
            'meal_plan_id': self.meal_plan_id,
            'day': self.day,
            'recipe_id': self.recipe_id,
            'locked': bool(self.locked),
            'meal_type': self.meal_type,
            'main_number': self.main_number,
            'assigned_member_ids': list(self.assigned_member_ids or []),
            'parent_meal_item_id': self.parent_meal_item_id,
            'is_custom': bool(self.is_custom),
            'notes': notes if notes is not None else self.notes,
            'lunch_leftover_label': self.lunch_leftover_label,
            'leftover_lunch_recipe_id': self.leftover_lunch_recipe_id,
            'reasons': list(self.reasons or []),
            'name': self.display_name(),
            'recipe': self.recipe.to_dict() if self.recipe is not None else None,
        }


class RecipeUsage(db.Model):
    """Record of a recipe being planned for a family on a date."""
    __tablename__ = 'recipe_usage_history'

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    meal_plan_id = db.Column(db.Integer, db.ForeignKey('meal_plans.id', ondelete='CASCADE'),
                             nullable=True)
    used_date = db.Column(db.Date, nullable=False)


def item_sort_key(item):
    """Order items by day, then mains before sides before lunches, then main number."""
    return (
        VALID_DAYS.index(item.day) if item.day in VALID_DAYS else len(VALID_DAYS),
        MEAL_TYPE_ORDER.get(item.meal_type, 9),
        item.main_number or 0,
        item.id or 0,
    )
