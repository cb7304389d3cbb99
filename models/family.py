"""
Family Models

Contains the Family household profile and its FamilyMember rows.
"""

from .base import db, JSONList, utcnow, isoformat


class Family(db.Model):
    """Household profile with dietary rules and planning preferences."""
    __tablename__ = 'families'
    __table_args__ = (
        db.CheckConstraint('vegetarian_ratio >= 0 AND vegetarian_ratio <= 100', name='ck_family_veg_ratio'),
        db.CheckConstraint('leftovers_nights_per_week >= 0 AND leftovers_nights_per_week <= 4',
                           name='ck_family_leftovers'),
        db.CheckConstraint("planning_mode IN ('strictest_household', 'split_household')",
                           name='ck_family_planning_mode'),
        db.CheckConstraint('serving_multiplier > 0', name='ck_family_serving_multiplier'),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    allergies = db.Column(JSONList, nullable=False, default=list)
    vegetarian_ratio = db.Column(db.Integer, nullable=False, default=40)  # percent of dinners
    gluten_free = db.Column(db.Boolean, nullable=False, default=False)
    dairy_free = db.Column(db.Boolean, nullable=False, default=False)
    nut_free = db.Column(db.Boolean, nullable=False, default=False)
    max_cook_minutes_weekday = db.Column(db.Integer, nullable=False, default=45)
    max_cook_minutes_weekend = db.Column(db.Integer, nullable=False, default=90)
    leftovers_nights_per_week = db.Column(db.Integer, nullable=False, default=1)
    picky_kid_mode = db.Column(db.Boolean, nullable=False, default=False)  # kid-friendly recipes only
    planning_mode = db.Column(db.String(30), nullable=False, default='strictest_household')
    serving_multiplier = db.Column(db.Float, nullable=False, default=1.0)  # scales grocery quantities
    created_at = db.Column(db.DateTime, default=utcnow)

    members = db.relationship('FamilyMember', backref='family', lazy=True,
                              cascade='all, delete-orphan', passive_deletes=True,
                              order_by='FamilyMember.id')
    meal_plans = db.relationship('MealPlan', backref='family', lazy=True,
                                 cascade='all, delete-orphan', passive_deletes=True)

    # Fields a client may set on create/update
    EDITABLE_FIELDS = (
        'name', 'allergies', 'vegetarian_ratio', 'gluten_free', 'dairy_free', 'nut_free',
        'max_cook_minutes_weekday', 'max_cook_minutes_weekend', 'leftovers_nights_per_week',
        'picky_kid_mode', 'planning_mode', 'serving_multiplier',
    )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'allergies': list(self.allergies or []),
            'vegetarian_ratio': self.vegetarian_ratio,
            'gluten_free': bool(self.gluten_free),
            'dairy_free': bool(self.dairy_free),
            'nut_free': bool(self.nut_free),
            'max_cook_minutes_weekday': self.max_cook_minutes_weekday,
            'max_cook_minutes_weekend': self.max_cook_minutes_weekend,
            'leftovers_nights_per_week': self.leftovers_nights_per_week,
            'picky_kid_mode': bool(self.picky_kid_mode),
            'planning_mode': self.planning_mode,
            'serving_multiplier': self.serving_multiplier,
            'created_at': isoformat(self.created_at),
        }


class FamilyMember(db.Model):
    """A person in the household with their own diet, allergies and tastes."""
    __tablename__ = 'family_members'
    __table_args__ = (
        db.CheckConstraint("dietary_style IN ('omnivore', 'vegetarian', 'vegan')",
                           name='ck_member_dietary_style'),
    )

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    dietary_style = db.Column(db.String(20), nullable=False, default='omnivore')
    allergies = db.Column(JSONList, nullable=False, default=list)
    dislikes = db.Column(JSONList, nullable=False, default=list)  # recipe names/ids or ingredients
    favorites = db.Column(JSONList, nullable=False, default=list)  # recipe names/ids
    no_spicy = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    EDITABLE_FIELDS = ('name', 'dietary_style', 'allergies', 'dislikes', 'favorites', 'no_spicy')

    def to_dict(self):
        return {
            'id': self.id,
            'family_id': self.family_id,
            'name': self.name,
            'dietary_style': self.dietary_style,
            'allergies': list(self.allergies or []),
            'dislikes': list(self.dislikes or []),
            'favorites': list(self.favorites or []),
            'no_spicy': bool(self.no_spicy),
            'created_at': isoformat(self.created_at),
        }
