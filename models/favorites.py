"""
Favorites Models

Contains a family's favorite chefs, meals, sides and recipe websites.
"""

from .base import db, JSONList, utcnow, isoformat


class FavoriteChef(db.Model):
    __tablename__ = 'family_favorite_chefs'

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    cuisines = db.Column(JSONList, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=utcnow)

    EDITABLE_FIELDS = ('name', 'cuisines')

    def to_dict(self):
        return {
            'id': self.id,
            'family_id': self.family_id,
            'name': self.name,
            'cuisines': list(self.cuisines or []),
            'created_at': isoformat(self.created_at),
        }


class FavoriteMeal(db.Model):
    """A dish the family likes, optionally linked to a catalog recipe."""
    __tablename__ = 'family_favorite_meals'
    __table_args__ = (
        db.CheckConstraint("difficulty IS NULL OR difficulty IN ('easy', 'medium', 'hard')",
                           name='ck_fav_meal_difficulty'),
        db.CheckConstraint(
            "frequency_preference IS NULL OR frequency_preference IN "
            "('always', 'weekly', 'twice_month', 'monthly', 'bimonthly', 'rarely')",
            name='ck_fav_meal_frequency'),
    )

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='SET NULL'), nullable=True)
    recipe_url = db.Column(db.String(500), nullable=True)
    difficulty = db.Column(db.String(20), nullable=True)
    total_time_minutes = db.Column(db.Integer, nullable=True)
    frequency_preference = db.Column(db.String(20), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    EDITABLE_FIELDS = ('name', 'recipe_id', 'recipe_url', 'difficulty', 'total_time_minutes',
                       'frequency_preference', 'notes')

    def to_dict(self):
        return {
            'id': self.id,
            'family_id': self.family_id,
            'name': self.name,
            'recipe_id': self.recipe_id,
            'recipe_url': self.recipe_url,
            'difficulty': self.difficulty,
            'total_time_minutes': self.total_time_minutes,
            'frequency_preference': self.frequency_preference,
            'notes': self.notes,
            'created_at': isoformat(self.created_at),
        }


class FavoriteSide(db.Model):
    __tablename__ = 'family_favorite_sides'

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    recipe_url = db.Column(db.String(500), nullable=True)
    category = db.Column(db.String(20), nullable=True)
    pairs_well_with = db.Column(JSONList, nullable=False, default=list)  # cuisines or main dishes
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    EDITABLE_FIELDS = ('name', 'recipe_url', 'category', 'pairs_well_with', 'notes')

    def to_dict(self):
        return {
            'id': self.id,
            'family_id': self.family_id,
            'name': self.name,
            'recipe_url': self.recipe_url,
            'category': self.category,
            'pairs_well_with': list(self.pairs_well_with or []),
            'notes': self.notes,
            'created_at': isoformat(self.created_at),
        }


class FavoriteWebsite(db.Model):
    __tablename__ = 'family_favorite_websites'

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    EDITABLE_FIELDS = ('name', 'url')

    def to_dict(self):
        return {
            'id': self.id,
            'family_id': self.family_id,
            'name': self.name,
            'url': self.url,
            'created_at': isoformat(self.created_at),
        }
