"""
Recipe Model

Contains the Recipe catalog entry. Ingredients are kept inline as a JSON list
of {name, quantity, unit, category} objects.
"""

from .base import db, JSONList, utcnow, isoformat


class Recipe(db.Model):
    """Recipe with planning metadata (cuisine, diet flags, timing, leftovers)."""
    __tablename__ = 'recipes'
    __table_args__ = (
        db.CheckConstraint('cook_minutes > 0', name='ck_recipe_cook_minutes'),
        db.CheckConstraint('leftovers_score >= 0 AND leftovers_score <= 5', name='ck_recipe_leftovers_score'),
        db.CheckConstraint("difficulty IN ('easy', 'medium', 'hard')", name='ck_recipe_difficulty'),
        db.CheckConstraint("source_type IN ('seeded', 'user', 'imported', 'chef')", name='ck_recipe_source_type'),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    cuisine = db.Column(db.String(30), nullable=False, default='american', index=True)
    vegetarian = db.Column(db.Boolean, nullable=False, default=False)
    protein_type = db.Column(db.String(30), nullable=True)
    cook_minutes = db.Column(db.Integer, nullable=False, default=30)
    allergens = db.Column(JSONList, nullable=False, default=list)
    kid_friendly = db.Column(db.Boolean, nullable=False, default=True)
    makes_leftovers = db.Column(db.Boolean, nullable=False, default=False)
    ingredients = db.Column(JSONList, nullable=False, default=list)
    tags = db.Column(JSONList, nullable=False, default=list)
    source_type = db.Column(db.String(20), nullable=False, default='user')
    source_name = db.Column(db.String(200), nullable=True)
    source_url = db.Column(db.String(500), nullable=True, unique=True)
    difficulty = db.Column(db.String(20), nullable=False, default='medium')
    leftovers_score = db.Column(db.Integer, nullable=False, default=0)  # 0-5, how well it reheats
    seasonal_tags = db.Column(JSONList, nullable=False, default=list)
    frequency_cap_per_month = db.Column(db.Integer, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    EDITABLE_FIELDS = (
        'name', 'cuisine', 'vegetarian', 'protein_type', 'cook_minutes', 'allergens',
        'kid_friendly', 'makes_leftovers', 'ingredients', 'tags', 'source_type',
        'source_name', 'source_url', 'difficulty', 'leftovers_score', 'seasonal_tags',
        'frequency_cap_per_month', 'notes', 'image_url',
    )

    def ingredient_names(self):
        """Lowercased ingredient names (entries may be plain strings)."""
        names = []
        for ing in self.ingredients or []:
            if isinstance(ing, dict):
                names.append(str(ing.get('name') or '').lower())
            else:
                names.append(str(ing).lower())
        return names

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'cuisine': self.cuisine,
            'vegetarian': bool(self.vegetarian),
            'protein_type': self.protein_type,
            'cook_minutes': self.cook_minutes,
            'allergens': list(self.allergens or []),
            'kid_friendly': bool(self.kid_friendly),
            'makes_leftovers': bool(self.makes_leftovers),
            'ingredients': list(self.ingredients or []),
            'tags': list(self.tags or []),
            'source_type': self.source_type,
            'source_name': self.source_name,
            'source_url': self.source_url,
            'difficulty': self.difficulty,
            'leftovers_score': self.leftovers_score,
            'seasonal_tags': list(self.seasonal_tags or []),
            'frequency_cap_per_month': self.frequency_cap_per_month,
            'notes': self.notes,
            'image_url': self.image_url,
            'created_at': isoformat(self.created_at),
        }
