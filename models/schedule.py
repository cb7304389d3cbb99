"""
Schedule Models

Contains the weekly cooking schedule (which days the family cooks and how
many mains), per-day main assignments, and weekday lunch needs.
"""

from .base import db, JSONList, utcnow, isoformat


class CookingScheduleDay(db.Model):
    """Whether the family cooks on a given day of a given week."""
    __tablename__ = 'weekly_cooking_schedule'
    __table_args__ = (
        db.UniqueConstraint('family_id', 'week_start', 'day', name='uq_schedule_family_week_day'),
        db.CheckConstraint("meal_mode IS NULL OR meal_mode IN ('one_main', 'customize_mains')",
                           name='ck_schedule_meal_mode'),
        db.CheckConstraint(
            "day IN ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')",
            name='ck_schedule_day'),
    )

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    week_start = db.Column(db.String(10), nullable=False)
    day = db.Column(db.String(10), nullable=False)
    is_cooking = db.Column(db.Boolean, nullable=False, default=True)
    meal_mode = db.Column(db.String(20), nullable=True, default='one_main')
    num_mains = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    main_assignments = db.relationship('MainAssignment', backref='schedule', lazy=True,
                                       cascade='all, delete-orphan', passive_deletes=True,
                                       order_by='MainAssignment.main_number')

    def to_dict(self):
        return {
            'id': self.id,
            'family_id': self.family_id,
            'week_start': self.week_start,
            'day': self.day,
            'is_cooking': bool(self.is_cooking),
            'meal_mode': self.meal_mode,
            'num_mains': self.num_mains,
            'main_assignments': [a.to_dict() for a in self.main_assignments],
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }


class MainAssignment(db.Model):
    """Which members eat main number N on a customize_mains day."""
    __tablename__ = 'cooking_day_main_assignments'
    __table_args__ = (
        db.CheckConstraint('main_number > 0', name='ck_assignment_main_number'),
    )

    id = db.Column(db.Integer, primary_key=True)
    schedule_id = db.Column(db.Integer, db.ForeignKey('weekly_cooking_schedule.id', ondelete='CASCADE'),
                            nullable=False, index=True)
    main_number = db.Column(db.Integer, nullable=False)
    member_ids = db.Column(JSONList, nullable=False, default=list)

    def to_dict(self):
        return {
            'id': self.id,
            'schedule_id': self.schedule_id,
            'main_number': self.main_number,
            'member_ids': list(self.member_ids or []),
        }


class LunchNeed(db.Model):
    """A member's packed-lunch need for one weekday."""
    __tablename__ = 'weekly_lunch_needs'
    __table_args__ = (
        db.UniqueConstraint('family_id', 'week_start', 'member_id', 'day', name='uq_lunch_need'),
        db.CheckConstraint("day IN ('monday', 'tuesday', 'wednesday', 'thursday', 'friday')",
                           name='ck_lunch_day'),
    )

    id = db.Column(db.Integer, primary_key=True)
    family_id = db.Column(db.Integer, db.ForeignKey('families.id', ondelete='CASCADE'),
                          nullable=False, index=True)
    week_start = db.Column(db.String(10), nullable=False)
    member_id = db.Column(db.Integer, db.ForeignKey('family_members.id', ondelete='CASCADE'),
                          nullable=False)
    day = db.Column(db.String(10), nullable=False)
    needs_lunch = db.Column(db.Boolean, nullable=False, default=False)
    leftovers_ok = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'family_id': self.family_id,
            'week_start': self.week_start,
            'member_id': self.member_id,
            'day': self.day,
            'needs_lunch': bool(self.needs_lunch),
            'leftovers_ok': bool(self.leftovers_ok),
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
