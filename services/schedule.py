"""
Schedule Service

Saves a family's weekly cooking schedule and lunch needs. Each save
replaces the whole week.
"""

from constants import VALID_DAYS
from models import db, CookingScheduleDay, MainAssignment, LunchNeed


def replace_cooking_schedule(family_id, week_start, entries):
    """Replace the week's schedule with entries [{day, is_cooking, meal_mode, num_mains, main_assignments}]."""
    for existing in CookingScheduleDay.query.filter_by(family_id=family_id, week_start=week_start):
        db.session.delete(existing)
    db.session.flush()

    saved, seen = [], set()
    for entry in entries:
        day = entry['day']
        if day in seen:
            continue
        seen.add(day)
        row = CookingScheduleDay(
            family_id=family_id,
            week_start=week_start,
            day=day,
            is_cooking=bool(entry.get('is_cooking', True)),
            meal_mode=entry.get('meal_mode') or 'one_main',
            num_mains=entry.get('num_mains'),
        )
        for assignment in entry.get('main_assignments') or []:
            row.main_assignments.append(MainAssignment(
                main_number=assignment['main_number'],
                member_ids=list(assignment.get('member_ids') or []),
            ))
        db.session.add(row)
        saved.append(row)
    return saved


def replace_lunch_needs(family_id, week_start, entries):
    """Replace the week's lunch needs with entries [{member_id, day, needs_lunch, leftovers_ok}]."""
    LunchNeed.query.filter_by(family_id=family_id, week_start=week_start).delete(
        synchronize_session=False)

    saved = {}
    for entry in entries:
        key = (entry['member_id'], entry['day'])
        saved[key] = LunchNeed(
            family_id=family_id,
            week_start=week_start,
            member_id=entry['member_id'],
            day=entry['day'],
            needs_lunch=bool(entry.get('needs_lunch', True)),
            leftovers_ok=bool(entry.get('leftovers_ok', False)),
        )
    db.session.add_all(saved.values())
    return list(saved.values())


def load_cooking_schedule(family_id, week_start):
    rows = CookingScheduleDay.query.filter_by(family_id=family_id, week_start=week_start).all()
    return sorted(rows, key=lambda r: VALID_DAYS.index(r.day))


def load_lunch_needs(family_id, week_start):
    rows = LunchNeed.query.filter_by(family_id=family_id, week_start=week_start).all()
    return sorted(rows, key=lambda r: (r.member_id, VALID_DAYS.index(r.day)))
