"""
Hard filters: rules that remove a recipe from consideration entirely.
"""

from constants import WEEKEND_DAYS

DIETARY_STRICTNESS = {'omnivore': 0, 'vegetarian': 1, 'vegan': 2}


def is_vegan_safe(recipe):
    allergens = {a.lower() for a in recipe.allergens or []}
    return bool(recipe.vegetarian) and 'dairy' not in allergens and 'eggs' not in allergens


def strictest_style(members):
    style = 'omnivore'
    for member in members:
        if DIETARY_STRICTNESS.get(member.dietary_style, 0) > DIETARY_STRICTNESS[style]:
            style = member.dietary_style
    return style


def household_allergies(family, members):
    """Family-level allergies plus every member's, lowercased."""
    allergies = {a.lower() for a in family.allergies or []}
    for member in members:
        allergies.update(a.lower() for a in member.allergies or [])
    return allergies


def apply_hard_filters(recipes, family, members):
    """
    Split recipes into (passed, excluded).

    Allergies, the gluten/dairy/nut-free flags and picky-kid mode always apply.
    Member dietary styles only apply in strictest_household mode, where the
    strictest style in the house wins.

    excluded is a list of (recipe, reason_code).
    """
    allergies = household_allergies(family, members)
    style = 'omnivore'
    if family.planning_mode == 'strictest_household':
        style = strictest_style(members)

    passed, excluded = [], []
    for recipe in recipes:
        allergens = {a.lower() for a in recipe.allergens or []}
        if allergens & allergies:
            excluded.append((recipe, 'ALLERGEN_MATCH'))
        elif family.gluten_free and 'gluten' in allergens:
            excluded.append((recipe, 'GLUTEN_FREE'))
        elif family.dairy_free and 'dairy' in allergens:
            excluded.append((recipe, 'DAIRY_FREE'))
        elif family.nut_free and 'nuts' in allergens:
            excluded.append((recipe, 'NUT_FREE'))
        elif family.picky_kid_mode and not recipe.kid_friendly:
            excluded.append((recipe, 'NOT_KID_FRIENDLY'))
        elif style == 'vegan' and not is_vegan_safe(recipe):
            excluded.append((recipe, 'VEGAN_HOUSEHOLD'))
        elif style == 'vegetarian' and not recipe.vegetarian:
            excluded.append((recipe, 'VEGETARIAN_HOUSEHOLD'))
        else:
            passed.append(recipe)
    return passed, excluded


def filter_by_cook_time(recipes, max_minutes):
    passed = [r for r in recipes if r.cook_minutes <= max_minutes]
    excluded = [(r, 'COOK_TIME') for r in recipes if r.cook_minutes > max_minutes]
    return passed, excluded


def is_weekend(day):
    return day in WEEKEND_DAYS


def max_cook_time(family, day):
    return family.max_cook_minutes_weekend if is_weekend(day) else family.max_cook_minutes_weekday


def veg_target(vegetarian_ratio, days=7):
    """Number of vegetarian dinners a week, rounding halves up."""
    return int((vegetarian_ratio or 0) / 100 * days + 0.5)


def assign_veg_days(unlocked_days, locked_veg_count, total_veg_target):
    """Spread the remaining vegetarian dinners evenly over the unlocked days."""
    remaining = max(0, total_veg_target - locked_veg_count)
    veg_days = set()
    if remaining == 0 or not unlocked_days:
        return veg_days

    step = len(unlocked_days) / remaining
    assigned = 0
    for i, day in enumerate(unlocked_days):
        if assigned >= remaining:
            break
        if i >= assigned * step:
            veg_days.add(day)
            assigned += 1
    return veg_days


def pick_leftover_days(unlocked_days, count):
    """Choose leftover nights, Monday to Thursday first so lunch the next day works."""
    leftover_days = []
    for day in unlocked_days:
        if len(leftover_days) >= count:
            break
        if not is_weekend(day) and day != 'friday':
            leftover_days.append(day)
    for day in unlocked_days:
        if len(leftover_days) >= count:
            break
        if day not in leftover_days:
            leftover_days.append(day)
    return set(leftover_days)
