"""
Validation Service

Request-body validators. Each returns a list of {field, message} errors;
an empty list means the data is valid. Routes raise ValidationError when
the list is non-empty.
"""

import re
from datetime import date

from constants import (
    VALID_DAYS, WEEKDAYS, VALID_ALLERGENS, VALID_CUISINES, VALID_DIETARY_STYLES,
    VALID_PLANNING_MODES, VALID_DIFFICULTIES, VALID_SOURCE_TYPES, VALID_MEAL_MODES,
    VALID_FREQUENCY_PREFERENCES, VALID_SIDE_CATEGORIES, VALID_SIDE_WEIGHTS,
    VALID_GROCERY_CATEGORIES, VALID_SEASONS, MAX_LENGTHS,
)
from .errors import ApiError, ValidationError

DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _check_required_text(data, field, errors, label=None, max_length=None):
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        errors.append({'field': field, 'message': f"{label or field.capitalize()} is required"})
    elif max_length and len(value) > max_length:
        errors.append({'field': field, 'message': f"Must be at most {max_length} characters"})


def _check_choice(data, field, valid, errors):
    value = data.get(field)
    if value is not None and value not in valid:
        errors.append({'field': field, 'message': f"Must be one of: {', '.join(sorted(valid))}"})


def _check_allergens(data, field, errors):
    value = data.get(field)
    if value is None:
        return
    if not isinstance(value, list):
        errors.append({'field': field, 'message': 'Must be an array'})
        return
    for allergen in value:
        if allergen not in VALID_ALLERGENS:
            errors.append({'field': field, 'message': f"Invalid allergen: {allergen}"})


def _check_string_list(data, field, errors):
    value = data.get(field)
    if value is not None and (not isinstance(value, list)
                              or not all(isinstance(v, (str, int)) for v in value)):
        errors.append({'field': field, 'message': 'Must be an array'})


def _check_bool(data, field, errors):
    value = data.get(field)
    if value is not None and not isinstance(value, bool):
        errors.append({'field': field, 'message': 'Must be a boolean'})


def _check_range(data, field, low, high, errors, integer=False):
    value = data.get(field)
    if value is None:
        return
    ok = _is_int(value) if integer else _is_number(value)
    if not ok or value < low or value > high:
        errors.append({'field': field, 'message': f"Must be between {low} and {high}"})


def _check_positive(data, field, errors, integer=False):
    value = data.get(field)
    if value is None:
        return
    ok = _is_int(value) if integer else _is_number(value)
    if not ok or value <= 0:
        errors.append({'field': field, 'message': 'Must be a positive number'})


def is_valid_date(value):
    """True for real calendar dates in YYYY-MM-DD form."""
    if not isinstance(value, str) or not DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_family(data, partial=False):
    errors = []
    if not partial or 'name' in data:
        _check_required_text(data, 'name', errors, 'Name', MAX_LENGTHS['family_name'])
    _check_choice(data, 'planning_mode', VALID_PLANNING_MODES, errors)
    _check_allergens(data, 'allergies', errors)
    _check_range(data, 'vegetarian_ratio', 0, 100, errors)
    _check_positive(data, 'max_cook_minutes_weekday', errors)
    _check_positive(data, 'max_cook_minutes_weekend', errors)
    _check_range(data, 'leftovers_nights_per_week', 0, 4, errors, integer=True)
    _check_positive(data, 'serving_multiplier', errors)
    for flag in ('gluten_free', 'dairy_free', 'nut_free', 'picky_kid_mode'):
        _check_bool(data, flag, errors)
    return errors


def validate_member(data, partial=False):
    errors = []
    if not partial:
        if not _is_int(data.get('family_id')):
            errors.append({'field': 'family_id', 'message': 'family_id is required and must be a number'})
        if data.get('dietary_style') is None:
            errors.append({'field': 'dietary_style', 'message': 'Dietary style is required'})
    if not partial or 'name' in data:
        _check_required_text(data, 'name', errors, 'Name', MAX_LENGTHS['member_name'])
    _check_choice(data, 'dietary_style', VALID_DIETARY_STYLES, errors)
    _check_allergens(data, 'allergies', errors)
    _check_string_list(data, 'dislikes', errors)
    _check_string_list(data, 'favorites', errors)
    _check_bool(data, 'no_spicy', errors)
    return errors


def _check_ingredients(data, errors):
    value = data.get('ingredients')
    if value is None:
        return
    if not isinstance(value, list):
        errors.append({'field': 'ingredients', 'message': 'Must be an array'})
        return
    for ing in value:
        if isinstance(ing, str):
            continue
        if not isinstance(ing, dict) or not str(ing.get('name') or '').strip():
            errors.append({'field': 'ingredients', 'message': 'Each ingredient needs a name'})
            return
        if ing.get('quantity') is not None and not _is_number(ing.get('quantity')):
            errors.append({'field': 'ingredients', 'message': f"Invalid quantity for {ing.get('name')}"})
        category = ing.get('category')
        if category is not None and category not in VALID_GROCERY_CATEGORIES:
            errors.append({'field': 'ingredients', 'message': f"Invalid category: {category}"})


def validate_recipe(data, partial=False):
    errors = []
    if not partial or 'name' in data:
        _check_required_text(data, 'name', errors, 'Name', MAX_LENGTHS['recipe_name'])
    _check_choice(data, 'cuisine', VALID_CUISINES, errors)
    _check_choice(data, 'difficulty', VALID_DIFFICULTIES, errors)
    _check_choice(data, 'source_type', VALID_SOURCE_TYPES, errors)
    _check_positive(data, 'cook_minutes', errors, integer=True)
    _check_allergens(data, 'allergens', errors)
    _check_range(data, 'leftovers_score', 0, 5, errors, integer=True)
    _check_positive(data, 'frequency_cap_per_month', errors, integer=True)
    _check_ingredients(data, errors)
    _check_string_list(data, 'tags', errors)
    seasonal = data.get('seasonal_tags')
    if seasonal is not None:
        if not isinstance(seasonal, list):
            errors.append({'field': 'seasonal_tags', 'message': 'Must be an array'})
        else:
            for season in seasonal:
                if season not in VALID_SEASONS:
                    errors.append({'field': 'seasonal_tags', 'message': f"Invalid season: {season}"})
    for flag in ('vegetarian', 'kid_friendly', 'makes_leftovers'):
        _check_bool(data, flag, errors)
    return errors


def validate_generate_request(data):
    errors = []
    family_id = data.get('family_id')
    if not _is_int(family_id) or family_id <= 0:
        errors.append({'field': 'family_id', 'message': 'Must be a positive number'})
    week_start = data.get('week_start')
    if week_start is not None and not is_valid_date(week_start):
        errors.append({'field': 'week_start', 'message': 'Must be in YYYY-MM-DD format'})
    variant = data.get('variant')
    if variant is not None and (not _is_int(variant) or variant < 0):
        errors.append({'field': 'variant', 'message': 'Must be a non-negative number'})
    _check_locks(data, errors)
    return errors


def validate_swap_request(data):
    if data.get('day') not in VALID_DAYS:
        return [{'field': 'day', 'message': f"Must be one of: {', '.join(VALID_DAYS)}"}]
    return []


def validate_schedule_entry(entry, index=0):
    errors = []
    prefix = f"schedule[{index}]"
    if not isinstance(entry, dict):
        return [{'field': prefix, 'message': 'Must be an object'}]
    if entry.get('day') not in VALID_DAYS:
        errors.append({'field': f"{prefix}.day", 'message': f"Must be one of: {', '.join(VALID_DAYS)}"})
    if entry.get('meal_mode') is not None and entry['meal_mode'] not in VALID_MEAL_MODES:
        errors.append({'field': f"{prefix}.meal_mode", 'message': "Must be 'one_main' or 'customize_mains'"})
    num_mains = entry.get('num_mains')
    if num_mains is not None and (not _is_int(num_mains) or num_mains <= 0):
        errors.append({'field': f"{prefix}.num_mains", 'message': 'Must be a positive number'})
    assignments = entry.get('main_assignments')
    if assignments is not None:
        if not isinstance(assignments, list):
            errors.append({'field': f"{prefix}.main_assignments", 'message': 'Must be an array'})
        else:
            for assignment in assignments:
                main_number = assignment.get('main_number') if isinstance(assignment, dict) else None
                if not _is_int(main_number) or main_number <= 0:
                    errors.append({'field': f"{prefix}.main_assignments",
                                   'message': 'main_number must be a positive number'})
                    break
    return errors


def validate_lunch_entry(entry, index=0):
    errors = []
    prefix = f"lunch_needs[{index}]"
    if not isinstance(entry, dict):
        return [{'field': prefix, 'message': 'Must be an object'}]
    if not _is_int(entry.get('member_id')):
        errors.append({'field': f"{prefix}.member_id", 'message': 'member_id is required and must be a number'})
    if entry.get('day') not in WEEKDAYS:
        errors.append({'field': f"{prefix}.day", 'message': f"Must be one of: {', '.join(WEEKDAYS)}"})
    return errors

def _check_locks(data, errors):
    locks = data.get('locks')
    if locks is None:
        return
    if not isinstance(locks, dict):
        errors.append({'field': 'locks', 'message': 'Must be an object of day -> recipe_id'})
        return
    for day, recipe_id in locks.items():
        if day not in VALID_DAYS:
            errors.append({'field': 'locks', 'message': f"Invalid day: {day}"})
        elif not _is_int(recipe_id):
            errors.append({'field': 'locks', 'message': f"Recipe id for {day} must be a number"})


def validate_generate_v3_request(data):
    """Validate a schedule-driven generation request (required fields checked by the caller)."""
    errors = []
    family_id = data.get('family_id')
    if not _is_int(family_id) or family_id <= 0:
        errors.append({'field': 'family_id', 'message': 'Must be a positive number'})
    if not is_valid_date(data.get('week_start')):
        errors.append({'field': 'week_start', 'message': 'Must be in YYYY-MM-DD format'})

    schedule = data.get('cooking_schedule')
    if not isinstance(schedule, list):
        errors.append({'field': 'cooking_schedule', 'message': 'Must be an array'})
    else:
        for index, entry in enumerate(schedule):
            errors.extend(validate_schedule_entry(entry, index))

    lunch_needs = data.get('lunch_needs')
    if lunch_needs is not None:
        if not isinstance(lunch_needs, list):
            errors.append({'field': 'lunch_needs', 'message': 'Must be an array'})
        else:
            for index, entry in enumerate(lunch_needs):
                errors.extend(validate_lunch_entry(entry, index))

    specific_meals = data.get('specific_meals')
    if specific_meals is not None:
        if not isinstance(specific_meals, list):
            errors.append({'field': 'specific_meals', 'message': 'Must be an array'})
        else:
            for index, meal in enumerate(specific_meals):
                if (not isinstance(meal, dict) or meal.get('day') not in VALID_DAYS
                        or not isinstance(meal.get('description'), str)):
                    errors.append({'field': f"specific_meals[{index}]",
                                   'message': 'Must be an object with a valid day and a description'})

    _check_locks(data, errors)
    _check_positive(data, 'max_cook_minutes_weekday', errors)
    _check_positive(data, 'max_cook_minutes_weekend', errors)
    _check_range(data, 'vegetarian_ratio', 0, 100, errors)
    return errors


def validate_favorite_meal(data, partial=False):
    errors = []
    if not partial or 'name' in data:
        _check_required_text(data, 'name', errors, 'Name')
    _check_choice(data, 'difficulty', VALID_DIFFICULTIES, errors)
    _check_choice(data, 'frequency_preference', VALID_FREQUENCY_PREFERENCES, errors)
    _check_positive(data, 'total_time_minutes', errors, integer=True)
    return errors


def validate_favorite_side(data, partial=False):
    errors = []
    if not partial or 'name' in data:
        _check_required_text(data, 'name', errors, 'Name')
    _check_choice(data, 'category', VALID_SIDE_CATEGORIES, errors)
    _check_string_list(data, 'pairs_well_with', errors)
    return errors


def validate_side_library_entry(data):
    errors = []
    _check_required_text(data, 'name', errors, 'Name')
    _check_choice(data, 'category', VALID_SIDE_CATEGORIES, errors)
    _check_choice(data, 'weight', VALID_SIDE_WEIGHTS, errors)
    _check_string_list(data, 'cuisine_affinity', errors)
    _check_string_list(data, 'avoid_with_main_types', errors)
    _check_positive(data, 'prep_time_minutes', errors, integer=True)
    _check_ingredients(data, errors)
    _check_bool(data, 'vegetarian', errors)
    return errors


def ensure_valid(errors):
    """Raise ValidationError when a validator reported problems."""
    if errors:
        raise ValidationError(errors)


def require_fields(data, *fields):
    """Raise a 400 naming the first missing field ('x is required')."""
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ApiError(f"{field} is required", 400)
