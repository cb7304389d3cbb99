"""
Grocery Service

Consolidates the ingredients of a meal plan into a shopping list and keeps
the persisted GroceryItem rows in step with the plan.
"""

import logging

from models import db, GroceryItem, MealPlan, SideLibraryEntry
from .generator import LEFTOVER_LUNCH_NOTE
from .parsing import parse_ingredient_line, safe_float

logger = logging.getLogger(__name__)


def _normalize_ingredient(ing):
    """Return {name, quantity, unit, category} for a dict or free-text ingredient."""
    if isinstance(ing, str):
        return parse_ingredient_line(ing)
    if not isinstance(ing, dict) or not str(ing.get('name') or '').strip():
        return None
    return {
        'name': str(ing['name']).strip(),
        'quantity': safe_float(ing.get('quantity'), 0.0),
        'unit': ing.get('unit') or '',
        'category': ing.get('category') or 'other',
    }


def _plan_ingredient_lists(plan):
    """Yield ingredient lists for every dish on the plan that needs shopping."""
    side_ids = set()
    for item in plan.items:
        if item.meal_type == 'side':
            info = item.side_info or {}
            if info.get('side_library_id'):
                side_ids.add(info['side_library_id'])
        elif item.recipe is not None:
            if item.meal_type == 'lunch' and item.notes == LEFTOVER_LUNCH_NOTE:
                continue  # cooked with last night's dinner
            yield item.recipe.ingredients or []

    sides = {}
    if side_ids:
        sides = {s.id: s for s in SideLibraryEntry.query.filter(SideLibraryEntry.id.in_(side_ids))}
    for item in plan.items:
        info = item.side_info or {}
        side = sides.get(info.get('side_library_id'))
        if side is not None:
            yield side.ingredients or []


def aggregate_grocery_items(plan, multiplier=None):
    """
    Consolidate plan ingredients by (name, unit).

    Quantities are scaled by the family's serving multiplier and rounded to
    two places. Items are sorted by category, then name.

    Returns:
        List of {name, quantity, unit, category} dicts
    """
    if multiplier is None:
        multiplier = plan.family.serving_multiplier if plan.family else 1.0

    consolidated = {}
    for ingredients in _plan_ingredient_lists(plan):
        for raw in ingredients:
            ing = _normalize_ingredient(raw)
            if ing is None:
                continue
            key = (ing['name'].lower(), ing['unit'])
            if key in consolidated:
                consolidated[key]['quantity'] += ing['quantity'] * multiplier
            else:
                consolidated[key] = {
                    'quantity': ing['quantity'] * multiplier,
                    'category': ing['category'],
                }

    items = []
    for (name, unit), entry in consolidated.items():
        items.append({
            'name': name[:1].upper() + name[1:],
            'quantity': round(entry['quantity'], 2),
            'unit': unit,
            'category': entry['category'],
        })
    items.sort(key=lambda i: (i['category'], i['name']))
    return items


def regenerate_grocery_list(plan):
    """
    Rebuild the plan's generated grocery items.

    Manual items are kept; a regenerated item stays checked if an item with
    the same name and unit was checked before.
    """
    checked = set()
    for item in list(plan.grocery_items):
        if item.source == 'mealplan':
            if item.checked:
                checked.add((item.name.lower(), item.unit or ''))
            db.session.delete(item)
    db.session.flush()
    db.session.expire(plan, ['grocery_items'])

    for entry in aggregate_grocery_items(plan):
        db.session.add(GroceryItem(
            meal_plan_id=plan.id,
            name=entry['name'],
            quantity=entry['quantity'],
            unit=entry['unit'],
            category=entry['category'],
            checked=(entry['name'].lower(), entry['unit']) in checked,
            source='mealplan',
        ))
    plan.grocery_generated = True
    db.session.flush()
    db.session.expire(plan, ['grocery_items'])
    logger.info("Regenerated grocery list for plan %s", plan.id)


def get_grocery_list(plan):
    """
    Grocery items for a plan, building the generated part on first access.

    Once built, the list is only rebuilt after the plan changes, so items
    removed by clear-checked stay gone.
    """
    if not plan.grocery_generated:
        regenerate_grocery_list(plan)
    return sorted(plan.grocery_items, key=lambda i: (i.category or 'other', i.name.lower(), i.id))


def invalidate_grocery_list(plan_id):
    """Drop generated items after the plan changes; they are rebuilt on next read."""
    GroceryItem.query.filter_by(meal_plan_id=plan_id, source='mealplan').delete(
        synchronize_session='fetch')
    MealPlan.query.filter_by(id=plan_id).update({'grocery_generated': False},
                                                synchronize_session='fetch')
