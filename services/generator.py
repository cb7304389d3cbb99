"""
Schedule-Driven Plan Generator

Builds a week from the family's cooking schedule: one shared main or
several per-member mains on cooking days, a side for every main, and
weekday lunches either from last night's leftovers or a quick recipe.
"""

import json
import logging

from constants import WEEKDAYS, WEEKEND_DAYS
from models import db, Recipe, MealPlan, MealPlanItem, SideLibraryEntry
from .matching import find_recipes_by_keyword
from .sides import select_smart_sides, side_payload
from .planner.filters import veg_target

logger = logging.getLogger(__name__)

BASE_RECIPE_SCORE = 100
FAVORITE_BONUS = 50
DISLIKED_INGREDIENT_PENALTY = 30
DEFAULT_NUM_MAINS = 2
LEFTOVER_LUNCH_NOTE = 'Leftovers from previous night'


def _lower_set(values):
    return {str(v).lower() for v in values or []}


def allergy_conflict(recipe, members, extra_allergies=()):
    """Name of the first member allergy the recipe contains, or None."""
    allergens = _lower_set(recipe.allergens)
    for allergy in extra_allergies:
        if allergy in allergens:
            return allergy
    for member in members:
        for allergy in _lower_set(member.allergies):
            if allergy in allergens:
                return allergy
    return None


def is_compatible(recipe, members, extra_allergies=()):
    """Diet, allergy and spice compatibility with every member at the table."""
    tags = _lower_set(recipe.tags)
    for member in members:
        if member.dietary_style == 'vegan' and 'vegan' not in tags:
            return False
        if member.dietary_style == 'vegetarian' and not recipe.vegetarian:
            return False
        if member.no_spicy and 'spicy' in tags:
            return False
    return allergy_conflict(recipe, members, extra_allergies) is None


def score_recipe(recipe, members):
    score = BASE_RECIPE_SCORE
    name = recipe.name.lower()
    ingredients = recipe.ingredient_names()
    for member in members:
        if any(str(fav).lower() in name for fav in member.favorites or []):
            score += FAVORITE_BONUS
        for dislike in member.dislikes or []:
            dislike = str(dislike).lower()
            if any(dislike in ing for ing in ingredients):
                score -= DISLIKED_INGREDIENT_PENALTY
    return score


def select_recipe(recipes, members, max_cook_minutes, used_ids, vegetarian_day=False,
                  extra_allergies=()):
    """
    Best-scoring compatible recipe that fits the cook time and is not used yet.

    On a vegetarian day the choice is limited to vegetarian recipes unless
    that leaves nothing, in which case any compatible recipe will do.
    """
    def candidates(veg_only):
        return [
            r for r in recipes
            if r.cook_minutes <= max_cook_minutes
            and r.id not in used_ids
            and (r.vegetarian or not veg_only)
            and is_compatible(r, members, extra_allergies)
        ]

    pool = candidates(vegetarian_day)
    if not pool and vegetarian_day:
        pool = candidates(False)
    if not pool:
        return None

    best, best_score = None, None
    for recipe in pool:
        score = score_recipe(recipe, members)
        if best_score is None or score > best_score:
            best, best_score = recipe, score
    return best


def select_lunch_recipe(recipes, members, used_ids, max_cook_minutes=20, extra_allergies=()):
    """First quick recipe the member can eat that is not already on the plan."""
    for recipe in recipes:
        if recipe.cook_minutes > max_cook_minutes or recipe.id in used_ids:
            continue
        if any(m.dietary_style in ('vegetarian', 'vegan') for m in members) and not recipe.vegetarian:
            continue
        if allergy_conflict(recipe, members, extra_allergies) is None:
            return recipe
    return None


def find_requested_recipe(description, recipes, members, used_ids, extra_allergies=()):
    """Match a specific meal request; only allergies can veto an explicit request."""
    matches = find_recipes_by_keyword(description, recipes)
    logger.info("Keyword %r matched %d recipes", description, len(matches))
    for candidate, score in matches:
        if candidate.id in used_ids:
            continue
        conflict = allergy_conflict(candidate, members, extra_allergies)
        if conflict:
            logger.debug("Skipping %s for %r: %s allergy", candidate.name, description, conflict)
            continue
        logger.info("Matched %r to %s (score=%d)", description, candidate.name, score)
        return candidate
    logger.info("No compatible match for %r, falling back to normal selection", description)
    return None


def _normalize_schedule(cooking_schedule, locks):
    """Lowercase days, drop repeats (first wins) and force locked days on."""
    locked_days = {day.lower() for day in locks}
    schedule, seen = [], set()
    for entry in cooking_schedule or []:
        day = str(entry.get('day', '')).lower()
        if not day or day in seen:
            continue
        seen.add(day)
        entry = dict(entry, day=day)
        if day in locked_days and not entry.get('is_cooking'):
            logger.info("Forcing is_cooking for locked day %s", day)
            entry['is_cooking'] = True
        entry['meal_mode'] = entry.get('meal_mode') or 'one_main'
        schedule.append(entry)
    return schedule


def find_or_create_plan(family, week_start):
    """The variant-0 plan for the week, emptied of items."""
    plan = MealPlan.query.filter_by(family_id=family.id, week_start=week_start, variant=0).first()
    if plan is None:
        plan = MealPlan(family_id=family.id, week_start=week_start, variant=0)
        db.session.add(plan)
        db.session.flush()
        logger.info("Created meal plan %s for family %s week %s", plan.id, family.id, week_start)
    else:
        cleared = len(plan.items)
        for item in list(plan.items):
            db.session.delete(item)
        for item in list(plan.grocery_items):
            if item.source == 'mealplan':
                db.session.delete(item)
        plan.grocery_generated = False
        db.session.flush()
        db.session.expire(plan, ['items', 'grocery_items'])
        logger.info("Reusing meal plan %s, cleared %d old items", plan.id, cleared)
    return plan


def _add_main(plan, day, recipe, main_number=None, member_ids=None):
    item = MealPlanItem(day=day, recipe=recipe, meal_type='main', main_number=main_number,
                        assigned_member_ids=list(member_ids or []))
    plan.items.append(item)
    return item


def add_side_item(plan, main_item, side=None, custom_name=None):
    item = MealPlanItem(day=main_item.day, meal_type='side', main_number=main_item.main_number,
                        is_custom=True, notes=json.dumps(side_payload(side, custom_name)))
    item.parent = main_item
    plan.items.append(item)
    return item


def generate_meal_plan_v3(family, week_start, cooking_schedule, lunch_needs=None,
                          max_cook_minutes_weekday=None, max_cook_minutes_weekend=None,
                          vegetarian_ratio=None, specific_meals=None, locks=None,
                          lunch_max_cook_minutes=20):
    """
    Generate (or regenerate) the family's variant-0 plan for a week.

    Args:
        family: Family model
        week_start: Monday of the week, YYYY-MM-DD
        cooking_schedule: [{day, is_cooking, meal_mode, num_mains, main_assignments}]
        lunch_needs: [{member_id, day, needs_lunch, leftovers_ok}]
        specific_meals: [{day, description}] requests such as "salmon"
        locks: {day: recipe_id} dinners fixed by the user
        lunch_max_cook_minutes: cook-time cap for lunches that are not leftovers

    Returns:
        The MealPlan, flushed but not committed
    """
    locks = {str(day).lower(): recipe_id for day, recipe_id in (locks or {}).items()}
    weekday_limit = max_cook_minutes_weekday or family.max_cook_minutes_weekday
    weekend_limit = max_cook_minutes_weekend or family.max_cook_minutes_weekend
    if vegetarian_ratio is None:
        vegetarian_ratio = family.vegetarian_ratio
    target_veg = veg_target(vegetarian_ratio)

    members = list(family.members)
    members_by_id = {m.id: m for m in members}
    family_allergies = _lower_set(family.allergies)
    recipes = Recipe.query.order_by(Recipe.id).all()
    recipes_by_id = {r.id: r for r in recipes}
    sides_library = SideLibraryEntry.query.order_by(SideLibraryEntry.name).all()
    requests = {str(m.get('day', '')).lower(): m.get('description')
                for m in specific_meals or [] if m.get('description')}

    schedule = _normalize_schedule(cooking_schedule, locks)
    plan = find_or_create_plan(family, week_start)
    plan.settings_snapshot = {
        'generator': 'v3',
        'max_cook_minutes_weekday': weekday_limit,
        'max_cook_minutes_weekend': weekend_limit,
        'vegetarian_ratio': vegetarian_ratio,
        'locks': locks,
        'specific_meals': list(specific_meals or []),
    }

    used_ids = set()
    veg_mains = 0
    mains_by_day = {}

    # Locked and requested dinners are reserved before any day is filled
    cooking_days = [e for e in schedule if e.get('is_cooking') and e['meal_mode'] == 'one_main']
    for entry in cooking_days:
        if locks.get(entry['day']) in recipes_by_id:
            used_ids.add(locks[entry['day']])
    requested = {}
    for entry in cooking_days:
        day = entry['day']
        if requests.get(day) and locks.get(day) not in recipes_by_id:
            recipe = find_requested_recipe(requests[day], recipes, members, used_ids, family_allergies)
            if recipe is not None:
                requested[day] = recipe
                used_ids.add(recipe.id)

    for entry in schedule:
        if not entry.get('is_cooking'):
            continue
        day = entry['day']
        limit = weekend_limit if day in WEEKEND_DAYS else weekday_limit
        day_sides = []

        if entry['meal_mode'] == 'customize_mains':
            assignments = entry.get('main_assignments') or [
                {'main_number': n, 'member_ids': list(members_by_id)}
                for n in range(1, (entry.get('num_mains') or DEFAULT_NUM_MAINS) + 1)
            ]
            for assignment in assignments:
                member_ids = assignment.get('member_ids') or list(members_by_id)
                eaters = [members_by_id[mid] for mid in member_ids if mid in members_by_id]
                recipe = select_recipe(recipes, eaters, limit, used_ids,
                                       veg_mains < target_veg, family_allergies)
                if recipe is None:
                    logger.warning("No recipe for %s main %s", day, assignment.get('main_number'))
                    continue
                main = _add_main(plan, day, recipe, assignment.get('main_number'), member_ids)
                mains_by_day.setdefault(day, []).append(main)
                used_ids.add(recipe.id)
                veg_mains += 1 if recipe.vegetarian else 0
                for side in select_smart_sides(recipe, 1, day_sides, sides_library):
                    add_side_item(plan, main, side)
                    day_sides.append(side.id)
            continue

        recipe = None
        locked_id = locks.get(day)
        if locked_id:
            recipe = recipes_by_id.get(locked_id)
            if recipe is None:
                logger.info("Locked recipe %s for %s not found, falling back", locked_id, day)
        if recipe is None:
            recipe = requested.get(day)
        if recipe is None:
            recipe = select_recipe(recipes, members, limit, used_ids,
                                   veg_mains < target_veg, family_allergies)
        if recipe is None:
            logger.warning("No recipe fits %s", day)
            continue

        main = _add_main(plan, day, recipe)
        main.locked = bool(locked_id and recipe.id == locked_id)
        mains_by_day.setdefault(day, []).append(main)
        used_ids.add(recipe.id)
        veg_mains += 1 if recipe.vegetarian else 0
        for side in select_smart_sides(recipe, 1, day_sides, sides_library):
            add_side_item(plan, main, side)

    for need in lunch_needs or []:
        if not need.get('needs_lunch'):
            continue
        day = str(need.get('day', '')).lower()
        member = members_by_id.get(need.get('member_id'))
        if day not in WEEKDAYS or member is None:
            continue

        if need.get('leftovers_ok'):
            index = WEEKDAYS.index(day)
            previous = mains_by_day.get(WEEKDAYS[index - 1]) if index > 0 else None
            if previous and previous[0].recipe is not None:
                plan.items.append(MealPlanItem(
                    day=day, recipe=previous[0].recipe, meal_type='lunch',
                    assigned_member_ids=[member.id], notes=LEFTOVER_LUNCH_NOTE))
            continue

        recipe = select_lunch_recipe(recipes, [member], used_ids, lunch_max_cook_minutes,
                                     family_allergies)
        if recipe is not None:
            used_ids.add(recipe.id)
            plan.items.append(MealPlanItem(day=day, recipe=recipe, meal_type='lunch',
                                           assigned_member_ids=[member.id]))

    db.session.flush()
    logger.info("Generated v3 plan %s: %d items, %d vegetarian mains",
                plan.id, len(plan.items), veg_mains)
    return plan
