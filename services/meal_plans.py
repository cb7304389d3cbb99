"""
Meal Plan Service

Runs the weekly planner for a family and persists the result: plan rows,
their items, and the usage history that feeds frequency caps.
"""

import logging
from datetime import date, timedelta

from constants import VALID_DAYS
from models import db, Recipe, MealPlan, MealPlanItem, RecipeUsage
from .errors import ConflictError
from .generator import add_side_item
from .grocery import invalidate_grocery_list
from .sides import select_smart_sides
from .planner import PlannerContext, PlanSlot, generate_plan, rescore_day, derive_seed

logger = logging.getLogger(__name__)

HISTORY_WINDOW_DAYS = 30


def day_date(week_start, day):
    return date.fromisoformat(week_start) + timedelta(days=VALID_DAYS.index(day))


def recent_recipe_history(family_id, week_start, exclude_plan_id=None):
    """Recipe ids used by the family in the 30 days before week_start (repeats kept)."""
    start = date.fromisoformat(week_start)
    query = RecipeUsage.query.filter(
        RecipeUsage.family_id == family_id,
        RecipeUsage.used_date >= start - timedelta(days=HISTORY_WINDOW_DAYS),
        RecipeUsage.used_date < start,
    )
    if exclude_plan_id is not None:
        query = query.filter(RecipeUsage.meal_plan_id != exclude_plan_id)
    return [usage.recipe_id for usage in query.all()]


def build_context(family, week_start, variant=0, locks=None, exclude_plan_id=None, seed=None):
    if seed is None:
        seed = derive_seed(family.id, week_start, variant)
    return PlannerContext(
        family=family,
        members=family.members,
        recipes=Recipe.query.order_by(Recipe.id).all(),
        week_start=week_start,
        seed=seed,
        locks=locks,
        recent_history=recent_recipe_history(family.id, week_start, exclude_plan_id),
    )


def _slot_item(slot):
    return MealPlanItem(
        day=slot.day,
        recipe=slot.recipe,
        locked=slot.locked,
        meal_type='main',
        lunch_leftover_label=slot.lunch_leftover_label,
        leftover_lunch_recipe_id=slot.leftover_lunch_recipe_id,
        reasons=slot.reasons,
    )


def record_usage(plan):
    """Replace the plan's usage history with its current mains and lunches."""
    RecipeUsage.query.filter_by(meal_plan_id=plan.id).delete(synchronize_session=False)
    for item in plan.items:
        if item.recipe_id is None or item.meal_type == 'side':
            continue
        db.session.add(RecipeUsage(family_id=plan.family_id, recipe_id=item.recipe_id,
                                   meal_plan_id=plan.id, used_date=day_date(plan.week_start, item.day)))


def clear_plan_items(plan):
    for item in list(plan.items):
        db.session.delete(item)
    db.session.flush()
    db.session.expire(plan, ['items'])
    invalidate_grocery_list(plan.id)


def generate_weekly_plan(family, week_start, variant=0, locks=None, overwrite=False):
    """
    Generate and persist the seeded weekly dinner plan.

    When a plan already exists for (family, week, variant) a ConflictError
    carrying its id is raised, unless overwrite is set; then the plan is
    regenerated in place and its locked days are kept.

    Returns:
        The MealPlan (flushed, not committed)
    """
    locks = dict(locks or {})
    plan = MealPlan.query.filter_by(family_id=family.id, week_start=week_start, variant=variant).first()
    if plan is not None and not overwrite:
        raise ConflictError("A meal plan already exists for this week",
                            payload={'meal_plan_id': plan.id})

    if plan is not None:
        for item in plan.items:
            if item.locked and item.meal_type == 'main' and item.recipe_id:
                locks.setdefault(item.day, item.recipe_id)

    ctx = build_context(family, week_start, variant, locks,
                        exclude_plan_id=plan.id if plan is not None else None)
    slots = generate_plan(ctx)

    if plan is None:
        plan = MealPlan(family_id=family.id, week_start=week_start, variant=variant)
        db.session.add(plan)
        db.session.flush()
    else:
        clear_plan_items(plan)

    plan.settings_snapshot = {
        'generator': 'v1',
        'seed': ctx.seed,
        'locks': locks,
        'vegetarian_ratio': family.vegetarian_ratio,
        'max_cook_minutes_weekday': family.max_cook_minutes_weekday,
        'max_cook_minutes_weekend': family.max_cook_minutes_weekend,
        'leftovers_nights_per_week': family.leftovers_nights_per_week,
        'planning_mode': family.planning_mode,
    }
    for slot in slots:
        plan.items.append(_slot_item(slot))
    db.session.flush()
    record_usage(plan)

    logger.info("Generated plan %s for family %s week %s: %d slots, seed %s",
                plan.id, family.id, week_start, len(slots), ctx.seed)
    return plan


def swap_day(plan, day):
    """
    Re-pick the main for one day, excluding the current recipe.

    Returns:
        The updated MealPlanItem, or None if the day has no main
    """
    mains = [i for i in plan.items if i.meal_type == 'main' and i.day == day]
    if not mains:
        return None
    item = mains[0]

    others = [
        PlanSlot(i.day, i.recipe)
        for i in plan.items
        if i.meal_type == 'main' and i.day != day and i.recipe is not None
    ]
    seed = derive_seed(plan.family_id, f"{plan.week_start}/{day}", item.recipe_id or 0)
    ctx = build_context(plan.family, plan.week_start, exclude_plan_id=plan.id, seed=seed)
    exclude = [item.recipe_id] if item.recipe_id else []
    slot = rescore_day(ctx, day, others, exclude_recipe_ids=exclude)

    side_count = len(item.sides)
    for side in list(item.sides):
        db.session.delete(side)
    db.session.flush()
    db.session.expire(plan, ['items'])
    db.session.expire(item, ['sides'])

    item.recipe = slot.recipe
    for side in select_smart_sides(slot.recipe, side_count):
        add_side_item(plan, item, side)
    item.reasons = slot.reasons + [{'type': 'info', 'code': 'SWAPPED', 'message': 'Swapped by user'}]
    item.lunch_leftover_label = None
    item.leftover_lunch_recipe_id = None
    db.session.flush()
    record_usage(plan)
    invalidate_grocery_list(plan.id)
    logger.info("Swapped %s on plan %s to %s", day, plan.id, slot.recipe.name)
    return item


def toggle_lock(item):
    item.locked = not item.locked
    return item


def copy_item_to_week(item, target_day, target_week_start):
    """
    Copy a main into the family's variant-0 plan for another week.

    The target plan is created if needed; an existing main on the target
    day is replaced.
    """
    source_plan = item.meal_plan
    target = MealPlan.query.filter_by(family_id=source_plan.family_id,
                                      week_start=target_week_start, variant=0).first()
    if target is None:
        target = MealPlan(family_id=source_plan.family_id, week_start=target_week_start,
                          variant=0, settings_snapshot={'generator': 'copy'})
        db.session.add(target)
        db.session.flush()

    for existing in list(target.items):
        if existing.day == target_day and existing.meal_type == 'main' and not existing.main_number:
            db.session.delete(existing)
    db.session.flush()
    db.session.expire(target, ['items'])

    copy = MealPlanItem(
        day=target_day,
        recipe_id=item.recipe_id,
        meal_type='main',
        assigned_member_ids=list(item.assigned_member_ids or []),
        reasons=[{'type': 'info', 'code': 'COPIED', 'message': f"Copied from {source_plan.week_start}"}],
    )
    target.items.append(copy)
    db.session.flush()
    record_usage(target)
    invalidate_grocery_list(target.id)
    return copy
