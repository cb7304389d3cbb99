"""
Weekly Dinner Planner

Builds a deterministic Monday-to-Sunday dinner plan for a family:

1. Hard-filter the catalog once (allergies, diet flags, picky kids, strict diets)
2. Pre-fill locked days
3. Spread vegetarian nights and choose leftover nights
4. For each open day, score the cook-time-suitable recipes and pick from
   the top band with a seeded shuffle
"""

import logging

from constants import VALID_DAYS
from ..errors import PlanningError
from .filters import (
    apply_hard_filters, filter_by_cook_time, max_cook_time, veg_target,
    assign_veg_days, pick_leftover_days, is_weekend,
)
from .scoring import (
    score_favorites, score_dislikes, score_dietary_mismatch, penalize_same_cuisine,
    penalize_same_protein, penalize_repeat, leftovers_scorer, enforce_frequency_cap,
    score_seasonality, score_veg_day, reason, current_season, GOOD_LEFTOVERS_MIN,
)
from .seeding import (
    SeededRandom, derive_seed, seeded_shuffle, normalize_to_monday, next_monday,
)

logger = logging.getLogger(__name__)

TOP_CANDIDATE_THRESHOLD = 10
NO_RECIPES_MESSAGE = "No recipes match the family's dietary restrictions. Try relaxing some constraints."


class PlannerContext:
    """Everything the planner needs for one family and one week."""

    def __init__(self, family, members, recipes, week_start, seed,
                 locks=None, recent_history=None, today=None):
        self.family = family
        self.members = list(members)
        self.recipes = list(recipes)
        self.week_start = week_start
        self.seed = seed
        self.locks = dict(locks or {})
        self.recent_history = list(recent_history or [])  # recipe ids, trailing 30 days
        self.today = today


class PlanSlot:
    """One planned dinner."""

    def __init__(self, day, recipe, locked=False, lunch_leftover_label=None,
                 leftover_lunch_recipe_id=None, reasons=None):
        self.day = day
        self.recipe = recipe
        self.locked = locked
        self.lunch_leftover_label = lunch_leftover_label
        self.leftover_lunch_recipe_id = leftover_lunch_recipe_id
        self.reasons = reasons or []

    def __repr__(self):
        return f"<PlanSlot {self.day} {self.recipe.name!r}>"


def select_best_candidate(pool, day, ctx, plan, modifiers, veg_days, rng):
    """Score the pool and pick from the band within TOP_CANDIDATE_THRESHOLD of the best."""
    scored = []
    for recipe in pool:
        score, why = score_veg_day(recipe, day in veg_days)
        reasons = [why] if why else []
        for modifier in modifiers:
            delta, why = modifier(recipe, ctx, plan, day)
            score += delta
            if why:
                reasons.append(why)
        scored.append((recipe, score, reasons))

    scored.sort(key=lambda entry: -entry[1])
    best = scored[0][1]
    top_band = [entry for entry in scored if entry[1] >= best - TOP_CANDIDATE_THRESHOLD]
    return seeded_shuffle(top_band, rng)[0]


def build_slot(day, pick, leftover_days):
    recipe, _, reasons = pick
    slot = PlanSlot(day, recipe, reasons=list(reasons))
    if day in leftover_days:
        if recipe.leftovers_score >= GOOD_LEFTOVERS_MIN:
            slot.lunch_leftover_label = f"Leftover {recipe.name} for lunch"
            slot.leftover_lunch_recipe_id = recipe.id
        slot.reasons.append(reason('LEFTOVER_DAY', 'Designated leftover day'))
    return slot


def generate_plan(ctx):
    """
    Generate seven PlanSlots (Monday first) for the context.

    Raises:
        PlanningError: if no recipe survives the hard filters
    """
    rng = SeededRandom(ctx.seed)

    eligible, excluded = apply_hard_filters(ctx.recipes, ctx.family, ctx.members)
    if not eligible:
        raise PlanningError(NO_RECIPES_MESSAGE)
    logger.debug("Planner: %d eligible recipes, %d excluded", len(eligible), len(excluded))

    recipes_by_id = {r.id: r for r in ctx.recipes}
    plan = []
    unlocked_days = []
    for day in VALID_DAYS:
        recipe = recipes_by_id.get(ctx.locks.get(day))
        if recipe is not None:
            plan.append(PlanSlot(day, recipe, locked=True,
                                 reasons=[reason('LOCKED', 'Locked by user')]))
        else:
            if day in ctx.locks:
                logger.info("Ignoring lock on %s: recipe %s not found", day, ctx.locks[day])
            unlocked_days.append(day)

    locked_veg = sum(1 for slot in plan if slot.recipe.vegetarian)
    veg_days = assign_veg_days(unlocked_days, locked_veg, veg_target(ctx.family.vegetarian_ratio))
    leftover_days = pick_leftover_days(unlocked_days, ctx.family.leftovers_nights_per_week or 0)

    modifiers = [
        score_favorites,
        score_dislikes,
        score_dietary_mismatch,
        penalize_same_cuisine,
        penalize_same_protein,
        penalize_repeat,
        leftovers_scorer(leftover_days),
        enforce_frequency_cap,
        score_seasonality,
    ]

    for day in unlocked_days:
        pool, _ = filter_by_cook_time(eligible, max_cook_time(ctx.family, day))
        if not pool:
            pool = eligible
        pick = select_best_candidate(pool, day, ctx, plan, modifiers, veg_days, rng)
        plan.append(build_slot(day, pick, leftover_days))

    plan.sort(key=lambda slot: VALID_DAYS.index(slot.day))
    return plan


def rescore_day(ctx, day, plan, exclude_recipe_ids=()):
    """
    Pick a replacement dinner for one day of an existing plan.

    plan is the list of the other days' slots; the rules that look at the
    previous nights see the days before this one.
    """
    rng = SeededRandom(ctx.seed)
    eligible, _ = apply_hard_filters(ctx.recipes, ctx.family, ctx.members)
    eligible = [r for r in eligible if r.id not in set(exclude_recipe_ids)]
    if not eligible:
        raise PlanningError(NO_RECIPES_MESSAGE)

    day_index = VALID_DAYS.index(day)
    earlier = [s for s in plan if VALID_DAYS.index(s.day) < day_index]
    earlier.sort(key=lambda slot: VALID_DAYS.index(slot.day))
    others = earlier + [s for s in plan if VALID_DAYS.index(s.day) > day_index]

    pool, _ = filter_by_cook_time(eligible, max_cook_time(ctx.family, day))
    pool = pool or eligible

    def penalize_week_repeat(recipe, ctx, _plan, _day):
        return penalize_repeat(recipe, ctx, others, day)

    modifiers = [
        score_favorites,
        score_dislikes,
        score_dietary_mismatch,
        penalize_same_cuisine,
        penalize_same_protein,
        penalize_week_repeat,
        enforce_frequency_cap,
        score_seasonality,
    ]
    recipe, _, reasons = select_best_candidate(pool, day, ctx, earlier, modifiers, set(), rng)
    return PlanSlot(day, recipe, reasons=list(reasons))


__all__ = [
    'PlannerContext', 'PlanSlot', 'generate_plan', 'rescore_day',
    'SeededRandom', 'derive_seed', 'seeded_shuffle', 'normalize_to_monday', 'next_monday',
    'apply_hard_filters', 'filter_by_cook_time', 'assign_veg_days', 'pick_leftover_days',
    'veg_target', 'is_weekend', 'current_season', 'NO_RECIPES_MESSAGE',
]
