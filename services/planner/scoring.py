"""
Score modifiers for the weekly planner.

Every modifier has the signature (recipe, ctx, plan, day) and returns a
(delta, reason) pair; reason is None when the rule did not fire.
"""

from datetime import date

from .filters import is_vegan_safe

FAVORITE_BOOST = 20
DISLIKE_PENALTY = -30
DIETARY_MISMATCH_PENALTY = -25
SAME_CUISINE_PENALTY = -50
SAME_PROTEIN_PENALTY = -40
REPEAT_RECIPE_PENALTY = -100
FREQUENCY_CAP_PENALTY = -1000
SEASONAL_BOOST = 15
OUT_OF_SEASON_PENALTY = -5
VEG_DAY_SCORE = 30
GOOD_LEFTOVERS_MIN = 3

NO_CHANGE = (0, None)


def reason(code, message, kind='info'):
    return {'type': kind, 'code': code, 'message': message}


def _names_recipe(entry, recipe):
    return str(entry).lower() == recipe.name.lower() or str(entry) == str(recipe.id)


def score_favorites(recipe, ctx, plan, day):
    count = sum(1 for m in ctx.members if any(_names_recipe(f, recipe) for f in m.favorites or []))
    if count:
        return FAVORITE_BOOST * count, reason('FAVORITE', 'Family favorite', 'included')
    return NO_CHANGE


def score_dislikes(recipe, ctx, plan, day):
    count = sum(1 for m in ctx.members if any(_names_recipe(d, recipe) for d in m.dislikes or []))
    if count:
        return DISLIKE_PENALTY * count, reason('DISLIKED', 'Disliked by a family member')
    return NO_CHANGE


def score_dietary_mismatch(recipe, ctx, plan, day):
    """Split households get a soft penalty per member whose diet the recipe breaks."""
    if ctx.family.planning_mode != 'split_household':
        return NO_CHANGE

    penalty = 0
    for member in ctx.members:
        if member.dietary_style == 'vegan' and not is_vegan_safe(recipe):
            penalty += DIETARY_MISMATCH_PENALTY
        elif member.dietary_style == 'vegetarian' and not recipe.vegetarian:
            penalty += DIETARY_MISMATCH_PENALTY
    if penalty:
        return penalty, reason('DISLIKED', 'Conflicts with a member\'s diet')
    return NO_CHANGE


def penalize_same_cuisine(recipe, ctx, plan, day):
    if not plan:
        return NO_CHANGE
    prev = plan[-1]
    if prev.recipe.cuisine == recipe.cuisine:
        return SAME_CUISINE_PENALTY, reason('SAME_CUISINE', f"Same cuisine as {prev.day}")
    return NO_CHANGE


def penalize_same_protein(recipe, ctx, plan, day):
    if not recipe.protein_type:
        return NO_CHANGE
    for slot in plan[-2:]:
        if slot.recipe.protein_type == recipe.protein_type:
            return SAME_PROTEIN_PENALTY, reason('SAME_PROTEIN', f"Same protein as {slot.day}")
    return NO_CHANGE


def penalize_repeat(recipe, ctx, plan, day):
    if any(slot.recipe.id == recipe.id for slot in plan):
        return REPEAT_RECIPE_PENALTY, reason('REPEAT_RECIPE', 'Already used this week')
    return NO_CHANGE


def leftovers_scorer(leftover_days):
    """Build a modifier that favours good reheaters on leftover nights."""
    def score_leftovers(recipe, ctx, plan, day):
        if day not in leftover_days:
            return NO_CHANGE
        if recipe.leftovers_score >= GOOD_LEFTOVERS_MIN:
            return (recipe.leftovers_score * 5,
                    reason('GOOD_LEFTOVERS', 'Makes good leftovers', 'included'))
        return -10, reason('LOW_LEFTOVERS', 'Does not keep well as leftovers')
    return score_leftovers


def enforce_frequency_cap(recipe, ctx, plan, day):
    cap = recipe.frequency_cap_per_month
    if cap is None:
        return NO_CHANGE
    count = ctx.recent_history.count(recipe.id)
    if count >= cap:
        return (FREQUENCY_CAP_PENALTY,
                reason('FREQUENCY_CAP', f"Used {count}x in last 30 days (cap: {cap})", 'excluded'))
    return NO_CHANGE


def current_season(today=None):
    """Northern-hemisphere meteorological season."""
    month = (today or date.today()).month
    if 3 <= month <= 5:
        return 'spring'
    if 6 <= month <= 8:
        return 'summer'
    if 9 <= month <= 11:
        return 'fall'
    return 'winter'


def score_seasonality(recipe, ctx, plan, day):
    tags = recipe.seasonal_tags or []
    if not tags:
        return NO_CHANGE
    season = current_season(ctx.today)
    if season in tags:
        return SEASONAL_BOOST, reason('SEASONAL_BOOST', f"In season ({season})", 'included')
    return OUT_OF_SEASON_PENALTY, reason('OUT_OF_SEASON', f"Out of season (current: {season})")


def score_veg_day(recipe, is_veg_day):
    if not is_veg_day:
        return NO_CHANGE
    if recipe.vegetarian:
        return VEG_DAY_SCORE, reason('VEG_DAY', 'Vegetarian day', 'included')
    return -VEG_DAY_SCORE, reason('VEG_DAY', 'Non-veg on vegetarian day')
