"""
Sides Service

Pairs side dishes from the sides library with a main recipe: heavy mains
get light sides, light mains get something more filling, cuisine affinity
and veggie sides score higher, and sides that clash with the main's starch
are pushed down.
"""

from constants import HEAVY_MAIN_KEYWORDS, LIGHT_MAIN_KEYWORDS, MAIN_CATEGORY_KEYWORDS
from models import SideLibraryEntry


def _ingredient_text(recipe):
    return ' '.join(recipe.ingredient_names())


def determine_main_weight(recipe):
    """Classify a main as 'light', 'medium' or 'heavy' from its ingredients and tags."""
    text = _ingredient_text(recipe)
    if any(word in text for word in HEAVY_MAIN_KEYWORDS):
        return 'heavy'
    if any(word in text for word in LIGHT_MAIN_KEYWORDS) or 'light' in (recipe.tags or []):
        return 'light'
    return 'medium'


def categorize_main(recipe):
    """Starch categories present in the main (pasta, rice, potatoes, quinoa, bread)."""
    text = _ingredient_text(recipe)
    return [category for keyword, category in MAIN_CATEGORY_KEYWORDS.items() if keyword in text]


def score_side(side, recipe, main_categories, cuisine=None):
    score = 100
    if (cuisine or recipe.cuisine) in (side.cuisine_affinity or []):
        score += 50
    for avoid in side.avoid_with_main_types or []:
        if avoid in main_categories:
            score -= 100
    if side.category in ('veggie', 'salad'):
        score += 20
    return score


def select_smart_sides(recipe, count=1, exclude_ids=(), sides=None):
    """
    Choose the best `count` sides for a main recipe.

    Args:
        recipe: Recipe the sides go with
        count: How many sides to return
        exclude_ids: Side library ids already on the plate
        sides: Candidate SideLibraryEntry rows (defaults to the whole library)

    Returns:
        List of SideLibraryEntry, best first (ties by name)
    """
    if sides is None:
        sides = SideLibraryEntry.query.order_by(SideLibraryEntry.name).all()

    weight = determine_main_weight(recipe)
    excluded = set(exclude_ids or ())
    candidates = [s for s in sides if s.id not in excluded]
    if weight == 'heavy':
        candidates = [s for s in candidates if s.weight == 'light']
    elif weight == 'light':
        candidates = [s for s in candidates if s.weight in ('medium', 'heavy')]

    categories = categorize_main(recipe)
    ranked = sorted(candidates, key=lambda s: (-score_side(s, recipe, categories), s.name))
    return ranked[:count]


def suggest_sides(recipe, cuisine=None, exclude_ids=(), limit=2):
    """
    Sides to offer when a user is picking one by hand.

    A pasta, rice or potato main only gets light sides. A side whose
    cuisine_affinity is set must include the cuisine.
    """
    cuisine = cuisine or recipe.cuisine
    excluded = set(exclude_ids or ())
    heavy = any(word in name for name in recipe.ingredient_names()
                for word in ('pasta', 'rice', 'potato'))

    candidates = []
    for side in SideLibraryEntry.query.order_by(SideLibraryEntry.name).all():
        if side.id in excluded:
            continue
        if heavy and side.weight != 'light':
            continue
        affinity = side.cuisine_affinity or []
        if cuisine and affinity and cuisine not in affinity:
            continue
        candidates.append(side)

    categories = categorize_main(recipe)
    candidates.sort(key=lambda s: (-score_side(s, recipe, categories, cuisine), s.name))
    return candidates[:limit]


def side_payload(side=None, custom_name=None):
    """Notes payload stored on a side MealPlanItem."""
    if side is not None:
        return {'side_library_id': side.id, 'side_name': side.name}
    return {'custom_side': True, 'side_name': custom_name}
