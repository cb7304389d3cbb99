"""
Services Package

Business logic for the meal planning API.
"""

from .errors import (
    ApiError,
    NotFoundError,
    ValidationError,
    ConflictError,
    PlanningError,
    RateLimitError,
    LLMConfigError,
    LLMResponseError,
)

from .parsing import (
    safe_float,
    safe_int,
    parse_bool,
    float_to_fraction,
    normalize_fractions,
    parse_fraction,
    parse_ingredient,
    parse_ingredient_line,
    guess_category,
)

from .matching import (
    normalize_recipe_name,
    match_recipes,
    extract_food_words,
    find_recipes_by_keyword,
)

from .sides import (
    determine_main_weight,
    categorize_main,
    select_smart_sides,
    suggest_sides,
)

from .generator import (
    generate_meal_plan_v3,
    select_recipe,
    select_lunch_recipe,
)

from .grocery import (
    aggregate_grocery_items,
    regenerate_grocery_list,
    get_grocery_list,
    invalidate_grocery_list,
)

from .schedule import (
    replace_cooking_schedule,
    replace_lunch_needs,
    load_cooking_schedule,
    load_lunch_needs,
)

from .meal_plans import (
    generate_weekly_plan,
    swap_day,
    toggle_lock,
    copy_item_to_week,
    recent_recipe_history,
)

__all__ = [
    # Errors
    'ApiError',
    'NotFoundError',
    'ValidationError',
    'ConflictError',
    'PlanningError',
    'RateLimitError',
    'LLMConfigError',
    'LLMResponseError',
    # Parsing
    'safe_float',
    'safe_int',
    'parse_bool',
    'float_to_fraction',
    'normalize_fractions',
    'parse_fraction',
    'parse_ingredient',
    'parse_ingredient_line',
    'guess_category',
    # Matching
    'normalize_recipe_name',
    'match_recipes',
    'extract_food_words',
    'find_recipes_by_keyword',
    # Sides
    'determine_main_weight',
    'categorize_main',
    'select_smart_sides',
    'suggest_sides',
    # Generator
    'generate_meal_plan_v3',
    'select_recipe',
    'select_lunch_recipe',
    # Grocery
    'aggregate_grocery_items',
    'regenerate_grocery_list',
    'get_grocery_list',
    'invalidate_grocery_list',
    # Schedule
    'replace_cooking_schedule',
    'replace_lunch_needs',
    'load_cooking_schedule',
    'load_lunch_needs',
    # Meal plans
    'generate_weekly_plan',
    'swap_day',
    'toggle_lock',
    'copy_item_to_week',
    'recent_recipe_history',
]
