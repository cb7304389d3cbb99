"""
Validation Constants

Contains whitelist values for validating user input and the enumerations
mirrored by the database CHECK constraints.
"""

# Days of the week, in plan order
VALID_DAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')
WEEKDAYS = VALID_DAYS[:5]
WEEKEND_DAYS = {'saturday', 'sunday'}

VALID_ALLERGENS = {'gluten', 'dairy', 'nuts', 'shellfish', 'soy', 'fish', 'eggs'}

VALID_CUISINES = {
    'american', 'italian', 'mexican', 'indian', 'chinese', 'japanese',
    'thai', 'mediterranean', 'korean', 'french', 'middle_eastern', 'ethiopian'
}

VALID_DIETARY_STYLES = {'omnivore', 'vegetarian', 'vegan'}

VALID_PLANNING_MODES = {'strictest_household', 'split_household'}

VALID_DIFFICULTIES = {'easy', 'medium', 'hard'}

VALID_SOURCE_TYPES = {'seeded', 'user', 'imported', 'chef'}

VALID_MEAL_TYPES = {'main', 'side', 'lunch'}

VALID_MEAL_MODES = {'one_main', 'customize_mains'}

VALID_FREQUENCY_PREFERENCES = {'always', 'weekly', 'twice_month', 'monthly', 'bimonthly', 'rarely'}

VALID_SIDE_CATEGORIES = {'veggie', 'salad', 'starch', 'grain', 'bread', 'fruit', 'other'}

VALID_SIDE_WEIGHTS = {'light', 'medium', 'heavy'}

VALID_GROCERY_CATEGORIES = {'produce', 'dairy', 'pantry', 'protein', 'spices', 'grains', 'frozen', 'other'}

VALID_SEASONS = {'spring', 'summer', 'fall', 'winter'}

# Maximum field lengths for security
MAX_LENGTHS = {
    'family_name': 100,
    'member_name': 100,
    'recipe_name': 200,
    'source_url': 500,
    'ingredient_name': 200,
    'notes': 2000,
    'smart_setup_text': 4000,
}
