"""
Ingredient Constants

Keyword tables used to classify ingredients pulled from imported recipes:
grocery category, allergens, protein type and whether the dish is meatless.
"""

# Keywords indicating notes to remove from ingredient text (set for O(1) lookup)
NOTE_KEYWORDS = {
    'optional', 'divided', 'or more', 'or less', 'to taste',
    'for serving', 'for garnish', 'at room temp', 'softened',
    'melted', 'chopped', 'diced', 'minced', 'sliced', 'cubed',
    'sifted', 'packed', 'beaten', 'room temperature', 'thawed',
    'drained', 'rinsed', 'peeled', 'seeded', 'cored', 'trimmed',
    'cut into', 'plus more', 'as needed', 'torn', 'shredded',
    'juiced', 'zested', 'halved', 'grated', 'crushed'
}

# Grocery category keywords, checked in order (first hit wins)
CATEGORY_KEYWORDS = [
    ('protein', ('chicken', 'beef', 'pork', 'turkey', 'lamb', 'sausage', 'bacon',
                 'salmon', 'tuna', 'shrimp', 'fish', 'cod', 'tofu', 'tempeh', 'egg')),
    ('dairy', ('milk', 'cheese', 'butter', 'cream', 'yogurt', 'parmesan',
               'mozzarella', 'cheddar', 'feta', 'ricotta')),
    ('grains', ('rice', 'pasta', 'spaghetti', 'noodle', 'quinoa', 'bread',
                'tortilla', 'flour', 'oats', 'couscous', 'bun')),
    ('frozen', ('frozen',)),
    ('spices', ('salt', 'pepper', 'cumin', 'paprika', 'oregano', 'thyme',
                'cinnamon', 'chili powder', 'curry powder', 'garam masala',
                'turmeric', 'basil leaves', 'bay leaf')),
    ('produce', ('onion', 'garlic', 'tomato', 'potato', 'carrot', 'celery',
                 'lettuce', 'spinach', 'broccoli', 'pepper', 'zucchini',
                 'mushroom', 'lemon', 'lime', 'avocado', 'cilantro', 'parsley',
                 'ginger', 'cucumber', 'apple', 'kale', 'cabbage', 'squash',
                 'bean sprout', 'scallion', 'basil')),
    ('pantry', ('oil', 'vinegar', 'sauce', 'broth', 'stock', 'sugar', 'honey',
                'beans', 'lentils', 'chickpeas', 'coconut milk', 'paste',
                'mustard', 'mayonnaise', 'ketchup', 'can')),
]

# Allergen detection keywords for imported recipes
ALLERGEN_KEYWORDS = {
    'gluten': ('flour', 'bread', 'pasta', 'spaghetti', 'noodle', 'tortilla',
               'breadcrumb', 'panko', 'couscous', 'barley', 'soy sauce', 'bun'),
    'dairy': ('milk', 'cheese', 'butter', 'cream', 'yogurt', 'parmesan',
              'mozzarella', 'cheddar', 'feta', 'ricotta', 'ghee'),
    'nuts': ('almond', 'walnut', 'pecan', 'cashew', 'pistachio', 'peanut',
             'hazelnut', 'pine nut'),
    'shellfish': ('shrimp', 'prawn', 'crab', 'lobster', 'scallop', 'clam',
                  'mussel', 'oyster'),
    'soy': ('soy', 'tofu', 'tempeh', 'edamame', 'miso'),
    'fish': ('salmon', 'tuna', 'cod', 'tilapia', 'halibut', 'anchov',
             'fish sauce', 'trout', 'sardine'),
    'eggs': ('egg', 'mayonnaise'),
}

# Protein keyword -> protein_type, checked in order
PROTEIN_KEYWORDS = [
    ('chicken', 'chicken'),
    ('turkey', 'turkey'),
    ('beef', 'beef'),
    ('steak', 'beef'),
    ('pork', 'pork'),
    ('bacon', 'pork'),
    ('sausage', 'pork'),
    ('lamb', 'lamb'),
    ('salmon', 'fish'),
    ('tuna', 'fish'),
    ('cod', 'fish'),
    ('fish', 'fish'),
    ('shrimp', 'shellfish'),
    ('tofu', 'tofu'),
    ('tempeh', 'tofu'),
    ('lentil', 'legumes'),
    ('chickpea', 'legumes'),
    ('beans', 'legumes'),
    ('egg', 'eggs'),
]

# Ingredients that make a recipe non-vegetarian
MEAT_KEYWORDS = (
    'chicken', 'beef', 'steak', 'pork', 'bacon', 'ham', 'sausage', 'turkey',
    'lamb', 'veal', 'duck', 'salmon', 'tuna', 'cod', 'fish', 'shrimp', 'prawn',
    'crab', 'lobster', 'anchov', 'prosciutto', 'pancetta', 'chorizo', 'gelatin',
)
