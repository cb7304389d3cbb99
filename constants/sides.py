"""
Sides Library Seed

Standard sides loaded into an empty sides library by init_db().
Tuples are (name, category, weight, cuisine_affinity, prep_time_minutes).
"""

DEFAULT_SIDES = [
    ('Green Salad', 'salad', 'light', [], 10),
    ('Caesar Salad', 'salad', 'light', ['italian', 'american'], 15),
    ('Roasted Broccoli', 'veggie', 'light', [], 25),
    ('Steamed Green Beans', 'veggie', 'light', [], 10),
    ('Mashed Potatoes', 'starch', 'heavy', ['american'], 30),
    ('Roasted Potatoes', 'starch', 'medium', [], 40),
    ('White Rice', 'grain', 'medium', ['asian', 'mexican', 'indian'], 20),
    ('Brown Rice', 'grain', 'medium', ['asian'], 45),
    ('Garlic Bread', 'bread', 'medium', ['italian'], 15),
    ('Dinner Rolls', 'bread', 'medium', ['american'], 5),
    ('Corn on the Cob', 'veggie', 'medium', ['american', 'mexican'], 15),
    ('Coleslaw', 'salad', 'light', ['american'], 15),
    ('Caprese Salad', 'salad', 'light', ['italian'], 10),
    ('Quinoa Pilaf', 'grain', 'medium', [], 25),
    ('Sautéed Spinach', 'veggie', 'light', ['italian', 'mediterranean'], 10),
    ('Roasted Brussels Sprouts', 'veggie', 'medium', [], 30),
    ('Sweet Potato Fries', 'starch', 'medium', ['american'], 35),
    ('Cucumber Salad', 'salad', 'light', ['asian', 'mediterranean'], 10),
    ('French Fries', 'starch', 'heavy', ['american', 'french'], 30),
    ('Grilled Asparagus', 'veggie', 'light', ['italian', 'french'], 15),
]

# Main-dish ingredient keywords that a side can list in avoid_with_main_types
MAIN_CATEGORY_KEYWORDS = {
    'pasta': 'pasta',
    'rice': 'rice',
    'potato': 'potatoes',
    'quinoa': 'quinoa',
    'bread': 'bread',
}

HEAVY_MAIN_KEYWORDS = ('pasta', 'rice', 'potato', 'bread')
LIGHT_MAIN_KEYWORDS = ('salad', 'soup')
