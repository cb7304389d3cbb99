"""Ingredient parsing, number helpers, scraped-text cleanup and page extraction."""

import pytest

from services.parsing import (
    parse_ingredient, parse_ingredient_line, parse_fraction, float_to_fraction,
    safe_float, safe_int, parse_bool, guess_category,
)
from services.recipe_import import (
    parse_iso_duration, map_cuisine, extract_recipe, detect_allergens, detect_protein,
)
from utils import clean_text, clean_recipe_name, clean_http_url


@pytest.mark.parametrize('text, expected', [
    ('2 cups flour', (2.0, 'cup', 'flour')),
    ('1 1/2 cups milk', (1.5, 'cup', 'milk')),
    ('½ tsp salt', (0.5, 'tsp', 'salt')),
    ('1½ lb ground beef', (1.5, 'lb', 'ground beef')),
    ('1 onion, diced', (1.0, 'whole', 'onion')),
    ('2-3 cloves garlic', (2.0, 'clove', 'garlic')),
    ('1 can of chickpeas (15 oz)', (1.0, 'can', 'chickpeas')),
    ('Salt, to taste', (1.0, 'whole', 'salt')),
    ('3 Tbsp. olive oil', (3.0, 'tbsp', 'olive oil')),
])
def test_parse_ingredient(text, expected):
    assert parse_ingredient(text) == expected


def test_parse_ingredient_blank():
    assert parse_ingredient('   ') == (None, None, None)
    assert parse_ingredient_line('') is None


def test_parse_ingredient_line_adds_category():
    assert parse_ingredient_line('2 cups basmati rice') == {
        'name': 'basmati rice', 'quantity': 2.0, 'unit': 'cup', 'category': 'grains'}


@pytest.mark.parametrize('value, expected', [
    ('1/2', 0.5), ('1 1/2', 1.5), ('¾', 0.75), ('2.25', 2.25),
    ('', 1.0), (None, 1.0), ('lots', 1.0), ('1/0', 1.0),
])
def test_parse_fraction(value, expected):
    assert parse_fraction(value) == pytest.approx(expected)


@pytest.mark.parametrize('value, expected', [
    (0.5, '1/2'), (1.5, '1 1/2'), (2.0, '2'), (0.33, '1/3'), (0.1, '0.1'), (0, '0'),
])
def test_float_to_fraction(value, expected):
    assert float_to_fraction(value) == expected


def test_safe_numbers():
    assert safe_float('2.5') == 2.5
    assert safe_float('abc') == 0.0
    assert safe_float(None, None) is None
    assert safe_float('5', min_val=10) == 10
    assert safe_int('7') == 7
    assert safe_int('seven') is None
    assert safe_int('', 3) == 3
    assert safe_int('500', max_val=100) == 100


def test_parse_bool():
    assert parse_bool('true') is True
    assert parse_bool('1') is True
    assert parse_bool('no') is False
    assert parse_bool(None, default=True) is True


@pytest.mark.parametrize('name, category', [
    ('chicken breast', 'protein'), ('cheddar', 'dairy'), ('basmati rice', 'grains'),
    ('black pepper', 'spices'), ('red onion', 'produce'), ('chickpeas', 'pantry'),
    ('paper towels', 'other'),
])
def test_guess_category(name, category):
    assert guess_category(name) == category


def test_clean_text():
    assert clean_text('  <b>Mac &amp; Cheese</b>\n\n ') == 'Mac & Cheese'
    assert clean_text('&lt;script&gt;alert(1)&lt;/script&gt;Soup') == 'alert(1) Soup'
    assert clean_text(None) == ''
    assert clean_text('a' * 20, max_length=5) == 'aaaaa'
    assert clean_recipe_name('  ') == 'Imported Recipe'


def test_clean_http_url():
    assert clean_http_url(' https://example.com/a.jpg ') == 'https://example.com/a.jpg'
    assert clean_http_url('javascript:alert(1)') is None
    assert clean_http_url('data:image/png;base64,xyz') is None
    assert clean_http_url('/relative.jpg') is None


@pytest.mark.parametrize('value, minutes', [
    ('PT1H30M', 90), ('PT45M', 45), ('P1D', 1440), ('pt20m', 20),
    ('PT0M', None), ('45 minutes', None), (None, None),
])
def test_parse_iso_duration(value, minutes):
    assert parse_iso_duration(value) == minutes


@pytest.mark.parametrize('value, cuisine', [
    ('Greek', 'mediterranean'), (['Italian'], 'italian'), ('Middle Eastern', 'middle_eastern'),
    ('Tex-Mex', 'mexican'), ('Asian, Thai', 'thai'), ('Martian', 'american'), (None, 'american'),
])
def test_map_cuisine(value, cuisine):
    assert map_cuisine(value) == cuisine


def test_ingredient_detection():
    names = ['spaghetti', 'parmesan', 'pine nuts', 'basil']
    assert detect_allergens(names) == ['dairy', 'gluten', 'nuts']
    assert detect_protein(['firm tofu', 'soy sauce']) == 'tofu'
    assert detect_protein(['rice'], 'Chicken Fried Rice') == 'chicken'
    assert detect_protein(['rice']) is None


def test_extract_recipe_without_json_ld():
    fields = extract_recipe('<html><body><h1> Grandma&#39;s Pie </h1></body></html>',
                            'https://pies.example.com/grandmas-pie')
    assert fields['name'] == "Grandma's Pie"
    assert fields['cook_minutes'] == 30
    assert fields['ingredients'] == []
    assert fields['vegetarian'] is False
    assert fields['source_name'] == 'pies.example.com'


def test_extract_recipe_name_from_slug():
    fields = extract_recipe('<html><body><p>No title here</p></body></html>',
                            'https://www.example.com/recipes/1234/lemon-garlic-chicken/')
    assert fields['name'] == 'Lemon Garlic Chicken'
    assert fields['source_name'] == 'example.com'


def test_extract_recipe_json_ld_list():
    html = """<html><head>
    <meta property="og:site_name" content="Veg Weekly">
    <script type="application/ld+json">[{"@type": "WebSite"}, {
        "@type": ["Recipe"], "name": "Chana Masala", "cookTime": "PT25M", "recipeCuisine": "Indian",
        "recipeIngredient": ["2 cans chickpeas, drained", "1 onion"],
        "image": [{"url": "https://img.example.com/chana.jpg"}],
        "keywords": "curry, Vegan, curry"}]</script>
    </head></html>"""
    fields = extract_recipe(html, 'https://vegweekly.example.com/chana')
    assert fields['name'] == 'Chana Masala'
    assert fields['cook_minutes'] == 25
    assert fields['cuisine'] == 'indian'
    assert fields['vegetarian'] is True
    assert fields['protein_type'] == 'legumes'
    assert fields['ingredients'][0] == {'name': 'chickpeas', 'quantity': 2.0, 'unit': 'can',
                                        'category': 'pantry'}
    assert fields['image_url'] == 'https://img.example.com/chana.jpg'
    assert fields['tags'] == ['curry', 'vegan']
    assert fields['source_name'] == 'Veg Weekly'
