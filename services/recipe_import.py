"""
Recipe Import Service

Imports a recipe from a web page into the catalog. Most recipe sites embed
schema.org Recipe data as JSON-LD; pages without it fall back to the <h1>
and finally to the URL slug.
"""

import json
import logging
import re

from bs4 import BeautifulSoup

from constants import ALLERGEN_KEYWORDS, PROTEIN_KEYWORDS, MEAT_KEYWORDS, VALID_CUISINES
from models import db, Recipe
from utils import (
    safe_fetch, is_paywalled_domain, name_from_url_slug, domain_of,
    clean_text, clean_recipe_name, clean_ingredient_line, clean_http_url,
)
from .parsing import parse_ingredient_line

logger = logging.getLogger(__name__)

DEFAULT_COOK_MINUTES = 30
PAYWALL_WARNING = ("This site usually requires a subscription. "
                   "The recipe was imported, but some details may be missing.")

ISO_DURATION = re.compile(
    r'^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+(?:\.\d+)?)H)?'
    r'(?:(?P<minutes>\d+(?:\.\d+)?)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$',
    re.IGNORECASE,
)

CUISINE_ALIASES = {
    'middle eastern': 'middle_eastern',
    'lebanese': 'middle_eastern',
    'persian': 'middle_eastern',
    'greek': 'mediterranean',
    'spanish': 'mediterranean',
    'tex-mex': 'mexican',
    'southern': 'american',
    'cajun': 'american',
}


def _is_recipe_type(item):
    if not isinstance(item, dict):
        return False
    kind = item.get('@type')
    return kind == 'Recipe' or (isinstance(kind, list) and 'Recipe' in kind)


def find_recipe_json_ld(soup):
    """First schema.org Recipe object in the page's ld+json scripts, or None."""
    for script in soup.find_all('script', type='application/ld+json'):
        try:
            data = json.loads(script.string or '')
        except (ValueError, TypeError):
            continue

        candidates = data if isinstance(data, list) else [data]
        for candidate in candidates:
            if _is_recipe_type(candidate):
                return candidate
            if isinstance(candidate, dict) and isinstance(candidate.get('@graph'), list):
                for item in candidate['@graph']:
                    if _is_recipe_type(item):
                        return item
    return None


def parse_iso_duration(value):
    """'PT1H30M' -> 90. Returns None for missing or unparseable durations."""
    if not isinstance(value, str):
        return None
    match = ISO_DURATION.match(value.strip())
    if not match or not any(match.groupdict().values()):
        return None
    parts = {k: float(v) for k, v in match.groupdict().items() if v}
    minutes = (parts.get('days', 0) * 1440 + parts.get('hours', 0) * 60
               + parts.get('minutes', 0) + parts.get('seconds', 0) / 60)
    return int(round(minutes)) or None


def _first(value):
    if isinstance(value, list):
        return value[0] if value else None
    return value


def extract_image(value):
    image = _first(value)
    if isinstance(image, dict):
        image = image.get('url')
    return clean_http_url(image)


def map_cuisine(value):
    """Map recipeCuisine text to a supported cuisine, defaulting to american."""
    values = value if isinstance(value, list) else [value]
    for raw in values:
        text = clean_text(raw).lower()
        if not text:
            continue
        for part in re.split(r'[,/]', text):
            part = part.strip()
            key = part.replace(' ', '_').replace('-', '_')
            if key in VALID_CUISINES:
                return key
            if part in CUISINE_ALIASES:
                return CUISINE_ALIASES[part]
    return 'american'


def detect_allergens(ingredient_names):
    text = ' '.join(ingredient_names)
    return sorted(a for a, keywords in ALLERGEN_KEYWORDS.items() if any(k in text for k in keywords))


def detect_protein(ingredient_names, name=''):
    text = ' '.join([name.lower()] + list(ingredient_names))
    for keyword, protein in PROTEIN_KEYWORDS:
        if keyword in text:
            return protein
    return None


def is_meatless(ingredient_names):
    text = ' '.join(ingredient_names)
    return not any(keyword in text for keyword in MEAT_KEYWORDS)


def _site_name(data, soup, url):
    publisher = data.get('publisher') if data else None
    if isinstance(publisher, dict) and publisher.get('name'):
        return clean_text(publisher['name'], 200)
    meta = soup.find('meta', attrs={'property': 'og:site_name'})
    if meta and meta.get('content'):
        return clean_text(meta['content'], 200)
    host = domain_of(url)
    return host[4:] if host.startswith('www.') else host


def _keywords(data):
    raw = data.get('keywords') or []
    if isinstance(raw, str):
        raw = raw.split(',')
    tags = []
    for word in raw:
        word = clean_text(word, 50).lower()
        if word and word not in tags:
            tags.append(word)
    return tags[:10]


def extract_recipe(html, url):
    """
    Pull catalog fields out of a recipe page.

    Returns:
        dict of Recipe column values (not yet saved)
    """
    soup = BeautifulSoup(html, 'html.parser')
    data = find_recipe_json_ld(soup)

    if data:
        name = clean_recipe_name(data.get('name'))
        minutes = (parse_iso_duration(data.get('totalTime'))
                   or parse_iso_duration(data.get('cookTime'))
                   or parse_iso_duration(data.get('prepTime')))
        lines = data.get('recipeIngredient') or data.get('ingredients') or []
        if isinstance(lines, str):
            lines = [lines]
        ingredients = []
        for line in lines:
            parsed = parse_ingredient_line(clean_ingredient_line(line))
            if parsed:
                ingredients.append(parsed)
        cuisine = map_cuisine(data.get('recipeCuisine'))
        image_url = extract_image(data.get('image'))
        tags = _keywords(data)
    else:
        heading = soup.find('h1')
        name = clean_text(heading.get_text()) if heading else ''
        name = clean_recipe_name(name or name_from_url_slug(url))
        minutes, ingredients, cuisine, image_url, tags = None, [], 'american', None, []

    names = [ing['name'] for ing in ingredients]
    return {
        'name': name,
        'cuisine': cuisine,
        'cook_minutes': minutes or DEFAULT_COOK_MINUTES,
        'ingredients': ingredients,
        'allergens': detect_allergens(names),
        'protein_type': detect_protein(names, name),
        'vegetarian': bool(ingredients) and is_meatless(names + [name.lower()]),
        'tags': tags,
        'image_url': image_url,
        'source_name': _site_name(data, soup, url),
        'source_url': url,
        'source_type': 'imported',
    }


def import_recipe_from_url(url, timeout=10, max_size=10 * 1024 * 1024):
    """
    Import (or find) the recipe at url.

    Returns:
        (recipe, already_exists, paywall_warning)

    Raises:
        SSRFError: URL is not allowed to be fetched
        requests.RequestException: the page could not be fetched
    """
    existing = Recipe.query.filter_by(source_url=url).first()
    if existing is not None:
        return existing, True, None

    response = safe_fetch(url, timeout=timeout, max_size=max_size)
    fields = extract_recipe(response.text, url)

    recipe = Recipe(**fields)
    db.session.add(recipe)
    db.session.flush()
    logger.info("Imported recipe %s (%s) from %s with %d ingredients",
                recipe.id, recipe.name, fields['source_name'], len(fields['ingredients']))

    warning = PAYWALL_WARNING if is_paywalled_domain(url) else None
    return recipe, False, warning
