"""
Recipe Matching Service

Matches free-text meal requests against the recipe catalog, either by
normalized name overlap (match_recipes) or by food keywords spread across
name, protein, tags and ingredients (find_recipes_by_keyword).
"""

import re

from constants import MATCH_STOP_WORDS, FOOD_STOP_WORDS, RELATED_TERMS

MIN_MATCH_SCORE = 0.4
MIN_HIT_RATIO = 0.5


def normalize_recipe_name(name):
    """
    Normalize a recipe name for comparison.

    "Ina's Mac & Cheese!" -> "ina mac and cheese"
    """
    text = (name or '').lower()
    text = re.sub(r"['\u2019]s\b", '', text)
    text = re.sub(r"['\u2019]", '', text)
    text = text.replace('&', ' and ')
    text = re.sub(r'[^a-z0-9]+', ' ', text)
    return ' '.join(text.split())


def match_recipes(query, recipes, limit=3):
    """
    Rank recipes by how many meaningful query words appear in their name.

    Returns:
        List of (recipe, score) with score in [0.4, 1.0], best first
    """
    normalized_query = normalize_recipe_name(query)
    words = normalized_query.split()
    if not words:
        return []
    meaningful = [w for w in words if w not in MATCH_STOP_WORDS] or words

    matches = []
    for recipe in recipes:
        normalized_name = normalize_recipe_name(recipe.name)
        if normalized_name == normalized_query:
            matches.append((recipe, 1.0))
            continue
        name_words = set(normalized_name.split())
        overlap = sum(1 for w in meaningful if w in name_words)
        score = overlap / len(meaningful)
        if score >= MIN_MATCH_SCORE:
            matches.append((recipe, round(score, 3)))

    matches.sort(key=lambda m: -m[1])
    return matches[:limit]


def extract_food_words(description):
    """Food words from a request like "Ina Garten's mac and cheese" -> ['mac', 'cheese']."""
    text = re.sub(r"['\u2018\u2019`]", ' ', description.lower())
    text = re.sub(r'[^a-z\s]', ' ', text)
    return [w for w in text.split() if len(w) > 1 and w not in FOOD_STOP_WORDS]


def _contains(values, word):
    return any(word in value for value in values)


def _score_food_words(words, name, protein, cuisine, tags, ingredients):
    name_hits = protein_hits = tag_hits = ingredient_hits = related_hits = 0
    for word in words:
        if word in name:
            name_hits += 1
        if word in protein:
            protein_hits += 1
        if _contains(tags, word) or word in cuisine:
            tag_hits += 1
        if _contains(ingredients, word):
            ingredient_hits += 1
        for related in RELATED_TERMS.get(word, ()):
            if (related in name or related in protein
                    or _contains(ingredients, related) or _contains(tags, related)):
                related_hits += 1
                break

    total = name_hits + protein_hits + tag_hits + ingredient_hits + related_hits
    if total / len(words) < MIN_HIT_RATIO:
        return 0

    if name_hits >= 2:
        score = 140
    elif name_hits == 1 and (ingredient_hits or related_hits):
        score = 120
    elif name_hits == 1:
        score = 100
    elif protein_hits:
        score = 80
    elif ingredient_hits >= 2:
        score = 70
    elif tag_hits or ingredient_hits:
        score = 60
    elif related_hits:
        score = 40
    else:
        score = 0
    return score + min(total - 1, 3) * 5


def _score_single_word(word, protein, cuisine, tags, ingredients):
    if word in protein:
        return 100
    if _contains(tags, word) or word in cuisine:
        return 80
    if _contains(ingredients, word):
        return 50
    for related in RELATED_TERMS.get(word, ()):
        if related in protein:
            return 60
        if related in cuisine or _contains(tags, related):
            return 40
        if _contains(ingredients, related):
            return 30
    return 0


def find_recipes_by_keyword(keyword, recipes):
    """
    Score recipes against a meal description such as "salmon" or "tacos".

    Returns:
        List of (recipe, score), highest score first; catalog order breaks ties
    """
    kw = keyword.lower().strip()
    words = extract_food_words(keyword)

    matches = []
    for recipe in recipes:
        name = recipe.name.lower()
        protein = (recipe.protein_type or '').lower()
        cuisine = (recipe.cuisine or '').lower()
        tags = [str(t).lower() for t in recipe.tags or []]
        ingredients = recipe.ingredient_names()

        score = 0
        if name == kw:
            score = 200
        elif kw and kw in name:
            score = 150

        if not score and words:
            score = _score_food_words(words, name, protein, cuisine, tags, ingredients)

        if not score and len(words) <= 1:
            word = words[0] if words else kw
            if word:
                score = _score_single_word(word, protein, cuisine, tags, ingredients)

        if score > 0:
            matches.append((recipe, score))

    matches.sort(key=lambda m: -m[1])
    return matches
