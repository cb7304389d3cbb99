"""
Matching Constants

Word lists for turning free-text meal requests ("Ina Garten's mac and cheese",
"something with salmon") into recipe lookups.
"""

# Conversational filler ignored by the recipe name matcher
MATCH_STOP_WORDS = {
    'i', 'we', 'me', 'us', 'my', 'our',
    'want', 'need', 'like', 'make', 'cook', 'have', 'get', 'try',
    'a', 'an', 'the', 'some', 'any',
    'for', 'with', 'and', 'or', 'of', 'on', 'in', 'to',
    'please', 'tonight', 'today', 'dinner', 'lunch', 'meal',
    'something', 'thing', 'recipe', 'food',
}

# Non-food words (including well-known chef names) dropped from meal descriptions
FOOD_STOP_WORDS = {
    'a', 'an', 'the', 'and', 'or', 'with', 'in', 'on', 'for', 'of', 'my',
    'her', 'his', 'their', 'our', 'your', 'its', 'from', 'to', 'at', 'by',
    'style', 'recipe', 'dish', 'homemade', 'classic', 'famous', 'best',
    'easy', 'quick', 'simple', 'favorite', 'favourite', 'night', 'dinner',
    'lunch', 'meal', 'like', 'type', 'kind', 'some', 'good', 'great',
    'really', 'super', 'ina', 'garten', 'giada', 'julia', 'child',
    'gordon', 'ramsay', 'jamie', 'oliver', 'bobby', 'flay', 'ree',
    'drummond', 'alton', 'brown', 'martha', 'stewart', 'rachael', 'ray',
    'barefoot', 'contessa', 'pioneer', 'woman',
}

# Fallback terms tried when a food word has no direct hit
RELATED_TERMS = {
    'salmon': ['fish', 'seafood'],
    'tuna': ['fish', 'seafood'],
    'shrimp': ['shellfish', 'seafood'],
    'steak': ['beef'],
    'burger': ['beef', 'ground beef'],
    'tacos': ['taco', 'mexican'],
    'taco': ['tacos', 'mexican'],
    'pasta': ['noodles', 'italian'],
    'pizza': ['italian'],
    'curry': ['indian', 'thai'],
    'sushi': ['japanese', 'fish'],
    'chicken': ['poultry'],
    'pork': ['pork chop', 'pulled pork'],
    'mac': ['macaroni', 'pasta'],
    'cheese': ['cheddar', 'cheesy'],
    'macaroni': ['mac', 'pasta'],
}

# Recipe sites whose pages are usually behind a paywall
PAYWALL_DOMAINS = {
    'cooking.nytimes.com',
    'www.cooksillustrated.com',
    'www.americastestkitchen.com',
    'www.cookscountry.com',
}
