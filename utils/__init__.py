# Utility modules for Mealmaker
from .url_validator import (
    is_safe_url, safe_fetch, SSRFError, is_valid_http_url, is_paywalled_domain,
    name_from_url_slug, domain_of,
)
from .sanitizer import clean_text, clean_recipe_name, clean_ingredient_line, clean_http_url
