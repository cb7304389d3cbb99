"""
Scraped Text Cleanup

Normalizes text pulled out of third-party recipe pages before it is stored:
HTML entities decoded, tags and control characters removed, whitespace
collapsed and length capped. Output is plain text; the API returns JSON and
never renders it as HTML.
"""

import html
import re
from urllib.parse import urlparse

CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b-\x1f\x7f-\x9f]')
TAGS = re.compile(r'<[^>]+>')

DEFAULT_RECIPE_NAME = 'Imported Recipe'


def clean_text(text, max_length=10000):
    """
    Plain-text version of a scraped string.

    Args:
        text: Value to clean (None and non-strings allowed)
        max_length: Maximum length after cleaning

    Returns:
        Cleaned string, '' for empty input
    """
    if text is None:
        return ''
    if not isinstance(text, str):
        text = str(text)

    # Decode first: "&lt;b&gt;" is a tag too
    text = html.unescape(text)
    text = TAGS.sub(' ', text)
    text = CONTROL_CHARS.sub('', text)
    text = re.sub(r'\s+', ' ', text).strip()

    if len(text) > max_length:
        text = text[:max_length].rstrip()
    return text


def clean_recipe_name(name, max_length=200):
    """Cleaned recipe title, falling back to 'Imported Recipe'."""
    name = clean_text(name, max_length)
    return name or DEFAULT_RECIPE_NAME


def clean_ingredient_line(text, max_length=500):
    return clean_text(text, max_length)


def clean_http_url(url, max_length=500):
    """
    Return url if it is an absolute http(s) link, else None.

    Rejects javascript:, data: and other schemes that should never be
    stored as an image or source link.
    """
    if not url or not isinstance(url, str):
        return None
    url = url.strip()
    if len(url) > max_length:
        return None
    parsed = urlparse(url)
    if parsed.scheme.lower() not in ('http', 'https') or not parsed.netloc:
        return None
    return url
