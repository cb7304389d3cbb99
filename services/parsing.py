"""
Parsing Service

Functions for parsing ingredient text, fractions and loosely typed request
values.
"""

import re

from constants import (
    UNIT_MAPPINGS, DEFAULT_UNIT, NOTE_KEYWORDS, UNICODE_FRACTIONS,
    COMMON_FRACTIONS, CATEGORY_KEYWORDS,
)


def safe_float(value, default=0.0, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    try:
        result = float(value) if value else default
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def safe_int(value, default=None, min_val=None, max_val=None):
    """Safely parse an integer value with optional bounds."""
    try:
        result = int(value) if value not in (None, '') else default
        if result is None:
            return default
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError):
        return default


def parse_bool(value, default=False):
    """Interpret query-string style booleans ('1', 'true', 'yes')."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def float_to_fraction(value):
    """Convert float to fraction string for display."""
    if value is None or value == 0:
        return '0'
    # Check if it's a whole number
    if value == int(value):
        return str(int(value))
    # Split into whole and decimal parts
    whole = int(value)
    decimal = value - whole
    # Check common fractions (with tolerance)
    for dec, frac in COMMON_FRACTIONS.items():
        if abs(decimal - dec) < 0.02:
            if whole > 0:
                return f"{whole} {frac}"
            return frac
    # Fall back to decimal
    return f"{value:.2f}".rstrip('0').rstrip('.')


def normalize_fractions(text):
    """Replace Unicode fraction characters with decimal equivalents."""
    # First, normalize all whitespace (including non-breaking spaces) to regular spaces
    text = re.sub(r'[\s\u00a0\u2000-\u200b]+', ' ', text)

    for char, value in UNICODE_FRACTIONS.items():
        if char in text:
            # Mixed fraction like "1½" or "1 ½"
            pattern = r'(\d+)\s*' + re.escape(char)
            match = re.search(pattern, text)
            if match:
                whole = float(match.group(1))
                text = re.sub(pattern, str(whole + value), text)
            else:
                text = text.replace(char, str(value))
    return text


def parse_fraction(value, default=1.0):
    """
    Convert a quantity string to float. Handles: 1, 1.5, 1/2, 1 1/2, ½, 1½.
    Returns default for blank or unparseable input.
    """
    s = str(value).strip() if value is not None else ''
    if not s:
        return default

    s = normalize_fractions(s)

    mixed_match = re.match(r'^(\d+)\s+(\d+)\s*/\s*(\d+)$', s)
    if mixed_match:
        whole, num, denom = (float(g) for g in mixed_match.groups())
        return whole + (num / denom) if denom else default

    frac_match = re.match(r'^(\d+)\s*/\s*(\d+)$', s)
    if frac_match:
        num, denom = (float(g) for g in frac_match.groups())
        return num / denom if denom else default

    try:
        return float(s)
    except (ValueError, TypeError):
        return default


def guess_category(name):
    """Map an ingredient name onto a grocery category."""
    lowered = (name or '').lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return 'other'


def parse_ingredient(text):
    """Parse ingredient text like '2 cups flour' into (quantity, unit, name)."""
    text = (text or '').strip()
    if not text:
        return None, None, None

    text = normalize_fractions(text)

    # Remove bracketed asides, twice for nested brackets
    for _ in range(2):
        text = re.sub(r'\s*\([^)]*\)?', '', text)
        text = re.sub(r'\s*\[[^\]]*\]?', '', text)
    text = re.sub(r'^[/\-\s]+', '', text)

    # Only drop text after a comma when it is a prep note ("onion, diced")
    comma_match = re.search(r',\s*(.*)$', text)
    if comma_match:
        after_comma = comma_match.group(1).lower()
        if any(keyword in after_comma for keyword in NOTE_KEYWORDS):
            text = re.sub(r',.*$', '', text)

    # Mixed fractions first, then simple fractions, then numbers
    qty_match = re.match(r'^(\d+\s+\d+\s*/\s*\d+|\d+\s*/\s*\d+|\d+\.?\d*)\s*', text)
    quantity = 1.0
    if qty_match:
        quantity = parse_fraction(qty_match.group(1).strip())
        text = text[qty_match.end():].strip()
        # Ranges like "2-3 cloves" keep the lower bound
        text = re.sub(r'^(-|to)\s*[\d./]+\s*', '', text)

    unit = DEFAULT_UNIT
    words = text.split()
    if words:
        first_word = words[0].lower().rstrip('.')
        if first_word in UNIT_MAPPINGS:
            unit = UNIT_MAPPINGS[first_word]
            words = words[1:]
            if words and words[0].lower() == 'of':
                words = words[1:]

    name = ' '.join(words).strip(' ,.;')
    return round(quantity, 3), unit, name.lower()


def parse_ingredient_line(text):
    """Parse an ingredient line into the stored {name, quantity, unit, category} shape."""
    quantity, unit, name = parse_ingredient(text)
    if not name:
        return None
    return {
        'name': name,
        'quantity': quantity,
        'unit': unit,
        'category': guess_category(name),
    }
