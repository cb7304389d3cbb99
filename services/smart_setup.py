"""
Smart Setup Service

Turns a free-text description of the week ("cooking Mon, Wed and Fri,
tacos on Wednesday, Sam needs lunch Tuesday") into a structured schedule
using the Anthropic Messages API.
"""

import json
import logging
import re
import time

import anthropic
from flask import current_app

from constants import VALID_DAYS, WEEKDAYS
from .errors import LLMConfigError, LLMResponseError, RateLimitError

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "High demand right now. Please wait 60 seconds and try again."

_DAY_SKELETON = """  "cooking_days": {
    "monday": { "is_cooking": false, "meal_mode": "one_main" },
    "tuesday": { "is_cooking": false, "meal_mode": "one_main" },
    "wednesday": { "is_cooking": false, "meal_mode": "one_main" },
    "thursday": { "is_cooking": false, "meal_mode": "one_main" },
    "friday": { "is_cooking": false, "meal_mode": "one_main" },
    "saturday": { "is_cooking": false, "meal_mode": "one_main" },
    "sunday": { "is_cooking": false, "meal_mode": "one_main" }
  }"""

_COOKING_DAY_RULES = """- Every day starts as is_cooking: false. Only days the user explicitly names as cooking days become true. Do not infer extra days.
- "Eating out", "ordering in", "not cooking" or "off" on a day means is_cooking: false.
- meal_mode is "one_main" unless the user asks for several mains on a day, then "customize_mains".
- Match member names case-insensitively against the family members provided."""

WEEK_SYSTEM_PROMPT = f"""You are a meal planning assistant. The user describes their week in plain language. Return a JSON object with exactly this structure:

{{
{_DAY_SKELETON},
  "lunch_needs": {{ "<member_name>": ["monday", "tuesday"] }},
  "preferences": {{
    "max_cook_minutes_weekday": 45,
    "max_cook_minutes_weekend": 90,
    "vegetarian_ratio": 40
  }},
  "specific_meals": [ {{ "day": "tuesday", "description": "Ina Garten's mac and cheese" }} ]
}}

Rules:
{_COOKING_DAY_RULES}
- Add a member's days to lunch_needs when the user says that person needs lunch.
- Only include preferences the user mentions. "Quick meals" or a stated time limit lowers max_cook_minutes.
- When the user asks for a particular dish on a day, add it to specific_meals with the user's exact wording, chef names and possessives included, and make sure that day is a cooking day.
- specific_meals is an empty array when no dish is requested.
- Return only valid JSON with no markdown fences and no explanation."""

CONVERSATION_SYSTEM_PROMPT = f"""You are a meal planning assistant. The user describes their week in plain language. Return a JSON object with exactly this structure:

{{
{_DAY_SKELETON},
  "specific_meals": [],
  "dietary_preferences": {{ "vegetarian_ratio": 40, "allergies": [], "cuisine_preferences": [] }},
  "lunch_needs": {{}},
  "cook_time_limits": {{ "weekday": 45, "weekend": 90 }}
}}

Rules:
{_COOKING_DAY_RULES}
- specific_meals holds {{ "day", "description" }} for each dish the user asks for, such as "tacos on Tuesday".
- dietary_preferences.vegetarian_ratio is a percentage from 0 to 100 (default 40). Raise it when the user wants vegetarian, vegan or meatless meals.
- dietary_preferences.allergies lists any allergies or intolerances mentioned, such as "gluten" or "nuts".
- dietary_preferences.cuisine_preferences lists cuisines mentioned.
- lunch_needs maps a member name to the days they need lunch. Leave it empty unless lunch is mentioned.
- cook_time_limits default to 45 minutes on weekdays and 90 on weekends. Adjust them for "quick meals" or stated limits.
- Return only valid JSON with no markdown fences and no explanation."""

DEFAULT_DIETARY_PREFERENCES = {'vegetarian_ratio': 40, 'allergies': [], 'cuisine_preferences': []}
DEFAULT_COOK_TIME_LIMITS = {'weekday': 45, 'weekend': 90}


def get_client(api_key):
    """Anthropic client for the configured key."""
    return anthropic.Anthropic(api_key=api_key)


def create_with_retry(client, max_retries=2, retry_delay=10, **params):
    """
    client.messages.create() with retries on HTTP 429.

    Raises:
        RateLimitError: still rate limited after max_retries retries
    """
    for attempt in range(max_retries + 1):
        try:
            return client.messages.create(**params)
        except anthropic.RateLimitError:
            if attempt == max_retries:
                logger.error("Rate limited after %d attempts", max_retries + 1)
                raise RateLimitError(RATE_LIMIT_MESSAGE)
            logger.warning("Rate limited (attempt %d/%d), retrying in %ss",
                           attempt + 1, max_retries + 1, retry_delay)
            time.sleep(retry_delay)


def strip_json_fences(text):
    text = text.strip()
    text = re.sub(r'^```(?:json)?\s*\n?', '', text)
    text = re.sub(r'\n?```\s*$', '', text)
    return text.strip()


def ask_claude(system, user_message, model=None, max_tokens=1024):
    """Send one message and decode the JSON object in the reply."""
    config = current_app.config
    api_key = config.get('ANTHROPIC_API_KEY')
    if not api_key:
        raise LLMConfigError("ANTHROPIC_API_KEY not configured")

    response = create_with_retry(
        get_client(api_key),
        max_retries=config.get('LLM_MAX_RETRIES', 2),
        retry_delay=config.get('LLM_RETRY_DELAY', 10),
        model=model or config['ANTHROPIC_MODEL'],
        max_tokens=max_tokens,
        system=system,
        messages=[{'role': 'user', 'content': user_message}],
    )

    block = response.content[0] if response.content else None
    if block is None or getattr(block, 'type', 'text') != 'text':
        raise LLMResponseError("Unexpected response from Claude")
    try:
        parsed = json.loads(strip_json_fences(block.text))
    except ValueError:
        logger.warning("Unparseable Claude reply: %.200s", block.text)
        raise LLMResponseError("Failed to parse Claude response")
    if not isinstance(parsed, dict):
        raise LLMResponseError("Failed to parse Claude response")
    return parsed


def member_context(members, empty="No family members found."):
    if not members:
        return empty
    return "Family members: " + ", ".join(m.name for m in members)


def map_lunch_needs(raw, members):
    """{member name: [days]} -> {member id: [days]}; unknown names are dropped."""
    by_name = {m.name.lower(): m.id for m in members}
    mapped = {}
    for name, days in (raw or {}).items():
        member_id = by_name.get(str(name).lower())
        if member_id is not None:
            mapped[member_id] = [str(d).lower() for d in days or [] if str(d).lower() in VALID_DAYS]
    return mapped


def normalize_cooking_days(raw):
    """All seven days, defaulting to not cooking with one main."""
    raw = raw if isinstance(raw, dict) else {}
    days = {}
    for day in VALID_DAYS:
        entry = raw.get(day) if isinstance(raw.get(day), dict) else {}
        days[day] = {
            'is_cooking': bool(entry.get('is_cooking', False)),
            'meal_mode': entry.get('meal_mode') or 'one_main',
        }
    return days


def parse_week_description(text, members):
    """
    Parse a week description for the smart setup screen.

    Returns:
        dict with cooking_days, lunch_needs (by member id), preferences, specific_meals
    """
    user_message = f'{member_context(members)}\n\nUser\'s description:\n"{text}"'
    parsed = ask_claude(WEEK_SYSTEM_PROMPT, user_message)
    return {
        'cooking_days': normalize_cooking_days(parsed.get('cooking_days')),
        'lunch_needs': map_lunch_needs(parsed.get('lunch_needs'), members),
        'preferences': parsed.get('preferences') or {},
        'specific_meals': parsed.get('specific_meals') or [],
    }


def parse_conversation(text, members):
    """
    Parse a conversational planning request with the fast model.

    Returns:
        dict with cooking_days, specific_meals, dietary_preferences,
        lunch_needs (by member id) and cook_time_limits
    """
    user_message = f'{member_context(members, "Single person household.")}\n\nUser\'s description:\n"{text}"'
    parsed = ask_claude(CONVERSATION_SYSTEM_PROMPT, user_message,
                        model=current_app.config.get('ANTHROPIC_FAST_MODEL'))
    return {
        'cooking_days': normalize_cooking_days(parsed.get('cooking_days')),
        'specific_meals': parsed.get('specific_meals') or [],
        'dietary_preferences': parsed.get('dietary_preferences') or dict(DEFAULT_DIETARY_PREFERENCES),
        'lunch_needs': map_lunch_needs(parsed.get('lunch_needs'), members),
        'cook_time_limits': parsed.get('cook_time_limits') or dict(DEFAULT_COOK_TIME_LIMITS),
    }


def cooking_days_to_schedule(cooking_days):
    """Convert {day: {is_cooking, meal_mode}} into generator schedule entries."""
    return [
        {'day': day, 'is_cooking': cooking_days[day]['is_cooking'],
         'meal_mode': cooking_days[day]['meal_mode']}
        for day in VALID_DAYS
    ]


def lunch_needs_to_entries(lunch_needs):
    """Convert {member_id: [days]} into generator lunch entries."""
    entries = []
    for member_id, days in lunch_needs.items():
        for day in days:
            if day not in WEEKDAYS:
                continue
            entries.append({'member_id': member_id, 'day': day,
                            'needs_lunch': True, 'leftovers_ok': False})
    return entries
