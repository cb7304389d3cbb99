"""
Deterministic randomness for the planner.

Mulberry32 with 32-bit integer arithmetic, so a family/week pair always
yields the same plan.
"""

from datetime import date, timedelta

MASK_32 = 0xFFFFFFFF


def _imul(a, b):
    return ((a & MASK_32) * (b & MASK_32)) & MASK_32


def to_int32(value):
    value &= MASK_32
    return value - 0x100000000 if value & 0x80000000 else value


class SeededRandom:
    """Mulberry32 PRNG. random() returns floats in [0, 1)."""

    def __init__(self, seed):
        self._state = seed & MASK_32

    def random(self):
        self._state = (self._state + 0x6D2B79F5) & MASK_32
        s = self._state
        t = _imul(s ^ (s >> 15), 1 | s)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & MASK_32) ^ t
        return ((t ^ (t >> 14)) & MASK_32) / 4294967296


def derive_seed(family_id, week_start, variant=0):
    """Knuth multiplicative hash of the family id folded with the week string."""
    key = week_start if not variant else f"{week_start}#{variant}"
    seed = family_id * 2654435761
    for ch in key:
        seed = to_int32(seed * 31 + ord(ch))
    return seed


def seeded_shuffle(items, rng):
    """Fisher-Yates shuffle into a new list."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def normalize_to_monday(value):
    """Return the Monday (YYYY-MM-DD) of the week containing value (str or date)."""
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return (value - timedelta(days=value.weekday())).isoformat()


def next_monday(today=None):
    """The Monday after today (a week out when today is Monday)."""
    today = today or date.today()
    return (today + timedelta(days=7 - today.weekday())).isoformat()
