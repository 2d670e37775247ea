"""
Parsing Service

Functions for parsing ingredient text, timings, yields and step lists
from recipe data.
"""

import re

from constants import (
    UNIT_PATTERNS, QUANTITY_PATTERN, HOUR_WORDS, MINUTE_WORDS, UNICODE_FRACTIONS,
    COOKING_INSTRUCTIONS, BULLET_CHARS, blank_ingredient,
)

_INSTRUCTIONS = '|'.join(re.escape(phrase) for phrase in COOKING_INSTRUCTIONS)

# ", chopped", ", finely ground to a powder" -> everything after the comma goes
_COMMA_CLAUSE = re.compile(r',\s*(?:' + _INSTRUCTIONS + r')\b.*$', re.IGNORECASE)
# "onion thinly sliced" -> only when the clause ends the line
_TRAILING_CLAUSE = re.compile(r'\s+(?:' + _INSTRUCTIONS + r')\s*$', re.IGNORECASE)

_LEADING_BULLETS = re.compile(r'^[' + re.escape(BULLET_CHARS) + r']+\s*')
_PARENTHETICAL = re.compile(r'\s*\([^)]*\)')
_QUANTITY = re.compile(r'^(' + QUANTITY_PATTERN + r')\s+(.+)$')
_UNIT = re.compile(r'^(' + '|'.join(UNIT_PATTERNS) + r')\.?\s+(.+)$', re.IGNORECASE)
_NAME_PREFIX = re.compile(r'^(?:of|the)\s+', re.IGNORECASE)

_ISO_DURATION = re.compile(
    r'^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:[\d.]+S)?)?$', re.IGNORECASE
)
_HOURS = re.compile(r'(\d+)\s*(?:' + HOUR_WORDS + r')\b', re.IGNORECASE)
_MINUTES = re.compile(r'(\d+)\s*(?:' + MINUTE_WORDS + r')\b', re.IGNORECASE)

_STEP_LABEL = re.compile(r'^step\s*\d+', re.IGNORECASE)
_NUMBERED = re.compile(r'^\d+\.(?!\d)\s*')


def normalize_fractions(text):
    """Rewrite Unicode fraction characters as ASCII: '1½' -> '1 1/2'."""
    for char, ascii_fraction in UNICODE_FRACTIONS.items():
        if char in text:
            text = re.sub(r'(\d)\s*' + char, r'\1 ' + ascii_fraction, text)
            text = text.replace(char, ascii_fraction)
    return text


def normalize_ingredient_name(name):
    """Case-normalize an ingredient name for storage dedup and pantry matching."""
    if not name:
        return ''
    return re.sub(r'\s+', ' ', str(name)).strip().lower()


def parse_ingredient(text):
    """
    Parse a free-text ingredient line into its parts.

    '1 1/2 tsp salt, finely ground' -> quantity '1 1/2', unit 'tsp', name 'salt'.
    Never raises; empty or non-string input gives all-empty fields. The
    name is never empty when the trimmed input is not.
    """
    if not text or not isinstance(text, str):
        return blank_ingredient()

    original = text.strip()
    if not original:
        return blank_ingredient()

    text = normalize_fractions(original)
    text = _LEADING_BULLETS.sub('', text)
    text = re.sub(r'\s+', ' ', text)
    base = text.strip()

    # Drop cooking notes: "(finely diced)", ", chopped", trailing "sliced"
    text = _PARENTHETICAL.sub('', text)
    text = _COMMA_CLAUSE.sub('', text)
    text = _TRAILING_CLAUSE.sub('', text)
    cleaned = re.sub(r'\s+', ' ', text).strip() or base or original

    quantity = ''
    unit = ''
    name = cleaned

    qty_match = _QUANTITY.match(cleaned)
    if qty_match:
        quantity = qty_match.group(1)
        remainder = qty_match.group(2).strip()
        unit_match = _UNIT.match(remainder)
        if unit_match:
            unit = unit_match.group(1)
            name = unit_match.group(2)
        else:
            name = remainder

    name = _NAME_PREFIX.sub('', name)
    name = re.sub(r'\s+', ' ', name).strip()

    if len(name) < 2:
        name = cleaned
        quantity = ''
        unit = ''

    return {
        'name': name,
        'quantity': quantity,
        'unit': unit,
        'is_alternative': False,
    }


def first_integer(value):
    """Return the first integer embedded in value ('Serves 4-6' -> 4), else None."""
    if value is None:
        return None
    match = re.search(r'\d+', str(value))
    return int(match.group()) if match else None


def parse_duration_minutes(value):
    """
    Convert an ISO-8601 duration ('PT25M', 'PT1H30M') to whole minutes.

    Returns None for missing, malformed or zero durations.
    """
    if not value or not isinstance(value, str):
        return None
    match = _ISO_DURATION.match(value.strip())
    if not match:
        return None
    days, hours, minutes = (int(g) if g else 0 for g in match.groups())
    total = days * 24 * 60 + hours * 60 + minutes
    return total or None


def parse_time_text(text):
    """
    Read a human timing like '1 hr 20 min', '1h 5m' or '45 minutes' as minutes.

    Returns None unless the total is positive.
    """
    if not text:
        return None
    total = 0
    hours = _HOURS.search(text)
    if hours:
        total += int(hours.group(1)) * 60
    minutes = _MINUTES.search(text)
    if minutes:
        total += int(minutes.group(1))
    return total if total > 0 else None


def is_step_numbered(text):
    return bool(_STEP_LABEL.match(text))


def number_steps(lines):
    """
    Label instruction lines 'Step 1: ...', 'Step 2: ...' and join them.

    Lines already starting with 'Step N' are kept as written; a leading
    'N.' is replaced by the label. Every kept line counts as a step, so
    numbers follow position. Steps are separated by a blank line.
    """
    steps = []
    for line in lines:
        text = (line or '').strip()
        if not text:
            continue
        if not is_step_numbered(text):
            text = f"Step {len(steps) + 1}: {_NUMBERED.sub('', text)}"
        steps.append(text)
    return '\n\n'.join(steps)
