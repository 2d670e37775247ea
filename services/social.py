"""
Social Caption Extraction

Reads a recipe out of the unstructured caption of a social media post.
Posts carry no recipe markup, so the caption from the page's meta tags
is split into lines and walked with a small section state machine.
"""

import logging
import re

from constants import (
    MAX_LENGTHS, SOCIAL_DEFAULT_TITLE, SOCIAL_DEFAULT_DIRECTIONS,
    SOCIAL_REVIEW_NOTES, SOCIAL_PLACEHOLDER, blank_ingredient,
)
from utils.sanitizer import sanitize_text
from .extraction import RecipeExtractor, to_soup
from .parsed_recipe import ParsedRecipe
from .parsing import parse_ingredient, first_integer, is_step_numbered

logger = logging.getLogger(__name__)

# Section states
NO_SECTION = None
INGREDIENTS = 'ingredients'
INSTRUCTIONS = 'instructions'
NOTES = 'notes'

# Checked in this order; the first trigger found anywhere in a line wins
SECTION_TRIGGERS = [
    (INGREDIENTS, ('ingredient', 'you need')),
    (INSTRUCTIONS, ('instruction', 'method', 'step', 'direction', 'how to', 'recipe')),
    (NOTES, ('note', 'tip', 'hint')),
]

SERVING_LINE = re.compile(r'\b(?:serves?|servings?|portions?)\b', re.IGNORECASE)
TIME_LINE = re.compile(r'\b(?:prep\w*|time)\b', re.IGNORECASE)

# Newlines and bullets always split; a dash only when it stands alone
# between spaces, so hyphenated words like "stir-fry" survive
LINE_DELIMITERS = re.compile(r'[\r\n•·*]+|\s+[-–—]+\s+')
LEADING_MARKERS = re.compile(r'^[\d.\-–—*•\s]+')

DESCRIPTION_META = [
    {'property': 'og:description'},
    {'property': 'twitter:description'},
    {'name': 'twitter:description'},
    {'name': 'description'},
]
TITLE_META = [
    {'property': 'og:title'},
    {'property': 'twitter:title'},
    {'name': 'twitter:title'},
]


def _meta_content(soup, candidates):
    for attrs in candidates:
        tag = soup.find('meta', attrs=attrs)
        if tag and tag.get('content', '').strip():
            return tag['content'].strip()
    return ''


def split_caption(text):
    """Split a caption into trimmed, non-empty lines."""
    lines = []
    for part in LINE_DELIMITERS.split(text or ''):
        line = re.sub(r'^[-–—]+\s*', '', part.strip()).strip()
        if line:
            lines.append(line)
    return lines


def section_for(line):
    """Return the section a trigger line switches to, or None."""
    lowered = line.lower()
    for section, keywords in SECTION_TRIGGERS:
        if any(keyword in lowered for keyword in keywords):
            return section
    return None


class CaptionExtractor(RecipeExtractor):
    """Section-detection heuristics over a post caption."""
    name = 'caption-heuristic'

    def extract(self, soup):
        description = _meta_content(soup, DESCRIPTION_META)
        page_title = _meta_content(soup, TITLE_META)
        if not page_title and soup.title and soup.title.string:
            page_title = soup.title.string.strip()

        recipe = ParsedRecipe()
        if description:
            logger.debug("Caption found (%d chars)", len(description))
            self.read_caption(recipe, split_caption(description))

        if not recipe.title and page_title:
            recipe.title = sanitize_text(re.split(r'[•\-|]', page_title)[0],
                                         MAX_LENGTHS['recipe_title'])

        return recipe

    def read_caption(self, recipe, lines):
        section = NO_SECTION
        step = 1
        directions = []
        notes = []

        for index, line in enumerate(lines):
            # "Step 2: ..." is instruction content, not a section heading
            if is_step_numbered(line):
                section = INSTRUCTIONS
                directions.append(line)
                step += 1
                continue

            new_section = section_for(line)
            if new_section:
                section = new_section
                if section == INSTRUCTIONS:
                    step = 1
                continue

            if SERVING_LINE.search(line):
                value = first_integer(line)
                if value:
                    recipe.serving_size = value
                continue

            if TIME_LINE.search(line):
                value = first_integer(line)
                if value:
                    recipe.prep_time = value
                continue

            if not recipe.title and index == 0 and 5 < len(line) < 100:
                recipe.title = sanitize_text(line, MAX_LENGTHS['recipe_title'])
                continue

            if section == INGREDIENTS and len(line) > 2:
                parsed = parse_ingredient(line)
                if parsed['name']:
                    recipe.ingredients.append(parsed)
            elif section == INSTRUCTIONS and len(line) > 5:
                text = LEADING_MARKERS.sub('', line).strip()
                if text:
                    directions.append(f"Step {step}: {text}")
                    step += 1
            elif section == NOTES and len(line) > 5:
                notes.append(line)

        recipe.directions = '\n\n'.join(directions)
        recipe.notes = ' '.join(notes)


def _first_body_line(soup):
    if soup.body is None:
        return ''
    for line in soup.body.get_text('\n').split('\n'):
        line = line.strip()
        if 10 <= len(line) <= 500:
            return line
    return ''


def placeholder_recipe():
    """Fixed recipe returned when the post could not be fetched or read."""
    return ParsedRecipe(
        title=SOCIAL_PLACEHOLDER['title'],
        directions=SOCIAL_PLACEHOLDER['directions'],
        notes=SOCIAL_PLACEHOLDER['notes'],
        ingredients=[blank_ingredient()],
    )


def extract_from_caption(markup):
    """
    Extract a recipe from a fetched social media post page.

    Always returns a ParsedRecipe with a title, at least one ingredient
    row and some directions text.
    """
    soup = to_soup(markup)
    recipe = CaptionExtractor().extract(soup)

    if not recipe.has_content():
        fallback_title = _first_body_line(soup)
        if fallback_title:
            recipe.title = sanitize_text(fallback_title, MAX_LENGTHS['recipe_title'])
            recipe.notes = SOCIAL_REVIEW_NOTES

    if not recipe.title:
        recipe.title = SOCIAL_DEFAULT_TITLE
    if not recipe.directions:
        recipe.directions = SOCIAL_DEFAULT_DIRECTIONS
    return recipe.ensure_ingredient_row()
