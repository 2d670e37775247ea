"""
Recipe Extraction Service

Turns a fetched recipe page into a ParsedRecipe. Extraction strategies
share the RecipeExtractor interface and are tried in a fixed priority
order; the first one that returns a recipe wins:

1. StructuredDataExtractor - schema.org Recipe JSON-LD (most recipe sites)
2. HtmlHeuristicExtractor  - ordered CSS selector candidates per field

Anything still missing afterwards gets a placeholder so the client
always receives a recipe it can edit.
"""

import json
import logging
from collections import namedtuple

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from constants import (
    TITLE_SELECTORS, PREP_TIME_SELECTORS, SERVING_SELECTORS,
    INGREDIENT_SELECTORS, DIRECTION_SELECTORS, NOTE_SELECTORS,
    INGREDIENT_BOILERPLATE, MAX_LENGTHS, DEFAULT_IMPORT_TITLE,
)
from utils.errors import ExtractionFailure
from utils.sanitizer import sanitize_text, sanitize_multiline
from .parsed_recipe import ParsedRecipe
from .parsing import (
    parse_ingredient, parse_duration_minutes, parse_time_text,
    first_integer, number_steps,
)

logger = logging.getLogger(__name__)


def to_soup(markup):
    """Accept raw HTML (str/bytes) or an already parsed document."""
    if isinstance(markup, BeautifulSoup):
        return markup
    return BeautifulSoup(markup or '', 'html.parser')


def element_text(element):
    return sanitize_text(element.get_text(' ', strip=True))


class RecipeExtractor:
    """One way of reading a recipe out of a parsed page.

    ``extract`` returns a ParsedRecipe, or None when this strategy found
    nothing. It may raise ExtractionFailure when the document is present
    but unreadable; the chain runner logs it and moves on.
    """
    name = 'base'

    def extract(self, soup):
        raise NotImplementedError


# ============================================
# STRUCTURED DATA (JSON-LD)
# ============================================

def _is_recipe_type(node):
    node_type = node.get('@type')
    if isinstance(node_type, str):
        return node_type == 'Recipe'
    if isinstance(node_type, list):
        return 'Recipe' in node_type
    return False


def find_recipe_node(data):
    """Find a Recipe object at top level, in a top-level list, or in @graph."""
    if isinstance(data, list):
        for item in data:
            found = find_recipe_node(item)
            if found is not None:
                return found
        return None
    if not isinstance(data, dict):
        return None
    if _is_recipe_type(data):
        return data
    if isinstance(data.get('@graph'), list):
        return find_recipe_node(data['@graph'])
    return None


def _instruction_lines(instructions):
    """Flatten recipeInstructions (text, HowToStep list, HowToSection) into lines."""
    if not instructions:
        return []
    if isinstance(instructions, str):
        return [sanitize_text(line) for line in instructions.splitlines() if line.strip()]
    if isinstance(instructions, dict):
        instructions = [instructions]
    if not isinstance(instructions, list):
        return []

    lines = []
    for step in instructions:
        if isinstance(step, str):
            lines.append(sanitize_text(step))
        elif isinstance(step, dict):
            if 'itemListElement' in step:
                lines.extend(_instruction_lines(step['itemListElement']))
            else:
                lines.append(sanitize_text(step.get('text') or step.get('name') or ''))
    return [line for line in lines if line]


def _yield_value(recipe_yield):
    if isinstance(recipe_yield, list):
        recipe_yield = recipe_yield[0] if recipe_yield else None
    return first_integer(recipe_yield)


def _notes_value(data):
    for key in ('recipeNotes', 'cookingTips', 'notes', 'description'):
        value = data.get(key)
        if not value:
            continue
        if isinstance(value, list):
            value = ' '.join(str(v) for v in value if v)
        return sanitize_multiline(value, MAX_LENGTHS['notes'])
    return ''


class StructuredDataExtractor(RecipeExtractor):
    """Reads the first schema.org Recipe found in the page's JSON-LD blocks."""
    name = 'structured-data'

    def find_recipe_data(self, soup):
        for script in soup.find_all('script', type='application/ld+json'):
            raw = script.string or script.get_text()
            if not raw or not raw.strip():
                continue
            try:
                data = json.loads(raw)
            except ValueError:
                logger.debug("Skipping unparseable JSON-LD block")
                continue
            recipe_data = find_recipe_node(data)
            if recipe_data is not None:
                return recipe_data
        return None

    def extract(self, soup):
        recipe_data = self.find_recipe_data(soup)
        if recipe_data is None:
            return None
        try:
            return self.map_recipe(recipe_data)
        except (AttributeError, TypeError, ValueError) as e:
            raise ExtractionFailure(f"Malformed Recipe JSON-LD: {e}")

    def map_recipe(self, data):
        raw_ingredients = data.get('recipeIngredient') or []
        if isinstance(raw_ingredients, str):
            raw_ingredients = [raw_ingredients]

        ingredients = []
        for line in raw_ingredients:
            text = sanitize_text(line, MAX_LENGTHS['ingredient_text'])
            if text:
                ingredients.append(parse_ingredient(text))

        return ParsedRecipe(
            title=sanitize_text(data.get('name'), MAX_LENGTHS['recipe_title']),
            prep_time=parse_duration_minutes(data.get('prepTime')),
            serving_size=_yield_value(data.get('recipeYield')),
            directions=number_steps(_instruction_lines(data.get('recipeInstructions'))),
            notes=_notes_value(data),
            ingredients=ingredients,
        )


# ============================================
# HTML HEURISTICS
# ============================================

# field: ParsedRecipe attribute; selectors: ordered candidates;
# accept: maps the matched elements to a value, or None if implausible
FieldRule = namedtuple('FieldRule', ['field', 'selectors', 'accept'])


def _accept_title(elements):
    title = element_text(elements[0])
    if len(title) > 5 and title != 'Level:':
        return title[:MAX_LENGTHS['recipe_title']]
    return None


def _accept_prep_time(elements):
    return parse_time_text(element_text(elements[0]))


def _accept_serving_size(elements):
    return first_integer(element_text(elements[0]))


def _accept_ingredients(elements):
    ingredients = []
    for element in elements:
        text = element_text(element)
        lowered = text.lower()
        if len(text) <= 2 or any(word in lowered for word in INGREDIENT_BOILERPLATE):
            continue
        ingredients.append(parse_ingredient(text[:MAX_LENGTHS['ingredient_text']]))
    return ingredients or None


def _accept_directions(elements):
    lines = [element_text(element) for element in elements]
    return number_steps(line for line in lines if len(line) > 10) or None


def _accept_notes(elements):
    notes = element_text(elements[0])
    return notes if len(notes) > 20 else None


HEURISTIC_RULES = [
    FieldRule('title', TITLE_SELECTORS, _accept_title),
    FieldRule('prep_time', PREP_TIME_SELECTORS, _accept_prep_time),
    FieldRule('serving_size', SERVING_SELECTORS, _accept_serving_size),
    FieldRule('ingredients', INGREDIENT_SELECTORS, _accept_ingredients),
    FieldRule('directions', DIRECTION_SELECTORS, _accept_directions),
    FieldRule('notes', NOTE_SELECTORS, _accept_notes),
]


def first_plausible(soup, selectors, accept):
    """Return the first accepted value over selectors tried in order."""
    for selector in selectors:
        try:
            elements = soup.select(selector)
        except SelectorSyntaxError:
            logger.warning("Invalid heuristic selector: %s", selector)
            continue
        if not elements:
            continue
        value = accept(elements)
        if value:
            return value
    return None


class HtmlHeuristicExtractor(RecipeExtractor):
    """Scrapes fields with site-specific and generic CSS selectors."""
    name = 'html-heuristic'

    def __init__(self, rules=None):
        self.rules = rules if rules is not None else HEURISTIC_RULES

    def extract(self, soup):
        found = {}
        for rule in self.rules:
            value = first_plausible(soup, rule.selectors, rule.accept)
            if value:
                found[rule.field] = value
        if not found:
            return None
        return ParsedRecipe(**found)


# ============================================
# STRATEGY CHAIN
# ============================================

PAGE_EXTRACTORS = (StructuredDataExtractor(), HtmlHeuristicExtractor())


def run_extractors(soup, extractors):
    """Try extractors in order; return the first recipe produced, else None."""
    for extractor in extractors:
        try:
            recipe = extractor.extract(soup)
        except ExtractionFailure as e:
            logger.warning("Extractor %s failed: %s", extractor.name, e)
            continue
        if recipe is not None:
            logger.debug("Recipe extracted by %s", extractor.name)
            return recipe
    return None


def extract_from_html(markup, extractors=PAGE_EXTRACTORS):
    """
    Extract a recipe from a fetched web page.

    Always returns a ParsedRecipe with a title and at least one
    ingredient row, even when nothing could be read.
    """
    soup = to_soup(markup)
    recipe = run_extractors(soup, extractors)
    if recipe is None:
        logger.info("No recipe data found on page; returning placeholder")
        recipe = ParsedRecipe()
    if not recipe.title:
        recipe.title = DEFAULT_IMPORT_TITLE
    return recipe.ensure_ingredient_row()
