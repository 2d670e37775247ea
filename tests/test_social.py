"""
Tests for reading recipes out of social media captions.
"""

from html import escape

import pytest

from services.social import extract_from_caption, split_caption, section_for


def _post(caption='', og_title='', body=''):
    meta = ''
    if caption:
        meta += f'<meta property="og:description" content="{escape(caption)}">'
    if og_title:
        meta += f'<meta property="og:title" content="{escape(og_title)}">'
    return f'<html><head>{meta}</head><body>{body}</body></html>'


PASTA_CAPTION = (
    "Creamy Tomato Pasta\n"
    "Serves 4\n"
    "Prep time: 20 minutes\n"
    "Ingredients:\n"
    "- 2 cups pasta\n"
    "• 1 cup cream\n"
    "* 2 tomatoes\n"
    "Method:\n"
    "1. Boil the pasta\n"
    "2. Stir in the cream\n"
    "Notes:\n"
    "Add chili flakes for heat"
)


def test_split_caption_keeps_hyphenated_words():
    assert split_caption('Stir-fry veggies - quick and easy') == ['Stir-fry veggies', 'quick and easy']
    assert split_caption('a\n\n•b * c') == ['a', 'b', 'c']


def test_section_triggers():
    assert section_for('INGREDIENTS:') == 'ingredients'
    assert section_for('What you need') == 'ingredients'
    assert section_for('How to make it') == 'instructions'
    assert section_for('Chef tips') == 'notes'
    assert section_for('2 cups pasta') is None


def test_full_caption():
    recipe = extract_from_caption(_post(PASTA_CAPTION))

    assert recipe.title == 'Creamy Tomato Pasta'
    assert recipe.serving_size == 4
    assert recipe.prep_time == 20
    assert [i['name'] for i in recipe.ingredients] == ['pasta', 'cream', 'tomatoes']
    assert recipe.ingredients[0]['quantity'] == '2'
    assert recipe.ingredients[0]['unit'] == 'cups'
    assert recipe.directions == 'Step 1: Boil the pasta\n\nStep 2: Stir in the cream'
    assert recipe.notes == 'Add chili flakes for heat'


def test_step_numbered_lines_are_kept_verbatim():
    caption = "Quick Eggs\nStep 1: Crack the eggs\nStep 2: Whisk well"
    recipe = extract_from_caption(_post(caption))

    assert recipe.title == 'Quick Eggs'
    assert recipe.directions == 'Step 1: Crack the eggs\n\nStep 2: Whisk well'
    assert len(recipe.ingredients) == 1
    assert recipe.ingredients[0]['name'] == ''


def test_title_from_page_title_when_caption_has_none():
    recipe = extract_from_caption(_post('Ingredients\n2 eggs', og_title='Chef Anna • Instagram photo'))

    assert recipe.title == 'Chef Anna'
    assert recipe.ingredients[0]['name'] == 'eggs'
    assert recipe.directions == 'Please add cooking instructions from the Instagram post.'


def test_body_text_used_when_nothing_else_found():
    recipe = extract_from_caption(_post(body="<p>Sorry, this page isn't available.</p>"))

    assert recipe.title == "Sorry, this page isn't available."
    assert recipe.notes == 'Content imported from Instagram. Please review and edit the recipe details.'
    assert len(recipe.ingredients) == 1


def test_empty_post_gets_defaults():
    recipe = extract_from_caption('<html></html>')

    assert recipe.title == 'Instagram Recipe'
    assert recipe.directions == 'Please add cooking instructions from the Instagram post.'
    assert recipe.ingredients == [{'name': '', 'quantity': '', 'unit': '', 'is_alternative': False}]


def test_step_numbered_line_advances_counter():
    caption = "Quick Eggs\nStep 1: Crack the eggs\nWhisk them well together"
    recipe = extract_from_caption(_post(caption))

    assert recipe.directions == 'Step 1: Crack the eggs\n\nStep 2: Whisk them well together'


@pytest.mark.parametrize('meta', [
    '<meta property="twitter:description" content="{}">',
    '<meta name="twitter:description" content="{}">',
    '<meta name="description" content="{}">',
])
def test_caption_read_from_fallback_meta_tags(meta):
    page = f'<html><head>{meta.format("Ingredients&#10;2 eggs")}</head><body></body></html>'
    recipe = extract_from_caption(page)

    assert [i['name'] for i in recipe.ingredients] == ['eggs']
    assert recipe.ingredients[0]['quantity'] == '2'


def test_og_description_wins_over_other_meta_tags():
    page = (
        '<html><head>'
        '<meta name="description" content="Ingredients&#10;1 lemon">'
        '<meta property="og:description" content="Ingredients&#10;2 eggs">'
        '</head></html>'
    )
    assert [i['name'] for i in extract_from_caption(page).ingredients] == ['eggs']
