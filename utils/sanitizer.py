"""
Input Sanitization Module

Cleans user input and externally fetched text before it is stored or
returned from the API. Output is JSON, so HTML entities coming from
scraped pages are decoded rather than escaped.
"""

import html
import re
from urllib.parse import urlparse

_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')
_INLINE_SPACE = re.compile(r'[^\S\n]+')
_BLANK_LINE_RUNS = re.compile(r'\n{3,}')


def _decoded(value):
    """None -> '', anything else -> entity-decoded str without control chars."""
    if value is None:
        return ''
    return _CONTROL_CHARS.sub('', html.unescape(str(value)))


def sanitize_text(text, max_length=10000):
    """
    Clean a single-line value such as a title, quantity or ingredient name.

    All whitespace runs (newlines and non-breaking spaces included)
    become one space; the result is trimmed and cut to max_length.
    """
    text = re.sub(r'\s+', ' ', _decoded(text)).strip()
    return text[:max_length]


def sanitize_multiline(text, max_length=50000):
    """
    Clean free text such as directions or notes.

    Line breaks survive, each line is trimmed, and more than one blank
    line in a row is reduced to one so numbered steps stay separated.
    """
    text = _decoded(text).replace('\r\n', '\n').replace('\r', '\n')
    lines = [_INLINE_SPACE.sub(' ', line).strip() for line in text.split('\n')]
    text = _BLANK_LINE_RUNS.sub('\n\n', '\n'.join(lines)).strip()
    return text[:max_length]


def sanitize_url(url):
    """Return the trimmed URL if it is http(s) with a host, else ''."""
    if not isinstance(url, str):
        return ''
    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError:
        return ''
    if parsed.scheme.lower() not in ('http', 'https') or not parsed.netloc:
        return ''
    return url
