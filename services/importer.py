"""
Recipe Import Service

Fetches a recipe URL and dispatches it to the right extractor:
social media posts go to the caption extractor, everything else to the
page extractor. The result always has at least one ingredient row.

Only a URL that cannot be reached is reported as an error to the
caller; anything that merely fails to parse comes back as a
best-effort recipe for the user to finish by hand.
"""

import logging
from urllib.parse import urlparse

import requests

from config import Config
from utils.errors import RecipeAppError, ValidationError, UnreachableResourceError, ImportFailure
from utils.sanitizer import sanitize_url
from utils.url_validator import safe_fetch, SSRFError
from .extraction import extract_from_html
from .social import extract_from_caption, placeholder_recipe

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = 'Unable to access the provided URL. Please check the URL and try again.'


def _setting(settings, key):
    """Read an import setting from a Flask config mapping, falling back to Config."""
    if settings is not None and key in settings:
        return settings[key]
    return getattr(Config, key)


def is_social_url(url, social_domain=Config.SOCIAL_DOMAIN):
    host = (urlparse(url).hostname or '').lower()
    return social_domain in host


def fetch_page(url, timeout, settings=None):
    """Fetch a page with a browser User-Agent, SSRF checks and a size cap."""
    headers = {
        'User-Agent': _setting(settings, 'IMPORT_USER_AGENT'),
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    }
    return safe_fetch(url, headers=headers, timeout=timeout,
                      max_size=_setting(settings, 'IMPORT_MAX_BYTES'))


def import_web_page(url, settings=None):
    """
    Fetch a recipe page and run the page extractor over it.

    Raises:
        ValidationError: URL blocked by SSRF protection
        UnreachableResourceError: DNS failure or connection refused
        ImportFailure: timeout, HTTP error status or other request failure
    """
    try:
        response = fetch_page(url, _setting(settings, 'IMPORT_TIMEOUT'), settings)
    except SSRFError as e:
        raise ValidationError(f'URL blocked for security: {e}')
    except requests.Timeout as e:
        # ConnectTimeout is also a ConnectionError; a slow host is not unreachable
        logger.warning("Timed out fetching %s: %s", url, e)
        raise ImportFailure(f'Timed out fetching URL: {url}')
    except requests.ConnectionError as e:
        logger.warning("Could not connect to %s: %s", url, e)
        raise UnreachableResourceError(UNREACHABLE_MESSAGE)
    except requests.RequestException as e:
        logger.warning("Fetching %s failed: %s", url, e)
        raise ImportFailure(f'Could not fetch URL: {e}')

    return extract_from_html(response.text)


def import_social_post(url, settings=None):
    """
    Fetch a social media post and read its caption.

    Never raises for fetch or parse problems; returns the fixed
    placeholder recipe instead.
    """
    try:
        response = fetch_page(url, _setting(settings, 'SOCIAL_IMPORT_TIMEOUT'), settings)
        return extract_from_caption(response.text)
    except (requests.RequestException, SSRFError, RecipeAppError,
            AttributeError, TypeError, ValueError) as e:
        logger.warning("Social post import failed for %s: %s", url, e)
        return placeholder_recipe()


def import_from_url(url, settings=None):
    """
    Import a recipe from url for client-side review.

    Args:
        url: http(s) URL of a recipe page or social media post
        settings: optional config mapping (the Flask app config)

    Returns:
        ParsedRecipe with at least one ingredient row
    """
    safe_url = sanitize_url(url)
    if not safe_url:
        raise ValidationError('Invalid URL. Only http and https URLs are allowed.')

    if is_social_url(safe_url, _setting(settings, 'SOCIAL_DOMAIN')):
        logger.info("Importing social media post %s", safe_url)
        recipe = import_social_post(safe_url, settings)
    else:
        logger.info("Importing recipe page %s", safe_url)
        recipe = import_web_page(safe_url, settings)

    return recipe.ensure_ingredient_row()
