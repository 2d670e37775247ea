# Utility modules for Recipe Manager
from .errors import (
    RecipeAppError, ValidationError, NotFoundError, UnreachableResourceError,
    ImportFailure, StorageError, ExtractionFailure
)
from .url_validator import is_safe_url, safe_fetch, SSRFError
from .sanitizer import sanitize_text, sanitize_multiline, sanitize_url
