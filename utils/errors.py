"""
Application Errors

Exception taxonomy shared by the services and the JSON API. Each
RecipeAppError carries the HTTP status the API answers with.
"""


class RecipeAppError(Exception):
    """Base class for errors rendered as ``{"error": message}``."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(RecipeAppError):
    """Missing or malformed request fields."""
    status_code = 400


class NotFoundError(RecipeAppError):
    """Unknown recipe id."""
    status_code = 404


class UnreachableResourceError(RecipeAppError):
    """Import URL could not be reached (DNS failure, connection refused)."""
    status_code = 400


class ImportFailure(RecipeAppError):
    """Import failed for a reason other than unreachability."""
    status_code = 500


class StorageError(RecipeAppError):
    """Persistence failure; the surrounding transaction was rolled back."""
    status_code = 500


class ExtractionFailure(RecipeAppError):
    """A single extraction strategy could not read the document.

    Raised and caught inside the extractors; never reaches the API.
    """
