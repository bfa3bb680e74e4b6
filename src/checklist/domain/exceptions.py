"""Errors surfaced to API clients. Each carries the HTTP status it maps to."""


class ChecklistError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ChecklistError):
    """Malformed or missing client input."""
    status_code = 400


class ConfigurationError(ChecklistError):
    status_code = 500

    def __init__(self, message: str = "Database is not configured. Set DATABASE_URL (and DATABASE_PASSWORD if required)."):
        super().__init__(message)


class StorageError(ChecklistError):
    """Failure reported by the database; the message is passed through."""
    status_code = 500


class NotFoundError(ChecklistError):
    status_code = 404
