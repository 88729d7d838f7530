"""Exceptions shared across the offer, shopping and tracking modules."""


class MealcartError(Exception):
    """Base exception for mealcart errors."""


class SourceUnavailable(MealcartError):
    """Raised when a backing data source cannot be reached.

    Transient: the caller decides whether to retry. Nothing in mealcart retries
    on its own.
    """

    retryable = True

    def __init__(self, message: str, source: str | None = None, cause: Exception | None = None):
        super().__init__(message)
        self.source = source
        self.cause = cause


class InvalidState(MealcartError):
    """Raised for an illegal transition, e.g. mutating a completed shopping list."""

    def __init__(self, message: str, record_id: str | None = None):
        super().__init__(message)
        self.record_id = record_id


class NotFound(MealcartError):
    """Raised when a requested list or log does not exist."""

    def __init__(self, message: str, key: object = None):
        super().__init__(message)
        self.key = key
