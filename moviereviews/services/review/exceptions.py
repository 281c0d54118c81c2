# exceptions.py


class ReviewError(Exception):
    """Base class for review errors."""

    pass


class ValidationError(ReviewError):
    """Raised when a review is rejected locally, before reaching the store."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class UnauthenticatedError(ReviewError):
    """Raised when a review action needs a signed in viewer."""

    pass


class TransportError(ReviewError):
    """Raised when a call to the backend fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RemoteValidationError(TransportError):
    """Raised when the backend rejects a review payload."""

    pass


class RemoteNotFoundError(TransportError):
    """Raised when the backend does not know the requested review."""

    pass


class DuplicateIdError(ReviewError):
    """Raised when a review id is inserted twice into an aggregate."""

    def __init__(self, review_id: str) -> None:
        super().__init__(f"Review {review_id!r} is already in the aggregate.")
        self.review_id = review_id


class NotFoundError(ReviewError):
    """
    Raised when a review id is not in the requested category.
    `category` is None when the id is in no category at all.
    """

    def __init__(self, review_id: str, category=None) -> None:
        where = category.value if category is not None else "the aggregate"
        super().__init__(f"Review {review_id!r} not found in {where}.")
        self.review_id = review_id
        self.category = category
