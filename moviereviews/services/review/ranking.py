from typing import Iterable, Optional

from moviereviews.schemas.review_schema import Review


def partition(reviews: Iterable[Review]) -> tuple[list[Review], list[Review]]:
    """
    Splits reviews into (critics, spectators) by their `is_trusted` flag.
    Input order is kept inside each list.
    """
    critics: list[Review] = []
    spectators: list[Review] = []
    for review in reviews:
        (critics if review.is_trusted else spectators).append(review)
    return critics, spectators


def rank(reviews: Iterable[Review], viewer_id: Optional[str] = None) -> list[Review]:
    """
    Moves the viewer's own reviews in front of everyone else's.

    :param reviews: Reviews of a single category.
    :param viewer_id: ID of the current viewer, None for anonymous viewers.
    :return: New list; without a viewer the input order is returned unchanged.
    """
    reviews = list(reviews)
    if viewer_id is None:
        return reviews

    # sorted() is stable, so equal keys keep their input order
    return sorted(reviews, key=lambda review: review.reviewer_id != viewer_id)
