import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Iterator, Optional

from moviereviews.models.enums.review_category import ReviewCategory
from moviereviews.schemas.review_schema import Review
from moviereviews.services.review.exceptions import DuplicateIdError, NotFoundError
from moviereviews.services.review.ranking import partition, rank

logger = logging.getLogger(__name__)


class ReviewAggregate:
    """
    Reviews of a single movie split into critics and spectators.

    Each category is a dict keyed by review id whose iteration order is the
    display order. Mutations build the new dict first and swap it in with a
    single assignment.
    """

    def __init__(
        self,
        critics: Optional[dict[str, Review]] = None,
        spectators: Optional[dict[str, Review]] = None,
    ) -> None:
        self._categories: dict[ReviewCategory, dict[str, Review]] = {
            ReviewCategory.CRITICS: dict(critics or {}),
            ReviewCategory.SPECTATORS: dict(spectators or {}),
        }

    @classmethod
    def build(
        cls, reviews: Iterable[Review], viewer_id: Optional[str] = None
    ) -> "ReviewAggregate":
        """
        Builds the aggregate from fetched reviews.
        Reviews are partitioned by trust, then the viewer's own review is
        ranked first inside its category.

        :raises DuplicateIdError: If a review id is listed more than once,
            in the same category or in both.
        """
        reviews = list(reviews)
        seen: set[str] = set()
        for review in reviews:
            if review.id in seen:
                raise DuplicateIdError(review.id)
            seen.add(review.id)

        critics, spectators = partition(reviews)
        aggregate = cls(
            critics={r.id: r for r in rank(critics, viewer_id)},
            spectators={r.id: r for r in rank(spectators, viewer_id)},
        )
        logger.debug(
            f"Built review aggregate with {len(critics)} critics "
            f"and {len(spectators)} spectators"
        )
        return aggregate

    @property
    def critics(self) -> dict[str, Review]:
        return self._categories[ReviewCategory.CRITICS]

    @property
    def spectators(self) -> dict[str, Review]:
        return self._categories[ReviewCategory.SPECTATORS]

    def reviews(self, category: ReviewCategory) -> list[Review]:
        return list(self._categories[category].values())

    def ids(self, category: ReviewCategory) -> list[str]:
        return list(self._categories[category].keys())

    def get(self, review_id: str) -> Review | None:
        category = self.category_of(review_id)
        if category is None:
            return None
        return self._categories[category][review_id]

    def category_of(self, review_id: str) -> ReviewCategory | None:
        for category, reviews in self._categories.items():
            if review_id in reviews:
                return category
        return None

    def average_score(self, category: ReviewCategory) -> float:
        """
        Mean score of a category rounded half-up to one decimal place.
        Returns 0 for an empty category.
        """
        reviews = self._categories[category]
        if not reviews:
            return 0

        total = sum(review.score for review in reviews.values())
        average = Decimal(total) / Decimal(len(reviews))
        return float(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    def insert(self, review: Review) -> None:
        """
        Adds a review at the front of its category.

        :raises DuplicateIdError: If the id is already in either category.
        """
        if review.id is None:
            raise ValueError("Only reviews stored by the backend can be inserted.")
        if review.id in self:
            raise DuplicateIdError(review.id)

        category = ReviewCategory.for_trust(review.is_trusted)
        self._categories[category] = {
            review.id: review,
            **self._categories[category],
        }

    def remove(self, review_id: str, category: ReviewCategory) -> Review:
        """
        Removes a review from the given category and returns it.

        :raises NotFoundError: If the id is not in that category. The other
            category is never searched.
        """
        reviews = self._categories[category]
        if review_id not in reviews:
            raise NotFoundError(review_id, category)

        removed = reviews[review_id]
        self._categories[category] = {
            key: review for key, review in reviews.items() if key != review_id
        }
        return removed

    def snapshot(self) -> dict[str, dict[str, Review]]:
        return {
            category.value: dict(reviews)
            for category, reviews in self._categories.items()
        }

    def __contains__(self, review_id: object) -> bool:
        return any(review_id in reviews for reviews in self._categories.values())

    def __len__(self) -> int:
        return sum(len(reviews) for reviews in self._categories.values())

    def __iter__(self) -> Iterator[Review]:
        for reviews in self._categories.values():
            yield from reviews.values()
