import asyncio
import logging
from typing import Awaitable, Callable, Optional

from moviereviews.schemas.review_schema import Review
from moviereviews.schemas.viewer_schema import ViewerIdentity
from moviereviews.services.review.aggregate import ReviewAggregate
from moviereviews.services.review.review_service import Confirm, ReviewService

logger = logging.getLogger(__name__)

ResolveIdentity = Callable[[], Awaitable[Optional[ViewerIdentity]]]


class MovieReviewsView:
    """
    Review state of one open movie page.

    The view owns its aggregate from `open()` until `close()`. Results that
    arrive after `close()` are dropped instead of being applied.
    """

    def __init__(
        self,
        movie_id: str,
        store,
        resolve_identity: ResolveIdentity,
        confirm: Confirm,
    ) -> None:
        self.movie_id = movie_id
        self.store = store
        self.resolve_identity = resolve_identity
        self.viewer: ViewerIdentity | None = None
        self.aggregate = ReviewAggregate()
        self.is_open = True
        self.service = ReviewService(
            store, self.aggregate, confirm, is_live=lambda: self.is_open
        )

    async def open(self) -> ReviewAggregate:
        """
        Fetches the reviews and the viewer together and builds the aggregate
        once both are known. An anonymous viewer still gets the reviews, in
        the order the backend sent them.
        """
        reviews, viewer = await asyncio.gather(
            self.store.fetch_reviews(self.movie_id),
            self.resolve_identity(),
        )
        if not self.is_open:
            logger.warning(
                f"Reviews for movie {self.movie_id} arrived after the view closed"
            )
            return self.aggregate

        self.viewer = viewer
        self.aggregate = ReviewAggregate.build(
            reviews.to_reviews(), viewer.id if viewer else None
        )
        self.service.aggregate = self.aggregate
        logger.info(
            f"Opened reviews for movie {self.movie_id} with {len(self.aggregate)} reviews"
        )
        return self.aggregate

    def close(self) -> None:
        self.is_open = False

    async def submit_review(self, score, text) -> Review:
        return await self.service.submit_review(
            self.movie_id, self.viewer, score, text
        )

    async def delete_review(self, review_id: str) -> bool:
        return await self.service.delete_review(self.movie_id, review_id, self.viewer)
