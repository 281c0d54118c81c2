import logging
from typing import Awaitable, Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from moviereviews.models.enums.mutation_state import MutationState
from moviereviews.models.enums.review_category import ReviewCategory
from moviereviews.schemas.review_schema import Review, ReviewDraft
from moviereviews.schemas.viewer_schema import ViewerIdentity
from moviereviews.services.review.aggregate import ReviewAggregate
from moviereviews.services.review.exceptions import (
    NotFoundError,
    ReviewError,
    UnauthenticatedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

Confirm = Callable[[str], Awaitable[bool]]

DELETE_PROMPT = "Are you sure? You won't be able to revert this action."


class MutationAction:
    """State of a single submit or delete request."""

    def __init__(self, kind: str, review_id: str | None = None) -> None:
        self.kind = kind
        self.review_id = review_id
        self.state = MutationState.IDLE
        self.message = ""


class ReviewService:
    """
    Publishes and deletes reviews of a movie.

    The backend call always finishes before the aggregate is touched. A
    failed call leaves the aggregate as it was and the error reaches the
    caller unchanged. Nothing is retried: publishing twice would show a
    duplicate review to every other viewer.

    Every call gets its own `MutationAction`, so a submit and a delete in
    flight at the same time keep separate states.
    """

    def __init__(
        self,
        store,
        aggregate: ReviewAggregate,
        confirm: Confirm,
        is_live: Callable[[], bool] = lambda: True,
    ) -> None:
        self.store = store
        self.aggregate = aggregate
        self.confirm = confirm
        # False once the owner of the aggregate is gone
        self.is_live = is_live
        self.actions: list[MutationAction] = []

    @property
    def last_action(self) -> MutationAction | None:
        return self.actions[-1] if self.actions else None

    # state and message of the most recently started action
    @property
    def state(self) -> MutationState:
        return self.last_action.state if self.last_action else MutationState.IDLE

    @property
    def last_message(self) -> str:
        return self.last_action.message if self.last_action else ""

    @staticmethod
    def build_draft(
        movie_id: str, viewer: ViewerIdentity, score, text
    ) -> ReviewDraft:
        """
        :raises ValidationError: Naming the first invalid field, score first.
        """
        try:
            return ReviewDraft(
                movie_id=movie_id,
                reviewer_id=viewer.id,
                reviewer_name=viewer.name,
                reviewer_avatar=viewer.avatar,
                score=score,
                text=text,
            )
        except PydanticValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "review"
            raise ValidationError(field, error["msg"]) from exc

    async def submit_review(
        self,
        movie_id: str,
        viewer: Optional[ViewerIdentity],
        score,
        text,
    ) -> Review:
        if viewer is None:
            raise UnauthenticatedError("You must sign in to publish a review.")
        draft = self.build_draft(movie_id, viewer, score, text)

        action = self._start("submit")
        action.state = MutationState.SUBMITTING
        try:
            created = await self.store.create_review(draft)
        except Exception as e:
            action.state = MutationState.FAILED
            logger.warning(f"Publishing review for movie {movie_id} failed: {e}")
            raise

        review = Review(
            **draft.model_dump(), id=created.review_id, is_trusted=viewer.is_trusted
        )
        action.review_id = review.id
        action.message = created.message
        self._apply(action, lambda: self.aggregate.insert(review))
        logger.info(f"Published review {review.id} for movie {movie_id}")
        return review

    async def delete_review(
        self,
        movie_id: str,
        review_id: str,
        viewer: Optional[ViewerIdentity],
    ) -> bool:
        """
        Deletes a review once the viewer confirms it.

        :return: False when the viewer declined; nothing was sent then.
        """
        if viewer is None:
            raise UnauthenticatedError("You must sign in to delete a review.")

        action = self._start("delete", review_id)
        action.state = MutationState.CONFIRM_PENDING
        if not await self.confirm(DELETE_PROMPT):
            action.state = MutationState.IDLE
            return False

        action.state = MutationState.DELETING
        try:
            action.message = await self.store.delete_review(review_id, movie_id)
        except Exception as e:
            action.state = MutationState.FAILED
            logger.warning(f"Deleting review {review_id} failed: {e}")
            raise

        self._apply(
            action,
            lambda: self.aggregate.remove(review_id, self.resolve_category(review_id)),
        )
        logger.info(f"Deleted review {review_id} of movie {movie_id}")
        return True

    def resolve_category(self, review_id: str) -> ReviewCategory:
        """
        The category a review was stored under decides where it is removed
        from, whatever the deleting viewer's own trust status is.

        :raises NotFoundError: If the aggregate does not know the review.
        """
        category = self.aggregate.category_of(review_id)
        if category is None:
            raise NotFoundError(review_id)
        return category

    def _start(self, kind: str, review_id: str | None = None) -> MutationAction:
        action = MutationAction(kind, review_id)
        self.actions.append(action)
        return action

    def _apply(self, action: MutationAction, mutation: Callable[[], object]) -> None:
        if not self.is_live():
            logger.warning("Review view closed, discarding local update")
            action.state = MutationState.COMMITTED
            return
        try:
            mutation()
        except ReviewError:
            action.state = MutationState.FAILED
            raise
        action.state = MutationState.COMMITTED
