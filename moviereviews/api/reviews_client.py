import logging

from pydantic import ValidationError as PydanticValidationError

from moviereviews.api.base_client import BackendClient
from moviereviews.schemas.review_schema import MovieReviews, ReviewCreated, ReviewDraft
from moviereviews.services.review.exceptions import TransportError

logger = logging.getLogger(__name__)


class ReviewsClient(BackendClient):
    """Client for the backend `/reviews` endpoints."""

    async def fetch_reviews(self, movie_id: str) -> MovieReviews:
        """
        Returns the critic and spectator reviews of a movie.

        :raises TransportError: On network failure or a non-2xx response.
        """
        payload = await self._get_json(
            "/reviews",
            "Unexpected error getting movie reviews.",
            params={"movie_id": movie_id},
        )
        try:
            reviews = MovieReviews.model_validate(payload)
        except PydanticValidationError as exc:
            raise TransportError(f"Malformed reviews payload: {exc}") from exc

        logger.debug(
            f"Fetched {len(reviews.critics)} critic and "
            f"{len(reviews.spectators)} spectator reviews for movie {movie_id}"
        )
        return reviews

    async def create_review(self, draft: ReviewDraft) -> ReviewCreated:
        response = await self._request(
            "POST", "/reviews", json=draft.model_dump(by_alias=True)
        )
        try:
            return ReviewCreated.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise TransportError(
                "Unexpected response publishing the review.", response.status_code
            ) from exc

    async def delete_review(self, review_id: str, movie_id: str) -> str:
        """Deletes a review and returns the backend confirmation message."""
        response = await self._request(
            "DELETE",
            "/reviews",
            params={"review_id": review_id, "movie_id": movie_id},
        )
        if not response.content:
            return ""
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            return str(body.get("message", ""))
        return str(body)
