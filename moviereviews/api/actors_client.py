from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from moviereviews.api.base_client import BackendClient
from moviereviews.schemas.actor_schema import Actor, ActorProfile, MoviePoster
from moviereviews.services.review.exceptions import TransportError

_actors = TypeAdapter(list[Actor])
_posters = TypeAdapter(list[MoviePoster])


class ActorsClient(BackendClient):
    """Client for the backend `/actors` endpoints."""

    async def get_casting(self, movie_id: str) -> list[Actor]:
        payload = await self._get_json(
            "/actors/casting",
            "Unexpected error getting movie casting.",
            params={"movie_id": movie_id},
        )
        return self._parse(_actors.validate_python, payload)

    async def get_actor(self, actor_id: str) -> ActorProfile:
        payload = await self._get_json(
            "/actors",
            "Unexpected error getting actor data.",
            params={"actor_id": actor_id},
        )
        return self._parse(ActorProfile.model_validate, payload)

    async def get_movies_by_actor(self, actor_id: str) -> list[MoviePoster]:
        payload = await self._get_json(
            "/actors/movies",
            "Unexpected error getting actor movies.",
            params={"actor_id": actor_id},
        )
        return self._parse(_posters.validate_python, payload)

    @staticmethod
    def _parse(validate, payload):
        try:
            return validate(payload)
        except PydanticValidationError as exc:
            raise TransportError(f"Malformed actor payload: {exc}") from exc
