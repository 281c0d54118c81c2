import os

os.environ["MOVIEREVIEWS_TESTING"] = "1"

import pytest
import pytest_asyncio
from faker import Faker
from fastapi import FastAPI, HTTPException, Request, status
from httpx import ASGITransport, AsyncClient

from moviereviews.api.actors_client import ActorsClient
from moviereviews.api.reviews_client import ReviewsClient
from moviereviews.core.config import Settings, create_http_client
from moviereviews.schemas.review_schema import Review
from moviereviews.schemas.viewer_schema import ViewerIdentity

fake = Faker()

MOVIE_ID = "42"


def review_record(uid: str, score: int, text: str | None = None) -> dict:
    return {
        "movieId": int(MOVIE_ID),
        "uid": uid,
        "username": fake.name(),
        "photoURL": fake.image_url(),
        "score": score,
        "text": text or fake.sentence(nb_words=12),
    }


def create_fake_backend() -> FastAPI:
    """In memory stand-in for the movie backend."""
    backend = FastAPI()
    backend.state.reviews = {
        MOVIE_ID: {
            "critics": {
                "c1": review_record("critic-1", 4),
                "c2": review_record("u-trusted", 3),
            },
            "spectators": {
                "s1": review_record("spectator-1", 2),
                "s2": review_record("u1", 5),
                "s3": review_record("spectator-3", 4),
            },
        }
    }
    backend.state.trusted_uids = {"critic-1", "u-trusted"}
    backend.state.calls = []
    backend.state.fail_writes = False
    backend.state.next_id = 1

    def record_call(request: Request) -> None:
        backend.state.calls.append((request.method, request.url.path))

    def check_writable() -> None:
        if backend.state.fail_writes:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Review service unavailable.",
            )

    @backend.get("/reviews")
    async def get_reviews(request: Request, movie_id: str):
        record_call(request)
        return backend.state.reviews.get(movie_id, {"critics": {}, "spectators": {}})

    @backend.post("/reviews", status_code=status.HTTP_201_CREATED)
    async def post_review(request: Request):
        record_call(request)
        check_writable()
        payload = await request.json()
        if not 1 <= payload.get("score", 0) <= 5:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Score must be between 1 and 5.",
            )
        review_id = f"r{backend.state.next_id}"
        backend.state.next_id += 1
        movie = backend.state.reviews.setdefault(
            str(payload["movieId"]), {"critics": {}, "spectators": {}}
        )
        bucket = (
            "critics" if payload["uid"] in backend.state.trusted_uids else "spectators"
        )
        movie[bucket][review_id] = payload
        return {"reviewId": review_id, "message": "Review published."}

    @backend.delete("/reviews")
    async def delete_review(request: Request, review_id: str, movie_id: str):
        record_call(request)
        check_writable()
        movie = backend.state.reviews.get(movie_id, {})
        for bucket in movie.values():
            if review_id in bucket:
                del bucket[review_id]
                return "Review deleted."
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Review not found."
        )

    @backend.get("/actors/casting")
    async def get_casting(movie_id: str):
        if movie_id != MOVIE_ID:
            return []
        return [
            {"id": 1, "name": "Ana Torrent", "character": "Ana", "profile_path": None},
            {"id": 2, "name": "Fernando Fernán Gómez", "character": "Fernando"},
        ]

    @backend.get("/actors")
    async def get_actor(actor_id: int):
        if actor_id != 1:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Actor not found."
            )
        return {
            "id": 1,
            "name": "Ana Torrent",
            "biography": fake.paragraph(),
            "birthday": "1966-07-12",
            "place_of_birth": "Madrid, Spain",
        }

    @backend.get("/actors/movies")
    async def get_movies_by_actor(actor_id: int):
        return [{"id": 42, "title": "El espíritu de la colmena", "poster_path": "/p.jpg"}]

    return backend


@pytest.fixture()
def backend() -> FastAPI:
    return create_fake_backend()


@pytest.fixture()
def settings() -> Settings:
    return Settings(backend_url="http://test", testing="1")


@pytest_asyncio.fixture()
async def async_client(backend: FastAPI, settings: Settings) -> AsyncClient:
    async with create_http_client(
        settings, token="fake", transport=ASGITransport(app=backend)
    ) as client:
        yield client


@pytest.fixture()
def reviews_client(async_client: AsyncClient) -> ReviewsClient:
    return ReviewsClient(async_client)


@pytest.fixture()
def actors_client(async_client: AsyncClient) -> ActorsClient:
    return ActorsClient(async_client)


@pytest.fixture()
def spectator() -> ViewerIdentity:
    return ViewerIdentity(id="u1", name="Spectator", is_trusted=False)


@pytest.fixture()
def critic() -> ViewerIdentity:
    return ViewerIdentity(id="u-trusted", name="Critic", is_trusted=True)


@pytest.fixture()
def make_review():
    counter = iter(range(1, 10_000))

    def _make_review(
        reviewer_id: str | None = None,
        score: int = 3,
        is_trusted: bool = False,
        review_id: str | None = None,
    ) -> Review:
        return Review(
            id=review_id or f"rev-{next(counter)}",
            movie_id=MOVIE_ID,
            reviewer_id=reviewer_id or fake.uuid4(),
            reviewer_name=fake.name(),
            reviewer_avatar="",
            score=score,
            text=fake.sentence(nb_words=8),
            is_trusted=is_trusted,
        )

    return _make_review
