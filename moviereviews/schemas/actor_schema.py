from datetime import date

from pydantic import BaseModel


class Actor(BaseModel):
    id: int
    name: str
    character: str | None = None
    profile_path: str | None = None


class ActorProfile(BaseModel):
    id: int
    name: str
    biography: str = ""
    birthday: date | None = None
    place_of_birth: str | None = None
    profile_path: str | None = None


# used to display movie cards in the actor filmography
class MoviePoster(BaseModel):
    id: int
    title: str
    poster_path: str | None = None
    release_date: str | None = None
