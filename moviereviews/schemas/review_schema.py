from pydantic import BaseModel, ConfigDict, Field, model_validator


# Review record as the backend sends it.
# The review id is the key of the mapping the record is stored under.
class ReviewRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)
    movie_id: str = Field(alias="movieId")
    reviewer_id: str = Field(alias="uid")
    reviewer_name: str = Field(default="", alias="username")
    reviewer_avatar: str = Field(default="", alias="photoURL")
    score: int
    text: str


class ReviewDraft(ReviewRecord):
    """Body of a review creation request, validated before it is sent."""

    model_config = ConfigDict(
        extra="forbid", populate_by_name=True, coerce_numbers_to_str=True
    )
    # strict: no bool, float, numeric string or number-to-text coercion
    score: int = Field(ge=1, le=5, strict=True)
    text: str = Field(min_length=1, strict=True)


class Review(ReviewRecord):
    """
    A review known to the client.

    `is_trusted` is the author's trust status when the review was written.
    It decides the category (critic or spectator) for the review's whole life.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, coerce_numbers_to_str=True
    )
    id: str | None = None
    is_trusted: bool = False


class ReviewCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)
    review_id: str = Field(alias="reviewId")
    message: str = ""


class MovieReviews(BaseModel):
    critics: dict[str, ReviewRecord] = Field(default_factory=dict)
    spectators: dict[str, ReviewRecord] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_disjoint_ids(self) -> "MovieReviews":
        overlap = self.critics.keys() & self.spectators.keys()
        if overlap:
            raise ValueError(
                f"Reviews listed as both critics and spectators: {sorted(overlap)}"
            )
        return self

    def to_reviews(self) -> list[Review]:
        """
        Flattens both buckets into a single list, critics first.
        The bucket a record came in sets its `is_trusted` flag.
        """
        reviews = []
        for is_trusted, records in ((True, self.critics), (False, self.spectators)):
            for review_id, record in records.items():
                reviews.append(
                    Review(**record.model_dump(), id=review_id, is_trusted=is_trusted)
                )
        return reviews
