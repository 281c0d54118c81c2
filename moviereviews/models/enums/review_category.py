from enum import Enum


class ReviewCategory(str, Enum):
    # reviews written by verified accounts
    CRITICS = "critics"
    SPECTATORS = "spectators"

    @classmethod
    def for_trust(cls, is_trusted: bool) -> "ReviewCategory":
        return cls.CRITICS if is_trusted else cls.SPECTATORS
