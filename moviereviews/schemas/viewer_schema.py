from pydantic import BaseModel, ConfigDict


class ViewerIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)
    id: str
    name: str = ""
    avatar: str = ""
    # verified accounts publish as critics
    is_trusted: bool = False

    @classmethod
    def from_firebase_claims(cls, claims: dict) -> "ViewerIdentity":
        return cls(
            id=claims["uid"],
            name=claims.get("name") or "",
            avatar=claims.get("picture") or "",
            is_trusted=bool(claims.get("email_verified", False)),
        )
