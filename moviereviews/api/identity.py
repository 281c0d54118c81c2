import asyncio
import logging

from firebase_admin import App, _apps, auth, credentials, get_app, initialize_app
from firebase_admin.exceptions import FirebaseError

from moviereviews.core.config import Settings
from moviereviews.schemas.viewer_schema import ViewerIdentity

logger = logging.getLogger(__name__)


def init_firebase(settings: Settings) -> App | None:
    if settings.testing == "1" or not settings.firebase_credentials:
        return None
    if _apps:
        return get_app()
    cred = credentials.Certificate(settings.firebase_credentials)
    return initialize_app(cred)


class FirebaseIdentityProvider:
    """
    Resolves the current viewer from a Firebase ID token.

    Resolution never raises: a missing, expired or otherwise invalid token
    resolves to None, which means the viewer is anonymous.
    """

    def __init__(self, token: str | None, firebase_app: App | None = None) -> None:
        self.token = token
        self.firebase_app = firebase_app

    async def resolve_viewer_identity(self) -> ViewerIdentity | None:
        if not self.token:
            return None

        try:
            # verify_id_token may fetch google certificates, keep it off the loop
            claims = await asyncio.to_thread(
                auth.verify_id_token, self.token, self.firebase_app
            )
        except (ValueError, FirebaseError) as e:
            logger.warning(f"Could not verify viewer token, continuing anonymous: {e}")
            return None

        return ViewerIdentity.from_firebase_claims(claims)

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirebaseIdentityProvider":
        return cls(settings.session_token, init_firebase(settings))
