import logging

import httpx

from moviereviews.services.review.exceptions import (
    RemoteNotFoundError,
    RemoteValidationError,
    TransportError,
)

logger = logging.getLogger(__name__)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("message") or body)
    return str(body)


class BackendClient:
    """Shared request handling for the backend API clients."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(f"{method} {path} failed: {exc}")
            raise TransportError(str(exc) or type(exc).__name__) from exc

        if response.is_success:
            return response

        detail = _error_detail(response)
        logger.warning(f"{method} {path} returned {response.status_code}: {detail}")
        if response.status_code in (
            httpx.codes.BAD_REQUEST,
            httpx.codes.UNPROCESSABLE_ENTITY,
        ):
            raise RemoteValidationError(detail, response.status_code)
        if response.status_code == httpx.codes.NOT_FOUND:
            raise RemoteNotFoundError(detail, response.status_code)
        raise TransportError(detail, response.status_code)

    async def _get_json(self, path: str, error: str, **kwargs):
        """
        GET `path` and return the decoded body.
        A response other than 200 with a body is reported with `error`.
        """
        response = await self._request("GET", path, **kwargs)
        if response.status_code != httpx.codes.OK or not response.content:
            raise TransportError(error, response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(error, response.status_code) from exc
