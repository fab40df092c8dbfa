import logging
from typing import Any, Dict, Optional

import httpx

from chefood.client.errors import ApiError, SessionExpiredError
from chefood.client.session import TokenSession
from chefood.core.config import settings

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Async HTTP client for the chefood backend.

    Attaches the bearer token from the session to every request, clears the
    session on 401 and turns every failure into an ApiError. There is no
    retry: callers decide how to recover.
    """

    def __init__(
        self,
        session: TokenSession,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.session = session
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_url,
            timeout=settings.request_timeout if timeout is None else timeout,
            transport=transport,
            event_hooks={"request": [self._attach_token]},
        )

    async def _attach_token(self, request: httpx.Request) -> None:
        token = self.session.get_access_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Any:
        # httpx sets Content-Type itself: JSON for json=, multipart for files=
        try:
            resp = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                data=data,
                files=files,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 401:
                self.session.clear()
                logger.warning("Session expired on %s %s, tokens cleared", method, path)
                raise SessionExpiredError(
                    401, "Session expired. Please login again.", _safe_json(e.response)
                ) from e
            raise ApiError.from_response(e.response) from e
        except httpx.RequestError as e:
            raise ApiError(None, f"Connection error: {e}") from e

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def unwrap(body: Any) -> Any:
    """Return body["data"] for enveloped responses, the body itself otherwise."""
    if isinstance(body, dict) and body.get("data") is not None:
        return body["data"]
    return body


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
