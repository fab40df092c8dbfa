from typing import Any

import httpx


class ApiError(Exception):
    """
    Error raised by every API call.

    status_code is None when the request never produced a response
    (connection refused, DNS failure, timeout).
    """

    def __init__(self, status_code: int | None, detail: str, payload: Any = None):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.payload = payload

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code!r}, detail={self.detail!r})"

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        payload: Any = None
        detail = ""
        try:
            payload = response.json()
        except ValueError:
            detail = response.text

        if isinstance(payload, dict):
            for key in ("detail", "message", "error"):
                value = payload.get(key)
                if value:
                    detail = value if isinstance(value, str) else str(value)
                    break

        if not detail:
            detail = f"HTTP {response.status_code}"

        return cls(response.status_code, detail, payload)


class SessionExpiredError(ApiError):
    """401 from the backend; the session has already been cleared."""


def is_not_found(err: ApiError) -> bool:
    return err.status_code == 404


def is_bad_request(err: ApiError) -> bool:
    return err.status_code == 400
