"""
Pass-through for /api/* so the SPA can talk to the backends from the same
origin. Recipe generation goes to the AI service, everything else to the
main backend.
"""
import logging

import httpx
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from chefood.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()

AI_SERVICE_PATHS = {"/api/v1/generate-recipe"}

HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
}

# httpx recomputes these on the way out and decodes the body on the way in
_REQUEST_SKIP = HOP_BY_HOP_HEADERS | {"host", "content-length"}
_RESPONSE_SKIP = HOP_BY_HOP_HEADERS | {"content-length", "content-encoding"}


def upstream_for(path: str, request: Request) -> str:
    if path in AI_SERVICE_PATHS:
        return getattr(request.app.state, "ai_service_url", settings.ai_service_url)
    return getattr(request.app.state, "api_url", settings.api_url)


@router.api_route(
    path="/api/{rest:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    include_in_schema=False,
)
async def proxy(rest: str, request: Request) -> Response:
    path = request.url.path
    base_url = upstream_for(path, request).rstrip("/")
    headers = {k: v for k, v in request.headers.items() if k.lower() not in _REQUEST_SKIP}
    body = await request.body()

    transport = getattr(request.app.state, "proxy_transport", None)
    async with httpx.AsyncClient(timeout=settings.request_timeout, transport=transport) as client:
        try:
            upstream = await client.request(
                request.method,
                f"{base_url}{path}",
                params=request.query_params.multi_items(),
                content=body,
                headers=headers,
            )
        except httpx.RequestError as e:
            logger.error("Proxy to %s%s failed: %r", base_url, path, e)
            return JSONResponse(
                status_code=502,
                content={"error": "Bad gateway", "message": f"Upstream unreachable: {base_url}"},
            )

    response_headers = {
        k: v for k, v in upstream.headers.items() if k.lower() not in _RESPONSE_SKIP
    }
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers=response_headers,
    )
