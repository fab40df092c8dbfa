import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response

from chefood.api.health import router as health_router
from chefood.api.proxy import router as proxy_router
from chefood.core.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


def resolve_static_dir(configured: str | None = None) -> Path:
    """Configured dir if set, otherwise ./build, then ./dist, then the cwd."""
    if configured:
        return Path(configured)
    for candidate in (Path("build"), Path("dist")):
        if candidate.is_dir():
            logger.info("Serving from %s directory", candidate)
            return candidate
    logger.error("No build or dist directory found!")
    return Path(".")


def create_app(
    static_dir: str | None = None,
    api_url: str | None = None,
    ai_service_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    static_path = resolve_static_dir(static_dir or settings.static_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting ChefoodAI Frontend Server on port %s", settings.port)
        logger.info("Serving static files from: %s", static_path.resolve())
        yield
        logger.info("Shutting down frontend server")

    app = FastAPI(title="ChefoodAI Frontend", lifespan=lifespan)
    app.state.api_url = api_url or settings.api_url
    app.state.ai_service_url = ai_service_url or settings.ai_service_url
    app.state.proxy_transport = transport

    app.add_middleware(GZipMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    #routers
    app.include_router(health_router)
    app.include_router(proxy_router)

    # Registered last so /health and /api/* win
    @app.get(path="/{full_path:path}", include_in_schema=False)
    def spa(full_path: str) -> Response:
        root = static_path.resolve()
        if full_path:
            candidate = (root / full_path).resolve()
            if root in candidate.parents and candidate.is_file():
                return FileResponse(candidate)

        index = root / "index.html"
        if index.is_file():
            return FileResponse(index)
        return JSONResponse(
            status_code=404,
            content={
                "error": "Frontend not built",
                "message": "Please build the React app first",
                "staticPath": str(root),
            },
        )

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
