from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.deps import close_app_state, get_api_cfg
from app.errors import install_error_handlers


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    await close_app_state()


def create_app() -> FastAPI:
    app = FastAPI(
        title="BGPKIT Data API",
        version=__version__,
        license_info={"name": "BGPKIT Public Dataset License", "url": "https://bgpkit.com/aua"},
        contact={"name": "About BGPKIT", "url": "https://bgpkit.com/about"},
        openapi_tags=[
            {"name": "meta", "description": "Meta information for Internet entities"},
            {"name": "bgp", "description": "BGP data"},
        ],
        lifespan=lifespan,
    )

    cors_cfg = get_api_cfg().get("cors", {})
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_cfg.get("allow_origins", ["*"]),
        allow_methods=cors_cfg.get("allow_methods", ["GET", "POST"]),
    )
    install_error_handlers(app)

    @app.get("/health_check", include_in_schema=False)
    def health_check() -> Response:
        return Response(status_code=200)

    from app.routes import asninfo, broker, peers, roas  # noqa: WPS433

    app.include_router(asninfo.router)
    app.include_router(roas.router)
    app.include_router(broker.router)
    app.include_router(peers.router)
    return app


app = create_app()
