from __future__ import annotations

from typing import List, Optional, Sequence

import bittensor as bt
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from taostake import __version__
from taostake.api.config import ApiEnvConfig, load_api_env
from taostake.api.errors import TaoStakeError, UpstreamFailure
from taostake.api.resolver import ProviderQueryResolver
from taostake.api.schemas import Provider, ProviderDelegator
from taostake.api.sources import InMemoryProviderSource, ProviderSource, RemoteProviderSource


def build_source(cfg: ApiEnvConfig) -> ProviderSource:
    if cfg.source == "remote":
        bt.logging.info(f"Using remote provider source at {cfg.upstream_url}")
        return RemoteProviderSource(cfg.upstream_url or "", timeout_s=cfg.upstream_timeout_s)
    if cfg.snapshot_path:
        return InMemoryProviderSource.from_json_file(cfg.snapshot_path)
    bt.logging.warning("TAOSTAKE_SNAPSHOT_PATH not set; serving an empty provider snapshot")
    return InMemoryProviderSource()


def create_app(
    resolver: ProviderQueryResolver,
    *,
    cors_origins: Sequence[str] = ("*",),
    source_kind: str = "memory",
) -> FastAPI:
    app = FastAPI(title="taostake Provider API", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(TaoStakeError)
    async def taostake_error_handler(request: Request, exc: TaoStakeError):
        if isinstance(exc, UpstreamFailure):
            bt.logging.error(f"{request.method} {request.url.path} failed upstream: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"statusCode": exc.status_code, "message": exc.message},
        )

    @app.get("/healthz")
    def healthz():
        return {"ok": True, "source": source_kind, "version": __version__}

    @app.get("/providers", response_model=List[Provider], tags=["providers"])
    def get_providers(
        identity: Optional[str] = Query(None, description="Search by identity"),
        owner: Optional[str] = Query(None, description="Search by owner"),
        providers: Optional[List[str]] = Query(None, description="Search by multiple providers address"),
        with_identity_info: Optional[str] = Query(
            None, alias="withIdentityInfo", description="Returns identity data for providers"
        ),
        with_latest_info: Optional[str] = Query(None, alias="withLatestInfo"),
    ):
        """Returns a list of all providers."""
        return resolver.list_providers(
            identity=identity,
            owner=owner,
            providers=providers,
            with_identity_info=with_identity_info,
            with_latest_info=with_latest_info,
        )

    @app.get(
        "/providers/{address}",
        response_model=Provider,
        tags=["providers"],
        responses={404: {"description": "Provider not found"}},
    )
    def get_provider(address: str):
        """Returns provider details for a given address."""
        return resolver.get_provider(address)

    @app.get(
        "/providers/{address}/avatar",
        tags=["providers"],
        status_code=302,
        responses={404: {"description": "Provider avatar not found"}},
    )
    def get_provider_avatar(address: str):
        """Redirects to the avatar of a specific provider address."""
        return RedirectResponse(resolver.get_provider_avatar_url(address), status_code=302)

    @app.get(
        "/providers/{address}/delegators",
        response_model=List[ProviderDelegator],
        tags=["providers"],
        responses={404: {"description": "Provider not found"}},
    )
    def get_provider_delegators(
        address: str,
        from_: Optional[str] = Query(None, alias="from"),
        size: Optional[str] = Query(None),
    ):
        """Returns a list of delegators for a given provider address."""
        return resolver.get_provider_delegators(address, from_=from_, size=size)

    @app.get("/providers/{address}/delegators/count", response_model=int, tags=["providers"])
    def get_provider_delegators_count(address: str):
        """Returns delegators count for a given provider address."""
        return resolver.get_provider_delegators_count(address)

    @app.get("/providers/{address}/delegators/c", response_model=int, include_in_schema=False)
    def get_provider_delegators_count_alternative(address: str):
        return resolver.get_provider_delegators_count(address)

    return app


def app_from_env() -> FastAPI:
    """App factory for uvicorn (`factory=True`); reads configuration from env on call."""
    cfg = load_api_env()
    resolver = ProviderQueryResolver(build_source(cfg))
    return create_app(resolver, cors_origins=cfg.cors_origins, source_kind=cfg.source)
