# folio/services/api/app.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio.common.logging import get_logger
from folio.common.settings import get_settings
from folio.services.api.routers import content, documents, health, users

cfg = get_settings()
dev = cfg.app_env.lower() == "development"
log = get_logger("folio.api")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Folio API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    # Routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(content.router)
    app.include_router(documents.router)

    log.info("Folio API created (env=%s)", cfg.app_env)
    return app

app = create_app()
