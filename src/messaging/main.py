"""
FastAPI application factory for the messaging read surface.

    uvicorn messaging.main:create_app --factory
"""
from fastapi import FastAPI

from messaging.api.v1 import router, register_exception_handlers
from messaging.config import Settings, get_settings
from messaging.core.logging import RequestIDMiddleware, setup_logging
from messaging.repositories import EntityMapping


def create_app(settings: Settings | None = None, *, configure_logging: bool = True) -> FastAPI:
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)

    app = FastAPI(title="Messaging read API")
    app.state.settings = settings
    app.state.entity_mapping = EntityMapping.from_paths(settings.ENTITY_MAPPING)

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(router)
    return app
