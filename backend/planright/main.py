"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from planright.config import get_settings
from planright.api.routes import assessment, clauses, health, properties, rules
from planright.engine.rules import get_rule_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.getLogger("planright").setLevel(settings.log_level.upper())
    registry = get_rule_registry()
    logger.info(f"{settings.app_name} {settings.app_version} started with {len(registry.rules)} rules")
    yield


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Exempt development checks for sheds, patios and carports in NSW",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    prefix = settings.api_prefix
    app.include_router(health.router, tags=["Health"])
    app.include_router(assessment.router, prefix=f"{prefix}/assessments", tags=["Assessment"])
    app.include_router(clauses.router, prefix=f"{prefix}/clauses", tags=["Clauses"])
    app.include_router(rules.router, prefix=f"{prefix}/rules", tags=["Rules"])
    app.include_router(properties.router, prefix=f"{prefix}/properties", tags=["Properties"])

    return app


app = create_app()
