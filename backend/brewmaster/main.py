import logging

from fastapi import FastAPI

from brewmaster import models  # noqa: F401
from brewmaster.api.ai import router as ai_router
from brewmaster.api.beerxml import router as beerxml_router
from brewmaster.api.brew_logs import router as brew_log_router
from brewmaster.api.calculators import router as calculator_router
from brewmaster.api.health import router as health_router
from brewmaster.api.library import router as library_router
from brewmaster.api.observability import router as observability_router
from brewmaster.api.recipes import router as recipe_router
from brewmaster.api.tasting_notes import router as tasting_note_router
from brewmaster.core.config import settings
from brewmaster.core.database import Base, engine
from brewmaster.core.observability_middleware import ObservabilityMiddleware

ROUTERS = (
    health_router,
    recipe_router,
    library_router,
    brew_log_router,
    tasting_note_router,
    beerxml_router,
    calculator_router,
    ai_router,
    observability_router,
)


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title=settings.app_name)
    app.add_middleware(ObservabilityMiddleware)

    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)

    for router in ROUTERS:
        app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
