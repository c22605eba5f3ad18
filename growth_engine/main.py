"""
Entry point of the growth classification service.

Exposes the engine over HTTP:
1. /classify           structural tree → canonical growth + provenance
2. /solve-recurrence   one recurrence → closed form
3. /compare            two growth expressions → asymptotic ordering
"""

import logging

import uvicorn
from fastapi import FastAPI

from .api.engine_routes import router as engine_router
from .config import settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured `FastAPI` instance.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Growth Classification Engine",
        version="1.0.0",
        description=(
            "Symbolic asymptotic growth classification. Combines the costs of "
            "sequences, conditionals, loops and recursive calls into a canonical "
            "Big-O expression over one or more size variables."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.include_router(engine_router)

    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)
    logger.info(
        "MAX_DEPTH=%s DEFAULT_VARIABLE=%s FLOAT_PRECISION=%s",
        settings.MAX_DEPTH, settings.DEFAULT_VARIABLE, settings.FLOAT_PRECISION,
    )
    return app


# Instancia por defecto utilizada por Uvicorn
app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
    )
