"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from diet_planner.api.plans import router as plans_router
from diet_planner.app_logging import configure_logging
from diet_planner.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    logger.info(
        "Starting diet planner with %d catalog foods (rules: %s)",
        len(container.catalog),
        container.rules.locale,
    )

    app = FastAPI(title="Diet Planner")
    app.state.container = container
    app.include_router(plans_router)

    @app.get("/health")
    async def health() -> dict[str, object]:
        """Simple health check endpoint."""
        return {"status": "ok", "catalog_size": len(container.catalog)}

    return app
