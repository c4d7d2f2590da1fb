"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from howl2go.api.admin import router as admin_router
from howl2go.api.bugs import router as bug_router
from howl2go.api.carts import router as cart_router
from howl2go.api.food import router as food_router
from howl2go.api.orders import router as order_router
from howl2go.api.reviews import router as review_router
from howl2go.app_logging import configure_logging
from howl2go.containers import AppContainer
from howl2go.domain.errors import Howl2GoError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(food_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(review_router)
    app.include_router(bug_router)
    app.include_router(admin_router)

    @app.exception_handler(Howl2GoError)
    async def domain_error_handler(
        request: Request, exc: Howl2GoError
    ) -> JSONResponse:
        """Render domain errors in the API's failure envelope."""
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed request parameters as client errors."""
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            message = f"{location}: {first.get('msg', message)}"
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": message},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Log unexpected failures and hide their details from clients."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Internal server error"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
