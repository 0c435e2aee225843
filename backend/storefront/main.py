"""
# `storefront/main.py`: Application entry point

## Overview
Builds the FastAPI application: CORS, routers, the catch-all error handler and
the startup/shutdown hooks that own the process-wide `Dependencies`
(Razorpay gateway + Firestore client).

## Routers
- `GET /`: health check
- `POST /api/create-razorpay-order`
- `POST /api/verify-payment`

## Events
- `startup`: configure logging, validate required env variables, log the
  environment status (secrets masked), initialize Firebase (bounded connectivity
  check) and the gateway client. Skipped when `create_app` is handed ready-made
  dependencies (tests).
- `shutdown`: close the gateway client and delete the Firebase app.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.config import Settings, mask
from storefront.core.deps import Dependencies, init_dependencies
from storefront.routers import checkout, health

logger = logging.getLogger("storefront")


def _log_environment(settings: Settings) -> None:
    logger.info("=== Environment Status ===")
    logger.info("Environment: %s", settings.environment)
    logger.info("Port: %s", settings.port)
    logger.info("Razorpay Key ID: %s", mask(settings.razorpay_key_id))
    logger.info("Firebase Project: %s", settings.firebase_project_id or "Not set")
    logger.info("Firebase Client Email: %s", settings.firebase_client_email or "Not set")
    logger.info("Firebase Private Key: %s", "*** (loaded)" if settings.firebase_private_key else "Not set")


def create_app(settings: Optional[Settings] = None, deps: Optional[Dependencies] = None) -> FastAPI:
    settings = settings or (deps.settings if deps else Settings())

    app = FastAPI(
        title="Storefront Checkout API",
        description="Razorpay order creation and payment verification for the storefront.",
        version="1.0.0",
        redirect_slashes=False,
    )
    app.state.deps = deps

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(checkout.router)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        body = {"success": False, "error": "Internal server error"}
        if settings.is_development:
            body["message"] = str(exc)
        return JSONResponse(status_code=500, content=body)

    @app.on_event("startup")
    async def _startup():
        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        if app.state.deps is not None:
            return
        missing = settings.missing_required()
        if missing:
            logger.error("Missing required environment variables: %s", ", ".join(missing))
            if settings.is_production:
                logger.error("Set these variables in the hosting dashboard under Environment")
            else:
                logger.error("Create a .env file with these variables")
            raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")
        _log_environment(settings)
        app.state.deps = init_dependencies(settings)
        logger.info(
            "Firebase: %s | Razorpay: %s",
            "connected" if app.state.deps.firebase_initialized else "disconnected",
            "configured" if settings.razorpay_configured else "not configured",
        )

    @app.on_event("shutdown")
    async def _shutdown():
        if app.state.deps is not None:
            logger.info("Shutting down, closing dependencies")
            app.state.deps.close()
            app.state.deps = None

    return app


app = create_app()

# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    import uvicorn
    _settings = Settings()
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=_settings.port, reload=not _settings.is_production)
