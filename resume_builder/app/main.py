import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_builder.app.api.routes.builder import router as builder_router
from resume_builder.app.api.routes.resume import router as resume_router
from resume_builder.app.core.config import get_settings

log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.

    Notes:
        1. Configure logging at the level from settings.
        2. Initialize the FastAPI application with the title "Resume Builder API".
        3. Add CORS middleware to allow requests from any origin (for development only).
        4. Include the resume and builder routers.
        5. Define a health check endpoint at "/health".

    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    _msg = "Creating FastAPI application"
    log.debug(_msg)

    app = FastAPI(title="Resume Builder API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(resume_router)
    app.include_router(builder_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    _msg = "FastAPI application created successfully"
    log.debug(_msg)
    return app


app = create_app()
