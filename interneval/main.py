import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

from interneval.config import get_settings
from interneval.api import evaluate
from interneval.custom_logging import configure_logging
from interneval.services.evaluation_store import EvaluationStore
from interneval.services.gemini_service import GeminiServices, get_gemini_service
from interneval.utils.response import create_response


def create_app(
    store: Optional[EvaluationStore] = None,
    gemini: Optional[GeminiServices] = None
) -> FastAPI:
    """
    Build the API. The evaluation store lives on app.state and is injected into routes
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
        Turns performance review notes into a standardized star-rating form per candidate
        and exports the scores as CSV. Powered by Google Gemini.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug
    )

    app.state.gemini = gemini or get_gemini_service()
    app.state.store = store or EvaluationStore(template_source=app.state.gemini)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc):
        return JSONResponse(
            status_code=400,
            content=create_response(False, "Request invalid", None, {"detail": jsonable_encoder(exc.errors())})
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):
        return JSONResponse(
            status_code=exc.status_code,
            content=create_response(False, exc.detail, None, None)
        )

    app.include_router(evaluate.router, tags=["Evaluate"], prefix="/api/v1")

    @app.get("/")
    async def root():
        return {"message": f"{settings.app_name} server running..."}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health Check Endpoint"""
        return {
            "status": "healthy",
            "services": {
                "api": "up",
                "gemini": "configured" if get_settings().gemini_api_key else "missing_api_key",
            },
            "processing": app.state.store.is_processing,
        }

    logging.info(f"{settings.app_name} {settings.app_version} ready")
    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn (`interneval` console script)"""
    settings = get_settings()
    uvicorn.run(
        "interneval.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.debug
    )


if __name__ == "__main__":
    run()
