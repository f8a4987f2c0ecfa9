import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from calorie_api.config import Settings, configure_logging, load_settings
from calorie_api.errors import AnalyzeError
from calorie_api.routes import analyze, health
from calorie_api.services.image_relay import ImageRelay

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AnalyzeError)
    async def analyze_error_handler(request: Request, exc: AnalyzeError):
        if exc.status_code < 500:
            logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_body()))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request body on %s", request.url.path)
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc)},
        )


def create_app(settings: Optional[Settings] = None, relay: Optional[ImageRelay] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Calorie Lens API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.relay = relay or ImageRelay(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.front_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > settings.max_body_bytes:
            logger.warning("Request body too large: %s bytes", length)
            return JSONResponse(status_code=413, content={"error": "Payload too large"})
        return await call_next(request)

    _register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(analyze.router)

    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; /api/analyze-image will answer 500")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = app.state.settings
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
