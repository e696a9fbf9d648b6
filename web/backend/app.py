import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from scorecard.exceptions import ScorecardError
from scorecard.logger import get_logger
from web.backend.routers import scorecard

logger = get_logger("web")


def _cors_origins():
    raw = os.getenv("SCORECARD_ALLOWED_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app() -> FastAPI:
    app = FastAPI(title="Strategy Scorecard API", version="1.0")

    origins = _cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(ScorecardError)
    async def scorecard_error_handler(request: Request, exc: ScorecardError):
        # routers translate the expected errors; anything reaching here is unexpected
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.get_user_message())
        return JSONResponse(
            status_code=500,
            content={"detail": {"code": "INTERNAL_ERROR", "message": exc.message}},
        )

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": "strategy-scorecard"}

    app.include_router(scorecard.router, prefix="/api/v1", tags=["scorecard"])
    logger.info("Scorecard routes mounted at /api/v1 (CORS origins: %s)", ", ".join(origins))
    return app


app = create_app()
