# app/main.py
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

# Only load .env locally (don't rely on it in Cloud Run)
if os.getenv("K_SERVICE") is None:  # not on Cloud Run
    from dotenv import load_dotenv
    load_dotenv()

from .config import Settings, load_settings
from .errors import build_error_notice
from .llm import get_openai
from .logger import logger
from .views import router as views_router

STATIC_DIR = Path(__file__).resolve().parents[1] / "static"


def create_app(settings: Optional[Settings] = None, openai_client=None) -> FastAPI:
    """
    Build the app with its configuration injected.
    Tests pass their own Settings (and a fake client) instead of touching os.environ.
    """
    settings = settings or load_settings()
    logger.setLevel(settings.log_level)

    app = FastAPI(title="Oviro Homeschool Planner")
    app.state.settings = settings
    app.state.openai_client = openai_client if openai_client is not None else get_openai(settings)

    # CORS from env (comma-separated), "*" by default
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if STATIC_DIR.is_dir():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.include_router(views_router, tags=["views"])

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        notice = build_error_notice(exc, {"op": "global"})
        logger.error(notice.log_line())
        path = request.url.path or "/"
        if path.startswith("/api/"):
            return JSONResponse(
                {"error": notice.title, "message": notice.user_message, "ref": notice.support_id, "code": notice.code},
                status_code=500,
            )
        return PlainTextResponse(notice.flash_text(), status_code=500)

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    mode = "openai" if settings.generative_enabled else "local fallback"
    logger.info(f"Oviro ready: summaries via {mode}")
    return app


app = create_app()
