"""
EMAIL_BUILDER — FastAPI app
Démarrer : uvicorn email_builder.app:app --reload --port 8001
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    from .database import init_db
    from .router import router

    app = FastAPI(title="EMAIL_BUILDER — Éditeur d'emails", version=__version__, docs_url="/docs")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.on_event("startup")
    def startup():
        init_db()
        log.info("DB initialisée (SQLite)")

    @app.get("/health")
    def health():
        return {"status": "ok", "version": __version__}

    app.include_router(router)
    return app


app = create_app()
