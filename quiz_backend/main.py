import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from quiz_backend.core.config import Settings
from quiz_backend.core.errors import register_error_handlers
from quiz_backend.db.firestore import SubmissionStore, get_db
from quiz_backend.routers import misc, submissions

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[SubmissionStore] = None) -> FastAPI:
    """Build the app with one store handle shared by every request."""
    settings = settings or Settings()
    if store is None:
        store = SubmissionStore(get_db(settings), settings.SUBMISSIONS_COLLECTION)

    app = FastAPI(title="Quiz Submission API")
    app.state.settings = settings
    app.state.store = store

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

    register_error_handlers(app)

    app.include_router(misc.router)
    app.include_router(submissions.router)

    # mounted last so API routes win over file resolution
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
    logger.info("Serving static files from: %s", settings.STATIC_DIR)
    return app
