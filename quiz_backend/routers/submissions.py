import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from quiz_backend.core.config import Settings
from quiz_backend.core.errors import SubmissionValidationError, error_body
from quiz_backend.db.firestore import SubmissionStore
from quiz_backend.models.schemas import ErrorResponse, SubmissionIn, SubmissionResponse
from quiz_backend.services.submission_service import save_submission

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Submissions"])


def get_store(request: Request) -> SubmissionStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.post(
    "/submit-quiz",
    response_model=SubmissionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def submit_quiz(
    payload: SubmissionIn,
    store: SubmissionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    logger.info("Received submission data: %s", payload.model_dump())
    try:
        data = save_submission(store, payload, strict=settings.STRICT_VALIDATION)
    except SubmissionValidationError:
        raise
    except Exception as e:
        logger.error("Error during submission process: %s", e)
        return JSONResponse(status_code=500, content=error_body(f"Server error saving submission: {e}"))
    return SubmissionResponse(message="Submission saved successfully.", data=data)
