import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something broke on the server!"


class SubmissionValidationError(Exception):
    """Client payload is missing required data."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class PersistenceError(Exception):
    """The store refused or failed the insert."""


def error_body(message: str) -> dict:
    return {"success": False, "error": message}


async def submission_validation_handler(request: Request, exc: SubmissionValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(str(exc)))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            logger.error("Submission body is not valid JSON")
            return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body("Malformed JSON body"))
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        fields.append(".".join(loc) or "body")
    logger.error("Malformed submission body: %s", exc.errors())
    message = "Invalid request body"
    if fields:
        message += f": {', '.join(dict.fromkeys(fields))}"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body(GENERIC_ERROR))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SubmissionValidationError, submission_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
