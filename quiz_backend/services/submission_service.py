import logging

from quiz_backend.core.errors import SubmissionValidationError
from quiz_backend.db.firestore import SubmissionStore
from quiz_backend.models.schemas import SubmissionIn, SubmissionRecord

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("name", "id_number", "section", "email", "phone")
REQUIRED_NUMBER_FIELDS = ("score", "totalQuestions")


def missing_fields(payload: SubmissionIn) -> list[str]:
    missing = [f for f in REQUIRED_TEXT_FIELDS if not getattr(payload, f)]
    # 0 is a legitimate score
    missing += [f for f in REQUIRED_NUMBER_FIELDS if getattr(payload, f) is None]
    return missing


def chapter_problems(payload: SubmissionIn) -> list[str]:
    problems = []
    chapter = payload.quizChapter
    is_int = isinstance(chapter, int) and not isinstance(chapter, bool)
    if isinstance(chapter, float) and chapter.is_integer():
        is_int = True
    if not is_int:
        problems.append(f"quizChapter must be an integer (got {chapter!r})")

    formatted = payload.course_chapter_formatted
    if not isinstance(formatted, str) or not formatted.strip():
        problems.append("course_chapter_formatted must be a non-empty string")
    return problems


def validate_submission(payload: SubmissionIn, strict: bool = False) -> None:
    """Raise SubmissionValidationError if the payload may not be stored.

    Chapter checks only block the request when strict is set; otherwise
    they are logged and the submission goes through.
    """
    missing = missing_fields(payload)
    if missing:
        logger.error("Validation error: missing required fields %s", missing)
        raise SubmissionValidationError([f"Missing required fields: {', '.join(missing)}"])

    problems = chapter_problems(payload)
    if problems and strict:
        logger.error("Validation error: %s", problems)
        raise SubmissionValidationError(problems)
    for problem in problems:
        logger.warning("Submission accepted despite: %s", problem)


def to_record(payload: SubmissionIn) -> SubmissionRecord:
    chapter = payload.quizChapter
    if isinstance(chapter, float) and chapter.is_integer():
        chapter = int(chapter)
    return SubmissionRecord(
        visitor_name=payload.name,
        visitor_id=payload.id_number,
        visitor_class=payload.section,
        visitor_email=payload.email,
        visitor_phone=payload.phone,
        score=payload.score,
        total_questions=payload.totalQuestions,
        quiz_chapter=chapter,
        course_chapter_formatted=payload.course_chapter_formatted,
    )


def save_submission(store: SubmissionStore, payload: SubmissionIn, strict: bool = False) -> list[dict]:
    validate_submission(payload, strict=strict)
    record = to_record(payload)
    logger.info("Inserting quiz results into '%s'", store.collection)
    data = store.insert(record.model_dump())
    logger.info("Database insertion successful: %s", data)
    return data
