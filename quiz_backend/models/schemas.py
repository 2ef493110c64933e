from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional, Union

Number = Union[int, float]


class SubmissionIn(BaseModel):
    """Quiz attempt as posted by a quiz page.

    Every field is optional at the parsing layer; presence is checked by
    the submission service so a missing field is a 400, not a 422.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True, allow_inf_nan=False)

    name: Optional[str] = None
    id_number: Optional[str] = None
    section: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    score: Optional[Number] = None
    totalQuestions: Optional[Number] = None
    # kept loose so a soft-validation failure can still be stored
    quizChapter: Optional[Any] = None
    course_chapter_formatted: Optional[Any] = None


class SubmissionRecord(BaseModel):
    visitor_name: str
    visitor_id: str
    visitor_class: str
    visitor_email: str
    visitor_phone: str
    score: Number
    total_questions: Number
    quiz_chapter: Optional[Any] = None
    course_chapter_formatted: Optional[Any] = None


class SubmissionResponse(BaseModel):
    success: bool = True
    message: str
    data: List[dict]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
