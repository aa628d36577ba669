"""
Pydantic schemas for grading records and API request/response models
"""
from typing import List, Dict, Optional, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .config import GradingConfig
from .core.constants import QuestionType, DEFAULT_POINTS


# ===== Segmentation Schemas =====
class Question(BaseModel):
    """One segmented answer, immutable once created"""
    model_config = ConfigDict(frozen=True)

    number: int = Field(..., gt=0, description="Question number on the sheet")
    type: QuestionType
    recognized_text: str = Field(default="", description="Recognized answer text")
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    points: float = Field(default=0.0, ge=0.0, description="Defaults by type")
    ambiguous: bool = Field(default=False, description="Numbering did not increase")

    @model_validator(mode="before")
    @classmethod
    def default_points_by_type(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("points") is None:
            data = dict(data)
            data["points"] = DEFAULT_POINTS[QuestionType(data.get("type"))]
        return data

    @field_validator("recognized_text", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class AnswerKeyEntry(BaseModel):
    """Instructor-supplied correct answer for one question"""
    question_number: int = Field(..., gt=0)
    type: QuestionType = QuestionType.SHORT_ANSWER
    correct_answer: str = Field(..., min_length=1)
    points: Optional[float] = Field(default=None, ge=0.0)
    keywords: Optional[List[str]] = None
    rubric: str = ""

    @field_validator("correct_answer", mode="before")
    @classmethod
    def correct_answer_not_blank(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("correct_answer is required")
        value = str(value)
        if not value.strip():
            raise ValueError("correct_answer must not be blank")
        return value

    @field_validator("rubric", mode="before")
    @classmethod
    def rubric_none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


# ===== Grading Schemas =====
class GradingDetail(BaseModel):
    question_number: int
    type: QuestionType
    student_answer: str
    correct_answer: str
    is_correct: bool
    earned_points: float
    max_points: float
    similarity: float
    feedback: str
    graded_by: str = ""
    degraded: bool = False


class GradingSummary(BaseModel):
    total_score: float
    total_points: float
    percentage: float
    correct_count: int
    wrong_count: int
    partial_count: int
    total_questions: int


class TypeStats(BaseModel):
    total: int = 0
    correct: int = 0
    points: float = 0.0
    max_points: float = 0.0


class GradingReport(BaseModel):
    summary: GradingSummary
    details: List[GradingDetail] = []
    type_stats: Dict[QuestionType, TypeStats] = {}


# ===== Essay Provider Schemas =====
class KeywordMatch(BaseModel):
    matched: List[str] = []
    missed: List[str] = []
    match_rate: float = 1.0


class EssayGradeResult(BaseModel):
    score: float
    max_points: float
    percentage: float
    similarity: float = 0.0
    feedback: str = ""
    keyword_match: Optional[KeywordMatch] = None
    details: Dict[str, float] = {}
    provider: str = ""


# ===== Recognition Schemas =====
class RecognitionResult(BaseModel):
    success: bool
    full_text: str = ""
    confidence: float = 0.0
    error: Optional[str] = None


# ===== API Schemas =====
class SegmentRequest(BaseModel):
    raw_text: str = Field(..., description="Recognized text of one exam")


class SegmentResponse(BaseModel):
    success: bool = True
    questions: List[Question] = []
    count: int = 0


class GradeRequest(BaseModel):
    questions: List[Question]
    answer_key: List[AnswerKeyEntry]
    config: Optional[GradingConfig] = None


class GradeTextRequest(BaseModel):
    raw_text: str
    answer_key: List[AnswerKeyEntry]
    config: Optional[GradingConfig] = None


class RecognizeRequest(BaseModel):
    image_paths: List[str] = Field(..., min_length=1)
    answer_key: List[AnswerKeyEntry]


class GradeResponse(BaseModel):
    success: bool = True
    message: str = ""
    report: GradingReport


class GradingConfigResponse(BaseModel):
    config: GradingConfig
    essay_provider: str
    ocr_mode: str
