"""
Grading API routes
Handles segmentation and grading of recognized exam answers
"""
from fastapi import APIRouter, Depends

from exam_grading.core.constants import Messages
from exam_grading.schemas import (
    GradeRequest,
    GradeResponse,
    GradeTextRequest,
    RecognizeRequest,
    SegmentRequest,
    SegmentResponse,
)
from exam_grading.services import GradingService, get_grading_service

router = APIRouter()


@router.post("/segment", response_model=SegmentResponse)
def segment_text(
    request: SegmentRequest,
    service: GradingService = Depends(get_grading_service)
):
    """
    Split recognized text into typed questions
    """
    questions = service.segment(request.raw_text)
    return SegmentResponse(questions=questions, count=len(questions))


@router.post("/grade", response_model=GradeResponse)
def grade_questions(
    request: GradeRequest,
    service: GradingService = Depends(get_grading_service)
):
    """
    Grade segmented questions against an answer key
    """
    report = service.grade(request.questions, request.answer_key, request.config)
    return GradeResponse(message=Messages.GRADING_COMPLETE, report=report)


@router.post("/grade-text", response_model=GradeResponse)
def grade_text(
    request: GradeTextRequest,
    service: GradingService = Depends(get_grading_service)
):
    """
    Segment recognized text and grade it in one call
    """
    report = service.grade_text(request.raw_text, request.answer_key, request.config)
    return GradeResponse(message=Messages.GRADING_COMPLETE, report=report)


@router.post("/recognize", response_model=GradeResponse)
def recognize_and_grade(
    request: RecognizeRequest,
    service: GradingService = Depends(get_grading_service)
):
    """
    Recognize scanned pages, then segment and grade them
    """
    report = service.grade_images(request.image_paths, request.answer_key)
    return GradeResponse(message=Messages.GRADING_COMPLETE, report=report)
