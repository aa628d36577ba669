"""
Configuration API routes
Exposes the effective grading configuration
"""
from fastapi import APIRouter, Depends

from exam_grading.schemas import GradingConfigResponse
from exam_grading.services import GradingService, get_grading_service

router = APIRouter()


@router.get("/grading", response_model=GradingConfigResponse)
def get_grading_config(service: GradingService = Depends(get_grading_service)):
    """
    Get thresholds, essay weights and provider selection
    """
    return GradingConfigResponse(
        config=service.default_config,
        essay_provider=service.essay_provider.provider_name,
        ocr_mode=service.recognizer.mode,
    )
