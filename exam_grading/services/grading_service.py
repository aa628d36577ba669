"""
Grading Service
Builds engines from settings and serves grading requests
"""
import logging
from typing import List, Optional, Sequence

from exam_grading.config import GradingConfig, Settings, settings as default_settings
from exam_grading.grader import (
    ExamProcessor,
    GradingEngine,
    QuestionSegmenter,
    create_essay_provider,
    create_recognizer,
)
from exam_grading.grader.essay_providers import EssayGradingProvider
from exam_grading.schemas import AnswerKeyEntry, GradingReport, Question

logger = logging.getLogger(__name__)


class GradingService:
    """Service for segmentation and grading runs"""

    def __init__(self, app_settings: Optional[Settings] = None):
        self.settings = app_settings or default_settings
        self.default_config = self.settings.grading_config()
        self.essay_provider: EssayGradingProvider = create_essay_provider(
            self.settings, self.default_config.essay_weights
        )
        self.segmenter = QuestionSegmenter()
        self.recognizer = create_recognizer(self.settings)
        logger.info(
            f"GradingService ready (essay provider={self.essay_provider.provider_name}, "
            f"ocr={self.recognizer.mode})"
        )

    def get_engine(self, config: Optional[GradingConfig] = None) -> GradingEngine:
        """Engine for one run; request config overrides the environment defaults"""
        return GradingEngine(config or self.default_config, self.essay_provider)

    def segment(self, raw_text: str) -> List[Question]:
        return self.segmenter.segment(raw_text)

    def grade(
        self,
        questions: Sequence[Question],
        answer_key: Sequence[AnswerKeyEntry],
        config: Optional[GradingConfig] = None
    ) -> GradingReport:
        return self.get_engine(config).grade(questions, answer_key)

    def grade_text(
        self,
        raw_text: str,
        answer_key: Sequence[AnswerKeyEntry],
        config: Optional[GradingConfig] = None
    ) -> GradingReport:
        return self.get_engine(config).grade_text(raw_text, answer_key, self.segmenter)

    def grade_images(
        self,
        image_paths: Sequence[str],
        answer_key: Sequence[AnswerKeyEntry]
    ) -> GradingReport:
        processor = ExamProcessor(self.recognizer, self.get_engine(), self.segmenter)
        return processor.process_files(image_paths, answer_key)


_grading_service: Optional[GradingService] = None


def get_grading_service() -> GradingService:
    """Shared service instance for the API"""
    global _grading_service
    if _grading_service is None:
        _grading_service = GradingService()
    return _grading_service
