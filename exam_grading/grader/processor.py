"""
Exam Processor Module
Runs recognition, segmentation and grading for one exam
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from ..core.exceptions import RecognitionException
from ..schemas import AnswerKeyEntry, GradingReport, Question
from .grading_engine import GradingEngine
from .recognition import TextRecognizer
from .segmentation import QuestionSegmenter

logger = logging.getLogger(__name__)


class ExamProcessor:
    """
    Processor for grading the scanned pages of one exam.

    Orchestrates the full pipeline:
    1. Text recognition, page by page
    2. Question segmentation
    3. Grading
    """

    def __init__(
        self,
        recognizer: TextRecognizer,
        engine: GradingEngine,
        segmenter: Optional[QuestionSegmenter] = None
    ):
        self.recognizer = recognizer
        self.engine = engine
        self.segmenter = segmenter or QuestionSegmenter()
        logger.info(f"ExamProcessor initialized (ocr={recognizer.mode})")

    def recognize_pages(self, image_paths: Sequence[str]) -> List[str]:
        """
        Recognize every page of an exam.

        Raises:
            RecognitionException: on the first page that fails, so that
                partial text is never segmented
        """
        pages = []
        for path in image_paths:
            result = self.recognizer.recognize(path)
            if not result.success:
                logger.error(f"Recognition failed for {path}: {result.error}")
                raise RecognitionException(path, result.error)
            pages.append(result.full_text)
        return pages

    def extract_questions(self, image_paths: Sequence[str]) -> List[Question]:
        """Recognize and segment an exam"""
        return self.segmenter.segment_pages(self.recognize_pages(image_paths))

    def process_files(
        self,
        image_paths: Sequence[str],
        answer_key: Sequence[Union[AnswerKeyEntry, Dict[str, Any]]]
    ) -> GradingReport:
        """
        Recognize, segment and grade the pages of one exam.

        Args:
            image_paths: Scanned pages in order
            answer_key: Instructor answer key

        Returns:
            GradingReport for the exam
        """
        questions = self.extract_questions(image_paths)
        logger.info(f"Processing {len(image_paths)} pages, {len(questions)} questions found")
        return self.engine.grade(questions, answer_key)
