"""
Question Segmentation Module
Splits recognized exam text into numbered, typed answers
"""
import logging
import re
from typing import Iterable, List, Optional, Tuple

from ..core.constants import (
    CIRCLED_DIGITS,
    ESSAY_MIN_LENGTH,
    ClassificationConfidence,
    QuestionType,
)
from ..schemas import Question

logger = logging.getLogger(__name__)

# "12. answer" or "12) answer"
QUESTION_LINE = re.compile(r"^([0-9]+)[.)]\s*(.*)")
_CHOICE_MARK = re.compile(r"^[" + "".join(CIRCLED_DIGITS) + r"]$|^[1-5]$")


def classify_answer(text: Optional[str]) -> Tuple[QuestionType, float]:
    """
    Infer the question type from the shape of an answer.

    Args:
        text: Segmented answer text

    Returns:
        (question type, classification confidence); never fails
    """
    answer = (text or "").strip()

    if _CHOICE_MARK.match(answer):
        return QuestionType.MULTIPLE_CHOICE, ClassificationConfidence.MULTIPLE_CHOICE

    if len(answer) > ESSAY_MIN_LENGTH:
        return QuestionType.ESSAY, ClassificationConfidence.ESSAY

    return QuestionType.SHORT_ANSWER, ClassificationConfidence.SHORT_ANSWER


class QuestionSegmenter:
    """
    Line-based question segmenter.

    A line starting with a number followed by "." or ")" opens a new
    question; following lines are appended to its answer. Numbering is
    not validated: a number that does not increase still opens a new
    question, which is flagged ambiguous and given reduced confidence.
    """

    def __init__(self, ambiguous_confidence_factor: float = ClassificationConfidence.AMBIGUOUS_FACTOR):
        self.ambiguous_confidence_factor = ambiguous_confidence_factor

    def segment(self, raw_text: Optional[str]) -> List[Question]:
        """
        Segment the full recognized text of one exam.

        Args:
            raw_text: Recognized text, all pages concatenated

        Returns:
            Questions in order of appearance
        """
        blocks = self._split_blocks(raw_text or "")

        questions = []
        highest_number = 0
        for number, answer in blocks:
            ambiguous = number <= highest_number
            if ambiguous:
                logger.warning(
                    f"Question {number} follows question {highest_number}; "
                    "boundary kept but flagged ambiguous"
                )
            highest_number = max(highest_number, number)
            questions.append(self._build_question(number, answer, ambiguous))

        logger.info(f"Segmented {len(questions)} questions")
        return questions

    def segment_pages(self, pages: Iterable[str]) -> List[Question]:
        """Segment an exam recognized page by page"""
        return self.segment("\n".join(page for page in pages if page))

    def _split_blocks(self, raw_text: str) -> List[Tuple[int, str]]:
        blocks = []
        current_number = None
        current_lines: List[str] = []

        for line in raw_text.splitlines():
            if not line.strip():
                continue

            match = QUESTION_LINE.match(line)
            # Question numbers start at 1; "0." reads as answer text
            if match and int(match.group(1)) > 0:
                if current_number is not None:
                    blocks.append((current_number, " ".join(current_lines)))
                current_number = int(match.group(1))
                first_line = match.group(2).strip()
                current_lines = [first_line] if first_line else []
            elif current_number is not None:
                current_lines.append(line.strip())

        if current_number is not None:
            blocks.append((current_number, " ".join(current_lines)))

        return blocks

    def _build_question(self, number: int, answer: str, ambiguous: bool) -> Question:
        question_type, confidence = classify_answer(answer)
        if ambiguous:
            confidence *= self.ambiguous_confidence_factor

        return Question(
            number=number,
            type=question_type,
            recognized_text=answer,
            confidence=confidence,
            ambiguous=ambiguous,
        )


def segment(raw_text: Optional[str]) -> List[Question]:
    """Segment recognized text with the default segmenter"""
    return QuestionSegmenter().segment(raw_text)
