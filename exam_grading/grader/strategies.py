"""
Grading Strategies Module
One grader per question type
"""
import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import Optional

from ..core.constants import QuestionType, Feedback
from ..schemas import AnswerKeyEntry, EssayGradeResult
from ..utils import clamp, percent, round_half_up
from .essay_providers import EssayGradingProvider, HeuristicEssayProvider
from .normalizer import normalize_multiple_choice, normalize_text
from .similarity import similarity

logger = logging.getLogger(__name__)


@dataclass
class QuestionResult:
    """Score for a single question"""
    is_correct: bool
    earned_points: float
    similarity: float
    feedback: str
    graded_by: str
    degraded: bool = False


class AnswerGrader(ABC):
    """
    Base class for question-type graders.

    Blank answers score zero for every type; subclasses only see
    non-blank answers.
    """

    question_type: QuestionType
    name: str

    def grade(
        self,
        student_answer: Optional[str],
        entry: AnswerKeyEntry,
        max_points: float
    ) -> QuestionResult:
        """
        Grade one answer.

        Args:
            student_answer: Recognized answer text
            entry: Answer key entry for the question
            max_points: Points available

        Returns:
            QuestionResult with 0 <= earned_points <= max_points
        """
        if not student_answer or not student_answer.strip():
            return QuestionResult(
                is_correct=False,
                earned_points=0.0,
                similarity=0.0,
                feedback=Feedback.NO_ANSWER,
                graded_by=self.name,
            )

        result = self._grade_answer(student_answer, entry, max_points)
        result.earned_points = clamp(result.earned_points, 0.0, max_points)
        return result

    @abstractmethod
    def _grade_answer(
        self,
        student_answer: str,
        entry: AnswerKeyEntry,
        max_points: float
    ) -> QuestionResult:
        pass


class MultipleChoiceGrader(AnswerGrader):
    """Exact match on the normalized choice number"""

    question_type = QuestionType.MULTIPLE_CHOICE
    name = "multiple_choice"

    def _grade_answer(self, student_answer, entry, max_points):
        is_correct = normalize_multiple_choice(student_answer) == normalize_multiple_choice(entry.correct_answer)
        return QuestionResult(
            is_correct=is_correct,
            earned_points=max_points if is_correct else 0.0,
            similarity=1.0 if is_correct else 0.0,
            feedback=Feedback.CORRECT if is_correct else Feedback.INCORRECT.format(correct=entry.correct_answer),
            graded_by=self.name,
        )


class ShortAnswerGrader(AnswerGrader):
    """
    Fuzzy match on normalized text.

    At or above the full-credit threshold the answer is accepted; at or
    above the partial-credit threshold it earns points proportional to
    its similarity.
    """

    question_type = QuestionType.SHORT_ANSWER
    name = "fuzzy_match"

    def __init__(self, full_credit_threshold: float = 0.8, partial_credit_threshold: float = 0.7):
        self.full_credit_threshold = max(full_credit_threshold, partial_credit_threshold)
        self.partial_credit_threshold = min(full_credit_threshold, partial_credit_threshold)

    def _grade_answer(self, student_answer, entry, max_points):
        student_norm = normalize_text(student_answer)
        correct_norm = normalize_text(entry.correct_answer)

        if student_norm == correct_norm:
            return QuestionResult(
                is_correct=True,
                earned_points=max_points,
                similarity=1.0,
                feedback=Feedback.CORRECT,
                graded_by=self.name,
            )

        score = similarity(student_norm, correct_norm)

        if score >= self.full_credit_threshold:
            return QuestionResult(
                is_correct=True,
                earned_points=max_points,
                similarity=score,
                feedback=Feedback.ACCEPTED_SIMILAR.format(percent=percent(score)),
                graded_by=self.name,
            )

        if score >= self.partial_credit_threshold:
            return QuestionResult(
                is_correct=False,
                earned_points=round_half_up(max_points * score, 1),
                similarity=score,
                feedback=Feedback.PARTIAL_CREDIT.format(
                    percent=percent(score), correct=entry.correct_answer
                ),
                graded_by=self.name,
            )

        return QuestionResult(
            is_correct=False,
            earned_points=0.0,
            similarity=score,
            feedback=Feedback.INCORRECT.format(correct=entry.correct_answer),
            graded_by=self.name,
        )


class EssayGrader(AnswerGrader):
    """
    Essay grading through a pluggable provider.

    Remote providers get one timeout-bounded call; on any failure the
    reference heuristic scores the answer instead and the result is
    marked degraded.
    """

    question_type = QuestionType.ESSAY
    name = "essay"

    def __init__(
        self,
        provider: Optional[EssayGradingProvider] = None,
        fallback: Optional[HeuristicEssayProvider] = None,
        pass_percentage: float = 80.0,
        timeout: float = 30.0
    ):
        self.fallback = fallback or HeuristicEssayProvider()
        self.provider = provider or self.fallback
        self.pass_percentage = pass_percentage
        self.timeout = timeout

    def _grade_answer(self, student_answer, entry, max_points):
        degraded = False
        try:
            result = self._call_provider(student_answer, entry, max_points)
        except Exception as e:
            logger.warning(
                f"Essay provider '{self.provider.provider_name}' failed for question "
                f"{entry.question_number}, using heuristic: {e}"
            )
            result = self._call_fallback(student_answer, entry, max_points)
            degraded = True

        feedback = result.feedback
        if degraded:
            feedback = f"{feedback} {Feedback.PROVIDER_FALLBACK}"

        return QuestionResult(
            is_correct=result.percentage >= self.pass_percentage,
            earned_points=result.score,
            similarity=clamp(result.similarity),
            feedback=feedback,
            graded_by=result.provider or self.provider.provider_name,
            degraded=degraded,
        )

    def _call_fallback(self, student_answer, entry, max_points) -> EssayGradeResult:
        return self.fallback.grade_essay(
            student_answer, entry.correct_answer, max_points,
            keywords=entry.keywords, rubric=entry.rubric
        )

    def _call_provider(self, student_answer, entry, max_points) -> EssayGradeResult:
        if not self.provider.is_remote:
            return self.provider.grade_essay(
                student_answer, entry.correct_answer, max_points,
                keywords=entry.keywords, rubric=entry.rubric
            )

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="essay-provider")
        try:
            future = executor.submit(
                self.provider.grade_essay,
                student_answer, entry.correct_answer, max_points,
                entry.keywords, entry.rubric
            )
            try:
                return future.result(timeout=self.timeout)
            except FutureTimeoutError:
                future.cancel()
                raise TimeoutError(f"no response within {self.timeout:g}s")
        finally:
            executor.shutdown(wait=False)
