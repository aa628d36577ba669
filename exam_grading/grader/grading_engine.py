"""
Grading Engine Module
Grades segmented questions against an answer key and aggregates results
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import TypeAdapter, ValidationError

from ..config import GradingConfig
from ..core.constants import QuestionType, Feedback, Messages
from ..core.exceptions import ConfigurationException, GradingValidationException
from ..schemas import (
    AnswerKeyEntry,
    GradingDetail,
    GradingReport,
    GradingSummary,
    Question,
    TypeStats,
)
from ..utils import calculate_percentage, round_half_up
from .essay_providers import EssayGradingProvider, HeuristicEssayProvider
from .segmentation import QuestionSegmenter
from .strategies import (
    AnswerGrader,
    EssayGrader,
    MultipleChoiceGrader,
    QuestionResult,
    ShortAnswerGrader,
)

logger = logging.getLogger(__name__)

_questions_adapter = TypeAdapter(List[Question])
_answer_key_adapter = TypeAdapter(List[AnswerKeyEntry])


class GradingEngine:
    """
    Engine for grading segmented exam answers against an answer key.

    The engine keeps no state between runs: grading the same inputs
    twice produces the same report.
    """

    def __init__(
        self,
        config: Optional[GradingConfig] = None,
        essay_provider: Optional[EssayGradingProvider] = None
    ):
        """
        Initialize grading engine.

        Args:
            config: Thresholds, essay weights and provider timeout
            essay_provider: Essay scorer; defaults to the reference heuristic.
                A heuristic provider is rebuilt with this run's essay weights.
        """
        self.config = config or GradingConfig()
        fallback = HeuristicEssayProvider(self.config.essay_weights)
        if isinstance(essay_provider, HeuristicEssayProvider):
            essay_provider = fallback

        graders: List[AnswerGrader] = [
            MultipleChoiceGrader(),
            ShortAnswerGrader(
                full_credit_threshold=self.config.short_answer_threshold,
                partial_credit_threshold=self.config.fuzzy_threshold,
            ),
            EssayGrader(
                provider=essay_provider,
                fallback=fallback,
                pass_percentage=self.config.essay_pass_percentage,
                timeout=self.config.essay_provider_timeout,
            ),
        ]
        self.graders: Dict[QuestionType, AnswerGrader] = {
            grader.question_type: grader for grader in graders
        }

        missing = [t.value for t in QuestionType if t not in self.graders]
        if missing:
            raise ConfigurationException(f"no grader for question types: {', '.join(missing)}")

    @property
    def essay_provider(self):
        return self.graders[QuestionType.ESSAY].provider

    @property
    def essay_provider_name(self) -> str:
        return self.essay_provider.provider_name

    def grade(
        self,
        questions: Sequence[Union[Question, Dict[str, Any]]],
        answer_key: Sequence[Union[AnswerKeyEntry, Dict[str, Any]]]
    ) -> GradingReport:
        """
        Grade all questions that have an answer key entry.

        Args:
            questions: Segmented questions
            answer_key: Instructor answer key

        Returns:
            GradingReport with summary, per-question details and type stats

        Raises:
            GradingValidationException: if either input is empty or invalid
        """
        questions = self._validate_questions(questions)
        key_by_number = self._index_answer_key(answer_key)

        details = []
        for question in questions:
            entry = key_by_number.get(question.number)
            if entry is None:
                logger.debug(f"No answer key entry for question {question.number}, skipped")
                continue
            details.append(self._grade_question(question, entry))

        summary = self._summarize(details)
        logger.info(
            f"Graded {summary.total_questions} questions: "
            f"{summary.total_score}/{summary.total_points} ({summary.percentage}%)"
        )

        return GradingReport(
            summary=summary,
            details=details,
            type_stats=self._type_stats(details),
        )

    def grade_text(
        self,
        raw_text: str,
        answer_key: Sequence[Union[AnswerKeyEntry, Dict[str, Any]]],
        segmenter: Optional[QuestionSegmenter] = None
    ) -> GradingReport:
        """Segment recognized text and grade it"""
        segmenter = segmenter or QuestionSegmenter()
        return self.grade(segmenter.segment(raw_text), answer_key)

    def _grade_question(self, question: Question, entry: AnswerKeyEntry) -> GradingDetail:
        max_points = entry.points if entry.points is not None else question.points
        grader = self.graders[question.type]

        try:
            result = grader.grade(question.recognized_text, entry, max_points)
        except Exception as e:
            logger.exception(f"Grading failed for question {question.number}")
            result = QuestionResult(
                is_correct=False,
                earned_points=0.0,
                similarity=0.0,
                feedback=Feedback.GRADING_FAILED.format(reason=e),
                graded_by=grader.name,
                degraded=True,
            )

        return GradingDetail(
            question_number=question.number,
            type=question.type,
            student_answer=question.recognized_text,
            correct_answer=entry.correct_answer,
            is_correct=result.is_correct,
            earned_points=result.earned_points,
            max_points=max_points,
            similarity=result.similarity,
            feedback=result.feedback,
            graded_by=result.graded_by,
            degraded=result.degraded,
        )

    @staticmethod
    def _validate_questions(questions) -> List[Question]:
        if not questions:
            raise GradingValidationException(Messages.EMPTY_QUESTIONS)
        try:
            return _questions_adapter.validate_python(list(questions))
        except ValidationError as e:
            raise GradingValidationException(f"Invalid questions: {e}")

    @staticmethod
    def _index_answer_key(answer_key) -> Dict[int, AnswerKeyEntry]:
        if not answer_key:
            raise GradingValidationException(Messages.EMPTY_ANSWER_KEY)
        try:
            entries = _answer_key_adapter.validate_python(list(answer_key))
        except ValidationError as e:
            raise GradingValidationException(f"Invalid answer key: {e}")

        by_number: Dict[int, AnswerKeyEntry] = {}
        for entry in entries:
            if entry.question_number in by_number:
                raise GradingValidationException(
                    Messages.DUPLICATE_KEY_ENTRY.format(number=entry.question_number)
                )
            by_number[entry.question_number] = entry
        return by_number

    @staticmethod
    def _summarize(details: List[GradingDetail]) -> GradingSummary:
        total_score = sum(d.earned_points for d in details)
        total_points = sum(d.max_points for d in details)
        correct_count = sum(1 for d in details if d.is_correct)
        partial_count = sum(1 for d in details if not d.is_correct and d.earned_points > 0)

        return GradingSummary(
            total_score=round_half_up(total_score, 1),
            total_points=total_points,
            percentage=calculate_percentage(total_score, total_points),
            correct_count=correct_count,
            wrong_count=len(details) - correct_count - partial_count,
            partial_count=partial_count,
            total_questions=len(details),
        )

    @staticmethod
    def _type_stats(details: List[GradingDetail]) -> Dict[QuestionType, TypeStats]:
        stats: Dict[QuestionType, TypeStats] = {}
        for d in details:
            entry = stats.setdefault(d.type, TypeStats())
            entry.total += 1
            if d.is_correct:
                entry.correct += 1
            entry.points += d.earned_points
            entry.max_points += d.max_points

        for entry in stats.values():
            entry.points = round_half_up(entry.points, 1)
        return stats


def grade(
    questions: Sequence[Union[Question, Dict[str, Any]]],
    answer_key: Sequence[Union[AnswerKeyEntry, Dict[str, Any]]],
    config: Optional[GradingConfig] = None,
    essay_provider: Optional[EssayGradingProvider] = None
) -> GradingReport:
    """Grade questions with a one-off engine"""
    return GradingEngine(config, essay_provider).grade(questions, answer_key)
