"""
Unit tests for grading strategies
"""
import time

import pytest

from exam_grading.config import EssayWeights
from exam_grading.core.constants import Feedback
from exam_grading.grader import (
    EssayGrader,
    EssayGradingProvider,
    HeuristicEssayProvider,
    MultipleChoiceGrader,
    ShortAnswerGrader,
    similarity,
)
from exam_grading.schemas import AnswerKeyEntry, EssayGradeResult

ESSAY_ANSWER = "I study hard because I want to get good grades."


def key(correct, question_type="short_answer", **kwargs):
    return AnswerKeyEntry(question_number=1, type=question_type, correct_answer=correct, **kwargs)


class FailingProvider(EssayGradingProvider):
    is_remote = True

    @property
    def provider_name(self):
        return "failing"

    def grade_essay(self, student_answer, correct_answer, max_points=10.0, keywords=None, rubric=""):
        raise RuntimeError("connection refused")


class SlowProvider(EssayGradingProvider):
    is_remote = True

    @property
    def provider_name(self):
        return "slow"

    def grade_essay(self, student_answer, correct_answer, max_points=10.0, keywords=None, rubric=""):
        time.sleep(1.0)
        return EssayGradeResult(score=max_points, max_points=max_points, percentage=100, provider="slow")


class StubProvider(EssayGradingProvider):
    is_remote = True

    def __init__(self, score, percentage):
        self.score = score
        self.percentage = percentage
        self.calls = []

    @property
    def provider_name(self):
        return "stub"

    def grade_essay(self, student_answer, correct_answer, max_points=10.0, keywords=None, rubric=""):
        self.calls.append((student_answer, correct_answer, max_points, keywords, rubric))
        return EssayGradeResult(
            score=self.score,
            max_points=max_points,
            percentage=self.percentage,
            similarity=0.9,
            feedback="Good work.",
            provider="stub",
        )


class TestMultipleChoiceGrader:
    """Test cases for multiple-choice grading"""

    @pytest.mark.parametrize("answer", ["③", "c", "C", "3", " 3 "])
    def test_equivalent_encodings_get_full_credit(self, answer):
        result = MultipleChoiceGrader().grade(answer, key("3", "multiple_choice"), 3)
        assert result.is_correct
        assert result.earned_points == 3
        assert result.similarity == 1.0
        assert result.feedback == Feedback.CORRECT

    def test_letter_key(self):
        result = MultipleChoiceGrader().grade("②", key("B", "multiple_choice"), 3)
        assert result.is_correct

    def test_wrong_choice(self):
        result = MultipleChoiceGrader().grade("②", key("3", "multiple_choice"), 3)
        assert not result.is_correct
        assert result.earned_points == 0
        assert result.similarity == 0.0
        assert "3" in result.feedback


class TestShortAnswerGrader:
    """Test cases for fuzzy short-answer grading"""

    def test_exact_match_ignores_case_and_punctuation(self):
        result = ShortAnswerGrader().grade("Goes.", key("goes"), 5)
        assert result.is_correct
        assert result.earned_points == 5
        assert result.similarity == 1.0

    def test_similar_answer_gets_full_credit(self):
        result = ShortAnswerGrader().grade("beautifull", key("beautiful"), 5)
        assert result.is_correct
        assert result.earned_points == 5
        assert result.similarity == pytest.approx(0.9)
        assert "90%" in result.feedback

    def test_partial_credit(self):
        result = ShortAnswerGrader(0.8, 0.7).grade("goas", key("goes"), 5)
        assert not result.is_correct
        assert result.similarity == pytest.approx(0.75)
        assert result.earned_points == 3.8
        assert "75%" in result.feedback

    def test_wrong_answer(self):
        result = ShortAnswerGrader().grade("went", key("goes"), 5)
        assert not result.is_correct
        assert result.earned_points == 0
        assert "goes" in result.feedback

    def test_misordered_thresholds_keep_higher_for_full_credit(self):
        grader = ShortAnswerGrader(full_credit_threshold=0.7, partial_credit_threshold=0.8)
        assert grader.full_credit_threshold == 0.8
        assert grader.partial_credit_threshold == 0.7
        assert grader.grade("goas", key("goes"), 5).earned_points == 3.8


class TestBlankAnswers:
    """Blank answers score zero for every type"""

    @pytest.mark.parametrize("grader", [
        MultipleChoiceGrader(),
        ShortAnswerGrader(),
        EssayGrader(),
    ])
    @pytest.mark.parametrize("answer", ["", "   ", None])
    def test_no_answer(self, grader, answer):
        result = grader.grade(answer, key("3"), 5)
        assert not result.is_correct
        assert result.earned_points == 0
        assert result.similarity == 0
        assert result.feedback == Feedback.NO_ANSWER

    def test_provider_not_called_for_blank_essay(self):
        provider = StubProvider(score=10, percentage=100)
        EssayGrader(provider=provider).grade("", key(ESSAY_ANSWER, "essay"), 10)
        assert provider.calls == []


class TestEssayGrader:
    """Test cases for essay grading and provider fallback"""

    def test_reference_heuristic_full_marks(self):
        result = EssayGrader().grade(ESSAY_ANSWER, key(ESSAY_ANSWER, "essay"), 10)
        assert result.is_correct
        assert result.earned_points == 10
        assert result.graded_by == "heuristic"
        assert not result.degraded
        assert result.feedback.startswith(Feedback.ESSAY_VERY_SIMILAR)

    def test_pass_percentage(self):
        grader = EssayGrader(provider=StubProvider(score=7.9, percentage=79))
        assert not grader.grade("An answer.", key(ESSAY_ANSWER, "essay"), 10).is_correct

        grader = EssayGrader(provider=StubProvider(score=8, percentage=80))
        assert grader.grade("An answer.", key(ESSAY_ANSWER, "essay"), 10).is_correct

    def test_remote_provider_result_is_used(self):
        provider = StubProvider(score=8, percentage=85)
        entry = key(ESSAY_ANSWER, "essay", keywords=["study"], rubric="Mention the reason")
        result = EssayGrader(provider=provider).grade("I study a lot.", entry, 10)

        assert result.earned_points == 8
        assert result.graded_by == "stub"
        assert result.feedback == "Good work."
        assert provider.calls == [("I study a lot.", ESSAY_ANSWER, 10, ["study"], "Mention the reason")]

    def test_provider_score_is_clamped(self):
        result = EssayGrader(provider=StubProvider(score=15, percentage=100)).grade(
            "An answer.", key(ESSAY_ANSWER, "essay"), 10
        )
        assert result.earned_points == 10

    def test_failing_provider_falls_back_to_heuristic(self):
        result = EssayGrader(provider=FailingProvider()).grade(
            ESSAY_ANSWER, key(ESSAY_ANSWER, "essay"), 10
        )
        assert result.degraded
        assert result.graded_by == "heuristic"
        assert result.earned_points == 10
        assert result.feedback.endswith(Feedback.PROVIDER_FALLBACK)

    def test_slow_provider_times_out(self):
        start = time.monotonic()
        result = EssayGrader(provider=SlowProvider(), timeout=0.1).grade(
            ESSAY_ANSWER, key(ESSAY_ANSWER, "essay"), 10
        )
        assert time.monotonic() - start < 0.9
        assert result.degraded
        assert result.graded_by == "heuristic"

    def test_score_monotonic_in_similarity(self):
        """Same keyword coverage and grammar: higher similarity never scores lower"""
        correct = "The cat sat on the mat."
        entry = key(correct, "essay", keywords=["cat"])
        answers = [
            "The cat sat on the mat.",
            "The cat sat on a mat.",
            "The cat sat down.",
            "A cat is here.",
            "Cat.",
        ]
        grader = EssayGrader()
        scored = sorted(
            (similarity(a.lower(), correct.lower()), grader.grade(a, entry, 10).earned_points)
            for a in answers
        )
        points = [p for _, p in scored]
        assert points == sorted(points)

    def test_custom_weights(self):
        fallback = HeuristicEssayProvider(EssayWeights(similarity=1.0, keywords=0.0, grammar=0.0))
        result = EssayGrader(fallback=fallback).grade("goas", key("goes", "essay"), 10)
        assert result.earned_points == 7.5


class TestScoreBounds:
    """0 <= earned_points <= max_points for every strategy and input"""

    ODD_INPUTS = [
        "x",
        "x" * 3000,
        "③④",
        "🙂 ÄÖÜ ß",
        "İstanbul",
        "1. 2. 3.",
        "\t\n answer \n",
    ]

    @pytest.mark.parametrize("grader", [
        MultipleChoiceGrader(),
        ShortAnswerGrader(),
        EssayGrader(),
        EssayGrader(provider=FailingProvider()),
    ])
    @pytest.mark.parametrize("max_points", [0, 3, 5.5, 3.36])
    def test_bounds(self, grader, max_points):
        for answer in self.ODD_INPUTS:
            for correct in ["goes", ESSAY_ANSWER, "③", "🙂"]:
                result = grader.grade(answer, key(correct), max_points)
                assert 0 <= result.earned_points <= max_points
                assert 0.0 <= result.similarity <= 1.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
