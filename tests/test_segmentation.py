"""
Unit tests for question segmentation and classification
"""
import pytest

from exam_grading.core.constants import QuestionType
from exam_grading.grader import QuestionSegmenter, classify_answer, segment
from exam_grading.grader.recognition import MOCK_ANSWER_SHEET


class TestClassifier:
    """Test cases for answer classification"""

    @pytest.mark.parametrize("text", ["③", "①", "5", "1", " ② "])
    def test_multiple_choice(self, text):
        assert classify_answer(text) == (QuestionType.MULTIPLE_CHOICE, 0.95)

    @pytest.mark.parametrize("text", ["6", "goes", "", None, "x" * 20, "③③"])
    def test_short_answer(self, text):
        assert classify_answer(text) == (QuestionType.SHORT_ANSWER, 0.88)

    def test_essay(self):
        assert classify_answer("x" * 21) == (QuestionType.ESSAY, 0.85)
        assert classify_answer("I study hard because I want good grades.")[0] == QuestionType.ESSAY


class TestSegmenter:
    """Test cases for the line-based segmenter"""

    def test_mock_answer_sheet(self):
        """Header lines before the first number are ignored"""
        questions = segment(MOCK_ANSWER_SHEET)

        assert [q.number for q in questions] == list(range(1, 11))
        assert questions[0].recognized_text == "③"
        assert questions[1].recognized_text == "goes"
        assert [q.type for q in questions] == [
            QuestionType.MULTIPLE_CHOICE,
            QuestionType.SHORT_ANSWER,
            QuestionType.MULTIPLE_CHOICE,
            QuestionType.SHORT_ANSWER,
            QuestionType.MULTIPLE_CHOICE,
            QuestionType.SHORT_ANSWER,
            QuestionType.SHORT_ANSWER,
            QuestionType.MULTIPLE_CHOICE,
            QuestionType.SHORT_ANSWER,
            QuestionType.ESSAY,
        ]
        assert not any(q.ambiguous for q in questions)

    def test_continuation_lines_are_joined(self):
        text = "1. The water cycle\n   starts with evaporation\n\n2) ②"
        questions = segment(text)

        assert len(questions) == 2
        assert questions[0].recognized_text == "The water cycle starts with evaporation"
        assert questions[0].type == QuestionType.ESSAY
        assert questions[1].number == 2
        assert questions[1].type == QuestionType.MULTIPLE_CHOICE

    def test_answer_on_following_line(self):
        questions = segment("1.\n   goes")
        assert questions[0].recognized_text == "goes"

    def test_blank_answer(self):
        questions = segment("1.\n2. ③")
        assert questions[0].recognized_text == ""
        assert questions[0].type == QuestionType.SHORT_ANSWER

    def test_default_points_by_type(self):
        questions = segment("1. ③\n2. goes\n3. This answer is long enough to be an essay.")
        assert [q.points for q in questions] == [3.0, 5.0, 10.0]

    def test_confidence_by_type(self):
        questions = segment("1. ③\n2. goes\n3. This answer is long enough to be an essay.")
        assert [q.confidence for q in questions] == [0.95, 0.88, 0.85]

    def test_non_increasing_number_is_flagged(self):
        """A repeated or lower number still opens a question but is flagged"""
        text = "1. a\n2. b\n2. c\n5. The answer is long enough here\n3. x"
        questions = segment(text)

        assert [q.number for q in questions] == [1, 2, 2, 5, 3]
        assert [q.ambiguous for q in questions] == [False, False, True, False, True]
        assert questions[2].confidence == pytest.approx(0.88 * 0.5)
        assert questions[4].confidence == pytest.approx(0.88 * 0.5)

    def test_numbered_line_inside_essay_splits(self):
        """False positives in essay bodies are kept, not re-derived"""
        text = "6. My plan has steps\n5. wake up early and study"
        questions = segment(text)

        assert len(questions) == 2
        assert questions[1].ambiguous

    def test_zero_is_not_a_question_number(self):
        questions = segment("0. intro\n1. goes\n0. more")
        assert len(questions) == 1
        assert questions[0].recognized_text == "goes 0. more"

    def test_empty_text(self):
        assert segment("") == []
        assert segment(None) == []
        assert segment("no numbered lines here") == []

    def test_segmentation_is_idempotent(self):
        """Re-segmenting rendered questions reproduces the same boundaries"""
        first = segment("1. ③\n2. goes\nto school\n3) I study hard because I want to get good grades.")
        rendered = "\n".join(f"{q.number}. {q.recognized_text}" for q in first)
        second = segment(rendered)

        assert [(q.number, q.recognized_text, q.type) for q in second] == \
            [(q.number, q.recognized_text, q.type) for q in first]

    def test_segment_pages(self):
        questions = QuestionSegmenter().segment_pages(["1. ③\n2. goes", "3. ②"])
        assert [q.number for q in questions] == [1, 2, 3]

    def test_questions_are_immutable(self):
        question = segment("1. ③")[0]
        with pytest.raises(Exception):
            question.recognized_text = "①"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
