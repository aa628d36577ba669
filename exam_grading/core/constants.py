"""
Application constants
"""
from enum import Enum


class QuestionType(str, Enum):
    """Question types recognized on an answer sheet"""
    MULTIPLE_CHOICE = "multiple_choice"
    SHORT_ANSWER = "short_answer"
    ESSAY = "essay"


class EssayProvider(str, Enum):
    """Essay grading backends"""
    HEURISTIC = "heuristic"
    OLLAMA = "ollama"
    GROQ = "groq"
    OPENAI = "openai"


# Default points awarded per question type when the answer key has none
DEFAULT_POINTS = {
    QuestionType.MULTIPLE_CHOICE: 3.0,
    QuestionType.SHORT_ANSWER: 5.0,
    QuestionType.ESSAY: 10.0,
}


class ClassificationConfidence:
    """Confidence reported by the question classifier"""
    MULTIPLE_CHOICE = 0.95
    ESSAY = 0.85
    SHORT_ANSWER = 0.88
    # Applied to questions whose number does not increase
    AMBIGUOUS_FACTOR = 0.5


# Answers longer than this are classified as essays
ESSAY_MIN_LENGTH = 20

CIRCLED_DIGITS = {"①": "1", "②": "2", "③": "3", "④": "4", "⑤": "5"}
CHOICE_LETTERS = {"a": "1", "b": "2", "c": "3", "d": "4", "e": "5"}

STOP_WORDS = frozenset([
    "the", "a", "an", "is", "are", "was", "were", "to", "of", "in",
    "for", "and", "or", "but", "i", "my", "me",
])


class Feedback:
    """Feedback messages attached to grading details"""

    NO_ANSWER = "No answer was written."
    CORRECT = "Correct!"
    INCORRECT = "Incorrect. Correct answer: {correct}"
    ACCEPTED_SIMILAR = "Accepted as correct (similarity: {percent}%)."
    PARTIAL_CREDIT = "Partial credit (similarity: {percent}%). Correct answer: {correct}"

    # Essay commentary, banded by text similarity
    ESSAY_VERY_SIMILAR = "Very similar to the model answer. Well done!"
    ESSAY_MOSTLY_CORRECT = "Mostly correct, but some parts need revision."
    ESSAY_PARTIAL = "Partially correct."
    ESSAY_VERY_DIFFERENT = "Very different from the model answer. Please review it."
    MISSED_KEYWORDS = "Missed key terms: {keywords}"
    CHECK_GRAMMAR = "Please check grammar and formatting."
    MODEL_ANSWER = "Model answer: {correct}"

    PROVIDER_FALLBACK = "(AI grading unavailable, scored with the reference heuristic.)"
    GRADING_FAILED = "This question could not be graded: {reason}"


class Messages:
    """API response messages"""

    GRADING_COMPLETE = "Grading complete"
    EMPTY_QUESTIONS = "At least one question is required"
    EMPTY_ANSWER_KEY = "The answer key must not be empty"
    DUPLICATE_KEY_ENTRY = "Duplicate answer key entry for question {number}"
    RECOGNITION_FAILED = "Text recognition failed"
