"""
Grader Module
Provides answer grading for recognized exam text

Usage:
    from exam_grading.grader import GradingEngine, QuestionSegmenter

    # Segment recognized text into typed questions
    questions = QuestionSegmenter().segment(raw_text)

    # Grade against an answer key
    engine = GradingEngine(GradingConfig(fuzzy_threshold=0.7))
    report = engine.grade(questions, answer_key)

    # Recognize, segment and grade scanned pages
    processor = ExamProcessor(MockTextRecognizer(), engine)
    report = processor.process_files(["page1.jpg"], answer_key)
"""

from .normalizer import (
    normalize_multiple_choice,
    normalize_text,
)

from .similarity import (
    levenshtein_distance,
    similarity,
)

from .keywords import (
    match_keywords,
    extract_keywords,
)

from .grammar import grammar_score

from .segmentation import (
    QuestionSegmenter,
    classify_answer,
    segment,
)

from .essay_providers import (
    EssayGradingProvider,
    HeuristicEssayProvider,
    LLMEssayProvider,
    create_essay_provider,
)

from .strategies import (
    AnswerGrader,
    MultipleChoiceGrader,
    ShortAnswerGrader,
    EssayGrader,
    QuestionResult,
)

from .grading_engine import (
    GradingEngine,
    grade,
)

from .recognition import (
    TextRecognizer,
    MockTextRecognizer,
    create_recognizer,
)

from .processor import ExamProcessor

__all__ = [
    # Text primitives
    "normalize_multiple_choice",
    "normalize_text",
    "levenshtein_distance",
    "similarity",
    "match_keywords",
    "extract_keywords",
    "grammar_score",
    # Segmentation
    "QuestionSegmenter",
    "classify_answer",
    "segment",
    # Essay providers
    "EssayGradingProvider",
    "HeuristicEssayProvider",
    "LLMEssayProvider",
    "create_essay_provider",
    # Strategies
    "AnswerGrader",
    "MultipleChoiceGrader",
    "ShortAnswerGrader",
    "EssayGrader",
    "QuestionResult",
    # Grading
    "GradingEngine",
    "grade",
    # Recognition
    "TextRecognizer",
    "MockTextRecognizer",
    "create_recognizer",
    "ExamProcessor",
]
