"""
Essay Grading Providers
=======================
Capability interface for essay scoring with two implementations:
the reference weighted heuristic and an adapter over an LLM backend.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from langchain_core.prompts import ChatPromptTemplate

from ..config import EssayWeights
from ..core.constants import EssayProvider, Feedback
from ..core.exceptions import ConfigurationException, EssayProviderException
from ..schemas import EssayGradeResult
from ..utils import clamp, round_half_up
from .grammar import grammar_score
from .keywords import extract_keywords, match_keywords
from .llm_providers import BaseLLM, LLMFactory
from .similarity import similarity

logger = logging.getLogger(__name__)

# Grammar reminders are only given for answers longer than this
GRAMMAR_REMINDER_MIN_LENGTH = 10
GRAMMAR_REMINDER_BELOW = 0.8


class EssayGradingProvider(ABC):
    """
    Scores one essay answer against a model answer.
    """

    # Remote providers are called with a timeout and may fail
    is_remote: bool = False

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name"""
        pass

    @abstractmethod
    def grade_essay(
        self,
        student_answer: str,
        correct_answer: str,
        max_points: float = 10.0,
        keywords: Optional[Sequence[str]] = None,
        rubric: str = ""
    ) -> EssayGradeResult:
        """
        Grade an essay answer.

        Args:
            student_answer: Recognized student answer
            correct_answer: Instructor's model answer
            max_points: Points available for the question
            keywords: Required key terms, if any
            rubric: Advisory grading notes

        Returns:
            EssayGradeResult with score, percentage, similarity and feedback
        """
        pass


class HeuristicEssayProvider(EssayGradingProvider):
    """
    Reference essay scorer.

    Combines edit-distance similarity, keyword coverage and a grammar
    check into a weighted score. Keywords are extracted from the model
    answer when none are supplied. The rubric is not interpreted.
    """

    def __init__(self, weights: Optional[EssayWeights] = None):
        self.weights = weights or EssayWeights()

    @property
    def provider_name(self) -> str:
        return EssayProvider.HEURISTIC.value

    def grade_essay(
        self,
        student_answer: str,
        correct_answer: str,
        max_points: float = 10.0,
        keywords: Optional[Sequence[str]] = None,
        rubric: str = ""
    ) -> EssayGradeResult:
        student_answer = student_answer or ""
        correct_answer = correct_answer or ""
        if not keywords:
            keywords = extract_keywords(correct_answer)

        text_similarity = similarity(
            student_answer.lower().strip(),
            correct_answer.lower().strip()
        )
        keyword_result = match_keywords(student_answer, keywords)
        grammar = grammar_score(student_answer)

        weighted_score = clamp(
            self.weights.similarity * text_similarity
            + self.weights.keywords * keyword_result.match_rate
            + self.weights.grammar * grammar
        )
        earned_points = min(round_half_up(weighted_score * max_points, 1), max_points)

        return EssayGradeResult(
            score=earned_points,
            max_points=max_points,
            percentage=weighted_score * 100,
            similarity=round_half_up(text_similarity, 2),
            feedback=self._build_feedback(
                text_similarity, keyword_result.missed, grammar,
                student_answer, correct_answer
            ),
            keyword_match=keyword_result,
            details={
                "text_similarity": round_half_up(text_similarity * 100, 0),
                "keyword_match_rate": round_half_up(keyword_result.match_rate * 100, 0),
                "grammar_score": round_half_up(grammar * 100, 0),
            },
            provider=self.provider_name,
        )

    def _build_feedback(
        self,
        text_similarity: float,
        missed: List[str],
        grammar: float,
        student_answer: str,
        correct_answer: str
    ) -> str:
        """Compose banded similarity commentary, missed keywords and the model answer"""
        if not student_answer.strip():
            return Feedback.NO_ANSWER

        parts = []
        if text_similarity >= 0.9:
            parts.append(Feedback.ESSAY_VERY_SIMILAR)
        elif text_similarity >= 0.7:
            parts.append(Feedback.ESSAY_MOSTLY_CORRECT)
        elif text_similarity >= 0.5:
            parts.append(Feedback.ESSAY_PARTIAL)
        else:
            parts.append(Feedback.ESSAY_VERY_DIFFERENT)

        if missed:
            parts.append(Feedback.MISSED_KEYWORDS.format(keywords=", ".join(missed)))

        if grammar < GRAMMAR_REMINDER_BELOW and len(student_answer) > GRAMMAR_REMINDER_MIN_LENGTH:
            parts.append(Feedback.CHECK_GRAMMAR)

        parts.append(Feedback.MODEL_ANSWER.format(correct=correct_answer))
        return " ".join(parts)


# ===== LLM adapter =====
ESSAY_GRADING_PROMPT = """You are an experienced language teacher grading a student's written exam answer.

Grading principles:
1. Grade objectively and with consistent criteria.
2. Deduct for minor spelling mistakes, but give partial credit when the meaning comes across.
3. Weigh grammatical accuracy, meaning and the presence of the key terms together.

Maximum points: {max_points}
Model answer: {correct_answer}
Student answer: {student_answer}
Key terms: {keywords}
Grading rubric: {rubric}

Respond with JSON only:
{{"score": <points earned>, "percentage": <0-100>, "similarity": <0.0-1.0>, "feedback": "<feedback for the student>"}}
"""


def parse_json_response(content: str) -> Optional[Dict[str, Any]]:
    """Parse a JSON object from an LLM response."""
    try:
        # Try direct JSON parse
        return json.loads(content)
    except json.JSONDecodeError:
        pass

    # Try to extract JSON from markdown code block
    json_match = re.search(r'```(?:json)?\s*([\s\S]*?)\s*```', content)
    if json_match:
        try:
            return json.loads(json_match.group(1))
        except json.JSONDecodeError:
            pass

    # Try to find JSON object in content
    json_match = re.search(r'\{[\s\S]*\}', content)
    if json_match:
        try:
            return json.loads(json_match.group(0))
        except json.JSONDecodeError:
            pass

    logger.error(f"Could not parse JSON from response: {content[:200]}")
    return None


class LLMEssayProvider(EssayGradingProvider):
    """
    Essay grading through a chat model in JSON mode.

    Any failure is raised as EssayProviderException so callers can fall
    back to the reference heuristic.
    """

    is_remote = True

    def __init__(self, llm_provider: BaseLLM):
        self.llm_provider = llm_provider
        self.prompt = ChatPromptTemplate.from_template(ESSAY_GRADING_PROMPT)
        logger.info(f"LLMEssayProvider initialized with provider: {llm_provider.provider_name}")

    @property
    def provider_name(self) -> str:
        return self.llm_provider.provider_name

    def grade_essay(
        self,
        student_answer: str,
        correct_answer: str,
        max_points: float = 10.0,
        keywords: Optional[Sequence[str]] = None,
        rubric: str = ""
    ) -> EssayGradeResult:
        chain = self.prompt | self.llm_provider.get_llm(json_mode=True)
        response = chain.invoke({
            "max_points": max_points,
            "correct_answer": correct_answer,
            "student_answer": student_answer or "(no answer)",
            "keywords": ", ".join(keywords) if keywords else "(none)",
            "rubric": rubric or "(none)",
        })

        content = response.content if hasattr(response, "content") else str(response)
        data = parse_json_response(content)
        if not isinstance(data, dict):
            raise EssayProviderException(self.provider_name, "unparseable response")

        try:
            score = clamp(float(data.get("score", 0)), 0.0, max_points)
            percentage = data.get("percentage")
            if percentage is None:
                percentage = score / max_points * 100 if max_points > 0 else 0.0
            percentage = clamp(float(percentage), 0.0, 100.0)
            text_similarity = clamp(float(data.get("similarity", 0)))
        except (TypeError, ValueError) as e:
            raise EssayProviderException(self.provider_name, f"invalid field: {e}")

        return EssayGradeResult(
            score=score,
            max_points=max_points,
            percentage=percentage,
            similarity=text_similarity,
            feedback=str(data.get("feedback") or "Graded."),
            provider=self.provider_name,
        )


def create_essay_provider(settings, weights: Optional[EssayWeights] = None) -> EssayGradingProvider:
    """
    Build the essay provider selected by settings.ESSAY_PROVIDER.

    Args:
        settings: Application settings
        weights: Heuristic weights, defaults to the configured ones

    Returns:
        EssayGradingProvider instance
    """
    name = settings.ESSAY_PROVIDER.lower()
    if name == EssayProvider.HEURISTIC.value:
        return HeuristicEssayProvider(weights or settings.grading_config().essay_weights)

    try:
        llm = LLMFactory.create(name, settings)
    except ValueError as e:
        raise ConfigurationException(str(e))
    return LLMEssayProvider(llm)
