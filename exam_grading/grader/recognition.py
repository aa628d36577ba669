"""
Text Recognition Module
Contract for the external OCR step and a mock implementation
"""
import logging
from abc import ABC, abstractmethod

from ..core.exceptions import ConfigurationException
from ..schemas import RecognitionResult

logger = logging.getLogger(__name__)

MOCK_ANSWER_SHEET = """English Exam - Answer Sheet

1. ③
2. goes
3. ②
4. beautiful
5. ④
6. went
7. taller
8. ①
9. I am a student
10. I study hard because I want to get good grades."""


class TextRecognizer(ABC):
    """
    Recognizes the text of one scanned page.
    """

    @property
    @abstractmethod
    def mode(self) -> str:
        pass

    @abstractmethod
    def recognize(self, image_path: str) -> RecognitionResult:
        """
        Recognize text in an image.

        Args:
            image_path: Path of the scanned page

        Returns:
            RecognitionResult; success is False when recognition failed
        """
        pass


class MockTextRecognizer(TextRecognizer):
    """
    Returns a fixed ten-question answer sheet for any image.
    """

    def __init__(self, text: str = MOCK_ANSWER_SHEET, confidence: float = 0.92):
        self.text = text
        self.confidence = confidence

    @property
    def mode(self) -> str:
        return "mock"

    def recognize(self, image_path: str) -> RecognitionResult:
        logger.info(f"Mock recognition for {image_path}")
        return RecognitionResult(
            success=True,
            full_text=self.text.strip(),
            confidence=self.confidence,
        )


def create_recognizer(settings) -> TextRecognizer:
    """Build the recognizer selected by settings.OCR_MODE"""
    mode = settings.OCR_MODE.lower()
    if mode == "mock":
        return MockTextRecognizer()
    raise ConfigurationException(f"unsupported OCR mode '{settings.OCR_MODE}'")
