# Core package
from .constants import (
    QuestionType,
    EssayProvider,
    DEFAULT_POINTS,
    ClassificationConfidence,
    Feedback,
    Messages,
)
from .exceptions import (
    BaseAPIException,
    BadRequestException,
    GradingValidationException,
    ConfigurationException,
    RecognitionException,
    EssayProviderException,
)
from .logger import logger, setup_logger, grading_logger

__all__ = [
    # Constants
    "QuestionType",
    "EssayProvider",
    "DEFAULT_POINTS",
    "ClassificationConfidence",
    "Feedback",
    "Messages",
    # Exceptions
    "BaseAPIException",
    "BadRequestException",
    "GradingValidationException",
    "ConfigurationException",
    "RecognitionException",
    "EssayProviderException",
    # Logging
    "logger",
    "setup_logger",
    "grading_logger",
]
