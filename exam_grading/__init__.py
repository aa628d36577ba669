# Exam grading package
"""
Scanned Exam Grader - answer grading engine
"""

from .config import settings, Settings, GradingConfig, EssayWeights

__all__ = [
    "settings",
    "Settings",
    "GradingConfig",
    "EssayWeights",
]
