"""
Custom exceptions for the exam grading engine
"""
from fastapi import HTTPException, status


class BaseAPIException(HTTPException):
    """Base exception for all grading errors"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str = None,
        headers: dict = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

    def __str__(self) -> str:
        return str(self.detail)


class BadRequestException(BaseAPIException):
    """Bad request - invalid input"""

    def __init__(self, message: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
            error_code=error_code
        )


class GradingValidationException(BadRequestException):
    """Questions or answer key rejected before any scoring"""

    def __init__(self, message: str):
        super().__init__(message, error_code="VALIDATION_ERROR")


class ConfigurationException(BadRequestException):
    """Invalid grading thresholds or weights"""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid grading configuration: {reason}",
            error_code="CONFIGURATION_ERROR"
        )


class RecognitionException(BaseAPIException):
    """Text recognition failed for a page"""

    def __init__(self, source: str, reason: str = None):
        detail = f"Text recognition failed for '{source}'"
        if reason:
            detail += f": {reason}"
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code="RECOGNITION_ERROR"
        )


class EssayProviderException(BaseAPIException):
    """Essay grading provider error"""

    def __init__(self, provider: str, reason: str = None):
        detail = f"Essay provider '{provider}' failed"
        if reason:
            detail += f": {reason}"
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            error_code="ESSAY_PROVIDER_ERROR"
        )
