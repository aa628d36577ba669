"""
Configuration settings for the exam grading engine
"""
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings


class EssayWeights(BaseModel):
    """Weights of the reference essay heuristic"""
    similarity: float = Field(default=0.4, ge=0.0)
    keywords: float = Field(default=0.4, ge=0.0)
    grammar: float = Field(default=0.2, ge=0.0)

    @model_validator(mode="after")
    def check_total(self) -> "EssayWeights":
        total = self.similarity + self.keywords + self.grammar
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Essay weights must sum to 1.0, got {total:.3f}")
        return self


class GradingConfig(BaseModel):
    """
    Per-run grading parameters.

    Invalid combinations are rejected when the config is built, never
    in the middle of a grading run.
    """
    fuzzy_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    short_answer_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    essay_pass_percentage: float = Field(default=80.0, ge=0.0, le=100.0)
    essay_weights: EssayWeights = Field(default_factory=EssayWeights)
    essay_provider_timeout: float = Field(default=30.0, gt=0.0)

    @model_validator(mode="after")
    def check_threshold_order(self) -> "GradingConfig":
        if self.short_answer_threshold < self.fuzzy_threshold:
            raise ValueError(
                "short_answer_threshold must be >= fuzzy_threshold "
                f"({self.short_answer_threshold} < {self.fuzzy_threshold})"
            )
        return self


class Settings(BaseSettings):
    """Application settings using pydantic-settings"""

    # Server settings
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    DEBUG: bool = True

    # CORS settings
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Project paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False

    # Grading settings
    FUZZY_MATCH_THRESHOLD: float = 0.7
    SHORT_ANSWER_THRESHOLD: float = 0.8
    ESSAY_PASS_PERCENTAGE: float = 80.0
    ESSAY_WEIGHT_SIMILARITY: float = 0.4
    ESSAY_WEIGHT_KEYWORDS: float = 0.4
    ESSAY_WEIGHT_GRAMMAR: float = 0.2

    # Essay provider: "heuristic", "ollama", "groq" or "openai"
    ESSAY_PROVIDER: str = "heuristic"
    ESSAY_PROVIDER_TIMEOUT: float = 30.0
    LLM_TEMPERATURE: float = 0.1

    # Ollama
    OLLAMA_MODEL: str = "llama3.1:latest"
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_NUM_CTX: int = 4096

    # Groq Cloud (OpenAI-compatible)
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o"

    # Text recognition: only the mock recognizer ships with the engine
    OCR_MODE: str = "mock"

    class Config:
        env_file = ".env"
        extra = "allow"

    def grading_config(self) -> GradingConfig:
        """
        Build the grading config from the environment.

        Raises:
            ConfigurationException: if thresholds or weights are invalid
        """
        from .core.exceptions import ConfigurationException

        try:
            return GradingConfig(
                fuzzy_threshold=self.FUZZY_MATCH_THRESHOLD,
                short_answer_threshold=self.SHORT_ANSWER_THRESHOLD,
                essay_pass_percentage=self.ESSAY_PASS_PERCENTAGE,
                essay_weights=EssayWeights(
                    similarity=self.ESSAY_WEIGHT_SIMILARITY,
                    keywords=self.ESSAY_WEIGHT_KEYWORDS,
                    grammar=self.ESSAY_WEIGHT_GRAMMAR,
                ),
                essay_provider_timeout=self.ESSAY_PROVIDER_TIMEOUT,
            )
        except ValidationError as e:
            raise ConfigurationException(str(e))


settings = Settings()
