"""
LLM Providers Module
====================
Abstraction layer for swappable LLM backends used by essay grading.
Supports Ollama (local), Groq Cloud and OpenAI (OpenAI-compatible).
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_ollama import ChatOllama

from ..core.constants import EssayProvider

logger = logging.getLogger(__name__)


class BaseLLM(ABC):
    """
    Abstract base class for LLM providers.
    Provides a unified interface for different LLM backends.
    """

    def __init__(
        self,
        model: str,
        temperature: float = 0.1,
        timeout: Optional[float] = None,
        **kwargs
    ):
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self._llm: Optional[BaseChatModel] = None
        self._llm_json: Optional[BaseChatModel] = None

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name"""
        pass

    @abstractmethod
    def _create_llm(self, json_mode: bool = False) -> BaseChatModel:
        """Create and return the underlying LangChain chat model"""
        pass

    def get_llm(self, json_mode: bool = False) -> BaseChatModel:
        """
        Get LLM instance with optional JSON mode (lazy initialization).

        Args:
            json_mode: If True, configure LLM to output JSON

        Returns:
            LangChain chat model instance
        """
        if json_mode:
            if self._llm_json is None:
                self._llm_json = self._create_llm(json_mode=True)
            return self._llm_json
        if self._llm is None:
            self._llm = self._create_llm()
        return self._llm



class OllamaLLM(BaseLLM):
    """
    Ollama LLM provider for local inference.
    """

    def __init__(
        self,
        model: str = "llama3.1:latest",
        temperature: float = 0.1,
        base_url: str = "http://localhost:11434",
        num_ctx: int = 4096,
        **kwargs
    ):
        super().__init__(model=model, temperature=temperature, **kwargs)
        self.base_url = base_url
        self.num_ctx = num_ctx
        logger.info(f"OllamaLLM initialized: model={model}, base_url={base_url}")

    @property
    def provider_name(self) -> str:
        return EssayProvider.OLLAMA.value

    def _create_llm(self, json_mode: bool = False) -> BaseChatModel:
        """Create ChatOllama instance"""
        kwargs = {
            "model": self.model,
            "temperature": self.temperature,
            "base_url": self.base_url,
            "num_ctx": self.num_ctx,
        }

        # HTTP timeout for the Ollama client
        if self.timeout:
            kwargs["client_kwargs"] = {"timeout": self.timeout}

        if json_mode:
            kwargs["format"] = "json"

        return ChatOllama(**kwargs)


class OpenAICompatibleLLM(BaseLLM):
    """
    OpenAI-compatible provider (OpenAI itself or Groq Cloud).
    """

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        temperature: float = 0.1,
        base_url: Optional[str] = None,
        max_tokens: int = 800,
        provider: str = EssayProvider.OPENAI.value,
        **kwargs
    ):
        super().__init__(model=model, temperature=temperature, **kwargs)

        if not api_key:
            raise ValueError(f"An API key is required for the {provider} provider")

        self.api_key = api_key
        self.base_url = base_url
        self.max_tokens = max_tokens
        self._provider = provider

        # Import here to avoid dependency issues if openai not installed
        try:
            from langchain_openai import ChatOpenAI
            self._openai_class = ChatOpenAI
        except ImportError:
            raise ImportError(
                "langchain-openai is required for OpenAI-compatible providers. "
                "Install it with: pip install langchain-openai"
            )

        logger.info(f"{provider} LLM initialized: model={model}, base_url={base_url}")

    @property
    def provider_name(self) -> str:
        return self._provider

    def _create_llm(self, json_mode: bool = False) -> BaseChatModel:
        """Create ChatOpenAI instance"""
        kwargs = {
            "model": self.model,
            "temperature": self.temperature,
            "api_key": self.api_key,
            "max_tokens": self.max_tokens,
            "max_retries": 0,
        }
        if self.base_url:
            kwargs["base_url"] = self.base_url
        if self.timeout:
            kwargs["timeout"] = self.timeout

        if json_mode:
            kwargs["model_kwargs"] = {"response_format": {"type": "json_object"}}

        return self._openai_class(**kwargs)


class LLMFactory:
    """
    Factory class for creating LLM instances from settings.
    """

    @classmethod
    def create(cls, provider: str, settings) -> BaseLLM:
        """
        Create an LLM instance based on provider.

        Args:
            provider: "ollama", "groq" or "openai"
            settings: Application settings holding model names and keys

        Returns:
            BaseLLM instance
        """
        provider = provider.lower()
        logger.info(f"Creating LLM: provider={provider}")

        if provider == EssayProvider.OLLAMA.value:
            return OllamaLLM(
                model=settings.OLLAMA_MODEL,
                temperature=settings.LLM_TEMPERATURE,
                base_url=settings.OLLAMA_BASE_URL,
                num_ctx=settings.OLLAMA_NUM_CTX,
                timeout=settings.ESSAY_PROVIDER_TIMEOUT,
            )
        elif provider == EssayProvider.GROQ.value:
            return OpenAICompatibleLLM(
                model=settings.GROQ_MODEL,
                api_key=settings.GROQ_API_KEY,
                temperature=settings.LLM_TEMPERATURE,
                base_url=settings.GROQ_BASE_URL,
                timeout=settings.ESSAY_PROVIDER_TIMEOUT,
                provider=EssayProvider.GROQ.value,
            )
        elif provider == EssayProvider.OPENAI.value:
            return OpenAICompatibleLLM(
                model=settings.OPENAI_MODEL,
                api_key=settings.OPENAI_API_KEY,
                temperature=settings.LLM_TEMPERATURE,
                timeout=settings.ESSAY_PROVIDER_TIMEOUT,
                provider=EssayProvider.OPENAI.value,
            )
        raise ValueError(f"Unknown LLM provider: {provider}. Supported: ollama, groq, openai")
