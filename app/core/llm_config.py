import os
from typing import Optional
from langchain_openai import ChatOpenAI
from pydantic import SecretStr
from app.core.config import settings

class LLMFactory:
    """Factory for creating configured LLM instances with tracing."""

    @staticmethod
    def create_llm(
        model: str = "llama-3.1-8b-instant",
        base_url: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        tracing_project: Optional[str] = None,
        api_key: Optional[str] = None
    ) -> ChatOpenAI:
        """
        Create a configured ChatOpenAI instance against an OpenAI-compatible endpoint.

        Args:
            model: The model name to use.
            base_url: API base URL, defaults to settings.LLM_BASE_URL.
            temperature: The temperature for generation.
            max_tokens: Upper bound on completion tokens.
            tracing_project: The LangSmith project name for tracing.
            api_key: API key (optional, defaults to settings).
        """
        # Set env vars for tracing if provided
        if settings.LANGSMITH_TRACING:
            os.environ["LANGCHAIN_TRACING_V2"] = "true"
            os.environ["LANGCHAIN_ENDPOINT"] = settings.LANGSMITH_ENDPOINT
            os.environ["LANGCHAIN_API_KEY"] = settings.LANGSMITH_API_KEY
            os.environ["LANGCHAIN_PROJECT"] = tracing_project or settings.LANGSMITH_PROJECT

        return ChatOpenAI(
            model=model,
            api_key=SecretStr(api_key or settings.GROQ_API_KEY),
            base_url=base_url or settings.LLM_BASE_URL,
            temperature=temperature,
            max_tokens=max_tokens,
        )
