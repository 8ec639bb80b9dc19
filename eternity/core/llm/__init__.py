"""
LLM Module

Gemini access through LangChain. The client only transports; schema
enforcement and parsing live in eternity.core.analysis.
"""
from .gemini_client import GeminiClient, GeminiConfig, GeminiModel, GeminiResponse

__all__ = [
    "GeminiClient",
    "GeminiConfig",
    "GeminiModel",
    "GeminiResponse",
]
