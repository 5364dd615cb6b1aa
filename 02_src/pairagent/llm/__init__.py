"""LLM access used by the planner."""

from .llm_provider import ILLMProvider, LLMProvider

__all__ = ["ILLMProvider", "LLMProvider"]
