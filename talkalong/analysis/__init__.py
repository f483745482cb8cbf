"""Highlight analysis: heuristic picker, language-model providers and orchestration."""
from .heuristics import build_heuristic_analysis, build_attempt_feedback, AttemptFeedback
from .orchestrator import AnalysisOrchestrator, AnalysisResult, AnalysisError
from .llm import OpenAIProvider, AnthropicProvider, get_provider

__all__ = [
    "build_heuristic_analysis",
    "build_attempt_feedback",
    "AttemptFeedback",
    "AnalysisOrchestrator",
    "AnalysisResult",
    "AnalysisError",
    "OpenAIProvider",
    "AnthropicProvider",
    "get_provider",
]
