"""Agent modules for the two model round trips.

This package contains the analysis and generation agents. Each agent makes
exactly one LLM call and returns an immutable result.
"""

from recreator.agents.analyzer import AnalysisResult, analyze_source
from recreator.agents.writer import GeneratedArticle, generate_article, parse_generation_response

__all__ = [
    "analyze_source",
    "AnalysisResult",
    "generate_article",
    "parse_generation_response",
    "GeneratedArticle",
]
