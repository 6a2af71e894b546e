"""Pytest configuration for workflow tests.

Node modules register themselves on import; importing the package makes
sure NodeRegistry is populated before any graph is built. The agent
calls are replaced with AsyncMocks so no test reaches the LLM.
"""

from unittest.mock import AsyncMock, patch

import pytest

from recreator.agents.analyzer import AnalysisResult
from recreator.agents.writer import parse_generation_response
from recreator.workflow import nodes  # noqa: F401

SOURCE_TEXT = "我在大厂做了八年产品经理，年薪百万，但每天都睡不好。"
ANALYSIS_TEXT = "1. 主题与核心结论\n高薪不等于自由"
GENERATION_RESPONSE = (
    "[ARTICLE_START]\n那天下午，我盯着工资条看了很久。\n[ARTICLE_END]\n"
    "[TITLE_START]\n1. 年薪百万的代价\n2. 我用八年换来的\n[TITLE_END]"
)


def make_analysis(content: str = ANALYSIS_TEXT) -> AnalysisResult:
    return AnalysisResult(
        content=content,
        raw_response=content,
        char_count=len(content),
        is_placeholder=False,
    )


@pytest.fixture
def mock_analyze():
    with patch(
        "recreator.workflow.nodes.analyze.analyze_source", new_callable=AsyncMock
    ) as mock:
        mock.return_value = make_analysis()
        yield mock


@pytest.fixture
def mock_generate():
    with patch(
        "recreator.workflow.nodes.generate.generate_article", new_callable=AsyncMock
    ) as mock:
        mock.return_value = parse_generation_response(GENERATION_RESPONSE)
        yield mock


@pytest.fixture
def mock_agents(mock_analyze, mock_generate):
    """Both agents mocked; yields (analyze_mock, generate_mock)."""
    yield mock_analyze, mock_generate
