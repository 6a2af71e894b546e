"""Tests for the Writer Agent.

Covers the response parser for both output contracts and the
generate_article entry point with a mocked LLM.
"""

from unittest.mock import AsyncMock, patch

import pytest

from recreator.agents.writer import (
    TITLES_FAILED_PLACEHOLDER,
    GeneratedArticle,
    _build_generation_prompt,
    generate_article,
    parse_generation_response,
)
from recreator.integrations.prompts import ARTICLE_START_TAG, TITLES_SEPARATOR

ANALYSIS = "1. 主题与核心结论\n高薪不等于自由"

TAGGED_RESPONSE = (
    "好的，以下是文章：\n"
    "[ARTICLE_START]\n"
    "## 那天下午\n"
    "我盯着工资条看了很久。\n\n"
    "总结：**自由**比高薪更贵。\n"
    "[ARTICLE_END]\n"
    "[TITLE_START]\n"
    "1. 年薪百万的产品经理，到底在透支什么\n"
    "2. 我用八年换来的，不只是钱\n"
    "[TITLE_END]"
)


class TestParseTaggedResponse:
    """Tag contract (prompt version 2)."""

    def test_article_and_titles(self):
        parsed = parse_generation_response(TAGGED_RESPONSE)

        assert parsed.output_format == "tags"
        assert parsed.article == "那天下午\n我盯着工资条看了很久。\n\n自由比高薪更贵。"
        assert parsed.titles == ("年薪百万的产品经理，到底在透支什么", "我用八年换来的，不只是钱")
        assert parsed.titles_text.startswith("1. 年薪百万")
        assert parsed.raw_response == TAGGED_RESPONSE

    def test_lowercase_tags(self):
        parsed = parse_generation_response(
            "[article_start]正文[article_end][title_start]标题[title_end]"
        )

        assert parsed.article == "正文"
        assert parsed.titles == ("标题",)

    def test_article_tags_without_titles(self):
        parsed = parse_generation_response("[ARTICLE_START]正文[ARTICLE_END]")

        assert parsed.article == "正文"
        assert parsed.titles == ()
        assert parsed.titles_text == TITLES_FAILED_PLACEHOLDER

    def test_char_count_matches_article(self):
        parsed = parse_generation_response("[ARTICLE_START]一二 三[ARTICLE_END]")

        assert parsed.char_count == 3


class TestParseSeparatorResponse:
    """Separator contract (prompt version 1)."""

    def test_split_on_separator(self):
        parsed = parse_generation_response(
            f"# 正文第一段\n正文第二段\n{TITLES_SEPARATOR}\n- 标题一\n- 标题二"
        )

        assert parsed.output_format == "separator"
        assert parsed.article == "正文第一段\n正文第二段"
        assert parsed.titles == ("标题一", "标题二")

    def test_non_ascii_before_separator(self):
        parsed = parse_generation_response(f"İİİ正文\n{TITLES_SEPARATOR}\n标题一\n标题二")

        assert parsed.article == "İİİ正文"
        assert parsed.titles == ("标题一", "标题二")

    def test_article_tags_win_over_separator_head(self):
        parsed = parse_generation_response(
            f"前言{ARTICLE_START_TAG}正文[ARTICLE_END]\n{TITLES_SEPARATOR}\n标题"
        )

        assert parsed.output_format == "separator"
        assert parsed.article == "正文"
        assert parsed.titles == ("标题",)


class TestParseFallback:
    """Neither contract matched."""

    def test_whole_response_is_article(self):
        parsed = parse_generation_response("  **只有**正文，没有标题  ")

        assert parsed.output_format == "fallback"
        assert parsed.article == "只有正文，没有标题"
        assert parsed.titles == ()
        assert parsed.titles_text == TITLES_FAILED_PLACEHOLDER

    @pytest.mark.parametrize("response", ["", None])
    def test_empty_response(self, response):
        parsed = parse_generation_response(response)

        assert parsed.article == ""
        assert parsed.titles_text == TITLES_FAILED_PLACEHOLDER
        assert parsed.raw_response == ""

    def test_half_open_tag_falls_back(self):
        parsed = parse_generation_response("[ARTICLE_START]正文没有结束")

        assert parsed.output_format == "fallback"
        assert parsed.article == "[ARTICLE_START]正文没有结束"

    def test_returns_frozen_dataclass(self):
        parsed = parse_generation_response("正文")

        assert isinstance(parsed, GeneratedArticle)
        with pytest.raises(Exception):
            parsed.article = "改"


class TestPromptConstruction:

    @pytest.mark.parametrize("version", [1, 2])
    def test_analysis_embedded(self, version):
        prompt = _build_generation_prompt(f"  {ANALYSIS}\n", version)

        assert ANALYSIS in prompt
        assert "{analysis_text}" not in prompt

    def test_unknown_version(self):
        with pytest.raises(ValueError, match="Unknown generation prompt version"):
            _build_generation_prompt(ANALYSIS, 7)


class TestGenerateArticle:
    """generate_article with the LLM mocked."""

    @pytest.mark.asyncio
    async def test_generates_and_parses(self):
        with patch("recreator.agents.writer.generate_text", new_callable=AsyncMock) as mock_generate:
            mock_generate.return_value = TAGGED_RESPONSE

            generated = await generate_article(ANALYSIS)

        assert generated.output_format == "tags"
        assert len(generated.titles) == 2
        assert "[ARTICLE_START]" in mock_generate.call_args.args[0]

    @pytest.mark.asyncio
    async def test_prompt_version_1_uses_separator_prompt(self):
        with patch("recreator.agents.writer.generate_text", new_callable=AsyncMock) as mock_generate:
            mock_generate.return_value = f"正文\n{TITLES_SEPARATOR}\n标题"

            generated = await generate_article(ANALYSIS, prompt_version=1, model="gpt-4o")

        assert TITLES_SEPARATOR in mock_generate.call_args.args[0]
        assert mock_generate.call_args.kwargs["model"] == "gpt-4o"
        assert generated.output_format == "separator"

    @pytest.mark.asyncio
    async def test_empty_analysis_rejected(self):
        with patch("recreator.agents.writer.generate_text", new_callable=AsyncMock) as mock_generate:
            with pytest.raises(ValueError, match="analysis_text cannot be empty"):
                await generate_article("  \n")

            mock_generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_version_rejected_before_call(self):
        with patch("recreator.agents.writer.generate_text", new_callable=AsyncMock) as mock_generate:
            with pytest.raises(ValueError):
                await generate_article(ANALYSIS, prompt_version=3)

            mock_generate.assert_not_called()
