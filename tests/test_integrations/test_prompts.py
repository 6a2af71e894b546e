"""Tests for the prompt registry."""

import string

import pytest

from recreator.integrations.prompts import (
    ANALYSIS_PROMPT_V1,
    ARTICLE_END_TAG,
    ARTICLE_START_TAG,
    GENERATION_PROMPT_V1,
    GENERATION_PROMPT_V2,
    GENERATION_PROMPTS,
    LATEST_GENERATION_PROMPT_VERSION,
    PROMPT_REGISTRY,
    TITLE_END_TAG,
    TITLE_START_TAG,
    TITLES_SEPARATOR,
    get_generation_prompt,
)


def _placeholders(template: str) -> set[str]:
    return {field for _, field, _, _ in string.Formatter().parse(template) if field}


class TestTemplatePlaceholders:
    """Templates only expose the documented slots."""

    def test_analysis_prompt_slot(self):
        assert _placeholders(ANALYSIS_PROMPT_V1) == {"source_text"}

    @pytest.mark.parametrize("template", [GENERATION_PROMPT_V1, GENERATION_PROMPT_V2])
    def test_generation_prompt_slot(self, template):
        assert _placeholders(template) == {"analysis_text"}

    def test_source_text_with_braces_formats_safely(self):
        source = "代码片段 {not_a_field} 和 {}"
        prompt = ANALYSIS_PROMPT_V1.format(source_text=source)
        assert source in prompt


class TestOutputContracts:
    """Each generation version spells out the markers the parser relies on."""

    def test_v2_uses_tags(self):
        for tag in (ARTICLE_START_TAG, ARTICLE_END_TAG, TITLE_START_TAG, TITLE_END_TAG):
            assert tag in GENERATION_PROMPT_V2
        assert TITLES_SEPARATOR not in GENERATION_PROMPT_V2

    def test_v1_uses_separator(self):
        assert TITLES_SEPARATOR in GENERATION_PROMPT_V1
        assert ARTICLE_START_TAG not in GENERATION_PROMPT_V1

    def test_analysis_prompt_has_eight_sections(self):
        for number in range(1, 9):
            assert f"\n{number}. " in ANALYSIS_PROMPT_V1

    def test_analysis_prompt_forbids_bold(self):
        assert '"**"' in ANALYSIS_PROMPT_V1


class TestRegistry:
    """Version lookup and the name registry."""

    def test_latest_version_is_tagged_contract(self):
        assert LATEST_GENERATION_PROMPT_VERSION == 2
        assert get_generation_prompt(LATEST_GENERATION_PROMPT_VERSION) is GENERATION_PROMPT_V2

    def test_get_v1(self):
        assert get_generation_prompt(1) is GENERATION_PROMPT_V1

    def test_unknown_version(self):
        with pytest.raises(ValueError, match="Unknown generation prompt version: 9"):
            get_generation_prompt(9)

    def test_registry_lists_all_generation_versions(self):
        for version in GENERATION_PROMPTS:
            assert f"GENERATION_PROMPT_V{version}" in PROMPT_REGISTRY
