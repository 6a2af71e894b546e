"""Tests for workflow graph definition and the edit interrupt."""

import pytest
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END
from langgraph.types import Command

from recreator.integrations.llm_client import LLMRetryExhausted
from recreator.workflow.graph import (
    create_workflow_graph,
    get_workflow_visualization,
    should_continue_after_analysis,
    should_continue_after_edit,
)
from recreator.workflow.graph_state import create_initial_state
from recreator.workflow.nodes.edit_analysis import EMPTY_ANALYSIS_ERROR, KEEP_ANALYSIS


def _config(thread_id: str) -> dict:
    return {"configurable": {"thread_id": thread_id}}


async def _start(graph, thread_id: str, **kwargs):
    config = _config(thread_id)
    await graph.ainvoke(create_initial_state(thread_id, "原文内容", **kwargs), config)
    return config


class TestGraphCreation:

    def test_compiles_with_default_checkpointer(self):
        assert create_workflow_graph() is not None

    def test_accepts_custom_checkpointer(self):
        checkpointer = MemorySaver()
        graph = create_workflow_graph(checkpointer=checkpointer)

        assert graph.checkpointer is checkpointer

    def test_graph_nodes(self):
        graph = create_workflow_graph()

        assert {"analyze_source", "edit_analysis", "generate_article"} <= set(graph.get_graph().nodes)

    def test_visualization_lists_steps(self):
        text = get_workflow_visualization()

        for step in ("analyze_source", "edit_analysis", "generate_article"):
            assert step in text


class TestConditionalRouting:

    def test_after_analysis_continues(self):
        assert should_continue_after_analysis({"current_step": "edit_analysis"}) == "edit_analysis"

    def test_after_analysis_failure_ends(self):
        assert should_continue_after_analysis({"current_step": "failed"}) == END

    def test_after_edit_continues(self):
        assert should_continue_after_edit({"current_step": "generate_article"}) == "generate_article"

    def test_after_edit_failure_ends(self):
        assert should_continue_after_edit({"current_step": "failed"}) == END


class TestEditInterrupt:
    """The graph pauses in edit_analysis and resumes with Command(resume=...)."""

    @pytest.mark.asyncio
    async def test_pauses_with_analysis_payload(self, mock_agents):
        _, mock_generate = mock_agents
        graph = create_workflow_graph()

        config = await _start(graph, "wf-pause")
        snapshot = await graph.aget_state(config)

        assert snapshot.next == ("edit_analysis",)
        payload = snapshot.tasks[0].interrupts[0].value
        assert payload["type"] == "analysis_edit"
        assert payload["analysis_text"] == snapshot.values["analysis_text"]
        mock_generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_resume_keep_keeps_analysis(self, mock_agents):
        mock_analyze, mock_generate = mock_agents
        graph = create_workflow_graph()
        config = await _start(graph, "wf-keep")

        final = await graph.ainvoke(Command(resume=KEEP_ANALYSIS), config)

        original = mock_analyze.return_value.content
        assert final["current_step"] == "completed"
        assert final["analysis_edited"] is False
        mock_generate.assert_awaited_once_with(original, prompt_version=2)

    @pytest.mark.asyncio
    async def test_resume_with_edited_text(self, mock_agents):
        _, mock_generate = mock_agents
        graph = create_workflow_graph()
        config = await _start(graph, "wf-edit", prompt_version=1)

        final = await graph.ainvoke(Command(resume="手动改写的分析"), config)

        assert final["analysis_text"] == "手动改写的分析"
        assert final["analysis_edited"] is True
        assert final["generated_article"]["article"] == "那天下午，我盯着工资条看了很久。"
        assert list(final["generated_article"]["titles"]) == ["年薪百万的代价", "我用八年换来的"]
        mock_generate.assert_awaited_once_with("手动改写的分析", prompt_version=1)

    @pytest.mark.asyncio
    async def test_resume_with_mapping(self, mock_agents):
        graph = create_workflow_graph()
        config = await _start(graph, "wf-map")

        final = await graph.ainvoke(Command(resume={"analysis_text": "映射里的分析"}), config)

        assert final["analysis_text"] == "映射里的分析"

    @pytest.mark.asyncio
    async def test_blank_edit_fails_without_generation(self, mock_agents):
        _, mock_generate = mock_agents
        graph = create_workflow_graph()
        config = await _start(graph, "wf-blank")

        final = await graph.ainvoke(Command(resume="   "), config)

        assert final["current_step"] == "failed"
        assert EMPTY_ANALYSIS_ERROR in final["errors"][0]
        mock_generate.assert_not_called()
        assert (await graph.aget_state(config)).next == ()

    @pytest.mark.asyncio
    async def test_skip_edit_runs_straight_through(self, mock_agents):
        graph = create_workflow_graph()
        config = await _start(graph, "wf-skip", skip_edit=True)

        snapshot = await graph.aget_state(config)

        assert snapshot.next == ()
        assert snapshot.values["current_step"] == "completed"


class TestFailureRouting:

    @pytest.mark.asyncio
    async def test_analysis_failure_ends_run(self, mock_agents):
        mock_analyze, mock_generate = mock_agents
        mock_analyze.side_effect = LLMRetryExhausted("All 3 attempts failed")
        graph = create_workflow_graph()

        config = await _start(graph, "wf-fail")
        snapshot = await graph.aget_state(config)

        assert snapshot.next == ()
        assert snapshot.values["current_step"] == "failed"
        assert len(snapshot.values["errors"]) == 1
        mock_generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_generation_failure_recorded(self, mock_agents):
        _, mock_generate = mock_agents
        mock_generate.side_effect = LLMRetryExhausted("Non-retryable error: AuthenticationError")
        graph = create_workflow_graph()

        config = await _start(graph, "wf-gen-fail", skip_edit=True)
        snapshot = await graph.aget_state(config)

        assert snapshot.values["current_step"] == "failed"
        assert "generate_article" in snapshot.values["errors"][0]
