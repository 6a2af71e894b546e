"""EditAnalysisNode - Human-in-the-loop edit of the analysis.

Pauses the workflow with LangGraph's interrupt so the user can keep, rewrite
or replace the analysis before the generation stage runs.

Resume values accepted via ``Command(resume=...)``:
    KEEP_ANALYSIS               keep the model's analysis ({"analysis_text": None})
    str                         use this text as the analysis
    {"analysis_text": str}      same, as a mapping

``resume=None`` is not a resume value in LangGraph; use KEEP_ANALYSIS.
"""

import logging

from langgraph.types import interrupt

from recreator.workflow.graph_state import RecreationWorkflowState
from recreator.workflow.nodes import BaseNode, NodeRegistry, handle_node_errors, log_node_execution

logger = logging.getLogger(__name__)

EMPTY_ANALYSIS_ERROR = "中间的分析框不能为空，请先分析或手动输入拆解思路"

KEEP_ANALYSIS = {"analysis_text": None}


def _resolve_edit(user_input, current_text: str) -> str:
    """Turn an interrupt resume value into the analysis text to use."""
    if user_input is None:
        return current_text

    if isinstance(user_input, str):
        return user_input

    if isinstance(user_input, dict):
        if "analysis_text" not in user_input:
            raise ValueError("Edit input mapping must contain 'analysis_text'")
        edited = user_input["analysis_text"]
        return current_text if edited is None else edited

    raise ValueError(f"Unsupported edit input type: {type(user_input).__name__}")


@NodeRegistry.register("edit_analysis")
class EditAnalysisNode(BaseNode):
    """Node that pauses workflow so the user can edit the analysis.

    State Requirements:
        - analysis_text: Analysis from AnalyzeSourceNode

    State Updates:
        - analysis_text: Final analysis for generation
        - analysis_edited: Whether the text changed
        - current_step: "generate_article"
    """

    @property
    def name(self) -> str:
        """Return node name."""
        return "edit_analysis"

    @handle_node_errors
    @log_node_execution
    async def execute(self, state: RecreationWorkflowState) -> dict:
        """Collect the user's edit of the analysis.

        Raises:
            ValueError: If the resulting analysis is blank
        """
        workflow_id = state.get("workflow_id", "unknown")
        current_text = state.get("analysis_text", "")

        if state.get("skip_edit"):
            logger.info(f"[{workflow_id}] Skipping analysis edit")
            edited_text = current_text
        else:
            user_input = interrupt(
                {
                    "type": "analysis_edit",
                    "analysis_text": current_text,
                    "message": "Edit the analysis before the article is generated",
                }
            )
            edited_text = _resolve_edit(user_input, current_text)

        if not edited_text or not edited_text.strip():
            raise ValueError(EMPTY_ANALYSIS_ERROR)

        analysis_edited = edited_text != current_text
        if analysis_edited:
            logger.info(f"[{workflow_id}] Analysis edited by user ({len(edited_text)} chars)")

        return {
            "analysis_text": edited_text,
            "analysis_edited": analysis_edited,
            "current_step": "generate_article",
        }


__all__ = ["EMPTY_ANALYSIS_ERROR", "KEEP_ANALYSIS", "EditAnalysisNode"]
