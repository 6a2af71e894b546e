"""AnalyzeSourceNode - First model round trip.

Integrates the analyzer agent into the LangGraph workflow.
"""

import logging
from dataclasses import asdict

from recreator.agents.analyzer import analyze_source
from recreator.workflow.graph_state import validate_required_fields
from recreator.workflow.nodes import BaseNode, NodeRegistry, handle_node_errors, log_node_execution

logger = logging.getLogger(__name__)


@NodeRegistry.register("analyze_source")
class AnalyzeSourceNode(BaseNode):
    """Workflow node that turns the source text into an editable analysis."""

    @property
    def name(self) -> str:
        """Return node identifier."""
        return "analyze_source"

    @handle_node_errors
    @log_node_execution
    async def execute(self, state: dict) -> dict:
        """Analyze the source article.

        Args:
            state: Workflow state containing:
                - source_text: Article text to analyze

        Returns:
            State updates with:
                - analysis: AnalysisResult as a dict
                - analysis_text: Editable analysis for the next step
                - current_step: Transition to "edit_analysis"
        """
        valid, missing = validate_required_fields(state)
        if not valid:
            raise ValueError(f"Workflow state is missing fields: {', '.join(missing)}")

        result = await analyze_source(state["source_text"])

        if result.is_placeholder:
            logger.warning(f"[{state['workflow_id']}] Model returned an empty analysis")

        return {
            "analysis": asdict(result),
            "analysis_text": result.content,
            "current_step": "edit_analysis",
        }
