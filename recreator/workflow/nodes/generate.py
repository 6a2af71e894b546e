"""GenerateArticleNode - Second model round trip.

Integrates the writer agent into the LangGraph workflow.
"""

from dataclasses import asdict

from recreator.agents.writer import generate_article
from recreator.integrations.prompts import LATEST_GENERATION_PROMPT_VERSION
from recreator.workflow.nodes import BaseNode, NodeRegistry, handle_node_errors, log_node_execution


@NodeRegistry.register("generate_article")
class GenerateArticleNode(BaseNode):
    """Workflow node that writes the article and titles from the analysis."""

    @property
    def name(self) -> str:
        """Return node identifier."""
        return "generate_article"

    @handle_node_errors
    @log_node_execution
    async def execute(self, state: dict) -> dict:
        """Generate the article.

        Args:
            state: Workflow state containing:
                - analysis_text: Final (possibly edited) analysis
                - prompt_version: Generation prompt version

        Returns:
            State updates with:
                - generated_article: GeneratedArticle as a dict
                - current_step: "completed"
        """
        analysis_text = state.get("analysis_text")
        if not analysis_text or not analysis_text.strip():
            raise ValueError("analysis_text is required and cannot be empty")

        generated = await generate_article(
            analysis_text,
            prompt_version=state.get("prompt_version", LATEST_GENERATION_PROMPT_VERSION),
        )

        return {
            "generated_article": asdict(generated),
            "current_step": "completed",
        }
