"""Drive the workflow graph through its interrupt.

run_workflow() starts a run, hands the paused analysis to an edit callback,
resumes the graph with whatever the callback returns and yields the final
state. The callback is a plain blocking function (the CLI passes an
interactive prompt) and runs in a worker thread so the event loop stays free.
"""

import asyncio
import logging
import uuid
from typing import Any, Callable, Optional

from langgraph.types import Command

from recreator.integrations.prompts import LATEST_GENERATION_PROMPT_VERSION
from recreator.workflow.graph import create_workflow_graph
from recreator.workflow.graph_state import RecreationWorkflowState, create_initial_state
from recreator.workflow.nodes.edit_analysis import KEEP_ANALYSIS

logger = logging.getLogger(__name__)

# Receives the analysis text, returns a resume value for EditAnalysisNode
EditCallback = Callable[[str], Any]


def _pending_interrupt(snapshot) -> Optional[Any]:
    """Return the value of the first pending interrupt, or None."""
    for task in snapshot.tasks:
        if task.interrupts:
            return task.interrupts[0].value
    return None


async def run_workflow(
    source_text: str,
    *,
    edit_callback: Optional[EditCallback] = None,
    prompt_version: int = LATEST_GENERATION_PROMPT_VERSION,
    workflow_id: Optional[str] = None,
    graph=None,
) -> RecreationWorkflowState:
    """Run analysis, the edit step and generation for one source text.

    Args:
        source_text: Article text to re-create
        edit_callback: Called with the analysis text when the workflow pauses.
            It may block on user input and is run in a worker thread. Its
            return value resumes the graph; None keeps the analysis.
            When omitted, the edit pause is skipped entirely.
        prompt_version: Generation prompt version
        workflow_id: Optional ID; a UUID is generated if omitted
        graph: Optional pre-built graph (defaults to create_workflow_graph())

    Returns:
        Final workflow state. Check state["current_step"]: "completed" on
        success, "failed" with state["errors"] populated otherwise.

    Raises:
        ValueError: If the initial state is invalid
    """
    workflow_id = workflow_id or str(uuid.uuid4())
    initial_state = create_initial_state(
        workflow_id,
        source_text,
        prompt_version=prompt_version,
        skip_edit=edit_callback is None,
    )

    graph = graph or create_workflow_graph()
    config = {"configurable": {"thread_id": workflow_id}}

    logger.info(f"[{workflow_id}] Starting re-creation workflow")
    await graph.ainvoke(initial_state, config)

    snapshot = await graph.aget_state(config)
    while snapshot.next:
        payload = _pending_interrupt(snapshot)
        if payload is None:
            break

        resume_value = None
        if edit_callback is not None:
            resume_value = await asyncio.to_thread(
                edit_callback, payload.get("analysis_text", "")
            )
        if resume_value is None:
            resume_value = KEEP_ANALYSIS
        await graph.ainvoke(Command(resume=resume_value), config)
        snapshot = await graph.aget_state(config)

    final_state: RecreationWorkflowState = snapshot.values
    logger.info(
        f"[{workflow_id}] Workflow finished at step: {final_state.get('current_step')}"
    )
    return final_state
