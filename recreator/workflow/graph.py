"""LangGraph workflow graph definition.

The workflow follows this flow:
1. analyze_source → edit_analysis [interrupt] → generate_article → END
2. Any node that fails ends the run; the error is left in state["errors"].
"""

import logging
from typing import Literal

from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, StateGraph

from recreator.workflow.graph_state import RecreationWorkflowState
from recreator.workflow.nodes import NodeRegistry

logger = logging.getLogger(__name__)

NODE_SEQUENCE: tuple[str, ...] = ("analyze_source", "edit_analysis", "generate_article")


def _failed(state: RecreationWorkflowState) -> bool:
    if state.get("current_step") == "failed":
        logger.info(f"[{state.get('workflow_id')}] Node failed → ending workflow")
        return True
    return False


def should_continue_after_analysis(
    state: RecreationWorkflowState,
) -> Literal["edit_analysis", "__end__"]:
    """Route to the edit step, or end the run if the analysis failed."""
    return END if _failed(state) else "edit_analysis"


def should_continue_after_edit(
    state: RecreationWorkflowState,
) -> Literal["generate_article", "__end__"]:
    """Route to generation, or end the run if the edit step failed."""
    return END if _failed(state) else "generate_article"


def create_workflow_graph(checkpointer=None):
    """Create and compile the re-creation workflow graph.

    Args:
        checkpointer: Optional checkpoint saver. Interrupts need one; if None,
            an in-memory MemorySaver() is used.

    Returns:
        Compiled graph ready for ainvoke

    Example:
        >>> graph = create_workflow_graph()
        >>> config = {"configurable": {"thread_id": "thread-1"}}
        >>> await graph.ainvoke(create_initial_state("wf-1", source), config)
        >>> # paused at edit_analysis
        >>> await graph.ainvoke(Command(resume=KEEP_ANALYSIS), config)
    """
    workflow = StateGraph(RecreationWorkflowState)

    for node_name in NODE_SEQUENCE:
        node = NodeRegistry.get(node_name)()
        workflow.add_node(node_name, node.execute)

    workflow.set_entry_point("analyze_source")

    workflow.add_conditional_edges(
        "analyze_source",
        should_continue_after_analysis,
        {"edit_analysis": "edit_analysis", END: END},
    )
    workflow.add_conditional_edges(
        "edit_analysis",
        should_continue_after_edit,
        {"generate_article": "generate_article", END: END},
    )
    workflow.add_edge("generate_article", END)

    if checkpointer is None:
        checkpointer = MemorySaver()
        logger.debug("Using MemorySaver for in-memory checkpointing")

    compiled_graph = workflow.compile(checkpointer=checkpointer)

    logger.debug("Workflow graph compiled")
    return compiled_graph


def get_workflow_visualization() -> str:
    """Get a text-based visualization of the workflow graph."""
    return """
    Re-creation Workflow:
    =====================

    START
      ↓
    analyze_source        (LLM: structured analysis)
      ↓
    edit_analysis         [INTERRUPT: keep / edit / replace]
      ↓
    generate_article      (LLM: article + titles)
      ↓
    END

    A failed node routes straight to END; see state["errors"].
    """


__all__ = [
    "NODE_SEQUENCE",
    "create_workflow_graph",
    "get_workflow_visualization",
    "should_continue_after_analysis",
    "should_continue_after_edit",
]
