"""Workflow orchestration for the analysis -> edit -> generation run.

This module provides:
- The LangGraph state schema and initial-state helper
- The compiled workflow graph
- A runner that resumes the graph through the edit interrupt
"""

from recreator.workflow.graph import create_workflow_graph
from recreator.workflow.graph_state import RecreationWorkflowState, create_initial_state
from recreator.workflow.runner import run_workflow

__all__ = [
    "RecreationWorkflowState",
    "create_initial_state",
    "create_workflow_graph",
    "run_workflow",
]
