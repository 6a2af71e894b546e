"""LangGraph workflow node infrastructure.

This module provides the base infrastructure for all workflow nodes:
- BaseNode abstract class: Contract for all nodes
- Error handling decorator: Graceful error capture
- Logging decorator: Automatic execution logging
- NodeRegistry: Node registration and discovery

Example Usage:
    >>> @NodeRegistry.register("my_node")
    ... class MyNode(BaseNode):
    ...     @property
    ...     def name(self) -> str:
    ...         return "my_node"
    ...
    ...     @handle_node_errors
    ...     @log_node_execution
    ...     async def execute(self, state):
    ...         return {"current_step": "next_step"}
"""

import functools
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar

from langgraph.errors import GraphBubbleUp

from recreator.workflow.graph_state import RecreationWorkflowState

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class BaseNode(ABC):
    """Abstract base class for workflow nodes.

    All workflow nodes must:
    1. Accept RecreationWorkflowState as input
    2. Return dict of state updates (not full state)
    3. Handle errors gracefully (use @handle_node_errors)
    4. Log execution (use @log_node_execution)
    """

    @abstractmethod
    async def execute(self, state: RecreationWorkflowState) -> dict[str, Any]:
        """Execute node logic and return state updates.

        Args:
            state: Current workflow state

        Returns:
            Dictionary of state updates to apply. Should NOT return
            the full state, only the fields that need updating.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return node name for logging and identification."""


def handle_node_errors(func: F) -> F:
    """Decorator to handle node execution errors gracefully.

    Catches exceptions during node execution and converts them to error
    state updates instead of crashing the workflow. LangGraph control-flow
    exceptions (interrupts) are re-raised untouched so the graph can pause.

    Example:
        >>> result = await failing_node.execute({})
        >>> result["current_step"]
        'failed'
    """

    @functools.wraps(func)
    async def wrapper(self: BaseNode, state: RecreationWorkflowState, *args, **kwargs) -> dict[str, Any]:
        try:
            return await func(self, state, *args, **kwargs)
        except GraphBubbleUp:
            raise
        except Exception as e:
            error_msg = f"Node '{self.name}' failed: {type(e).__name__}: {str(e)}"
            logger.error(error_msg, exc_info=True)
            return {
                "errors": [error_msg],
                "current_step": "failed",
            }

    return wrapper  # type: ignore


def log_node_execution(func: F) -> F:
    """Decorator to log node execution start, end, and duration.

    Example:
        >>> # INFO: [wf-123] Starting execution of node: analyze_source
        >>> # INFO: [wf-123] Completed execution of node: analyze_source (3.12s)
    """

    @functools.wraps(func)
    async def wrapper(self: BaseNode, state: RecreationWorkflowState, *args, **kwargs) -> dict[str, Any]:
        workflow_id = state.get("workflow_id", "unknown")

        logger.info(f"[{workflow_id}] Starting execution of node: {self.name}")
        start_time = time.time()

        try:
            result = await func(self, state, *args, **kwargs)
        except GraphBubbleUp:
            logger.info(f"[{workflow_id}] Paused node: {self.name}")
            raise
        except Exception:
            duration = time.time() - start_time
            logger.error(
                f"[{workflow_id}] Failed execution of node: {self.name} ({duration:.2f}s)"
            )
            raise

        duration = time.time() - start_time
        logger.info(
            f"[{workflow_id}] Completed execution of node: {self.name} ({duration:.2f}s)"
        )
        return result

    return wrapper  # type: ignore


class NodeRegistry:
    """Registry for workflow nodes.

    Nodes register themselves by name at import time; the graph builder
    looks them up here.

    Example:
        >>> node_class = NodeRegistry.get("analyze_source")
        >>> NodeRegistry.list_nodes()
        ['analyze_source', 'edit_analysis', 'generate_article']
    """

    _nodes: dict[str, type[BaseNode]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[BaseNode]], type[BaseNode]]:
        """Decorator to register a node class by name.

        Raises:
            ValueError: If a different class is already registered under the name
        """

        def decorator(node_class: type[BaseNode]) -> type[BaseNode]:
            existing = cls._nodes.get(name)
            if existing is not None and existing.__qualname__ != node_class.__qualname__:
                raise ValueError(f"Node '{name}' is already registered")

            cls._nodes[name] = node_class
            logger.debug(f"Registered node: {name} -> {node_class.__name__}")
            return node_class

        return decorator

    @classmethod
    def get(cls, name: str) -> type[BaseNode]:
        """Get a registered node class by name.

        Raises:
            KeyError: If no node with the given name is registered
        """
        if name not in cls._nodes:
            available = ", ".join(cls._nodes.keys()) or "none"
            raise KeyError(f"Node '{name}' not registered. Available nodes: {available}")
        return cls._nodes[name]

    @classmethod
    def list_nodes(cls) -> list[str]:
        """List all registered node names, sorted."""
        return sorted(cls._nodes.keys())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a node is registered."""
        return name in cls._nodes


# Import node modules to trigger registration
# These imports must be at the bottom after class definitions to avoid circular imports
from recreator.workflow.nodes import analyze, edit_analysis, generate  # noqa: E402, F401

__all__ = [
    "BaseNode",
    "handle_node_errors",
    "log_node_execution",
    "NodeRegistry",
]
