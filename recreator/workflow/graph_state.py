"""LangGraph state schema for the re-creation workflow.

The state is designed to be:
- Serializable (can be saved to checkpoints; agent results are stored as dicts)
- Immutable-friendly (nodes return state updates, not mutations)
- Debuggable (tracks errors and the current step)

State Flow:
    1. User provides source text
    2. Analysis generated and sanitized
    3. User keeps or edits the analysis (interrupt)
    4. Article and titles generated from the analysis

Example:
    >>> state = create_initial_state("wf-1", "原文内容……")
    >>> state["current_step"]
    'analyze_source'
"""

from operator import add
from typing import Annotated, Literal, TypedDict

from recreator.integrations.prompts import GENERATION_PROMPTS, LATEST_GENERATION_PROMPT_VERSION

WorkflowStep = Literal[
    "analyze_source",
    "edit_analysis",
    "generate_article",
    "completed",
    "failed",
]


class RecreationWorkflowState(TypedDict, total=False):
    """Complete state for one analysis -> edit -> generation run.

    Required Fields:
        workflow_id: Unique identifier for this workflow instance
        source_text: Article text supplied by the user
        current_step: Current workflow step
        errors: Accumulated error messages
        prompt_version: Generation prompt version to use

    Optional Fields - User Inputs:
        skip_edit: Generate straight from the model's analysis without pausing
        analysis_edited: Whether the user changed the analysis text

    Optional Fields - Agent Outputs:
        analysis: AnalysisResult as a dict (from analyzer)
        analysis_text: Analysis fed to the generation stage (editable)
        generated_article: GeneratedArticle as a dict (from writer)
    """

    # Required fields
    workflow_id: str
    source_text: str
    current_step: WorkflowStep
    errors: Annotated[list[str], add]
    prompt_version: int

    # User inputs
    skip_edit: bool
    analysis_edited: bool

    # Agent outputs
    analysis: dict
    analysis_text: str
    generated_article: dict


REQUIRED_FIELDS = frozenset(
    {"workflow_id", "source_text", "current_step", "errors", "prompt_version"}
)


def validate_required_fields(state: dict) -> tuple[bool, list[str]]:
    """Validate that required state fields are present.

    Returns:
        Tuple of (is_valid, sorted list of missing fields)

    Examples:
        >>> validate_required_fields({"workflow_id": "1"})[0]
        False
    """
    missing = sorted(field for field in REQUIRED_FIELDS if field not in state)
    return len(missing) == 0, missing


def create_initial_state(
    workflow_id: str,
    source_text: str,
    *,
    prompt_version: int = LATEST_GENERATION_PROMPT_VERSION,
    skip_edit: bool = False,
) -> RecreationWorkflowState:
    """Create initial workflow state with required fields.

    Args:
        workflow_id: Unique workflow identifier
        source_text: Article text to analyze
        prompt_version: Generation prompt version (default: latest)
        skip_edit: Skip the human edit pause

    Returns:
        Initial state dictionary

    Raises:
        ValueError: If inputs are invalid
    """
    if not workflow_id or not workflow_id.strip():
        raise ValueError("workflow_id cannot be empty")

    if not source_text or not source_text.strip():
        raise ValueError("source_text cannot be empty")

    if prompt_version not in GENERATION_PROMPTS:
        raise ValueError(f"Unknown generation prompt version: {prompt_version}")

    return RecreationWorkflowState(
        workflow_id=workflow_id.strip(),
        source_text=source_text,
        current_step="analyze_source",
        errors=[],
        prompt_version=prompt_version,
        skip_edit=skip_edit,
    )
