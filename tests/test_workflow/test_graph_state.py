"""Tests for workflow state creation and validation."""

import pytest

from recreator.workflow.graph_state import (
    REQUIRED_FIELDS,
    create_initial_state,
    validate_required_fields,
)


class TestCreateInitialState:

    def test_defaults(self):
        state = create_initial_state("wf-1", "原文")

        assert state["workflow_id"] == "wf-1"
        assert state["source_text"] == "原文"
        assert state["current_step"] == "analyze_source"
        assert state["errors"] == []
        assert state["prompt_version"] == 2
        assert state["skip_edit"] is False

    def test_has_all_required_fields(self):
        assert validate_required_fields(create_initial_state("wf-1", "原文")) == (True, [])

    def test_workflow_id_trimmed(self):
        assert create_initial_state("  wf-1 ", "原文")["workflow_id"] == "wf-1"

    def test_source_text_kept_verbatim(self):
        assert create_initial_state("wf-1", "  原文\n")["source_text"] == "  原文\n"

    def test_options(self):
        state = create_initial_state("wf-1", "原文", prompt_version=1, skip_edit=True)

        assert state["prompt_version"] == 1
        assert state["skip_edit"] is True

    @pytest.mark.parametrize("workflow_id", ["", "   "])
    def test_empty_workflow_id(self, workflow_id):
        with pytest.raises(ValueError, match="workflow_id cannot be empty"):
            create_initial_state(workflow_id, "原文")

    @pytest.mark.parametrize("source_text", ["", " \n "])
    def test_empty_source_text(self, source_text):
        with pytest.raises(ValueError, match="source_text cannot be empty"):
            create_initial_state("wf-1", source_text)

    def test_unknown_prompt_version(self):
        with pytest.raises(ValueError, match="Unknown generation prompt version: 5"):
            create_initial_state("wf-1", "原文", prompt_version=5)


class TestValidateRequiredFields:

    def test_reports_missing_sorted(self):
        valid, missing = validate_required_fields({"workflow_id": "wf-1"})

        assert valid is False
        assert missing == sorted(REQUIRED_FIELDS - {"workflow_id"})

    def test_empty_state(self):
        valid, missing = validate_required_fields({})

        assert valid is False
        assert set(missing) == REQUIRED_FIELDS
