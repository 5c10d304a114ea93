"""Unit tests for StateMachine."""

import pytest

from sequencer.core.state_machine import (
    InvalidTransitionError,
    StateMachine,
    create_document_state_machine,
    create_submission_state_machine,
)
from sequencer.models.document import DocumentVisibility
from sequencer.models.submission import SubmissionStatus


class TestStateMachine:
    """Tests for generic StateMachine."""

    @pytest.fixture
    def simple_transitions(self):
        """Create simple transition map for testing."""
        return {
            "start": ["middle", "end"],
            "middle": ["end"],
            "end": [],
        }

    @pytest.fixture
    def state_machine(self, simple_transitions):
        """Create state machine with simple transitions."""
        return StateMachine("start", simple_transitions)

    def test_initial_state(self, state_machine):
        """Test that initial state is set correctly."""
        assert state_machine.current == "start"

    def test_transition_valid(self, state_machine):
        """Test valid transition updates state."""
        state_machine.transition("middle")
        assert state_machine.current == "middle"

    def test_transition_invalid_raises(self, state_machine):
        """Test invalid transition raises error."""
        state_machine.transition("middle")

        with pytest.raises(InvalidTransitionError) as exc_info:
            state_machine.transition("start")  # Can't go back

        assert exc_info.value.current == "middle"
        assert exc_info.value.target == "start"
        assert "end" in exc_info.value.allowed
        assert exc_info.value.context["target"] == "start"

    def test_unknown_target_raises(self, state_machine):
        """Test a target outside the map is rejected without moving."""
        with pytest.raises(InvalidTransitionError):
            state_machine.transition("nonexistent")

        assert state_machine.current == "start"

    def test_allowed_transitions(self, state_machine):
        """Test allowed_transitions property."""
        assert state_machine.allowed_transitions == ["middle", "end"]

        state_machine.transition("end")
        assert state_machine.allowed_transitions == []

    def test_ensure_moves_once(self, state_machine):
        """Test ensure transitions, then is a no-op in the target state."""
        assert state_machine.ensure("middle") is True
        assert state_machine.ensure("middle") is False
        assert state_machine.current == "middle"

    def test_ensure_invalid_raises(self, state_machine):
        """Test ensure still validates real transitions."""
        state_machine.transition("end")

        with pytest.raises(InvalidTransitionError):
            state_machine.ensure("start")

    def test_str_representation(self, state_machine):
        """Test string representation."""
        assert "start" in str(state_machine)

    def test_repr_representation(self, state_machine):
        """Test repr representation."""
        repr_str = repr(state_machine)
        assert "start" in repr_str
        assert "middle" in repr_str


class TestDocumentStateMachine:
    """Tests for document visibility state machine."""

    def test_create_with_default(self):
        """Test creating with default initial state."""
        sm = create_document_state_machine()
        assert sm.current == DocumentVisibility.UNPUBLISHED

    def test_create_with_initial(self):
        """Test creating with specific initial state."""
        sm = create_document_state_machine("published")
        assert sm.current == DocumentVisibility.PUBLISHED

    def test_publish_and_unpublish(self):
        """Test UNPUBLISHED -> PUBLISHED -> UNPUBLISHED."""
        sm = create_document_state_machine()
        sm.transition(DocumentVisibility.PUBLISHED)
        sm.transition(DocumentVisibility.UNPUBLISHED)
        assert sm.current == DocumentVisibility.UNPUBLISHED

    def test_publish_twice_is_noop(self):
        """Test ensure on an already published document."""
        sm = create_document_state_machine("published")
        assert sm.ensure(DocumentVisibility.PUBLISHED) is False

    def test_invalid_initial_status(self):
        """Test unknown initial statuses are rejected."""
        with pytest.raises(ValueError):
            create_document_state_machine("archived")


class TestSubmissionStateMachine:
    """Tests for channel submission state machine."""

    def test_create_with_default(self):
        """Test creating with default initial state."""
        sm = create_submission_state_machine()
        assert sm.current == SubmissionStatus.ACTIVE

    def test_deactivate(self):
        """Test ACTIVE -> INACTIVE transition."""
        sm = create_submission_state_machine()
        assert sm.ensure(SubmissionStatus.INACTIVE) is True
        assert sm.current == SubmissionStatus.INACTIVE

    def test_deactivate_inactive_is_noop(self):
        """Test deactivating an inactive submission changes nothing."""
        sm = create_submission_state_machine("inactive")
        assert sm.ensure(SubmissionStatus.INACTIVE) is False

    def test_reactivate(self):
        """Test INACTIVE -> ACTIVE transition."""
        sm = create_submission_state_machine("inactive")
        sm.transition(SubmissionStatus.ACTIVE)
        assert sm.current == SubmissionStatus.ACTIVE
